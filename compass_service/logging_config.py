"""
Logging Configuration Module

Queue-based logging for the recommendation service. Request threads and the
ranker worker threads log through a queue so lines from a timed-out LLM call
never interleave with the request that abandoned it.
"""

import logging
import logging.handlers
import sys
from queue import Queue
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Client libraries that log every HTTP round trip
NOISY_LOGGERS = (
    "httpx",
    "httpcore",
    "urllib3",
    "openai",
    "google_genai",
    "langchain_core",
    "langchain_deepseek",
    "langchain_ollama",
    "werkzeug",
)


class _MuteHttpFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        if (record.name or "").startswith(("httpx", "httpcore")):
            return False
        msg = record.getMessage()
        return not msg.startswith(("HTTP Request:", "HTTP Response:"))


class QueueLoggingConfig:
    """Owns the queue listener so it can be stopped on shutdown."""

    def __init__(self):
        self._listener: Optional[logging.handlers.QueueListener] = None

    def setup(self, debug: bool = False) -> None:
        """Route the root logger through a queue to a single console handler.

        Calling again replaces the previous configuration.
        """
        self.stop()

        log_queue: Queue = Queue()
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        if not debug:
            console_handler.addFilter(_MuteHttpFilter())

        self._listener = logging.handlers.QueueListener(
            log_queue, console_handler, respect_handler_level=True
        )
        self._listener.start()

        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        root_logger.addHandler(logging.handlers.QueueHandler(log_queue))
        root_logger.setLevel(logging.DEBUG if debug else logging.INFO)

        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.DEBUG if debug else logging.WARNING)

    def stop(self) -> None:
        if self._listener:
            self._listener.stop()
            self._listener = None


logging_config = QueueLoggingConfig()


def setup_logging(debug: bool = False) -> None:
    logging_config.setup(debug)


def stop_logging() -> None:
    logging_config.stop()
