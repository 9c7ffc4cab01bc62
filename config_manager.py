"""
Configuration management for the CareerCompass recommendation service.
Handles loading, validating, and providing access to application settings.
"""

import os
import json
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass


@dataclass
class LLMConfig:
    """LLM configuration settings."""
    provider: str
    api_key: str
    base_url: Optional[str]
    model: str
    temperature: float
    timeout: int


@dataclass
class AppConfig:
    """Application configuration settings."""
    host: str
    port: int
    debug: bool


@dataclass
class RankingConfig:
    """Event ranking configuration settings."""
    timeout_seconds: float
    rating_weight: float
    popularity_weight: float
    include_going: bool


# Environment variable holding the API key for each provider
PROVIDER_API_KEY_ENV = {
    "gemini": "GEMINI_API_KEY",
    "deepseek": "DEEPSEEK_API_KEY",
    "openai": "OPENAI_API_KEY",
}


class ConfigManager:
    """Manages application configuration loading and access."""

    def __init__(self, config_file: str = "career_compass_config.json"):
        self.config_file = Path(config_file)
        self._config: Optional[Dict[str, Any]] = None
        self._load_config()

    def _load_config(self) -> None:
        """Load configuration from file and environment variables."""
        self._config = self._get_default_config()

        if self.config_file.exists():
            try:
                with open(self.config_file, 'r', encoding='utf-8') as f:
                    file_config = json.load(f)
                    self._merge_config(file_config)
            except (json.JSONDecodeError, FileNotFoundError):
                # Keep default config if file is invalid or not found
                pass

        self._override_with_env()

    def _get_default_config(self) -> Dict[str, Any]:
        """Get default configuration."""
        return {
            "llm": {
                "provider": "gemini",
                "api_key": "",
                "base_url": None,
                "model": "gemma-3-27b-it",
                "temperature": 0.1,
                "timeout": 30
            },
            "app": {
                "host": "0.0.0.0",
                "port": 3000,
                "debug": False
            },
            "ranking": {
                "timeout_seconds": 8.0,
                "rating_weight": 0.7,
                "popularity_weight": 0.3,
                "include_going": False
            }
        }

    def _merge_config(self, file_config: Dict[str, Any]) -> None:
        """Merge file configuration with current config."""
        for section, values in file_config.items():
            if section in self._config and isinstance(values, dict):
                self._config[section].update(values)
            else:
                self._config[section] = values

    def _override_with_env(self) -> None:
        """Override configuration with environment variables."""
        # LLM settings
        if os.getenv("LLM_PROVIDER"):
            self._config["llm"]["provider"] = os.getenv("LLM_PROVIDER").lower()

        key_env = PROVIDER_API_KEY_ENV.get(self._config["llm"]["provider"])
        if key_env and os.getenv(key_env):
            self._config["llm"]["api_key"] = os.getenv(key_env)

        if os.getenv("LLM_BASE_URL"):
            self._config["llm"]["base_url"] = os.getenv("LLM_BASE_URL")

        if os.getenv("LLM_MODEL"):
            self._config["llm"]["model"] = os.getenv("LLM_MODEL")

        # App settings
        if os.getenv("APP_HOST"):
            self._config["app"]["host"] = os.getenv("APP_HOST")

        if os.getenv("APP_PORT"):
            self._config["app"]["port"] = int(os.getenv("APP_PORT"))

        if os.getenv("APP_DEBUG"):
            self._config["app"]["debug"] = os.getenv("APP_DEBUG").lower() == "true"

        # Ranking settings
        if os.getenv("RANKING_TIMEOUT_SECONDS"):
            self._config["ranking"]["timeout_seconds"] = float(os.getenv("RANKING_TIMEOUT_SECONDS"))

    def get_llm_config(self) -> LLMConfig:
        """Get LLM configuration."""
        llm_config = self._config["llm"]
        return LLMConfig(
            provider=llm_config["provider"],
            api_key=llm_config["api_key"],
            base_url=llm_config["base_url"],
            model=llm_config["model"],
            temperature=llm_config["temperature"],
            timeout=llm_config["timeout"]
        )

    def get_app_config(self) -> AppConfig:
        """Get application configuration."""
        app_config = self._config["app"]
        return AppConfig(
            host=app_config["host"],
            port=app_config["port"],
            debug=app_config["debug"]
        )

    def get_ranking_config(self) -> RankingConfig:
        """Get ranking configuration."""
        ranking_config = self._config["ranking"]
        return RankingConfig(
            timeout_seconds=float(ranking_config["timeout_seconds"]),
            rating_weight=float(ranking_config["rating_weight"]),
            popularity_weight=float(ranking_config["popularity_weight"]),
            include_going=bool(ranking_config["include_going"])
        )

    def get_config(self) -> Dict[str, Any]:
        """Get raw configuration dictionary."""
        return self._config.copy()

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()

    def save_config(self) -> None:
        """Save current configuration to file."""
        with open(self.config_file, 'w', encoding='utf-8') as f:
            json.dump(self._config, f, indent=2, ensure_ascii=False)


# Global configuration instance
config_manager = ConfigManager()


def get_llm_config() -> LLMConfig:
    """Get LLM configuration."""
    return config_manager.get_llm_config()


def get_app_config() -> AppConfig:
    """Get application configuration."""
    return config_manager.get_app_config()


def get_ranking_config() -> RankingConfig:
    """Get ranking configuration."""
    return config_manager.get_ranking_config()


def reload_config() -> None:
    """Reload configuration."""
    config_manager.reload()


def save_config() -> None:
    """Save configuration to file."""
    config_manager.save_config()
