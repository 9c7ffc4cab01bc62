import argparse
import sys
from pathlib import Path

# Import configuration management
sys.path.append(str(Path(__file__).parent.parent))
from config_manager import ConfigManager

from flask import Flask, jsonify
from werkzeug.middleware.proxy_fix import ProxyFix

from app.recommendations.factory import create_recommendations_module
from compass_service.logging_config import setup_logging

SERVICE_NAME = "career-compass"


def create_app(config_manager: ConfigManager = None, external_rank=None) -> Flask:
    """Build the Flask application.

    Args:
        config_manager: Configuration source; a fresh ConfigManager by default
        external_rank: Ranking callable to use instead of the configured LLM
    """
    config_manager = config_manager or ConfigManager()
    llm_config = config_manager.get_llm_config()
    ranking_config = config_manager.get_ranking_config()

    flask_app = Flask(__name__)
    flask_app.wsgi_app = ProxyFix(
        flask_app.wsgi_app,
        x_proto=1,   # trust 1 hop for X-Forwarded-Proto
        x_host=1,    # trust 1 hop for X-Forwarded-Host
        x_prefix=1)  # trust 1 hop for X-Forwarded-Prefix

    recommendations_module = create_recommendations_module(
        llm_config=llm_config,
        ranking_config=ranking_config,
        external_rank=external_rank,
    )
    flask_app.register_blueprint(recommendations_module["blueprint"])
    flask_app.extensions["recommendations"] = recommendations_module

    @flask_app.get("/api/health")
    def health():
        """Health check endpoint for monitoring tools and cloud platforms."""
        return jsonify({
            "status": "UP",
            "service": SERVICE_NAME
        }), 200

    return flask_app


# -----------------------------------------------------------------------------
# Configuration
# -----------------------------------------------------------------------------

config_manager = ConfigManager()
app_config = config_manager.get_app_config()
llm_config = config_manager.get_llm_config()
ranking_config = config_manager.get_ranking_config()

app = create_app(config_manager)


# -----------------------------------------------------------------------------
# Entry point
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="CareerCompass event recommendation API")
    parser.add_argument("--port", type=int, help="Port to run the server on")
    parser.add_argument("--host", type=str, help="Host to bind the server to")
    parser.add_argument("--debug", action="store_true", help="Enable debug mode")
    args = parser.parse_args()

    # Override configuration with command line arguments
    if args.port:
        app_config.port = args.port
    if args.host:
        app_config.host = args.host
    if args.debug:
        app_config.debug = args.debug

    setup_logging(debug=app_config.debug)

    print("📋 Configuration loaded:")
    print(f"   - LLM Provider: {llm_config.provider}")
    print(f"   - Model: {llm_config.model}")
    print(f"   - Ranking timeout: {ranking_config.timeout_seconds}s")
    print(f"   - Server: {app_config.host}:{app_config.port}")
    app.run(
        host=app_config.host,
        port=app_config.port,
        debug=app_config.debug
    )
