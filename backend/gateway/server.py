"""
API gateway: serves the slide blueprint plus health checks.
This is the local entrypoint for development.
"""

from flask import Flask, jsonify
import os
import logging
from typing import Optional
from dotenv import load_dotenv

from backend.slide_service.config import SlideConfig

load_dotenv()

# Basic console logging during API requests
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="[%(levelname)s] %(asctime)s - %(message)s"
)

def create_app(config: Optional[SlideConfig] = None) -> Flask:
    """
    Application factory for creating the Flask app.

    Args:
        config (SlideConfig, optional): Slide settings. Read from the environment if omitted.

    Returns:
        Flask: The configured Flask application.
    """
    app = Flask(__name__)
    app.config["SLIDE_CONFIG"] = config if config is not None else SlideConfig.from_env()

    if not app.config["SLIDE_CONFIG"].api_key:
        logging.warning("OPENAI_API_KEY is not set. Slide requests will fail with 500.")

    # --- REGISTER BLUEPRINTS ---
    from backend.slide_service.routes import slide_bp

    app.register_blueprint(slide_bp, url_prefix="/api")
    logging.info("Slide blueprint registered successfully.")

    # --- BASIC HEALTH CHECKPOINTS ---
    @app.route("/")
    def ping():
        """
        Root URL for simple 'online' check.
        """
        return jsonify({"status": "gateway_ok"}), 200

    @app.route("/health")
    def health():
        """
        Health check endpoint.
        """
        return jsonify({"status": "ok"}), 200

    return app

if __name__ == "__main__":
    app = create_app()
    port = int(os.getenv("GATEWAY_PORT", 5050))
    app.run(host="0.0.0.0", port=port, debug=True)
