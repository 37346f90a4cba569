"""Application factory for the clinic site."""
from __future__ import annotations

from flask import Flask
from flask_cors import CORS

from clinic_site.config import get_config
from clinic_site.app.middleware import register_request_logging


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application."""

    app = Flask(__name__)
    config_cls = get_config(config_name or app.config.get("ENV"))
    app.config.from_object(config_cls)

    register_blueprints(app)
    register_request_logging(app)

    CORS(app, resources={r"/api/*": {"origins": "*"}})
    return app


def register_blueprints(app: Flask) -> None:
    """Register application blueprints."""

    from clinic_site.app.api import api_bp
    from clinic_site.app.frontend import frontend_bp

    app.register_blueprint(api_bp, url_prefix="/api")
    app.register_blueprint(frontend_bp)
