"""HeartLink: shareable invite links carrying an audio message."""
import logging
from pathlib import Path
from flask import Flask
from flask_cors import CORS

from heartlink import config
from heartlink.api.routes import api_bp
from heartlink.errors import register_error_handlers
from heartlink.pages.routes import pages_bp
from heartlink.services import init_services
from heartlink.utils.rate_limit import init_rate_limiter

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


def _configure_logging(level):
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logging.getLogger("heartlink").setLevel(level)


def create_app(overrides=None):
    """Application factory. `overrides` is applied on top of the environment settings."""
    app = Flask(__name__, static_folder=str(config.PUBLIC_DIR), static_url_path="")
    app.config.update(config.as_mapping())
    if overrides:
        app.config.update(overrides)
        if "PUBLIC_DIR" in overrides and "UPLOADS_DIR" not in overrides:
            app.config["UPLOADS_DIR"] = Path(overrides["PUBLIC_DIR"]) / "uploads"
    app.static_folder = str(app.config["PUBLIC_DIR"])
    # Hard cap on any request body; finer ceilings are enforced per route
    app.config["MAX_CONTENT_LENGTH"] = app.config["MAX_UPLOAD_BYTES"] + 1024 * 1024

    _configure_logging(app.config["LOG_LEVEL"])

    CORS(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})

    @app.after_request
    def set_security_headers(response):
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    init_services(app)
    init_rate_limiter(app)
    register_error_handlers(app)

    app.register_blueprint(api_bp)
    app.register_blueprint(pages_bp)
    return app
