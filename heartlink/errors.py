import logging
from flask import jsonify, request
from werkzeug.exceptions import HTTPException, RequestEntityTooLarge

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base for errors rendered as `{"error": ...}` JSON responses."""

    status_code = 400
    message = "Bad request"

    def __init__(self, message=None, status_code=None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        return {"error": self.message}


class ValidationFailed(ApiError):
    message = "Validation failed"

    def __init__(self, details):
        super().__init__()
        self.details = details

    def to_dict(self):
        return {"error": self.message, "details": self.details}


class Conflict(ApiError):
    message = "Conflict"


class Unauthorized(ApiError):
    status_code = 401
    message = "Unauthorized"


class InvalidCredentials(ApiError):
    status_code = 401
    message = "Invalid credentials"


class NotFound(ApiError):
    status_code = 404
    message = "Not found"


class UnsupportedMediaType(ApiError):
    message = "Only audio files are allowed!"


class PayloadTooLarge(ApiError):
    message = "File too large"


class RateLimited(ApiError):
    status_code = 429
    message = "Too many requests, please try again later"


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def api_error(e):
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        return jsonify(error="Payload too large"), 413

    @app.errorhandler(404)
    def not_found(e):
        if request.path.startswith("/api/"):
            return jsonify(error="Not found"), 404
        return e

    @app.errorhandler(Exception)
    def unhandled(e):
        if isinstance(e, HTTPException):
            return e
        logger.error("Unhandled exception on %s %s", request.method, request.path, exc_info=e)
        return jsonify(error="An internal error occurred"), 500
