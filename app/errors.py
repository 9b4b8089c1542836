"""
Error types and JSON error handlers for the Blog API.

Every failure leaves the API as ``{"error": <message>}`` with the
matching status code; nothing is swallowed.
"""

import logging

from flask import Flask, Response, jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors surfaced to API clients."""

    status_code: int = 500
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(ApiError):
    """Request body is missing a field or carries an invalid value."""

    status_code = 400
    message = "Bad request"


class NotFoundError(ApiError):
    """Referenced post does not exist."""

    status_code = 404
    message = "Post not found"


class StoreError(ApiError):
    """The document store could not complete an operation."""

    status_code = 500
    message = "Internal server error"


def register_error_handlers(app: Flask) -> None:
    """Attach JSON error handlers to the application."""

    @app.errorhandler(ApiError)
    def handle_api_error(error: ApiError) -> tuple[Response, int]:
        if isinstance(error, StoreError):
            logger.error("Store failure: %s", error.__cause__ or error)
            # Details of the cause stay in the log
            return jsonify({"error": StoreError.message}), error.status_code
        logger.warning("%s: %s", type(error).__name__, error.message)
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException) -> tuple[Response, int]:
        """Render werkzeug's routing and parsing errors as JSON."""
        messages = {
            400: "Bad request",
            404: "Resource not found",
            405: "Method not allowed",
        }
        status = error.code or 500
        return jsonify({"error": messages.get(status, error.name)}), status

    @app.errorhandler(500)
    def internal_error(error: Exception) -> tuple[Response, int]:
        """Handle 500 Internal Server errors."""
        logger.error("Internal server error: %s", error)
        return jsonify({"error": "Internal server error"}), 500
