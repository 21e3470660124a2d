"""
Error taxonomy for the helpdesk API.

Every error carries the HTTP status it maps to and is rendered by the
handlers registered in ``register_error_handlers`` as ``{"error": message}``.

    UnauthorizedError       401  no session / not an admin
    ValidationError         400  required identifier missing
    StoreError              500  unclassified database failure
      ConflictError         409  unique constraint violated
      NotFoundError         404  row missing / foreign key violated
      StoreUnavailableError 503  database unreachable
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class HelpdeskError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class UnauthorizedError(HelpdeskError):
    status_code = 401
    default_message = "Unauthorized"


class ValidationError(HelpdeskError):
    status_code = 400
    default_message = "Invalid request"

    @classmethod
    def required(cls, field: str) -> "ValidationError":
        return cls(f"{field} is required")


class StoreError(HelpdeskError):
    status_code = 500
    default_message = "Database error"


class ConflictError(StoreError):
    status_code = 409
    default_message = "Record already exists"


class NotFoundError(StoreError):
    status_code = 404
    default_message = "Record not found"


class StoreUnavailableError(StoreError):
    status_code = 503
    default_message = "Database unavailable"


def error_response(message: str, status_code: int):
    return jsonify({"error": message}), status_code


def register_error_handlers(app) -> None:
    """Map the taxonomy (and stray exceptions) onto JSON error responses."""

    @app.errorhandler(HelpdeskError)
    def _handle_helpdesk_error(ex: HelpdeskError):
        if ex.status_code >= 500:
            logger.error(f"{type(ex).__name__}: {ex.message}", exc_info=ex.__cause__ is not None)
        return error_response(ex.message, ex.status_code)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(ex: HTTPException):
        return error_response(ex.description or ex.name, ex.code or 500)

    @app.errorhandler(Exception)
    def _handle_unexpected(ex: Exception):
        logger.exception("Unhandled exception")
        return error_response("Internal server error", 500)
