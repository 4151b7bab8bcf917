"""
Error taxonomy shared by services and blueprints.

Services raise these; ``register_error_handlers`` renders them through
``jerror`` so every failure reaches the client as ``{code, message, error}``.
"""
import logging

from flask import request
from pydantic import ValidationError as SchemaError
from sqlalchemy.exc import SQLAlchemyError

from .extensions import db
from .http import jerror

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status = 500
    code = "INTERNAL_ERROR"

    def __init__(self, message: str, code: str | None = None, details=None, status: int | None = None):
        super().__init__(message)
        self.message = message
        self.details = details
        if code:
            self.code = code
        if status:
            self.status = status


class ValidationError(ApiError):
    status = 422
    code = "VALIDATION_ERROR"


class NotFoundError(ApiError):
    status = 404
    code = "NOT_FOUND"


class ConflictError(ApiError):
    status = 409
    code = "CONFLICT"


class AuthError(ApiError):
    status = 401
    code = "UNAUTHORIZED"


class StorageError(ApiError):
    status = 503
    code = "STORAGE_ERROR"


def parse_body(schema, payload=None):
    """Validates the JSON body (or ``payload``) against a pydantic model."""
    if payload is None:
        payload = request.get_json(silent=True)
    if payload is None:
        raise ValidationError("Missing or invalid JSON payload.", code="INVALID_PAYLOAD", status=400)
    try:
        return schema.model_validate(payload)
    except SchemaError as e:
        raise ValidationError(
            "Invalid input.",
            details=e.errors(include_url=False, include_context=False),
        ) from e


def register_error_handlers(app):
    @app.errorhandler(ApiError)
    def handle_api_error(e: ApiError):
        if e.status >= 500:
            logger.error("%s %s failed: %s", request.method, request.path, e.message)
        return jerror(e.status, e.code, e.message, details=e.details)

    @app.errorhandler(SQLAlchemyError)
    def handle_db_error(e: SQLAlchemyError):
        db.session.rollback()
        logger.exception("Database error on %s %s", request.method, request.path)
        return jerror(503, StorageError.code, "Storage backend unavailable.")

    @app.errorhandler(413)
    def handle_too_large(e):
        return jerror(413, "FILE_TOO_LARGE", "Uploaded file is too large.")
