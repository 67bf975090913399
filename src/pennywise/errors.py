"""Error taxonomy and JSON error handlers."""

from __future__ import annotations

from typing import Mapping, Sequence

from flask import Flask, current_app, jsonify
from werkzeug.exceptions import HTTPException


class ConfigurationError(RuntimeError):
    """Raised at startup when required configuration is missing."""


class PennywiseError(Exception):
    """Base class for errors reported to API clients."""

    status_code = 500
    message = "Server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_payload(self) -> dict:
        return {"success": False, "message": self.message}


class ValidationError(PennywiseError):
    """Missing or malformed input, reported per field."""

    status_code = 400
    message = "Validation error"

    def __init__(
        self,
        errors: Mapping[str, Sequence[str]] | None = None,
        message: str | None = None,
    ) -> None:
        super().__init__(message)
        self.errors = {field: list(msgs) for field, msgs in (errors or {}).items()}

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls({field: [message]})

    def to_payload(self) -> dict:
        payload = super().to_payload()
        if self.errors:
            payload["errors"] = self.errors
        return payload


class InvalidCredentialsError(PennywiseError):
    status_code = 400
    message = "Invalid credentials"


class UnauthenticatedError(PennywiseError):
    status_code = 401
    message = "No token, authorization denied"


class TokenExpiredError(UnauthenticatedError):
    message = "Token has expired"


class TokenMalformedError(UnauthenticatedError):
    message = "Invalid token"


class ForbiddenError(PennywiseError):
    status_code = 403
    message = "Not authorized"


class NotFoundError(PennywiseError):
    status_code = 404
    message = "Resource not found"


class ConflictError(PennywiseError):
    status_code = 409
    message = "User already exists"


def register_error_handlers(app: Flask) -> None:
    """Render every failure as the standard JSON envelope."""

    from .devtools import in_dev_mode
    from .logging_config import get_logger

    logger = get_logger("errors")

    @app.errorhandler(PennywiseError)
    def _handle_api_error(exc: PennywiseError):
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message)
        return jsonify(exc.to_payload()), exc.status_code

    @app.errorhandler(HTTPException)
    def _handle_http_error(exc: HTTPException):
        payload = {"success": False, "message": exc.description or exc.name}
        return jsonify(payload), exc.code or 500

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        logger.exception("Unhandled error while serving request")
        payload = {"success": False, "message": "Server error"}
        if in_dev_mode(current_app.config.get("PENNYWISE_CONFIG")):
            payload["error"] = str(exc)
        return jsonify(payload), 500
