"""Token authentication gate for API routes."""

from __future__ import annotations

from functools import wraps
from typing import Callable, TypeVar

from flask import jsonify
from flask_jwt_extended import JWTManager, get_current_user, jwt_required

from .errors import (
    ForbiddenError,
    TokenExpiredError,
    TokenMalformedError,
    UnauthenticatedError,
)
from .logging_config import get_logger
from .models.user import User

logger = get_logger("security")

jwt = JWTManager()

F = TypeVar("F", bound=Callable)


def _reject(error: UnauthenticatedError):
    return jsonify(error.to_payload()), error.status_code


@jwt.unauthorized_loader
def _missing_token(reason: str):
    return _reject(UnauthenticatedError())


@jwt.expired_token_loader
def _expired_token(jwt_header: dict, jwt_payload: dict):
    return _reject(TokenExpiredError())


@jwt.invalid_token_loader
def _invalid_token(reason: str):
    logger.info("Rejected token", extra={"reason": reason})
    return _reject(TokenMalformedError())


@jwt.user_lookup_loader
def _load_user(jwt_header: dict, jwt_data: dict) -> User | None:
    from .extensions import get_services
    from .services import auth

    try:
        user_id = int(jwt_data["sub"])
    except (KeyError, TypeError, ValueError):
        return None
    return auth.get_user(user_id, get_services().session_factory)


@jwt.user_lookup_error_loader
def _unknown_user(jwt_header: dict, jwt_data: dict):
    return _reject(UnauthenticatedError("User no longer exists"))


def login_required(fn: F) -> F:
    """Require a valid ``X-Auth-Token`` for the wrapped view."""

    return jwt_required()(fn)  # type: ignore[return-value]


def role_required(role: str) -> Callable[[F], F]:
    """Require a valid token whose user holds ``role``."""

    def decorator(fn: F) -> F:
        @wraps(fn)
        @jwt_required()
        def wrapper(*args, **kwargs):
            if current_identity().role != role:
                raise ForbiddenError("Forbidden")
            return fn(*args, **kwargs)

        return wrapper  # type: ignore[return-value]

    return decorator


def current_identity() -> User:
    """Return the user resolved from the request token."""

    return get_current_user()
