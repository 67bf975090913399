"""Issue and verify signed session tokens.

Tokens are HS256 JWTs whose subject is the user id. The signing key and the
24 hour lifetime come from the application config, so both helpers need an
active Flask application context.
"""

from __future__ import annotations

from datetime import timedelta

import jwt
from flask_jwt_extended import create_access_token, decode_token
from flask_jwt_extended.exceptions import JWTExtendedException

from ..errors import TokenExpiredError, TokenMalformedError


def issue_token(user_id: int, *, expires_delta: timedelta | None = None) -> str:
    """Return a signed token bound to ``user_id``."""

    if expires_delta is None:
        return create_access_token(identity=str(user_id))
    return create_access_token(identity=str(user_id), expires_delta=expires_delta)


def verify_token(token: str) -> int:
    """Return the user id embedded in ``token``.

    Raises:
        TokenExpiredError: the token is past its expiry.
        TokenMalformedError: bad signature, structure, or subject.
    """

    try:
        claims = decode_token(token)
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpiredError() from exc
    except (jwt.InvalidTokenError, JWTExtendedException) as exc:
        raise TokenMalformedError() from exc

    try:
        return int(claims["sub"])
    except (KeyError, TypeError, ValueError) as exc:
        raise TokenMalformedError() from exc
