"""Token issuing and verification."""

from __future__ import annotations

from datetime import timedelta

import jwt
import pytest
from flask_jwt_extended import decode_token

from pennywise.errors import TokenExpiredError, TokenMalformedError
from pennywise.services.tokens import issue_token, verify_token


def test_token_round_trips_user_id(app):
    with app.app_context():
        token = issue_token(42)
        assert verify_token(token) == 42


def test_token_lives_for_twenty_four_hours(app):
    with app.app_context():
        claims = decode_token(issue_token(7))

    assert claims["sub"] == "7"
    assert claims["exp"] - claims["iat"] == 24 * 3600


def test_expired_token_is_rejected(app):
    with app.app_context():
        token = issue_token(7, expires_delta=timedelta(seconds=-1))
        with pytest.raises(TokenExpiredError):
            verify_token(token)


def test_garbage_token_is_malformed(app):
    with app.app_context():
        with pytest.raises(TokenMalformedError):
            verify_token("not-a-token")


def test_token_signed_with_another_key_is_malformed(app):
    forged = jwt.encode(
        {"sub": "7", "type": "access"}, "another-signing-key-0123456789abcd", algorithm="HS256"
    )
    with app.app_context():
        with pytest.raises(TokenMalformedError):
            verify_token(forged)


def test_missing_header_is_rejected(client):
    response = client.get("/api/dashboard")

    assert response.status_code == 401
    assert response.get_json() == {
        "success": False,
        "message": "No token, authorization denied",
    }


def test_expired_header_is_rejected(app, client, make_user):
    _, user = make_user()
    with app.app_context():
        token = issue_token(user["id"], expires_delta=timedelta(seconds=-1))

    response = client.get("/api/dashboard", headers={"X-Auth-Token": token})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Token has expired"


def test_malformed_header_is_rejected(client):
    response = client.get("/api/dashboard", headers={"X-Auth-Token": "abc.def.ghi"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid token"


def test_bearer_prefix_is_not_accepted(client, make_user):
    headers, _ = make_user()
    token = headers["X-Auth-Token"]

    response = client.get("/api/dashboard", headers={"X-Auth-Token": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.get_json()["message"] == "Invalid token"
