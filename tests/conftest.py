"""Pytest configuration and shared fixtures for Pennywise tests.

Every test gets its own temporary SQLite file, data directory, and Flask app,
so nothing touches a real database.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any

import pytest
from sqlmodel import Session, SQLModel, create_engine

from pennywise import create_app
from pennywise.config import TestConfig
from pennywise.models import User

TEST_SECRET = "test-signing-key-0123456789abcdef"


# =============================================================================
# Application Fixtures
# =============================================================================


@pytest.fixture()
def test_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point configuration at a throwaway data directory and database."""

    monkeypatch.setenv("PENNYWISE_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("PENNYWISE_DATABASE_URL", f"sqlite:///{tmp_path / 'pennywise.db'}")
    monkeypatch.setenv("PENNYWISE_JWT_SECRET", TEST_SECRET)
    return tmp_path


@pytest.fixture()
def app(test_env):
    app = create_app(TestConfig())
    yield app
    app.extensions["pennywise"].engine.dispose()


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture()
def services(app):
    """Engine, session factory, and repositories bound to the test app."""
    return app.extensions["pennywise"]


def auth_headers(token: str) -> dict[str, str]:
    return {"X-Auth-Token": token}


@pytest.fixture()
def make_user(client):
    """Register a user through the API and return ``(headers, user_payload)``."""

    counter = {"n": 0}

    def _make_user(name: str | None = None, email: str | None = None, password: str = "secret123"):
        counter["n"] += 1
        name = name or f"User {counter['n']}"
        email = email or f"user{counter['n']}@example.com"
        response = client.post(
            "/api/auth/register", json={"name": name, "email": email, "password": password}
        )
        assert response.status_code == 201, response.get_json()
        body = response.get_json()
        return auth_headers(body["token"]), body["user"]

    return _make_user


@pytest.fixture()
def user_headers(make_user) -> dict[str, str]:
    headers, _ = make_user()
    return headers


@pytest.fixture()
def create_record(client):
    """POST a JSON body and return the created record's payload."""

    def _create(path: str, headers: dict[str, str], **body: Any) -> dict[str, Any]:
        response = client.post(path, json=body, headers=headers)
        assert response.status_code == 201, response.get_json()
        return response.get_json()["data"]

    return _create


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture()
def db_engine(tmp_path):
    """Create an isolated SQLite database file with every table."""

    engine = create_engine(f"sqlite:///{tmp_path / 'repo.db'}", echo=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(db_engine):
    """Session factory with the same commit/rollback contract as the app's."""

    @contextmanager
    def factory():
        session = Session(db_engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def _seed_user(session_factory, email: str) -> int:
    with session_factory() as session:
        user = User(name=email.split("@")[0], email=email, password_hash="dummy-hash")
        session.add(user)
        session.commit()
        session.refresh(user)
        return user.id  # type: ignore[return-value]


@pytest.fixture()
def owner_id(session_factory) -> int:
    return _seed_user(session_factory, "owner@example.com")


@pytest.fixture()
def other_id(session_factory) -> int:
    return _seed_user(session_factory, "other@example.com")
