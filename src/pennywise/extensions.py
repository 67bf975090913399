"""Database and extension wiring for Pennywise."""

from __future__ import annotations

from dataclasses import dataclass

from flask import Flask, current_app
from flask_cors import CORS
from sqlalchemy.engine import Engine

from .config import BaseConfig
from .infra.database import SessionFactory, bootstrap_database
from .infra.repositories import (
    SQLModelBudgetRepository,
    SQLModelGoalRepository,
    SQLModelTransactionRepository,
)
from .security import jwt

EXTENSION_KEY = "pennywise"


@dataclass
class AppServices:
    """Engine, session factory, and repositories shared by every request."""

    config: BaseConfig
    engine: Engine
    session_factory: SessionFactory
    transaction_repo: SQLModelTransactionRepository
    budget_repo: SQLModelBudgetRepository
    goal_repo: SQLModelGoalRepository


def init_app(app: Flask, config: BaseConfig) -> AppServices:
    """Create the engine, schema, and repositories and attach Flask extensions."""

    engine, session_factory = bootstrap_database(config)
    services = AppServices(
        config=config,
        engine=engine,
        session_factory=session_factory,
        transaction_repo=SQLModelTransactionRepository(session_factory),
        budget_repo=SQLModelBudgetRepository(session_factory),
        goal_repo=SQLModelGoalRepository(session_factory),
    )
    app.extensions[EXTENSION_KEY] = services

    jwt.init_app(app)
    CORS(
        app,
        resources={r"/api/*": {"origins": config.CORS_ORIGINS}},
        allow_headers=["Content-Type", config.TOKEN_HEADER],
    )
    return services


def get_services() -> AppServices:
    """Return the services bound to the active application."""

    try:
        return current_app.extensions[EXTENSION_KEY]
    except KeyError:  # pragma: no cover - exercised only on misconfigured apps
        raise RuntimeError("Pennywise extensions not initialized") from None
