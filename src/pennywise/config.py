"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .errors import ConfigurationError

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_list(name: str, default: str) -> list[str]:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


class BaseConfig:
    """Base configuration shared across environments."""

    DB_FILENAME = "pennywise.db"
    TOKEN_HEADER = "X-Auth-Token"
    TOKEN_TTL_HOURS = 24
    TESTING = False

    def __init__(self) -> None:
        self.JWT_SECRET_KEY = os.getenv("PENNYWISE_JWT_SECRET")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("PENNYWISE_DEV_MODE", default=False)
        self.DATABASE_URL = os.getenv("PENNYWISE_DATABASE_URL", self._build_sqlite_url())
        self.CORS_ORIGINS = _env_list("PENNYWISE_CORS_ORIGINS", "http://localhost:5173")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("PENNYWISE_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    @property
    def token_ttl(self) -> timedelta:
        return timedelta(hours=self.TOKEN_TTL_HOURS)

    def require_signing_key(self) -> str:
        """Return the token signing key or abort startup when it is absent."""

        if not self.JWT_SECRET_KEY:
            raise ConfigurationError(
                "PENNYWISE_JWT_SECRET must be set; refusing to start without a signing key."
            )
        return self.JWT_SECRET_KEY

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        return engine_options

    def flask_settings(self) -> dict[str, Any]:
        """Settings copied into ``app.config`` for Flask extensions."""

        return {
            "TESTING": self.TESTING,
            "JWT_SECRET_KEY": self.require_signing_key(),
            "JWT_TOKEN_LOCATION": ["headers"],
            "JWT_HEADER_NAME": self.TOKEN_HEADER,
            "JWT_HEADER_TYPE": "",
            "JWT_ACCESS_TOKEN_EXPIRES": self.token_ttl,
        }


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True


class TestConfig(BaseConfig):
    """Configuration used by the test-suite."""

    __test__ = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.JWT_SECRET_KEY = self.JWT_SECRET_KEY or "test-signing-key-0123456789abcdef"
        self.DEV_MODE = True
