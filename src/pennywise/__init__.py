"""Pennywise application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify

from .config import BaseConfig, DevConfig, TestConfig

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(config: BaseConfig | str | None) -> BaseConfig:
    """Return a config instance for an instance, an environment name, or None."""

    if isinstance(config, BaseConfig):
        return config
    if not config:
        return BaseConfig()
    return _CONFIG_MAP.get(config.lower(), BaseConfig)()


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths in registration order."""

    yield "pennywise.blueprints.auth"
    yield "pennywise.blueprints.users"
    yield "pennywise.blueprints.transactions"
    yield "pennywise.blueprints.budgets"
    yield "pennywise.blueprints.goals"
    yield "pennywise.blueprints.dashboard"


def create_app(config: BaseConfig | str | None = None) -> Flask:
    """Create and configure the Flask application instance.

    Raises ``ConfigurationError`` before anything else is wired when no token
    signing key is configured.
    """

    config_obj = _resolve_config(config)
    config_obj.require_signing_key()

    app = Flask(__name__, instance_relative_config=True)
    app.config.update(config_obj.flask_settings())
    app.config["PENNYWISE_CONFIG"] = config_obj
    app.json.sort_keys = False

    from . import cli as _cli
    from .devtools import dev_log
    from .errors import register_error_handlers
    from .extensions import init_app as init_extensions
    from .logging_config import init_request_logging, setup_logging

    setup_logging(config_obj)
    init_request_logging(app)
    register_error_handlers(app)
    init_extensions(app, config_obj)
    _register_blueprints(app)
    _cli.init_app(app)

    @app.get("/api/health")
    def health():
        return jsonify({"success": True, "message": "ok"})

    dev_log(config_obj, "Application created", context={"database": config_obj.DATABASE_URL})
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
