"""Small helpers for dev-mode logging and diagnostics."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from .logging_config import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from .config import BaseConfig

logger = get_logger("dev")


def in_dev_mode(config: "BaseConfig | None") -> bool:
    """Return True when dev mode diagnostics are enabled."""

    return bool(getattr(config, "DEV_MODE", False)) if config is not None else False


def dev_log(
    config: "BaseConfig | None",
    message: str,
    *,
    context: Mapping[str, Any] | None = None,
) -> None:
    """Emit developer-friendly diagnostics when dev mode is enabled."""

    if not in_dev_mode(config):
        return

    extras = " ".join(f"{k}={v}" for k, v in (context or {}).items())
    logger.info("[DEV] %s%s", message, f" ({extras})" if extras else "")
