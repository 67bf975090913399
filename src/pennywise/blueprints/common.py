"""Request and response helpers shared by the API blueprints."""

from __future__ import annotations

from typing import Any

from flask import jsonify, request

from ..errors import ValidationError


def json_body() -> dict[str, Any]:
    """Return the request's JSON object (empty when there is no body)."""

    data = request.get_json(silent=True)
    if data is None:
        if request.get_data(cache=True).strip():
            raise ValidationError(message="Request body must be valid JSON")
        return {}
    if not isinstance(data, dict):
        raise ValidationError(message="Request body must be a JSON object")
    return data


def respond(data: Any = None, *, status: int = 200, message: str | None = None, **extra: Any):
    """Render the success envelope; lists also report their ``count``."""

    payload: dict[str, Any] = {"success": True}
    if isinstance(data, list):
        payload["count"] = len(data)
    if data is not None:
        payload["data"] = data
    if message:
        payload["message"] = message
    payload.update(extra)
    return jsonify(payload), status
