"""Convert records and derived values into camelCase API payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, Mapping

from sqlmodel import SQLModel

from .models import Budget, Goal, Transaction, User
from .services.budgeting import BudgetProgress

# Internal names that the API exposes under a different key.
_RENAMED = {
    "occurred_at": "date",
}

_HIDDEN = {"password_hash"}


def to_camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def _encode(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


def serialize_record(record: SQLModel, *, extra: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """Dump a table row with camelCase keys, dropping secrets."""

    payload: dict[str, Any] = {}
    for name, value in record.model_dump().items():
        if name in _HIDDEN:
            continue
        payload[_RENAMED.get(name, to_camel(name))] = _encode(value)
    for key, value in (extra or {}).items():
        payload[key] = _encode(value)
    return payload


def serialize_user(user: User) -> dict[str, Any]:
    return serialize_record(user)


def serialize_transaction(txn: Transaction) -> dict[str, Any]:
    return serialize_record(txn)


def serialize_budget(budget: Budget) -> dict[str, Any]:
    return serialize_record(budget)


def serialize_goal(goal: Goal) -> dict[str, Any]:
    return serialize_record(goal, extra={"progressPercentage": round(goal.progress_percentage, 2)})


def serialize_many(records: Iterable[SQLModel]) -> list[dict[str, Any]]:
    serializers = {
        User: serialize_user,
        Transaction: serialize_transaction,
        Budget: serialize_budget,
        Goal: serialize_goal,
    }
    return [serializers.get(type(record), serialize_record)(record) for record in records]


def serialize_budget_progress(progress: BudgetProgress) -> dict[str, Any]:
    return {
        "budgetAmount": progress.budget_amount,
        "spent": progress.spent,
        "remaining": progress.remaining,
        "progressPercent": progress.progress_percent,
        "periodStart": progress.period_start.isoformat(),
        "periodEnd": progress.period_end.isoformat(),
        "thresholdReached": progress.threshold_reached,
    }
