"""Budgeting domain services."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Mapping, Optional

from ..domain.repositories import BudgetRepository, TransactionRepository
from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.budget import Budget
from . import ownership

logger = get_logger("budgeting")

LABEL = "Budget"


def period_start(period: str, now: datetime) -> datetime:
    """Return midnight at the start of the period containing ``now``.

    Weeks start on Sunday.
    """

    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if period == "daily":
        return midnight
    if period == "weekly":
        # weekday(): Monday == 0 ... Sunday == 6
        return midnight - timedelta(days=(midnight.weekday() + 1) % 7)
    if period == "monthly":
        return midnight.replace(day=1)
    if period == "yearly":
        return midnight.replace(month=1, day=1)
    raise ValidationError.single("period", f"Unknown budget period: {period}")


@dataclass(slots=True)
class BudgetProgress:
    """Spending against one budget within its current period window."""

    budget_amount: float
    spent: float
    period_start: datetime
    period_end: datetime
    notifications_enabled: bool = True
    notification_threshold: float = 80.0

    @property
    def remaining(self) -> float:
        return round(self.budget_amount - self.spent, 2)

    @property
    def progress_percent(self) -> float:
        return round(self.spent / self.budget_amount * 100, 2)

    @property
    def threshold_reached(self) -> bool:
        return self.notifications_enabled and self.progress_percent >= self.notification_threshold


def _check_dates(fields: Mapping[str, Any]) -> None:
    start, end = fields.get("start_date"), fields.get("end_date")
    if start is not None and end is not None and end < start:
        raise ValidationError.single("endDate", "End date cannot be before the start date.")


def list_budgets(repo: BudgetRepository, *, user_id: int) -> list[Budget]:
    """Return the user's budgets, most recently created first."""
    return repo.list_all(user_id=user_id)


def create_budget(repo: BudgetRepository, *, user_id: int, fields: Mapping[str, Any]) -> Budget:
    values = dict(fields)
    values.setdefault("start_date", datetime.now())
    _check_dates(values)
    budget = repo.create(Budget(**values), user_id=user_id)
    logger.info("Budget created", extra={"user_id": user_id, "budget_id": budget.id})
    return budget


def get_budget(repo: BudgetRepository, budget_id: int, *, user_id: int) -> Budget:
    return ownership.fetch_owned(repo, budget_id, user_id=user_id, label=LABEL)


def update_budget(
    repo: BudgetRepository, budget_id: int, *, user_id: int, changes: Mapping[str, Any]
) -> Budget:
    current = ownership.fetch_owned(repo, budget_id, user_id=user_id, label=LABEL)
    _check_dates({**current.model_dump(), **changes})
    return ownership.update_owned(repo, budget_id, user_id=user_id, changes=changes, label=LABEL)


def delete_budget(repo: BudgetRepository, budget_id: int, *, user_id: int) -> None:
    ownership.delete_owned(repo, budget_id, user_id=user_id, label=LABEL)
    logger.info("Budget deleted", extra={"user_id": user_id, "budget_id": budget_id})


def budget_progress(
    budgets: BudgetRepository,
    transactions: TransactionRepository,
    budget_id: int,
    *,
    user_id: int,
    now: Optional[datetime] = None,
) -> BudgetProgress:
    """Sum matching expenses from the start of the current period up to ``now``."""

    budget = ownership.fetch_owned(budgets, budget_id, user_id=user_id, label=LABEL)
    if budget.amount <= 0:
        raise ValidationError.single(
            "amount", "Budget amount must be greater than zero to compute progress."
        )

    now = now or datetime.now()
    start = period_start(budget.period, now)
    spent = transactions.sum_amount(
        user_id=user_id,
        txn_type="expense",
        category=budget.category,
        start_date=start,
        end_date=now,
    )
    return BudgetProgress(
        budget_amount=budget.amount,
        spent=round(spent, 2),
        period_start=start,
        period_end=now,
        notifications_enabled=budget.notifications_enabled,
        notification_threshold=budget.notification_threshold,
    )


def budget_stats(repo: BudgetRepository, *, user_id: int) -> list[dict[str, Any]]:
    """Total budgeted amount and budget count per category."""

    return [
        {"category": category, "totalAmount": round(total, 2), "count": count}
        for category, total, count in repo.totals_by_category(user_id=user_id)
    ]
