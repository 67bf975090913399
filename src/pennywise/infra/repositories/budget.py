"""SQLModel implementation of Budget repository."""

from __future__ import annotations

from sqlalchemy import func
from sqlmodel import select

from ...models.budget import Budget
from .base import SQLModelOwnedRepository


class SQLModelBudgetRepository(SQLModelOwnedRepository[Budget]):
    """SQLModel-based budget repository implementation."""

    model = Budget

    def _default_order(self) -> tuple:
        return (Budget.created_at.desc(), Budget.id.desc())  # type: ignore

    def totals_by_category(self, *, user_id: int) -> list[tuple[str, float, int]]:
        """Return (category, total budgeted, budget count) rows ordered by category."""
        with self.session_factory() as session:
            statement = (
                select(Budget.category, func.sum(Budget.amount), func.count(Budget.id))
                .where(Budget.user_id == user_id)
                .group_by(Budget.category)
                .order_by(Budget.category)
            )
            return [
                (str(category), float(total or 0.0), int(count))
                for category, total, count in session.exec(statement).all()
            ]
