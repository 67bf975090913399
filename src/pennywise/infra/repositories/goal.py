"""SQLModel implementation of Goal repository."""

from __future__ import annotations

from ...models.goal import Goal
from .base import SQLModelOwnedRepository


class SQLModelGoalRepository(SQLModelOwnedRepository[Goal]):
    """SQLModel-based goal repository; goals list soonest deadline first."""

    model = Goal

    def _default_order(self) -> tuple:
        return (Goal.target_date.asc(), Goal.id.asc())  # type: ignore
