"""Budget repository protocol."""

from __future__ import annotations

from typing import Protocol

from ...models.budget import Budget
from .owned import OwnedRecordRepository


class BudgetRepository(OwnedRecordRepository[Budget], Protocol):
    """Repository for managing budget entities."""

    def totals_by_category(self, *, user_id: int) -> list[tuple[str, float, int]]:
        """(category, total budgeted, count) rows."""
        ...
