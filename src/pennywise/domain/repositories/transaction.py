"""Transaction repository protocol."""

from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol

from ...models.transaction import Transaction
from .owned import OwnedRecordRepository


class TransactionRepository(OwnedRecordRepository[Transaction], Protocol):
    """Repository for managing transaction entities."""

    def search(
        self,
        *,
        user_id: int,
        txn_type: Optional[str] = None,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> list[Transaction]:
        """Filtered listing, newest first."""
        ...

    def sum_amount(
        self,
        *,
        user_id: int,
        txn_type: str,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> float:
        """Sum of amounts for matching transactions."""
        ...

    def monthly_totals(self, *, user_id: int) -> list[tuple[int, int, str, float, int]]:
        """(year, month, type, total, count) rows, newest month first."""
        ...
