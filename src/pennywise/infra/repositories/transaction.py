"""SQLModel implementation of Transaction repository."""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import extract, func
from sqlmodel import select

from ...models.transaction import Transaction
from .base import SQLModelOwnedRepository


class SQLModelTransactionRepository(SQLModelOwnedRepository[Transaction]):
    """SQLModel-based transaction repository implementation."""

    model = Transaction

    def _default_order(self) -> tuple:
        return (Transaction.occurred_at.desc(), Transaction.id.desc())  # type: ignore

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
        with self.session_factory() as session:
            statement = select(Transaction).where(Transaction.user_id == user_id)

            if txn_type:
                statement = statement.where(Transaction.type == txn_type)
            if category:
                statement = statement.where(Transaction.category == category)
            if start_date:
                statement = statement.where(Transaction.occurred_at >= start_date)
            if end_date:
                statement = statement.where(Transaction.occurred_at <= end_date)

            statement = statement.order_by(*self._default_order())
            if limit is not None:
                statement = statement.limit(limit)
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def sum_amount(
        self,
        *,
        user_id: int,
        txn_type: str,
        category: Optional[str] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> float:
        """Total amount of matching transactions (0.0 when none match)."""
        with self.session_factory() as session:
            statement = (
                select(func.coalesce(func.sum(Transaction.amount), 0.0))
                .where(Transaction.user_id == user_id)
                .where(Transaction.type == txn_type)
            )
            if category:
                statement = statement.where(Transaction.category == category)
            if start_date:
                statement = statement.where(Transaction.occurred_at >= start_date)
            if end_date:
                statement = statement.where(Transaction.occurred_at <= end_date)
            return float(session.exec(statement).one())

    def monthly_totals(self, *, user_id: int) -> list[tuple[int, int, str, float, int]]:
        """Return (year, month, type, total, count) rows, most recent month first."""
        year = extract("year", Transaction.occurred_at)
        month = extract("month", Transaction.occurred_at)
        with self.session_factory() as session:
            statement = (
                select(
                    year,
                    month,
                    Transaction.type,
                    func.sum(Transaction.amount),
                    func.count(Transaction.id),
                )
                .where(Transaction.user_id == user_id)
                .group_by(year, month, Transaction.type)
                .order_by(year.desc(), month.desc(), Transaction.type)
            )
            return [
                (int(y), int(m), str(t), float(total or 0.0), int(count))
                for y, m, t, total, count in session.exec(statement).all()
            ]
