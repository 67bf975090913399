"""Transaction listing, persistence, and monthly rollups."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..constants.categories import PERIODS, TRANSACTION_TYPES, categories_for_type
from ..domain.repositories import TransactionRepository
from ..errors import ValidationError
from ..logging_config import get_logger
from ..models.transaction import Transaction
from . import ownership

logger = get_logger("transactions")

LABEL = "Transaction"


@dataclass
class TransactionFilters:
    """Filters applied to transaction listings."""

    txn_type: Optional[str] = None
    category: Optional[str] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None


def _check_invariants(fields: Mapping[str, Any]) -> None:
    """Validate the cross-field rules on a complete (merged) record."""

    errors: dict[str, list[str]] = {}
    txn_type = fields.get("type")
    if txn_type not in TRANSACTION_TYPES:
        errors.setdefault("type", []).append("Type must be income or expense.")
    elif fields.get("category") not in categories_for_type(txn_type):
        errors.setdefault("category", []).append(
            f"Category is not valid for {txn_type} transactions."
        )

    if fields.get("is_recurring"):
        if fields.get("recurring_pattern") not in PERIODS:
            errors.setdefault("recurringPattern", []).append(
                "Recurring pattern is required for recurring transactions."
            )
        if fields.get("recurring_end_date") is None:
            errors.setdefault("recurringEndDate", []).append(
                "Recurring end date is required for recurring transactions."
            )

    if errors:
        raise ValidationError(errors)


def _snapshot(txn: Transaction) -> dict[str, Any]:
    return txn.model_dump()


def list_transactions(
    repo: TransactionRepository, *, user_id: int, filters: TransactionFilters | None = None
) -> list[Transaction]:
    """Return the user's transactions, newest first."""

    filters = filters or TransactionFilters()
    return repo.search(
        user_id=user_id,
        txn_type=filters.txn_type,
        category=filters.category,
        start_date=filters.start_date,
        end_date=filters.end_date,
    )


def create_transaction(
    repo: TransactionRepository, *, user_id: int, fields: Mapping[str, Any]
) -> Transaction:
    """Validate and persist a new transaction for ``user_id``."""

    values = dict(fields)
    values.setdefault("occurred_at", datetime.now())
    _check_invariants(values)
    txn = repo.create(Transaction(**values), user_id=user_id)
    logger.info(
        "Transaction created",
        extra={"user_id": user_id, "transaction_id": txn.id, "type": txn.type},
    )
    return txn


def get_transaction(repo: TransactionRepository, transaction_id: int, *, user_id: int) -> Transaction:
    return ownership.fetch_owned(repo, transaction_id, user_id=user_id, label=LABEL)


def update_transaction(
    repo: TransactionRepository,
    transaction_id: int,
    *,
    user_id: int,
    changes: Mapping[str, Any],
) -> Transaction:
    """Apply a partial update; the merged record must still be consistent."""

    current = ownership.fetch_owned(repo, transaction_id, user_id=user_id, label=LABEL)
    merged = {**_snapshot(current), **changes}
    _check_invariants(merged)
    return ownership.update_owned(
        repo, transaction_id, user_id=user_id, changes=changes, label=LABEL
    )


def delete_transaction(repo: TransactionRepository, transaction_id: int, *, user_id: int) -> None:
    ownership.delete_owned(repo, transaction_id, user_id=user_id, label=LABEL)
    logger.info("Transaction deleted", extra={"user_id": user_id, "transaction_id": transaction_id})


def monthly_stats(repo: TransactionRepository, *, user_id: int) -> list[dict[str, Any]]:
    """Totals grouped by (year, month, type), most recent month first."""

    return [
        {"year": year, "month": month, "type": txn_type, "total": round(total, 2), "count": count}
        for year, month, txn_type, total, count in repo.monthly_totals(user_id=user_id)
    ]
