"""Data loaders for the dashboard summary."""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Iterable, Optional

from ..domain.repositories import TransactionRepository
from ..models.transaction import Transaction

RECENT_LIMIT = 5


def month_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return the first and last instants of the calendar month containing ``now``."""

    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        next_start = start.replace(year=start.year + 1, month=1)
    else:
        next_start = start.replace(month=start.month + 1)
    return start, next_start - timedelta(microseconds=1)


def compute_spending_by_category(transactions: Iterable[Transaction]) -> list[dict[str, Any]]:
    """Roll up expense totals per category, largest first."""

    totals: dict[str, float] = {}
    for txn in transactions:
        if txn.type != "expense":
            continue
        totals[txn.category] = totals.get(txn.category, 0.0) + float(txn.amount)

    breakdown = [{"name": name, "value": round(total, 2)} for name, total in totals.items()]
    breakdown.sort(key=lambda entry: entry["value"], reverse=True)
    return breakdown


def load_dashboard_summary(
    repo: TransactionRepository, *, user_id: int, now: Optional[datetime] = None
) -> dict[str, Any]:
    """Gather the balance, this month's totals, recent activity, and spending mix."""

    now = now or datetime.now()
    month_start, month_end = month_bounds(now)

    # Balances over all time ----------------------------------------------
    total_income = repo.sum_amount(user_id=user_id, txn_type="income")
    total_expenses = repo.sum_amount(user_id=user_id, txn_type="expense")

    # Current calendar month ----------------------------------------------
    month_transactions = repo.search(
        user_id=user_id, start_date=month_start, end_date=month_end
    )
    monthly_income = sum(float(t.amount) for t in month_transactions if t.type == "income")
    monthly_expenses = sum(float(t.amount) for t in month_transactions if t.type == "expense")

    recent = repo.search(user_id=user_id, limit=RECENT_LIMIT)

    return {
        "totalBalance": round(total_income - total_expenses, 2),
        "monthlyIncome": round(monthly_income, 2),
        "monthlyExpenses": round(monthly_expenses, 2),
        "recentTransactions": recent,
        "categoryExpenses": compute_spending_by_category(month_transactions),
    }
