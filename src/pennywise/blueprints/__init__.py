"""Blueprint exports."""

from . import auth, budgets, dashboard, goals, transactions, users

__all__ = [
    "auth",
    "budgets",
    "dashboard",
    "goals",
    "transactions",
    "users",
]
