"""Service module exports."""

from . import auth, budgeting, dashboard, goals, ownership, tokens, transactions

__all__ = [
    "auth",
    "budgeting",
    "dashboard",
    "goals",
    "ownership",
    "tokens",
    "transactions",
]
