"""Concrete repository implementations using SQLModel."""

from .budget import SQLModelBudgetRepository
from .goal import SQLModelGoalRepository
from .transaction import SQLModelTransactionRepository

__all__ = [
    "SQLModelBudgetRepository",
    "SQLModelGoalRepository",
    "SQLModelTransactionRepository",
]
