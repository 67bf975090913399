"""Repository protocol definitions for domain layer."""

from ...models.goal import Goal
from .budget import BudgetRepository
from .owned import OwnedRecordRepository
from .transaction import TransactionRepository

GoalRepository = OwnedRecordRepository[Goal]

__all__ = [
    "BudgetRepository",
    "GoalRepository",
    "OwnedRecordRepository",
    "TransactionRepository",
]
