"""SQLModel table exports."""

from .budget import Budget
from .goal import Goal
from .transaction import Transaction
from .user import User

__all__ = [
    "Budget",
    "Goal",
    "Transaction",
    "User",
]
