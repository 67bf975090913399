"""Savings, investment, and debt-repayment goals."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel

from ..constants.categories import GOAL_NOT_STARTED


class Goal(SQLModel, table=True):
    """A target amount the user works toward by a target date."""

    __tablename__: ClassVar[str] = "goal"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    name: str = Field(nullable=False, max_length=128)
    target_amount: float = Field(nullable=False, ge=0)
    current_amount: float = Field(default=0.0, nullable=False, ge=0)
    start_date: datetime = Field(default_factory=datetime.now, nullable=False)
    target_date: datetime = Field(nullable=False, index=True)
    category: str = Field(nullable=False, max_length=32)
    priority: str = Field(default="Medium", nullable=False, max_length=16)
    status: str = Field(default=GOAL_NOT_STARTED, nullable=False, max_length=16, index=True)
    currency: str = Field(default="USD", max_length=3)
    auto_allocate_enabled: bool = Field(default=False, nullable=False)
    auto_allocate_percentage: float = Field(default=0.0, nullable=False)
    notes: Optional[str] = Field(default=None, max_length=1000)

    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)

    @property
    def progress_percentage(self) -> float:
        """Share of the target reached, clamped to [0, 100]; 0 for a zero target."""
        if self.target_amount <= 0:
            return 0.0
        return max(0.0, min(100.0, self.current_amount / self.target_amount * 100))
