"""Budgeting tables."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class Budget(SQLModel, table=True):
    """A spending limit for one expense category over a repeating period."""

    __tablename__: ClassVar[str] = "budget"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    category: str = Field(nullable=False, max_length=32, index=True)
    amount: float = Field(nullable=False, ge=0)
    period: str = Field(default="monthly", nullable=False, max_length=16)
    start_date: datetime = Field(default_factory=datetime.now, nullable=False, index=True)
    end_date: Optional[datetime] = Field(default=None)
    currency: str = Field(default="USD", max_length=3)
    notifications_enabled: bool = Field(default=True, nullable=False)
    notification_threshold: float = Field(
        default=80.0, nullable=False, description="Percent of the budget that triggers an alert"
    )

    created_at: datetime = Field(default_factory=datetime.now, nullable=False, index=True)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)
