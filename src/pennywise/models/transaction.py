"""SQLModel definitions for income and expense transactions."""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar, Optional

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


class Transaction(SQLModel, table=True):
    """A single income or expense entry owned by one user."""

    __tablename__: ClassVar[str] = "transaction"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", nullable=False, index=True)
    type: str = Field(nullable=False, max_length=16, index=True)
    amount: float = Field(nullable=False, ge=0, description="Always non-negative; type gives the sign")
    category: str = Field(nullable=False, max_length=32, index=True)
    description: str = Field(nullable=False, max_length=255)
    occurred_at: datetime = Field(default_factory=datetime.now, nullable=False, index=True)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    # Recurrence is descriptive only; nothing materializes future occurrences.
    is_recurring: bool = Field(default=False, nullable=False)
    recurring_pattern: Optional[str] = Field(default=None, max_length=16)
    recurring_end_date: Optional[datetime] = Field(default=None)

    currency: str = Field(default="USD", max_length=3, description="ISO-4217 currency code")
    exchange_rate: float = Field(default=1.0, nullable=False)

    created_at: datetime = Field(default_factory=datetime.now, nullable=False)
    updated_at: datetime = Field(default_factory=datetime.now, nullable=False)
