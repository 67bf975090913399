"""Goal form validation helpers."""

from __future__ import annotations

from dataclasses import dataclass

from ...constants.categories import GOAL_CATEGORIES, GOAL_PRIORITIES, GOAL_STATUSES
from ..forms import JSONForm


@dataclass
class GoalForm(JSONForm):
    """Represents goal input prior to validation."""

    def clean(self) -> None:
        self.text("name", "name", "Name", required=True, max_length=128)
        self.amount("targetAmount", "target_amount", "Target amount", required=True)
        self.amount("currentAmount", "current_amount", "Current amount")
        self.date("startDate", "start_date", "Start date")
        self.date("targetDate", "target_date", "Target date", required=True)
        self.choice("category", "category", "Category", GOAL_CATEGORIES, required=True)
        self.choice("priority", "priority", "Priority", GOAL_PRIORITIES)
        self.choice("status", "status", "Status", GOAL_STATUSES)
        self.text("currency", "currency", "Currency", max_length=3)
        self.flag("autoAllocateEnabled", "auto_allocate_enabled", "Auto allocate enabled")
        self.amount(
            "autoAllocatePercentage",
            "auto_allocate_percentage",
            "Auto allocate percentage",
            maximum=100.0,
        )
        self.text("notes", "notes", "Notes", max_length=1000, nullable=True)
        if "currency" in self.cleaned:
            self.cleaned["currency"] = self.cleaned["currency"].upper()


@dataclass
class GoalProgressForm(JSONForm):
    """Represents a progress update prior to validation."""

    def clean(self) -> None:
        self.amount("currentAmount", "current_amount", "Current amount", required=True)
