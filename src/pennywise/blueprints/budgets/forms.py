"""Budget form validation helpers."""

from __future__ import annotations

from dataclasses import dataclass

from ...constants.categories import BUDGET_CATEGORIES, PERIODS
from ..forms import JSONForm


@dataclass
class BudgetForm(JSONForm):
    """Represents budget input prior to validation."""

    def clean(self) -> None:
        self.choice("category", "category", "Category", BUDGET_CATEGORIES, required=True)
        self.amount("amount", "amount", "Amount", required=True)
        self.choice("period", "period", "Period", PERIODS)
        self.date("startDate", "start_date", "Start date")
        self.date("endDate", "end_date", "End date", nullable=True)
        self.text("currency", "currency", "Currency", max_length=3)
        self.flag("notificationsEnabled", "notifications_enabled", "Notifications enabled")
        self.amount(
            "notificationThreshold",
            "notification_threshold",
            "Notification threshold",
            maximum=100.0,
        )
        if "currency" in self.cleaned:
            self.cleaned["currency"] = self.cleaned["currency"].upper()
