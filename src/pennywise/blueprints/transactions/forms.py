"""Transaction form validation helpers."""

from __future__ import annotations

from dataclasses import dataclass

from ...constants.categories import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    PERIODS,
    TRANSACTION_TYPES,
)
from ..forms import JSONForm

_ALL_CATEGORIES = list(dict.fromkeys(INCOME_CATEGORIES + EXPENSE_CATEGORIES))


@dataclass
class TransactionForm(JSONForm):
    """Represents transaction input prior to validation.

    Whether the category fits the type is checked on the merged record by the
    transaction service, so partial updates see the stored type.
    """

    def clean(self) -> None:
        self.choice("type", "type", "Type", TRANSACTION_TYPES, required=True)
        self.amount("amount", "amount", "Amount", required=True)
        self.choice("category", "category", "Category", _ALL_CATEGORIES, required=True)
        self.text("description", "description", "Description", required=True, max_length=255)
        self.date("date", "occurred_at", "Date")
        self.string_list("tags", "tags", "Tags")
        self.flag("isRecurring", "is_recurring", "Is recurring")
        self.choice("recurringPattern", "recurring_pattern", "Recurring pattern", PERIODS)
        self.date("recurringEndDate", "recurring_end_date", "Recurring end date", nullable=True)
        self.text("currency", "currency", "Currency", max_length=3)
        self.amount("exchangeRate", "exchange_rate", "Exchange rate", exclusive_minimum=True)
        if "currency" in self.cleaned:
            self.cleaned["currency"] = self.cleaned["currency"].upper()
