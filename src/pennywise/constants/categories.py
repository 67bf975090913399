"""
Centralized enumerations for transactions, budgets, and goals.
Input validation and the client dropdowns both read from these lists.
"""

# Transaction Types
TRANSACTION_TYPES = ["income", "expense"]

# Transaction Categories - Income
INCOME_CATEGORIES = [
    "Salary",
    "Freelance",
    "Investments",
    "Other",
]

# Transaction Categories - Expenses (also the budget category set)
EXPENSE_CATEGORIES = [
    "Food",
    "Transportation",
    "Entertainment",
    "Utilities",
    "Housing",
    "Healthcare",
    "Education",
    "Shopping",
    "Other",
]

BUDGET_CATEGORIES = EXPENSE_CATEGORIES

# Shared by budget periods and recurrence patterns
PERIODS = ["daily", "weekly", "monthly", "yearly"]

GOAL_CATEGORIES = [
    "Savings",
    "Investment",
    "Purchase",
    "Debt Repayment",
    "Other",
]

GOAL_PRIORITIES = ["Low", "Medium", "High"]

GOAL_NOT_STARTED = "Not Started"
GOAL_IN_PROGRESS = "In Progress"
GOAL_COMPLETED = "Completed"
GOAL_ABANDONED = "Abandoned"

GOAL_STATUSES = [GOAL_NOT_STARTED, GOAL_IN_PROGRESS, GOAL_COMPLETED, GOAL_ABANDONED]

USER_ROLES = ["user", "admin"]


def categories_for_type(txn_type: str) -> list[str]:
    """Return the allowed categories for a transaction type (empty if unknown)."""
    if txn_type == "income":
        return INCOME_CATEGORIES
    if txn_type == "expense":
        return EXPENSE_CATEGORIES
    return []
