"""Fixed category sets for expense and income records."""

from fintrack.domain.entities import TransactionKind
from fintrack.domain.errors import InvalidArgumentError, invalid_category

UNCATEGORIZED = "Uncategorized"

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Food & Dining",
    "Transportation",
    "Shopping",
    "Entertainment",
    "Bills & Utilities",
    "Healthcare",
    "Education",
    "Travel",
    "Groceries",
    "Gas",
    "Insurance",
    "Other",
)

INCOME_CATEGORIES: tuple[str, ...] = (
    "Salary",
    "Freelance",
    "Business",
    "Investment",
    "Rental Income",
    "Bonus",
    "Commission",
    "Gift",
    "Refund",
    "Other",
)


def categories_for(kind: TransactionKind) -> tuple[str, ...]:
    """Return the allowed categories for a record kind."""
    if kind == TransactionKind.INCOME:
        return INCOME_CATEGORIES
    return EXPENSE_CATEGORIES


def resolve_category(kind: TransactionKind, value: str) -> str:
    """Match ``value`` case-insensitively against the kind's categories.

    Raises:
        InvalidArgumentError: If the category is not part of the set
    """
    allowed = categories_for(kind)
    needle = (value or "").strip().lower()
    for category in allowed:
        if category.lower() == needle:
            return category
    raise InvalidArgumentError(invalid_category(value, kind.value, allowed))
