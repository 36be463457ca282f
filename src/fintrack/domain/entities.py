"""Domain model entities for fintrack.

These are pure data classes representing business concepts, independent of
how the backing store lays out its records. Every record that reaches the
aggregation layer has already been normalized: amounts are ``Decimal`` and
dates are ``datetime.date``.
"""

from dataclasses import dataclass
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional

from fintrack.domain.errors import InvalidArgumentError, unknown_kind


class TransactionKind(str, Enum):
    """Discriminator for the two record collections."""

    EXPENSE = "expense"
    INCOME = "income"

    @classmethod
    def parse(cls, value: "str | TransactionKind") -> "TransactionKind":
        """Resolve a kind from its string value."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise InvalidArgumentError(unknown_kind(str(value))) from None


@dataclass(frozen=True)
class Transaction:
    """Transaction domain entity (one expense or income record)."""

    id: str
    kind: TransactionKind
    amount: Decimal
    description: str
    category: Optional[str]
    date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Notification:
    """Notification domain entity derived from a created record."""

    type: str
    title: str
    message: str
    icon: str
    read: bool = False
    created_at: Optional[datetime] = None
    id: Optional[str] = None


@dataclass(frozen=True)
class CategoryBreakdownItem:
    """One row of a category breakdown, ready for display."""

    category: str
    total: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class MonthlyTrendPoint:
    """Income and expense totals for one calendar month."""

    month_label: str
    month_start: date
    income_total: Decimal
    expense_total: Decimal
    net: Decimal


@dataclass(frozen=True)
class DashboardSummary:
    """Dashboard view-model."""

    total_income: Decimal
    total_expenses: Decimal
    balance: Decimal
    monthly_income: Decimal
    monthly_expenses: Decimal
    recent: tuple[Transaction, ...] = ()


@dataclass(frozen=True)
class ReportSummary:
    """Report view-model for a named period."""

    period: str
    start_date: date
    end_date: date
    total_income: Decimal
    total_expenses: Decimal
    net: Decimal
    expense_breakdown: tuple[CategoryBreakdownItem, ...] = ()
    income_breakdown: tuple[CategoryBreakdownItem, ...] = ()
    trend: tuple[MonthlyTrendPoint, ...] = ()
    recent: tuple[Transaction, ...] = ()
    expense_count: int = 0
    income_count: int = 0
