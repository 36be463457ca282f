"""Pure aggregation helpers over fetched transaction snapshots.

Nothing in this module performs I/O or mutates its inputs. Amounts are summed
as ``Decimal`` so displayed totals never drift.
"""

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from dateutil.relativedelta import relativedelta

from fintrack.domain.categories import UNCATEGORIZED
from fintrack.domain.entities import (
    CategoryBreakdownItem,
    MonthlyTrendPoint,
    Transaction,
    TransactionKind,
)
from fintrack.domain.errors import InvalidArgumentError
from fintrack.domain.periods import filter_by_period, month_bounds

ZERO = Decimal("0")
HUNDRED = Decimal("100")
CENT = Decimal("0.01")

SORT_KEYS: tuple[str, ...] = ("date", "amount")


def sum_amounts(records: Iterable[Transaction]) -> Decimal:
    """Total ``amount`` across records; ``0`` for no records."""
    return sum((record.amount for record in records), ZERO)


def breakdown_by_category(records: Iterable[Transaction]) -> dict[str, Decimal]:
    """Group records by category and sum their amounts.

    Records without a category are grouped under ``"Uncategorized"``. The
    returned mapping iterates by descending total, then by category name.
    """
    totals: dict[str, Decimal] = defaultdict(lambda: ZERO)
    for record in records:
        category = (record.category or "").strip() or UNCATEGORIZED
        totals[category] += record.amount

    ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
    return dict(ordered)


def percentage_of_total(part: Decimal, total: Decimal) -> Decimal:
    """Return ``part`` as a percentage of ``total`` rounded to 2 places."""
    if total == 0:
        return ZERO
    return (Decimal(part) / Decimal(total) * HUNDRED).quantize(CENT)


def breakdown_items(breakdown: dict[str, Decimal]) -> list[CategoryBreakdownItem]:
    """Convert a breakdown mapping into display rows with percentages."""
    total = sum(breakdown.values(), ZERO)
    return [
        CategoryBreakdownItem(
            category=category,
            total=amount,
            percentage=percentage_of_total(amount, total),
        )
        for category, amount in breakdown.items()
    ]


def monthly_trend(
    expenses: Sequence[Transaction],
    income: Sequence[Transaction],
    now: date,
    month_count: int = 6,
) -> list[MonthlyTrendPoint]:
    """Build per-month income/expense totals for the last ``month_count`` months.

    The series ends with ``now``'s month and is ordered oldest first.
    """
    if month_count < 1:
        raise InvalidArgumentError(
            f"month_count must be at least 1, got {month_count}"
        )
    if isinstance(now, datetime):
        now = now.date()

    points: list[MonthlyTrendPoint] = []
    for offset in range(month_count - 1, -1, -1):
        start, end = month_bounds(now - relativedelta(months=offset))
        income_total = sum_amounts(filter_by_period(income, start, end))
        expense_total = sum_amounts(filter_by_period(expenses, start, end))
        points.append(
            MonthlyTrendPoint(
                month_label=start.strftime("%b"),
                month_start=start,
                income_total=income_total,
                expense_total=expense_total,
                net=income_total - expense_total,
            )
        )
    return points


def _check_kind(records: Sequence[Transaction], kind: TransactionKind) -> None:
    for record in records:
        if record.kind != kind:
            raise InvalidArgumentError(
                f"Record {record.id} is a {record.kind.value} record, "
                f"expected {kind.value}"
            )


def recent_transactions(
    expenses: Sequence[Transaction],
    income: Sequence[Transaction],
    limit: int,
) -> list[Transaction]:
    """Merge both kinds and return the ``limit`` most recent records.

    Records sharing a date keep their fetch order (expenses before income).
    """
    if limit < 0:
        raise InvalidArgumentError(f"limit must not be negative, got {limit}")
    _check_kind(expenses, TransactionKind.EXPENSE)
    _check_kind(income, TransactionKind.INCOME)

    merged = [*expenses, *income]
    return sorted(merged, key=lambda record: record.date, reverse=True)[:limit]


def search_transactions(
    records: Iterable[Transaction],
    term: Optional[str] = None,
    category: Optional[str] = None,
) -> list[Transaction]:
    """Filter records by a search term and/or an exact category.

    The term matches case-insensitively against description and notes.
    """
    needle = (term or "").strip().lower()
    results = []
    for record in records:
        if needle:
            haystacks = (record.description or "", record.notes or "")
            if not any(needle in text.lower() for text in haystacks):
                continue
        if category and record.category != category:
            continue
        results.append(record)
    return results


def sort_transactions(
    records: Iterable[Transaction], sort_by: str = "date"
) -> list[Transaction]:
    """Sort records newest first (``date``) or largest first (``amount``)."""
    if sort_by == "date":
        return sorted(records, key=lambda record: record.date, reverse=True)
    if sort_by == "amount":
        return sorted(records, key=lambda record: record.amount, reverse=True)
    raise InvalidArgumentError(
        f"Unknown sort key '{sort_by}'. Supported keys: {', '.join(SORT_KEYS)}"
    )
