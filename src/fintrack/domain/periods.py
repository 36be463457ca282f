"""Named reporting periods and date-range filtering."""

from calendar import monthrange
from datetime import date, datetime
from typing import Iterable

from dateutil.relativedelta import relativedelta

from fintrack.domain.entities import Transaction
from fintrack.domain.errors import InvalidArgumentError, unknown_period

CURRENT_MONTH = "current-month"
LAST_MONTH = "last-month"
LAST_3_MONTHS = "last-3-months"
LAST_6_MONTHS = "last-6-months"
LAST_YEAR = "last-year"

PERIODS: tuple[str, ...] = (
    CURRENT_MONTH,
    LAST_MONTH,
    LAST_3_MONTHS,
    LAST_6_MONTHS,
    LAST_YEAR,
)

# Rolling periods start this many months before the anchor month and run to its end.
_ROLLING_MONTHS = {
    LAST_3_MONTHS: 3,
    LAST_6_MONTHS: 6,
    LAST_YEAR: 12,
}


def month_bounds(day: date) -> tuple[date, date]:
    """Return the first and last day of the month containing ``day``."""
    last_day = monthrange(day.year, day.month)[1]
    return day.replace(day=1), day.replace(day=last_day)


def select_period(period: str, now: date) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of ``PERIODS``
        now: Anchor day; callers inject it so results are reproducible

    Returns:
        Tuple of (start_date, end_date), both inclusive

    Raises:
        InvalidArgumentError: If period string is not recognized
    """
    if isinstance(now, datetime):
        now = now.date()
    name = (period or "").strip().lower()

    if name == CURRENT_MONTH:
        return month_bounds(now)

    if name == LAST_MONTH:
        return month_bounds(now - relativedelta(months=1))

    if name in _ROLLING_MONTHS:
        start, _ = month_bounds(now - relativedelta(months=_ROLLING_MONTHS[name]))
        _, end = month_bounds(now)
        return start, end

    raise InvalidArgumentError(unknown_period(period, PERIODS))


def filter_by_period(
    records: Iterable[Transaction], start: date, end: date
) -> list[Transaction]:
    """Return records dated within ``[start, end]``, keeping their order."""
    return [record for record in records if start <= record.date <= end]
