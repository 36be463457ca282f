"""Date parsing and normalization utilities."""

from datetime import date, datetime, timedelta
from typing import Any, Optional

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from fintrack.domain.errors import InvalidArgumentError, unparseable_date


def normalize_date(value: Any) -> date:
    """Normalize a stored date value into a ``date``.

    Backends hand dates back in several shapes:
    - ``date`` / ``datetime`` instances
    - native timestamp objects exposing ``to_date()`` or ``toDate()``
    - ISO 8601 strings ("2024-03-15", "2024-03-15T10:30:00Z")

    Args:
        value: Raw date value from a record

    Returns:
        Calendar date

    Raises:
        InvalidArgumentError: If the value cannot be resolved to a valid date
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    for accessor in ("to_date", "toDate"):
        converter = getattr(value, accessor, None)
        if callable(converter):
            return normalize_date(converter())

    if isinstance(value, str) and value.strip():
        try:
            return date_parser.isoparse(value.strip()).date()
        except (ValueError, OverflowError) as e:
            raise InvalidArgumentError(f"{unparseable_date(value)}: {e}") from e

    raise InvalidArgumentError(unparseable_date(value))


def parse_date(date_str: str, today: Optional[date] = None) -> date:
    """Parse a user-supplied date string into a date object.

    Supports various formats including relative dates:
    - Absolute dates: "2024-01-15", "January 15, 2024", etc.
    - Relative dates: "today", "yesterday", "last month", "this year", etc.

    Args:
        date_str: Date string in various formats
        today: Reference day for relative dates (defaults to the current day)

    Returns:
        Date object

    Raises:
        InvalidArgumentError: If date string cannot be parsed
    """
    date_str = date_str.strip().lower()
    today = today or date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }

    if date_str in relative_dates:
        return relative_dates[date_str]

    if date_str.startswith("last "):
        period = date_str[5:]
        if period == "month":
            return (today - relativedelta(months=1)).replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1) - relativedelta(years=1)
        elif period == "week":
            return today - timedelta(days=today.weekday() + 7)

    elif date_str.startswith("this "):
        period = date_str[5:]
        if period == "month":
            return today.replace(day=1)
        elif period == "year":
            return today.replace(month=1, day=1)
        elif period == "week":
            return today - timedelta(days=today.weekday())

    try:
        dt = date_parser.parse(date_str)
        return dt.date()
    except (ValueError, OverflowError) as e:
        raise InvalidArgumentError(f"Could not parse date '{date_str}': {e}")
