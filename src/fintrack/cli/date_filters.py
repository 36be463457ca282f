"""CLI helpers for date resolution."""

from datetime import date

import click

from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.errors import InvalidArgumentError
from fintrack.utils.date_parser import parse_date


def resolve_cli_date(ctx: click.Context, value: str | None, label: str) -> date | None:
    """Parse an optional date option, exiting with an error if it is invalid."""
    if value is None:
        return None
    try:
        return parse_date(value)
    except InvalidArgumentError as e:
        handle_domain_error(ctx, InvalidArgumentError(f"Invalid {label}: {e}"))


def resolve_cli_today(ctx: click.Context, today: str | None) -> date:
    """Resolve the anchor day for period calculations (defaults to today)."""
    return resolve_cli_date(ctx, today, "--today date") or date.today()
