"""Text rendering helpers shared by CLI commands."""

from decimal import Decimal
from typing import Sequence

import click

from fintrack.domain.entities import CategoryBreakdownItem, Transaction

WIDTH = 80
TABLE_WIDTH = 120


def format_amount(amount: Decimal) -> str:
    """Render an amount as currency."""
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.2f}"


def echo_rule(char: str = "-", width: int = WIDTH) -> None:
    click.echo(char * width)


def echo_total(label: str, amount: Decimal) -> None:
    click.echo(f"{label:<50} {format_amount(amount):>20}")


def echo_transactions(records: Sequence[Transaction], show_kind: bool = False) -> None:
    """Render records as a compact table."""
    kind_header = f"{'Kind':<8} " if show_kind else ""
    click.echo(
        f"{'ID':<32} {'Date':<12} {kind_header}{'Amount':>12}  {'Category':<18} {'Description'}"
    )
    echo_rule(width=TABLE_WIDTH)
    for record in records:
        kind_col = f"{record.kind.value:<8} " if show_kind else ""
        category = (record.category or "Uncategorized")[:18]
        click.echo(
            f"{record.id:<32} {record.date.isoformat():<12} {kind_col}"
            f"{format_amount(record.amount):>12}  {category:<18} {record.description[:30]}"
        )


def echo_breakdown(title: str, items: Sequence[CategoryBreakdownItem]) -> None:
    """Render a category breakdown with percentage of total."""
    click.echo(title)
    echo_rule("*")
    if not items:
        click.echo("  No records.")
        return
    for item in items:
        click.echo(
            f"    {item.category:<40} {format_amount(item.total):>16} {item.percentage:>8}%"
        )
