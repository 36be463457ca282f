"""Expense and income management commands."""

import click

from fintrack.cli.date_filters import resolve_cli_date, resolve_cli_today
from fintrack.cli.error_handling import handle_domain_error, require_session
from fintrack.cli.formatting import echo_rule, echo_total, echo_transactions, format_amount
from fintrack.domain.aggregation import SORT_KEYS, sum_amounts
from fintrack.domain.entities import TransactionKind
from fintrack.domain.errors import DomainError
from fintrack.domain.notifications import NotificationEmitter
from fintrack.domain.periods import PERIODS
from fintrack.domain.transaction import TransactionService
from fintrack.utils.amount_parser import parse_amount


def _service(ctx: click.Context) -> TransactionService:
    db = ctx.obj["db"]
    return TransactionService(db, require_session(ctx), NotificationEmitter(db))


def build_kind_group(kind: TransactionKind) -> click.Group:
    """Build the command group managing one record kind."""
    label = "expenses" if kind == TransactionKind.EXPENSE else "income"

    @click.group(name=kind.value, help=f"Manage {label}.")
    def kind_group():
        pass

    @kind_group.command("add")
    @click.option("--amount", required=True, help="Amount greater than 0 (e.g., 42.50)")
    @click.option("--description", required=True, help="Description (at least 2 characters)")
    @click.option("--category", required=True, help="Category (see 'fintrack categories')")
    @click.option(
        "--date",
        "date_str",
        default="today",
        show_default=True,
        help="Date (YYYY-MM-DD or relative like 'today', 'yesterday')",
    )
    @click.option("--notes", help="Notes")
    @click.pass_context
    def add(ctx, amount: str, description: str, category: str, date_str: str, notes: str | None):
        """Record a new entry.

        Examples:
            fintrack expense add --amount 50 --description "Lunch" --category "Food & Dining"
            fintrack income add --amount 3000 --description "March pay" --category Salary
        """
        service = _service(ctx)
        txn_date = resolve_cli_date(ctx, date_str, "date")
        try:
            transaction_id = service.create_transaction(
                kind=kind,
                amount=parse_amount(amount),
                description=description,
                category=category,
                date=txn_date,
                notes=notes,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)

        record = service.require_transaction(kind, transaction_id)
        click.echo(f"Created {kind.value} {transaction_id}")
        click.echo(f"  Date: {record.date}")
        click.echo(f"  Amount: {format_amount(record.amount)}")
        click.echo(f"  Category: {record.category}")
        click.echo(f"  Description: {record.description}")

    @kind_group.command("list")
    @click.option("--search", help="Text to find in description or notes")
    @click.option("--category", help="Only show this category")
    @click.option("--sort", "sort_by", type=click.Choice(SORT_KEYS), default="date", show_default=True)
    @click.option("--period", type=click.Choice(PERIODS), help="Only show a named period")
    @click.option("--today", help="Anchor day for --period (defaults to today)")
    @click.pass_context
    def list_records(ctx, search, category, sort_by, period, today):
        """List entries with optional filters."""
        service = _service(ctx)
        anchor = resolve_cli_today(ctx, today)
        try:
            records = service.list_transactions(
                kind,
                search=search,
                category=category,
                sort_by=sort_by,
                period=period,
                today=anchor,
            )
        except DomainError as e:
            handle_domain_error(ctx, e)

        if not records:
            click.echo(f"No {label} found.")
            return

        click.echo(f"\nFound {len(records)} record(s):")
        echo_transactions(records)
        echo_rule()
        echo_total("TOTAL", sum_amounts(records))

    @kind_group.command("update")
    @click.argument("transaction_id")
    @click.option("--amount", help="New amount")
    @click.option("--description", help="New description")
    @click.option("--category", help="New category")
    @click.option("--date", "date_str", help="New date")
    @click.option("--notes", help="New notes; pass an empty string to clear")
    @click.pass_context
    def update(ctx, transaction_id, amount, description, category, date_str, notes):
        """Update an entry.

        Updates only the fields that are provided.
        """
        service = _service(ctx)
        txn_date = resolve_cli_date(ctx, date_str, "date")
        try:
            service.update_transaction(
                kind,
                transaction_id,
                amount=parse_amount(amount) if amount is not None else None,
                description=description,
                category=category,
                date=txn_date,
                notes=notes,
                clear_notes=notes == "",
            )
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Updated {kind.value} {transaction_id}")

    @kind_group.command("delete")
    @click.argument("transaction_id")
    @click.option("--yes", is_flag=True, help="Do not ask for confirmation")
    @click.pass_context
    def delete(ctx, transaction_id, yes):
        """Delete an entry."""
        service = _service(ctx)
        if not yes:
            click.confirm(f"Delete {kind.value} {transaction_id}?", abort=True)
        try:
            service.delete_transaction(kind, transaction_id)
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Deleted {kind.value} {transaction_id}")

    return kind_group


def register_commands(cli):
    """Register expense and income groups with main CLI."""
    cli.add_command(build_kind_group(TransactionKind.EXPENSE))
    cli.add_command(build_kind_group(TransactionKind.INCOME))
