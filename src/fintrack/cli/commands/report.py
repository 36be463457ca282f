"""Report command."""

import click

from fintrack.cli.date_filters import resolve_cli_today
from fintrack.cli.error_handling import handle_domain_error, require_session
from fintrack.cli.formatting import (
    echo_breakdown,
    echo_rule,
    echo_total,
    echo_transactions,
    format_amount,
)
from fintrack.domain.dashboard import DashboardService
from fintrack.domain.errors import DomainError
from fintrack.domain.periods import CURRENT_MONTH, PERIODS


@click.command("report")
@click.option(
    "--period",
    type=click.Choice(PERIODS),
    default=CURRENT_MONTH,
    show_default=True,
    help="Reporting period",
)
@click.option("--today", help="Anchor day for the period (defaults to today)")
@click.pass_context
def report(ctx, period: str, today: str | None):
    """Show period totals, category breakdowns and a six-month trend."""
    service = DashboardService(ctx.obj["db"], require_session(ctx))
    anchor = resolve_cli_today(ctx, today)
    try:
        summary = service.report(period, anchor)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nReport: {period} ({summary.start_date} to {summary.end_date})")
    echo_rule()
    echo_total(f"Income ({summary.income_count})", summary.total_income)
    echo_total(f"Expenses ({summary.expense_count})", summary.total_expenses)
    echo_total("Net", summary.net)
    echo_rule("=")

    click.echo()
    echo_breakdown("Expenses by Category", summary.expense_breakdown)
    click.echo()
    echo_breakdown("Income by Category", summary.income_breakdown)

    click.echo("\nMonthly Trend:")
    echo_rule()
    click.echo(f"{'Month':<12} {'Income':>20} {'Expenses':>20} {'Net':>20}")
    for point in summary.trend:
        click.echo(
            f"{point.month_start.strftime('%b %Y'):<12} "
            f"{format_amount(point.income_total):>20} "
            f"{format_amount(point.expense_total):>20} "
            f"{format_amount(point.net):>20}"
        )

    click.echo("\nRecent Transactions:")
    if not summary.recent:
        click.echo("No transactions in this period.")
        return
    echo_transactions(summary.recent, show_kind=True)


def register_commands(cli):
    """Register report command with main CLI."""
    cli.add_command(report)
