"""Dashboard command."""

import click

from fintrack.cli.date_filters import resolve_cli_today
from fintrack.cli.error_handling import handle_domain_error, require_session
from fintrack.cli.formatting import echo_rule, echo_total, echo_transactions
from fintrack.domain.dashboard import DashboardService
from fintrack.domain.errors import DomainError


@click.command("dashboard")
@click.option("--today", help="Anchor day for the monthly figures (defaults to today)")
@click.pass_context
def dashboard(ctx, today: str | None):
    """Show totals, this month's figures and recent transactions."""
    service = DashboardService(ctx.obj["db"], require_session(ctx))
    anchor = resolve_cli_today(ctx, today)
    try:
        summary = service.dashboard(anchor)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"\nDashboard ({anchor.strftime('%B %Y')}):")
    echo_rule()
    echo_total("Total Income", summary.total_income)
    echo_total("Total Expenses", summary.total_expenses)
    echo_total("Balance", summary.balance)
    echo_rule()
    echo_total("Income This Month", summary.monthly_income)
    echo_total("Expenses This Month", summary.monthly_expenses)
    echo_rule("=")

    click.echo("\nRecent Transactions:")
    if not summary.recent:
        click.echo("No transactions yet.")
        return
    echo_transactions(summary.recent, show_kind=True)


def register_commands(cli):
    """Register dashboard command with main CLI."""
    cli.add_command(dashboard)
