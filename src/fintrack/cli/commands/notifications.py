"""Notification commands."""

import click

from fintrack.cli.date_filters import resolve_cli_today
from fintrack.cli.error_handling import handle_domain_error, require_session
from fintrack.cli.formatting import format_amount
from fintrack.domain.categories import resolve_category
from fintrack.domain.entities import TransactionKind
from fintrack.domain.errors import DomainError
from fintrack.domain.notifications import (
    NotificationEmitter,
    NotificationFeed,
    build_goal_notification,
    check_budget,
    unread_count,
)
from fintrack.domain.periods import CURRENT_MONTH, PERIODS
from fintrack.domain.transaction import TransactionService, validate_amount
from fintrack.utils.amount_parser import parse_amount


@click.group("notifications")
def notifications_group():
    """View and acknowledge notifications."""
    pass


@notifications_group.command("list")
@click.option("--unread", is_flag=True, help="Only show unread notifications")
@click.pass_context
def list_notifications(ctx, unread: bool):
    """List notifications, newest first."""
    session = require_session(ctx)
    try:
        with NotificationFeed(ctx.obj["db"], session.user_id) as feed:
            snapshot = feed.latest()
    except DomainError as e:
        handle_domain_error(ctx, e)

    shown = [n for n in snapshot if not n.read] if unread else list(snapshot)
    click.echo(f"{unread_count(snapshot)} unread of {len(snapshot)} notification(s)")
    if not shown:
        return
    click.echo("-" * 80)
    for notification in shown:
        marker = " " if notification.read else "*"
        created = notification.created_at.strftime("%Y-%m-%d %H:%M") if notification.created_at else ""
        click.echo(f"{marker} {notification.icon} {notification.title} [{created}]")
        click.echo(f"    {notification.message}")
        click.echo(f"    ID: {notification.id}")


@notifications_group.command("read")
@click.argument("notification_id")
@click.pass_context
def mark_read(ctx, notification_id: str):
    """Mark one notification as read."""
    session = require_session(ctx)
    try:
        ctx.obj["db"].mark_read(session.user_id, notification_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked notification {notification_id} as read")


@notifications_group.command("read-all")
@click.pass_context
def mark_all_read(ctx):
    """Mark every unread notification as read."""
    session = require_session(ctx)
    store = ctx.obj["db"]
    try:
        pending = [n.id for n in store.list_notifications(session.user_id) if not n.read]
        store.mark_all_read(session.user_id, pending)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Marked {len(pending)} notification(s) as read")


@notifications_group.command("budget")
@click.argument("category")
@click.argument("budget")
@click.option(
    "--period",
    type=click.Choice(PERIODS),
    default=CURRENT_MONTH,
    show_default=True,
    help="Period the budget covers",
)
@click.option("--today", help="Anchor day for the period (defaults to today)")
@click.pass_context
def budget_check(ctx, category: str, budget: str, period: str, today: str | None):
    """Check spending in CATEGORY against BUDGET and raise an alert when reached.

    Example:
        fintrack notifications budget Travel 500 --period last-3-months
    """
    session = require_session(ctx)
    anchor = resolve_cli_today(ctx, today)
    db = ctx.obj["db"]
    service = TransactionService(db, session)
    try:
        limit = validate_amount(parse_amount(budget))
        category = resolve_category(TransactionKind.EXPENSE, category)
        expenses = service.list_transactions(
            TransactionKind.EXPENSE, category=category, period=period, today=anchor
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    spent, alert = check_budget(expenses, category, limit)
    click.echo(f"{category}: {format_amount(spent)} of {format_amount(limit)} ({period})")
    if alert is None:
        click.echo("Within budget")
        return
    NotificationEmitter(db).send(session.user_id, alert)
    click.echo(f"{alert.icon} {alert.message}")


@notifications_group.command("goal")
@click.argument("name")
@click.pass_context
def goal_reached(ctx, name: str):
    """Record that the savings goal NAME was reached."""
    session = require_session(ctx)
    notification = build_goal_notification(name.strip())
    NotificationEmitter(ctx.obj["db"]).send(session.user_id, notification)
    click.echo(f"{notification.icon} {notification.message}")


def register_commands(cli):
    """Register notification commands with main CLI."""
    cli.add_command(notifications_group)
