"""Main CLI entry point."""

import click

from fintrack.database.factories import create_sqlite_database
from fintrack.logging_setup import configure_logging, get_logger

# Import and register all commands at module level
from fintrack.cli.commands import (
    categories,
    dashboard,
    notifications,
    report,
    transaction,
)

logger = get_logger(__name__)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--user",
    help="Signed-in user ID (overrides FINTRACK_USER environment variable)",
    envvar="FINTRACK_USER",
)
@click.option(
    "--log-level",
    help="Log level such as INFO or DEBUG (overrides FINTRACK_LOG_LEVEL)",
    envvar="FINTRACK_LOG_LEVEL",
)
@click.pass_context
def cli(ctx, db_path: str | None, user: str | None, log_level: str | None):
    """Fintrack - personal finance tracker.

    Record expenses and income, then review dashboards and period reports.
    """
    ctx.ensure_object(dict)
    try:
        configure_logging(log_level)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level")

    ctx.obj["user"] = user

    # Open the store only when a command actually runs (not for --help)
    if ctx.invoked_subcommand is not None and ctx.invoked_subcommand != "categories":
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)
        logger.debug("Using database %s", db.database_url)


# Register all commands
transaction.register_commands(cli)
dashboard.register_commands(cli)
report.register_commands(cli)
notifications.register_commands(cli)
categories.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
