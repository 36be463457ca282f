"""Category listing command."""

import click

from fintrack.domain.categories import categories_for
from fintrack.domain.entities import TransactionKind


@click.command("categories")
@click.argument("kind", type=click.Choice([k.value for k in TransactionKind]), required=False)
def list_categories(kind: str | None):
    """List the categories available for expenses and income."""
    kinds = [TransactionKind(kind)] if kind else list(TransactionKind)
    for index, item in enumerate(kinds):
        if index:
            click.echo()
        click.echo(f"{item.value.capitalize()} categories:")
        for category in categories_for(item):
            click.echo(f"  {category}")


def register_commands(cli):
    """Register categories command with main CLI."""
    cli.add_command(list_categories)
