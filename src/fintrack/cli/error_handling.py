"""CLI error handling helpers."""

import click

from fintrack.domain.errors import DomainError, UnauthorizedError
from fintrack.domain.session import Session


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def require_session(ctx: click.Context) -> Session:
    """Build the session for the current user or exit with an error."""
    try:
        return Session.from_user_id(ctx.obj.get("user"))
    except UnauthorizedError as e:
        handle_domain_error(ctx, e)
