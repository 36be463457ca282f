"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class InvalidArgumentError(DomainError):
    """Invalid input, such as an unknown period name or a malformed date."""


class NotFoundError(DomainError):
    """Requested record does not exist for this user."""


class UnauthorizedError(DomainError):
    """No usable identity was supplied for the operation."""


class UnavailableError(DomainError):
    """The backing store could not complete the request."""


def unknown_period(period: str, supported: tuple[str, ...]) -> str:
    """Return message for an unrecognized period name."""
    return f"Unknown period: '{period}'. Supported periods: {', '.join(supported)}"


def unknown_kind(kind: str) -> str:
    """Return message for an unrecognized record kind."""
    return f"Unknown transaction kind '{kind}'. Expected 'expense' or 'income'"


def unparseable_date(value: object) -> str:
    """Return message for a date value that cannot be resolved."""
    return f"Could not resolve date from {value!r}"


def transaction_not_found(kind: str, transaction_id: str) -> str:
    """Return message for a missing expense or income record."""
    label = "Expense" if kind == "expense" else "Income"
    return f"{label} {transaction_id} not found"


def notification_not_found(notification_id: str) -> str:
    """Return message for a missing notification."""
    return f"Notification {notification_id} not found"


def invalid_category(category: str, kind: str, allowed: tuple[str, ...]) -> str:
    """Return message for a category outside the kind's fixed set."""
    return (
        f"Category '{category}' is not a valid {kind} category. "
        f"Choose one of: {', '.join(allowed)}"
    )
