"""Domain layer for fintrack application."""

from fintrack.domain.entities import (
    Notification,
    Transaction,
    TransactionKind,
)
from fintrack.domain.errors import (
    DomainError,
    InvalidArgumentError,
    NotFoundError,
    UnauthorizedError,
    UnavailableError,
)

__all__ = [
    "Notification",
    "Transaction",
    "TransactionKind",
    "DomainError",
    "InvalidArgumentError",
    "NotFoundError",
    "UnauthorizedError",
    "UnavailableError",
]
