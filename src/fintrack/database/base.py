"""Abstract storage interfaces.

Both ports are keyed by user id; the backing store is responsible for keeping
one user's records invisible to another.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Optional, Sequence

# Import entities directly to avoid circular import through domain/__init__.py
from fintrack.domain.entities import Notification, Transaction, TransactionKind

NotificationListener = Callable[[Sequence[Notification]], None]


class TransactionRepository(ABC):
    """Expense and income record storage, one collection per kind."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def list_records(self, user_id: str, kind: TransactionKind) -> list[Transaction]:
        """List a user's records of one kind, newest first."""
        pass

    @abstractmethod
    def get(
        self, user_id: str, kind: TransactionKind, transaction_id: str
    ) -> Optional[Transaction]:
        """Get one record, or None if it does not exist."""
        pass

    @abstractmethod
    def create(
        self, user_id: str, kind: TransactionKind, fields: dict[str, Any]
    ) -> str:
        """Create a record. Returns the assigned record ID."""
        pass

    @abstractmethod
    def update(
        self,
        user_id: str,
        kind: TransactionKind,
        transaction_id: str,
        fields: dict[str, Any],
    ) -> None:
        """Replace the given editable fields of a record.

        Raises:
            NotFoundError: If the record does not exist
        """
        pass

    @abstractmethod
    def delete(self, user_id: str, kind: TransactionKind, transaction_id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: If the record does not exist
        """
        pass


class NotificationStore(ABC):
    """Per-user notification storage with change subscriptions."""

    @abstractmethod
    def append(self, user_id: str, notification: Notification) -> str:
        """Store a new notification. Returns the notification ID."""
        pass

    @abstractmethod
    def list_notifications(self, user_id: str) -> list[Notification]:
        """List a user's notifications, newest first."""
        pass

    @abstractmethod
    def subscribe(
        self, user_id: str, on_change: NotificationListener
    ) -> Callable[[], None]:
        """Register a listener for snapshot changes.

        The listener receives the current snapshot immediately and again after
        every change to the user's notifications. Returns an unsubscribe
        callable.
        """
        pass

    @abstractmethod
    def mark_read(self, user_id: str, notification_id: str) -> None:
        """Mark one notification as read."""
        pass

    @abstractmethod
    def mark_all_read(self, user_id: str, notification_ids: Sequence[str]) -> None:
        """Mark the given notifications as read."""
        pass
