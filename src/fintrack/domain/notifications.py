"""Notification message builders and best-effort delivery."""

from collections import deque
from decimal import Decimal
from typing import Callable, Iterable, Iterator, Optional, Sequence

from fintrack.database.base import NotificationStore
from fintrack.domain.aggregation import sum_amounts
from fintrack.domain.entities import Notification, Transaction, TransactionKind
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)

EXPENSE_ICON = "💸"
INCOME_ICON = "💰"
BUDGET_ALERT_ICON = "⚠️"
GOAL_ICON = "🎉"


def _format_amount(amount: Decimal) -> str:
    return f"${amount:,.2f}"


def build_expense_notification(record: Transaction) -> Notification:
    """Build the notification shown after an expense is recorded."""
    return Notification(
        type="expense",
        title="New Expense Added",
        message=f"You added {_format_amount(record.amount)} for {record.category}",
        icon=EXPENSE_ICON,
        read=False,
    )


def build_income_notification(record: Transaction) -> Notification:
    """Build the notification shown after income is recorded."""
    return Notification(
        type="income",
        title="New Income Added",
        message=f"You added {_format_amount(record.amount)} from {record.category}",
        icon=INCOME_ICON,
        read=False,
    )


def build_budget_alert(category: str, spent: Decimal, budget: Decimal) -> Notification:
    """Build an alert for spending measured against a category budget."""
    return Notification(
        type="budget_alert",
        title="Budget Alert",
        message=(
            f"You've spent {_format_amount(spent)} of "
            f"{_format_amount(budget)} budget for {category}"
        ),
        icon=BUDGET_ALERT_ICON,
        read=False,
    )


def build_goal_notification(goal_name: str) -> Notification:
    """Build a notification for a reached savings goal."""
    return Notification(
        type="goal",
        title="Goal Achievement",
        message=f"Congratulations! You've achieved your {goal_name} goal!",
        icon=GOAL_ICON,
        read=False,
    )


def check_budget(
    expenses: Iterable[Transaction], category: str, budget: Decimal
) -> tuple[Decimal, Optional[Notification]]:
    """Sum a category's spending and build an alert once it reaches the budget."""
    spent = sum_amounts(record for record in expenses if record.category == category)
    if spent < budget:
        return spent, None
    return spent, build_budget_alert(category, spent, budget)


def build_notification(record: Transaction) -> Notification:
    """Build the creation notification matching the record's kind."""
    if record.kind == TransactionKind.INCOME:
        return build_income_notification(record)
    return build_expense_notification(record)


def unread_count(notifications: Iterable[Notification]) -> int:
    """Count notifications that have not been read."""
    return sum(1 for notification in notifications if not notification.read)


class NotificationEmitter:
    """Fire-and-forget delivery of creation notifications."""

    def __init__(self, store: NotificationStore):
        """Initialize notification emitter.

        Args:
            store: Notification store that persists and fans out messages
        """
        self.store = store

    def emit(self, user_id: str, record: Transaction) -> Optional[str]:
        """Build and store a notification for a newly created record.

        Failures are logged and swallowed; the record has already been
        created and must stay that way.

        Returns:
            Notification ID, or None if delivery failed
        """
        try:
            notification = build_notification(record)
        except Exception:
            logger.warning(
                "Failed to build %s notification for record %s",
                record.kind.value,
                record.id,
                exc_info=True,
            )
            return None
        return self.send(user_id, notification)

    def send(self, user_id: str, notification: Notification) -> Optional[str]:
        """Store a prepared notification, logging and swallowing failures."""
        try:
            notification_id = self.store.append(user_id, notification)
        except Exception:
            logger.warning(
                "Failed to deliver %s notification", notification.type, exc_info=True
            )
            return None
        logger.debug("Stored notification %s for user %s", notification_id, user_id)
        return notification_id


class NotificationFeed:
    """Subscription handle exposing notification snapshots as an iterator.

    Snapshots pushed by the store queue up until they are consumed. Iterating
    yields the pending snapshots and stops when none are left; iterate again
    later to pick up new ones. Closing the feed releases the subscription.
    """

    def __init__(self, store: NotificationStore, user_id: str):
        self.store = store
        self.user_id = user_id
        self._pending: deque[tuple[Notification, ...]] = deque()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def is_open(self) -> bool:
        return self._unsubscribe is not None

    def open(self) -> "NotificationFeed":
        """Start receiving snapshots; the current one is queued immediately."""
        if self._unsubscribe is None:
            self._unsubscribe = self.store.subscribe(self.user_id, self._receive)
        return self

    def close(self) -> None:
        """Release the subscription. Already queued snapshots stay readable."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _receive(self, snapshot: Sequence[Notification]) -> None:
        self._pending.append(tuple(snapshot))

    def drain(self) -> Iterator[tuple[Notification, ...]]:
        """Yield pending snapshots oldest first, stopping when none are left."""
        while self._pending:
            yield self._pending.popleft()

    def __iter__(self) -> Iterator[tuple[Notification, ...]]:
        return self.drain()

    def latest(self) -> tuple[Notification, ...]:
        """Consume all pending snapshots and return the newest (or empty)."""
        snapshot: tuple[Notification, ...] = ()
        for snapshot in self:
            pass
        return snapshot

    def __enter__(self) -> "NotificationFeed":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
