"""Tests for notification builders, the emitter and notification feeds."""

import logging
from datetime import date
from decimal import Decimal

from fintrack.domain.entities import Notification, TransactionKind
from fintrack.domain.notifications import (
    NotificationEmitter,
    NotificationFeed,
    build_budget_alert,
    build_expense_notification,
    build_goal_notification,
    build_income_notification,
    build_notification,
    check_budget,
    unread_count,
)


class FailingStore:
    """Notification store whose writes always fail."""

    def append(self, user_id, notification):
        raise RuntimeError("store offline")


def test_build_expense_notification(make_record):
    record = make_record(amount="50", category="Food & Dining")

    notification = build_expense_notification(record)

    assert notification.type == "expense"
    assert notification.title == "New Expense Added"
    assert notification.message == "You added $50.00 for Food & Dining"
    assert notification.icon == "💸"
    assert notification.read is False


def test_build_income_notification(make_record):
    record = make_record(amount="1250.5", category="Salary", kind=TransactionKind.INCOME)

    notification = build_income_notification(record)

    assert notification.type == "income"
    assert notification.title == "New Income Added"
    assert notification.message == "You added $1,250.50 from Salary"
    assert notification.icon == "💰"


def test_build_notification_dispatches_on_kind(make_record):
    income = make_record(kind=TransactionKind.INCOME, category="Gift")
    expense = make_record()

    assert build_notification(income).type == "income"
    assert build_notification(expense).type == "expense"


def test_budget_and_goal_notifications():
    alert = build_budget_alert("Travel", Decimal("450"), Decimal("500"))
    goal = build_goal_notification("Emergency Fund")

    assert alert.type == "budget_alert"
    assert alert.message == "You've spent $450.00 of $500.00 budget for Travel"
    assert goal.message == "Congratulations! You've achieved your Emergency Fund goal!"



def test_check_budget_alerts_once_budget_is_reached(make_record):
    expenses = [
        make_record(amount="300", category="Travel"),
        make_record(amount="200", category="Travel"),
        make_record(amount="80", category="Gas"),
    ]

    spent, alert = check_budget(expenses, "Travel", Decimal("500"))
    assert spent == Decimal("500")
    assert alert.type == "budget_alert"
    assert alert.message == "You've spent $500.00 of $500.00 budget for Travel"

    spent, alert = check_budget(expenses, "Gas", Decimal("100"))
    assert spent == Decimal("80")
    assert alert is None

def test_unread_count():
    notifications = [
        Notification(type="expense", title="t", message="m", icon="i", read=False),
        Notification(type="expense", title="t", message="m", icon="i", read=True),
    ]

    assert unread_count(notifications) == 1


def test_emitter_stores_notification(temp_db, make_record):
    emitter = NotificationEmitter(temp_db)

    notification_id = emitter.emit("user-1", make_record(amount="20", category="Gas"))

    stored = temp_db.list_notifications("user-1")
    assert [n.id for n in stored] == [notification_id]
    assert stored[0].message == "You added $20.00 for Gas"
    assert stored[0].read is False


def test_emitter_swallows_and_logs_failures(make_record, caplog):
    emitter = NotificationEmitter(FailingStore())

    with caplog.at_level(logging.WARNING, logger="fintrack"):
        result = emitter.emit("user-1", make_record())

    assert result is None
    assert "Failed to deliver expense notification" in caplog.text



def test_emitter_sends_prepared_notification(temp_db, caplog):
    goal = build_goal_notification("Vacation")

    notification_id = NotificationEmitter(temp_db).send("user-1", goal)

    assert temp_db.list_notifications("user-1")[0].id == notification_id
    with caplog.at_level(logging.WARNING, logger="fintrack"):
        assert NotificationEmitter(FailingStore()).send("user-1", goal) is None
    assert "Failed to deliver goal notification" in caplog.text

def test_feed_receives_initial_and_later_snapshots(temp_db, make_record):
    emitter = NotificationEmitter(temp_db)

    with NotificationFeed(temp_db, "user-1") as feed:
        assert feed.latest() == ()
        emitter.emit("user-1", make_record(on=date(2024, 3, 1)))
        emitter.emit("user-1", make_record(on=date(2024, 3, 2)))
        snapshots = list(feed)

    assert [len(s) for s in snapshots] == [1, 2]
    assert not feed.is_open


def test_feed_stops_receiving_after_close(temp_db, make_record):
    feed = NotificationFeed(temp_db, "user-1").open()
    feed.close()

    NotificationEmitter(temp_db).emit("user-1", make_record())

    assert [len(s) for s in feed] == [0]


def test_feed_is_scoped_to_user(temp_db, make_record):
    with NotificationFeed(temp_db, "user-2") as feed:
        feed.latest()
        NotificationEmitter(temp_db).emit("user-1", make_record())
        assert list(feed) == []
