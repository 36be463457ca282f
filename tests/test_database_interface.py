"""Tests for the SQLAlchemy store."""

import logging
from datetime import date, datetime
from decimal import Decimal

import pytest

from fintrack.domain import entities
from fintrack.domain.entities import Notification, TransactionKind
from fintrack.domain.errors import NotFoundError, UnavailableError

EXPENSE = TransactionKind.EXPENSE
INCOME = TransactionKind.INCOME


def _fields(**overrides):
    fields = {
        "amount": Decimal("12.50"),
        "description": "Bus pass",
        "category": "Transportation",
        "date": date(2024, 3, 3),
        "notes": None,
    }
    fields.update(overrides)
    return fields


class FakeTimestamp:
    """Backend-native timestamp exposing a toDate() accessor."""

    def __init__(self, value):
        self.value = value

    def toDate(self):
        return self.value


class TestTransactionRepository:
    """Record storage behaviour."""

    def test_create_and_get_returns_domain_model(self, temp_db):
        record_id = temp_db.create("user-1", EXPENSE, _fields())

        record = temp_db.get("user-1", EXPENSE, record_id)

        assert isinstance(record, entities.Transaction)
        assert record.id == record_id
        assert record.kind == EXPENSE
        assert record.amount == Decimal("12.50")
        assert record.date == date(2024, 3, 3)
        assert isinstance(record.created_at, datetime)

    def test_create_normalizes_native_timestamps(self, temp_db):
        stamp = FakeTimestamp(datetime(2024, 3, 9, 8, 0))
        record_id = temp_db.create("user-1", INCOME, _fields(date=stamp, category="Salary"))

        assert temp_db.get("user-1", INCOME, record_id).date == date(2024, 3, 9)

    def test_list_records_newest_first_and_tagged(self, temp_db):
        temp_db.create("user-1", INCOME, _fields(date=date(2024, 1, 1), category="Gift"))
        temp_db.create("user-1", INCOME, _fields(date=date(2024, 3, 1), category="Gift"))
        temp_db.create("user-1", EXPENSE, _fields())

        records = temp_db.list_records("user-1", INCOME)

        assert [r.date for r in records] == [date(2024, 3, 1), date(2024, 1, 1)]
        assert all(r.kind == INCOME for r in records)

    def test_update_replaces_fields(self, temp_db):
        record_id = temp_db.create("user-1", EXPENSE, _fields())

        temp_db.update("user-1", EXPENSE, record_id, {"amount": Decimal("99"), "date": "2024-04-01"})

        record = temp_db.get("user-1", EXPENSE, record_id)
        assert record.amount == Decimal("99")
        assert record.date == date(2024, 4, 1)

    def test_update_rejects_unknown_fields(self, temp_db):
        record_id = temp_db.create("user-1", EXPENSE, _fields())

        with pytest.raises(ValueError):
            temp_db.update("user-1", EXPENSE, record_id, {"user_id": "user-2"})

    def test_update_and_delete_missing_record(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.update("user-1", EXPENSE, "missing", {"amount": Decimal("1")})
        with pytest.raises(NotFoundError):
            temp_db.delete("user-1", EXPENSE, "missing")

    def test_delete_removes_record(self, temp_db):
        record_id = temp_db.create("user-1", EXPENSE, _fields())

        temp_db.delete("user-1", EXPENSE, record_id)

        assert temp_db.get("user-1", EXPENSE, record_id) is None

    def test_other_users_cannot_touch_records(self, temp_db):
        record_id = temp_db.create("user-1", EXPENSE, _fields())

        assert temp_db.get("user-2", EXPENSE, record_id) is None
        with pytest.raises(NotFoundError):
            temp_db.delete("user-2", EXPENSE, record_id)

    def test_storage_failure_is_unavailable(self, temp_db):
        with pytest.raises(UnavailableError):
            temp_db.create("user-1", EXPENSE, _fields(description=None))


class TestNotificationStore:
    """Notification storage and subscriptions."""

    def _notification(self, title="New Expense Added", created_at=None):
        return Notification(
            type="expense",
            title=title,
            message="You added $1.00 for Gas",
            icon="💸",
            created_at=created_at,
        )

    def test_append_and_list_newest_first(self, temp_db):
        temp_db.append("user-1", self._notification("older", datetime(2024, 3, 1, 9)))
        temp_db.append("user-1", self._notification("newer", datetime(2024, 3, 2, 9)))

        notifications = temp_db.list_notifications("user-1")

        assert [n.title for n in notifications] == ["newer", "older"]
        assert all(isinstance(n, entities.Notification) for n in notifications)
        assert all(n.read is False for n in notifications)

    def test_mark_read(self, temp_db):
        notification_id = temp_db.append("user-1", self._notification())

        temp_db.mark_read("user-1", notification_id)

        assert temp_db.list_notifications("user-1")[0].read is True

    def test_mark_read_missing(self, temp_db):
        with pytest.raises(NotFoundError):
            temp_db.mark_read("user-1", "missing")

    def test_mark_all_read(self, temp_db):
        ids = [temp_db.append("user-1", self._notification()) for _ in range(3)]

        temp_db.mark_all_read("user-1", ids[:2])

        unread = [n.id for n in temp_db.list_notifications("user-1") if not n.read]
        assert unread == [ids[2]]

    def test_subscribe_pushes_snapshots_until_unsubscribed(self, temp_db):
        snapshots = []
        unsubscribe = temp_db.subscribe("user-1", snapshots.append)

        notification_id = temp_db.append("user-1", self._notification())
        temp_db.mark_read("user-1", notification_id)
        unsubscribe()
        temp_db.append("user-1", self._notification())

        assert [len(s) for s in snapshots] == [0, 1, 1]
        assert snapshots[-1][0].read is True

    def test_failing_listener_does_not_break_append(self, temp_db):
        def broken(snapshot):
            if snapshot:
                raise RuntimeError("listener crashed")

        temp_db.subscribe("user-1", broken)

        notification_id = temp_db.append("user-1", self._notification())

        assert temp_db.list_notifications("user-1")[0].id == notification_id

    def test_failed_subscribe_does_not_keep_listener(self, temp_db, monkeypatch):
        snapshots = []

        def offline(user_id):
            raise UnavailableError("Storage unavailable: offline")

        monkeypatch.setattr(temp_db, "list_notifications", offline)
        with pytest.raises(UnavailableError):
            temp_db.subscribe("user-1", snapshots.append)
        monkeypatch.undo()

        temp_db.append("user-1", self._notification())

        assert snapshots == []

    def test_writes_succeed_when_snapshot_reload_fails(self, temp_db, monkeypatch, caplog):
        snapshots = []
        temp_db.subscribe("user-1", snapshots.append)

        def offline(user_id):
            raise UnavailableError("Storage unavailable: offline")

        monkeypatch.setattr(temp_db, "list_notifications", offline)
        with caplog.at_level(logging.WARNING, logger="fintrack"):
            notification_id = temp_db.append("user-1", self._notification())
            temp_db.mark_read("user-1", notification_id)
            temp_db.mark_all_read("user-1", [notification_id])
        monkeypatch.undo()

        assert len(snapshots) == 1
        assert temp_db.list_notifications("user-1")[0].read is True
        assert "Could not load notifications" in caplog.text
