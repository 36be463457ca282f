"""Mapper functions to convert between domain models and SQLAlchemy models.

Dates are normalized here so that the aggregation layer only ever sees
``datetime.date`` values.
"""

from decimal import Decimal

from fintrack.domain import entities as domain
from fintrack.database.models import (
    Expense as ORMExpense,
    Income as ORMIncome,
    Notification as ORMNotification,
)
from fintrack.utils.date_parser import normalize_date


def record_to_domain(
    orm_record: ORMExpense | ORMIncome, kind: domain.TransactionKind
) -> domain.Transaction:
    """Convert an expense or income row to a domain Transaction tagged with ``kind``."""
    return domain.Transaction(
        id=orm_record.id,
        kind=kind,
        amount=Decimal(orm_record.amount),
        description=orm_record.description,
        category=orm_record.category,
        date=normalize_date(orm_record.date),
        notes=orm_record.notes,
        created_at=orm_record.created_at,
    )


def notification_to_domain(orm_notification: ORMNotification) -> domain.Notification:
    """Convert SQLAlchemy Notification model to domain Notification entity."""
    return domain.Notification(
        id=orm_notification.id,
        type=orm_notification.type,
        title=orm_notification.title,
        message=orm_notification.message,
        icon=orm_notification.icon,
        read=orm_notification.read,
        created_at=orm_notification.created_at,
    )


def notification_to_columns(notification: domain.Notification) -> dict:
    """Return column values for persisting a domain Notification."""
    columns = {
        "type": notification.type,
        "title": notification.title,
        "message": notification.message,
        "icon": notification.icon,
        "read": notification.read,
    }
    if notification.created_at is not None:
        columns["created_at"] = notification.created_at
    return columns
