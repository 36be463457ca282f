"""Storage layer for fintrack application."""

from fintrack.database.base import NotificationStore, TransactionRepository
from fintrack.database.factories import create_sqlite_database

__all__ = ["NotificationStore", "TransactionRepository", "create_sqlite_database"]
