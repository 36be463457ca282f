"""Shared pytest fixtures for fintrack tests."""

import tempfile
import os
from datetime import date
from decimal import Decimal

import pytest

from fintrack.database.factories import create_sqlite_database
from fintrack.domain.dashboard import DashboardService
from fintrack.domain.entities import Transaction, TransactionKind
from fintrack.domain.notifications import NotificationEmitter
from fintrack.domain.session import Session
from fintrack.domain.transaction import TransactionService
from fintrack.logging_setup import reset_logging


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def session():
    """Session for the default test user."""
    return Session(user_id="user-1")


@pytest.fixture
def transaction_service(temp_db, session):
    """Create a TransactionService that emits notifications."""
    return TransactionService(temp_db, session, NotificationEmitter(temp_db))


@pytest.fixture
def dashboard_service(temp_db, session):
    """Create a DashboardService with a temporary database."""
    return DashboardService(temp_db, session)


@pytest.fixture
def make_record():
    """Build in-memory records without touching the database."""
    counter = {"next": 0}

    def _make(
        amount="10",
        on=date(2024, 3, 15),
        category="Food & Dining",
        kind=TransactionKind.EXPENSE,
        description="Test record",
        notes=None,
        record_id=None,
    ):
        counter["next"] += 1
        return Transaction(
            id=record_id or f"r{counter['next']}",
            kind=kind,
            amount=Decimal(amount),
            description=description,
            category=category,
            date=on,
            notes=notes,
        )

    return _make


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
