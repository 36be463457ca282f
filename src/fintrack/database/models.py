"""SQLAlchemy models for the fintrack store."""

from datetime import datetime, UTC
from uuid import uuid4

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.orm import Session, declarative_base, sessionmaker

Base = declarative_base()


def _new_id() -> str:
    return uuid4().hex


class RecordColumns:
    """Columns shared by the expense and income collections."""

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    description = Column(String, nullable=False)
    category = Column(String, nullable=True)
    date = Column(Date, nullable=False, index=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Expense(RecordColumns, Base):
    """Expense record model."""

    __tablename__ = "expenses"


class Income(RecordColumns, Base):
    """Income record model."""

    __tablename__ = "income"


class Notification(Base):
    """Notification model."""

    __tablename__ = "notifications"

    id = Column(String(32), primary_key=True, default=_new_id)
    user_id = Column(String, nullable=False, index=True)
    type = Column(String, nullable=False)
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    icon = Column(String, nullable=False)
    read = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
