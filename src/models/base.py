"""SQLAlchemy declarative base and the timestamp mixin shared by all tables."""
from datetime import datetime

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Primary keys are PostgreSQL INTEGER columns
MAX_INTEGER_ID = 2**31 - 1


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at columns.

    Timestamps are timezone-aware (TIMESTAMP WITH TIME ZONE in PostgreSQL) and
    default to clock_timestamp(), the wall-clock time of the statement rather
    than the start of the transaction.

    There is no onupdate hook: services set updated_at explicitly when they
    change a row.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.clock_timestamp(),
        nullable=False,
    )
