"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, func


def utcnow() -> datetime:
    return datetime.now(UTC)


class TimestampMixin:
    """Mixin to add created_at and updated_at timestamp columns.

    Python-side defaults keep sub-second ordering on SQLite, where now() has
    one-second resolution.
    """

    created_at = Column(
        DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        onupdate=utcnow,
        nullable=False,
    )
