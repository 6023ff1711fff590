"""Time utilities for database models and scoring."""

from datetime import UTC, datetime

SECONDS_PER_DAY = 86_400.0


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Return ``value`` as an aware UTC datetime.

    SQLite hands back naive datetimes even for ``DateTime(timezone=True)``
    columns; those are stored in UTC, so they are tagged rather than shifted.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def days_between(start: datetime, end: datetime) -> float:
    """Return the real-valued number of days from ``start`` to ``end``."""
    return (as_utc(end) - as_utc(start)).total_seconds() / SECONDS_PER_DAY
