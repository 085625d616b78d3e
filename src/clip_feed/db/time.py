# src/clip_feed/db/time.py
"""Time utilities for database models."""

from datetime import UTC, datetime, time, timedelta


def utcnow() -> datetime:
    """Return the current UTC time as a timezone-aware datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes read back from stores without zone support."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def utc_day_bounds(moment: datetime) -> tuple[datetime, datetime]:
    """Return the ``[start, end)`` UTC calendar day containing ``moment``."""
    start = datetime.combine(as_utc(moment).date(), time.min, tzinfo=UTC)
    return start, start + timedelta(days=1)
