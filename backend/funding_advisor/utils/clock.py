"""Timestamp helpers.

All persisted timestamps are naive UTC datetimes (SQLite has no timezone
support); log entries carry the same instant as an ISO-8601 string with a
trailing ``Z``.
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime, microsecond precision."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat_utc(moment: datetime) -> str:
    """Render a naive-UTC datetime as ``2025-01-31T12:00:00.123Z``."""
    return moment.isoformat(timespec="milliseconds") + "Z"
