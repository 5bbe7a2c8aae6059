"""
UTC datetime utilities for consistent timezone handling.

All timestamps written to the store are UTC. Records carry both ISO-8601
strings (``timestamp``, ``sentAt`` ...) and epoch milliseconds
(``createdAt``), matching what the web client reads.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """
    Return the current UTC datetime with timezone info.

    Use this instead of datetime.now() or datetime.utcnow().

    Returns:
        Timezone-aware datetime in UTC
    """
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    """
    Format a datetime as ISO-8601 UTC with millisecond precision and a Z suffix.

    Naive datetimes are assumed to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_epoch_ms(dt: datetime) -> int:
    """Return milliseconds since the Unix epoch for dt."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp() * 1000)
