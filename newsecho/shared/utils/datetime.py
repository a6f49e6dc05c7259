"""UTC datetime helpers.

Timestamps stored in Firestore (createdAt, publishedAt, subscribedAt,
timestamp, lastActive) are always timezone-aware UTC.
"""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Normalize a datetime read from storage or a request to aware UTC.

    Naive values are taken to be UTC already; None passes through.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
