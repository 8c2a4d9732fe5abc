"""UTC datetime helper for document timestamps (createdAt / updatedAt)."""

from datetime import UTC, datetime


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime.

    Firestore stores timestampValue in UTC; naive datetimes would be
    encoded as local time.
    """
    return datetime.now(UTC)
