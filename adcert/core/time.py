"""Central time utilities for the application.

Timestamps are stored as naive UTC datetimes (TIMESTAMP WITHOUT TIME ZONE);
certificate validity windows are plain dates in UTC.
"""
from datetime import date, datetime, timezone


def utc_now() -> datetime:
    """
    Return current UTC time as a naive datetime object.

    Avoids the DeprecationWarning from datetime.utcnow() while keeping
    compatibility with naive DateTime columns.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def utc_today() -> date:
    """Return the current calendar date in UTC."""
    return utc_now().date()
