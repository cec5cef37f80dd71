"""
Datetime utilities.

Database columns store naive UTC datetimes; API consumers receive them as-is.
"""

from datetime import datetime, timezone

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Replaces datetime.utcnow() which is deprecated in Python 3.12+.
    """
    return datetime.now(UTC)


def utcnow_naive() -> datetime:
    """Get current UTC datetime without tzinfo, for database columns."""
    return now_utc().replace(tzinfo=None)
