"""
Centralized date/time utilities
All due dates are handled as timezone-aware UTC datetimes
"""

from datetime import datetime, timezone

from task_cli.config.constants import STORAGE_DATETIME_FORMAT

UTC = timezone.utc


def get_current_datetime() -> datetime:
    """
    Get current datetime in UTC

    Returns:
        Current datetime object with UTC timezone
    """
    return datetime.now(UTC)


def to_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to UTC

    Naive datetimes are interpreted as local time.

    Args:
        value: Datetime to normalize

    Returns:
        Timezone-aware UTC datetime
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.astimezone(UTC)


def format_datetime(value: datetime) -> str:
    """
    Format datetime for storage and JSON output

    Format: "YYYY-MM-DDTHH:MM:SS.mmmZ"
    Example: "2025-11-13T15:30:45.120Z"

    Args:
        value: Datetime to format

    Returns:
        UTC timestamp string with millisecond precision
    """
    value = to_utc(value)
    return f"{value.strftime(STORAGE_DATETIME_FORMAT)}.{value.microsecond // 1000:03d}Z"


def truncate_to_millis(value: datetime) -> datetime:
    """Drop sub-millisecond precision so values survive a storage round-trip"""
    return value.replace(microsecond=value.microsecond // 1000 * 1000)
