"""
Date parsing utilities for converting user input into due dates
"""

from datetime import date, datetime, time, timedelta
from typing import Any, Optional

from task_cli.utils.date_utils import UTC, get_current_datetime, to_utc, truncate_to_millis

RELATIVE_DAYS = {
    "tomorrow": 1,
    "day after tomorrow": 2,
}

DATE_FORMATS = [
    "%Y-%m-%d",   # 2025-11-08
    "%m/%d/%Y",   # 11/08/2025
]


def _midnight_utc(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def _parse_string(original_date_str: str, now: Optional[datetime]) -> Optional[datetime]:
    date_str_lower = original_date_str.lower()

    # Relative dates
    if date_str_lower in RELATIVE_DAYS:
        today = (now or get_current_datetime()).astimezone(UTC).date()
        return _midnight_utc(today + timedelta(days=RELATIVE_DAYS[date_str_lower]))

    # Date-only formats (slash dates are month first)
    for fmt in DATE_FORMATS:
        try:
            return _midnight_utc(datetime.strptime(original_date_str, fmt).date())
        except ValueError:
            continue

    # ISO 8601 (with or without offset, "Z" suffix allowed)
    try:
        return to_utc(datetime.fromisoformat(original_date_str.replace("Z", "+00:00")))
    except ValueError:
        return None


def parse_date(value: Any, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Parse a due date into a timezone-aware UTC datetime

    Date-only values (including "tomorrow") mean midnight UTC of that
    day. Date-times without an offset are interpreted as local time. The
    result is truncated to millisecond precision, which is what the task file
    stores.

    Args:
        value: datetime, date or string (e.g., "tomorrow", "2025-11-05",
            "2025-11-05T10:00:00Z", "11/05/2025")
        now: Reference moment for relative words (defaults to current UTC time)

    Returns:
        UTC datetime or None if the value can't be parsed
    """
    if isinstance(value, datetime):
        parsed = to_utc(value)
    elif isinstance(value, date):
        parsed = _midnight_utc(value)
    elif isinstance(value, str) and value.strip():
        parsed = _parse_string(value.strip(), now)
    else:
        parsed = None

    if parsed is None:
        return None
    return truncate_to_millis(parsed)
