"""Timestamp parsing and zh-TW date/time display."""

from datetime import date, datetime
from typing import Optional, Union

UNKNOWN_TIME = "未知"


def parse_timestamp(value: Union[str, datetime, date, None]) -> Optional[datetime]:
    """Parse an ISO-8601 date or timestamp, returning None when it is not one."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def is_red_eye(departure) -> bool:
    """A flight is red-eye when it leaves between 00:00 and 06:00 local time."""
    departed = parse_timestamp(departure)
    if departed is None:
        return False
    return 0 <= departed.hour < 6


def _meridiem(hour: int) -> tuple[str, int]:
    label = "上午" if hour < 12 else "下午"
    return label, hour % 12 or 12


def format_date(value) -> str:
    """zh-TW short date, e.g. ``2025/3/1``."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return str(value) if value else ""
    return f"{parsed.year}/{parsed.month}/{parsed.day}"


def format_datetime(value) -> str:
    """zh-TW date and time, e.g. ``2025/3/1 下午2:30:00``."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return str(value) if value else ""
    label, hour = _meridiem(parsed.hour)
    return f"{format_date(parsed)} {label}{hour}:{parsed.minute:02d}:{parsed.second:02d}"


def format_time(value) -> str:
    """zh-TW two-digit clock time, e.g. ``下午02:30``."""
    parsed = parse_timestamp(value)
    if parsed is None:
        return UNKNOWN_TIME
    label, hour = _meridiem(parsed.hour)
    return f"{label}{hour:02d}:{parsed.minute:02d}"
