from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from ..core.constants import WEEKDAY_NAMES
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_time_of_day(value: str | time | None) -> Optional[time]:
    """Parse HH:MM or HH:MM:SS into a time, dropping microseconds.

    Empty input means "not set" and returns None.
    """

    if value is None:
        return None
    if isinstance(value, time):
        return value.replace(microsecond=0)

    v = value.strip()
    if not v:
        return None
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"Invalid time {value!r} (expected HH:MM or HH:MM:SS)")


def format_time(value: Optional[time]) -> Optional[str]:
    return value.strftime("%H:%M:%S") if value is not None else None


def weekday_name(value: date) -> str:
    return WEEKDAY_NAMES[value.weekday()]


def seconds_of_day(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second


def whole_minutes(delta: timedelta) -> int:
    """Floor a duration to whole minutes (negative durations stay negative)."""
    return int(delta.total_seconds() // 60)


def format_minutes(minutes: Optional[int]) -> Optional[str]:
    """Render a minute count as HH:MM, e.g. 250 -> '04:10'; None stays None."""
    if minutes is None:
        return None
    safe = max(0, int(minutes))
    return f"{safe // 60:02d}:{safe % 60:02d}"


def now_local() -> datetime:
    """Current local time, seconds precision.

    Note: Wrapped so tests can patch it easily.
    """
    return datetime.now().replace(microsecond=0)
