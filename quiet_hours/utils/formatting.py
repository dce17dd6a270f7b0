"""Time helpers and human-readable date/time strings used in reminder emails."""

import datetime as dt
from typing import Optional


def utcnow() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: Optional[dt.datetime]) -> Optional[dt.datetime]:
    """Attach UTC to naive values read back from stores that drop the offset (SQLite)."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


def parse_time_of_day(value) -> dt.time:
    """Accept a ``time`` or an ``HH:MM[:SS]`` string."""
    if isinstance(value, dt.time):
        return value
    return dt.time.fromisoformat(str(value).strip())


def parse_calendar_date(value) -> dt.date:
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value).strip())


def format_clock_time(value) -> str:
    """``13:05`` -> ``1:05 PM``"""
    t = parse_time_of_day(value)
    hour = t.hour % 12 or 12
    suffix = "AM" if t.hour < 12 else "PM"
    return f"{hour}:{t.minute:02d} {suffix}"


def format_long_date(value) -> str:
    """``2025-03-10`` -> ``Monday, March 10, 2025``"""
    d = parse_calendar_date(value)
    return f"{d:%A}, {d:%B} {d.day}, {d.year}"
