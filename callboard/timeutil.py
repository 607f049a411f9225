"""Timezone helpers shared by sync and conflict logic."""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone, tzinfo

_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def as_utc(value: datetime) -> datetime:
    """Normalize a timestamp to aware UTC. Naive values (SQLite) are UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def local_datetime(day: date, wall_time: time, tz: tzinfo) -> datetime:
    """Combine a date and a wall-clock time in tz into an aware UTC timestamp."""
    return datetime.combine(day, wall_time, tzinfo=tz).astimezone(timezone.utc)


def local_day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def parse_iso_date(value: object) -> date | None:
    """Parse a strict YYYY-MM-DD string; return None for blank or malformed input."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    if not _ISO_DATE_RE.match(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
