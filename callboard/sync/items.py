"""SyncableItem projection and Google event payload building."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Iterable

from ..timeutil import as_utc, parse_iso_date
from .categories import COLOR_IDS


@dataclass(frozen=True)
class SyncableItem:
    """Common shape every category fetch produces.

    ``category`` is the mapping namespace (e.g. ``rehearsal_dates``), and
    ``local_id`` is unique within it.
    """

    category: str
    local_id: str
    title: str
    start: datetime | date
    end: datetime | date
    all_day: bool = False
    description: str | None = None
    location: str | None = None


def date_items(
    category: str,
    parent_id: object,
    dates: Iterable[object] | None,
    *,
    title: str,
    description: str | None = None,
    location: str | None = None,
) -> list[SyncableItem]:
    """Expand a parent's list of YYYY-MM-DD strings into all-day items.

    Blank, malformed, and repeated entries are skipped.
    """
    items: list[SyncableItem] = []
    seen: set[date] = set()
    for raw in dates or []:
        day = parse_iso_date(raw)
        if day is None or day in seen:
            continue
        seen.add(day)
        items.append(
            SyncableItem(
                category=category,
                local_id=f"{parent_id}_{day.isoformat()}",
                title=title,
                description=description,
                location=location,
                start=day,
                end=day + timedelta(days=1),
                all_day=True,
            )
        )
    return items


def to_google_event(item: SyncableItem, time_zone: str) -> dict[str, Any]:
    """Build a Calendar API event resource for an item."""
    event: dict[str, Any] = {
        "summary": item.title,
        "description": item.description or "",
    }
    color_id = COLOR_IDS.get(item.category)
    if color_id:
        event["colorId"] = color_id
    if item.location:
        event["location"] = item.location

    if item.all_day:
        # Google treats the all-day end date as exclusive
        event["start"] = {"date": _as_date(item.start).isoformat()}
        event["end"] = {"date": _as_date(item.end).isoformat()}
    else:
        event["start"] = {"dateTime": as_utc(item.start).isoformat(), "timeZone": time_zone}
        event["end"] = {"dateTime": as_utc(item.end).isoformat(), "timeZone": time_zone}
    return event


def _as_date(value: datetime | date) -> date:
    return value.date() if isinstance(value, datetime) else value
