"""Sync settings service - enabled categories, preferences, and setup status."""

from __future__ import annotations

import uuid

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.google import GoogleCalendarSync
from ..sync.categories import CATEGORY_ORDER, is_known
from ..timeutil import utcnow


class UnknownEventType(Exception):
    """Raised when a preference update names a category that does not exist."""


async def list_enabled(db: AsyncSession, user_id: uuid.UUID) -> list[GoogleCalendarSync]:
    stmt = select(GoogleCalendarSync).where(
        GoogleCalendarSync.user_id == user_id,
        GoogleCalendarSync.sync_enabled == True,  # noqa: E712
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def list_preferences(db: AsyncSession, user_id: uuid.UUID) -> list[GoogleCalendarSync]:
    stmt = (
        select(GoogleCalendarSync)
        .where(GoogleCalendarSync.user_id == user_id)
        .order_by(GoogleCalendarSync.event_type)
    )
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def update_preferences(
    db: AsyncSession, user_id: uuid.UUID, preferences: list[dict]
) -> int:
    """Toggle sync_enabled per event_type. Returns the number of rows updated."""
    for pref in preferences:
        if not is_known(pref["event_type"]):
            raise UnknownEventType(f"Unknown event type: {pref['event_type']}")

    updated = 0
    for pref in preferences:
        result = await db.execute(
            update(GoogleCalendarSync)
            .where(
                GoogleCalendarSync.user_id == user_id,
                GoogleCalendarSync.event_type == pref["event_type"],
            )
            .values(sync_enabled=bool(pref["sync_enabled"]))
        )
        updated += result.rowcount or 0
    await db.commit()
    return updated


async def mark_synced(db: AsyncSession, user_id: uuid.UUID) -> None:
    """Stamp last_synced_at on every sync setting the user has."""
    await db.execute(
        update(GoogleCalendarSync)
        .where(GoogleCalendarSync.user_id == user_id)
        .values(last_synced_at=utcnow())
    )
    await db.commit()


async def sync_status(db: AsyncSession, user_id: uuid.UUID) -> dict:
    """Report whether a calendar exists for every category."""
    calendars = await list_preferences(db, user_id)
    existing = {c.event_type for c in calendars}
    missing = [t for t in CATEGORY_ORDER if t not in existing]
    return {
        "calendarsSetup": not missing,
        "calendars": calendars,
        "missingTypes": missing,
    }
