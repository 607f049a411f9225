"""Event mapping store - local item to Google event links used for de-duplication."""

from __future__ import annotations

import uuid

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.google import GoogleEventMapping


async def find_mapped_ids(
    db: AsyncSession,
    user_id: uuid.UUID,
    event_type: str,
    local_ids: list[str],
) -> set[str]:
    """Return the subset of local_ids that already have a mapping, in one query."""
    if not local_ids:
        return set()
    stmt = select(GoogleEventMapping.event_id).where(
        GoogleEventMapping.user_id == user_id,
        GoogleEventMapping.event_type == event_type,
        GoogleEventMapping.event_id.in_(local_ids),
    )
    result = await db.execute(stmt)
    return set(result.scalars().all())


async def insert_mapping(
    db: AsyncSession,
    user_id: uuid.UUID,
    event_type: str,
    local_id: str,
    google_calendar_id: str,
    google_event_id: str,
) -> GoogleEventMapping:
    mapping = GoogleEventMapping(
        user_id=user_id,
        event_type=event_type,
        event_id=local_id,
        google_calendar_id=google_calendar_id,
        google_event_id=google_event_id,
    )
    db.add(mapping)
    await db.commit()
    return mapping

