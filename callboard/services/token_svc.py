"""Google credential store - read and persist a user's calendar tokens."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.google import GoogleCalendarToken


async def get_credential(
    db: AsyncSession, user_id: uuid.UUID
) -> GoogleCalendarToken | None:
    stmt = select(GoogleCalendarToken).where(GoogleCalendarToken.user_id == user_id)
    return (await db.execute(stmt)).scalar_one_or_none()


async def persist_credential(
    db: AsyncSession,
    user_id: uuid.UUID,
    access_token: str,
    expiry_date: datetime | None,
    refresh_token: str | None = None,
) -> GoogleCalendarToken:
    """Store a refreshed access token. Keeps the old refresh token unless a new one is given."""
    token = await get_credential(db, user_id)
    if token is None:
        token = GoogleCalendarToken(user_id=user_id, access_token=access_token)
        db.add(token)
    token.access_token = access_token
    token.expiry_date = expiry_date
    if refresh_token:
        token.refresh_token = refresh_token
    await db.commit()
    await db.refresh(token)
    return token

