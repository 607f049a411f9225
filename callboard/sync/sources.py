"""Per-category item queries - what a user owns or manages, as SyncableItems."""

from __future__ import annotations

import uuid
from datetime import tzinfo
from typing import Awaitable, Callable

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..models.audition import AuditionSignup, AuditionSlot, CallbackInvitation
from ..models.rehearsal import AgendaAssignment, RehearsalAgendaItem, RehearsalEvent
from ..models.show import Audition, CastMember
from ..timeutil import as_utc, local_datetime
from .categories import (
    AGENDA_ITEMS,
    AUDITION_SLOTS,
    AUDITIONS,
    CALLBACKS,
    PERFORMANCES,
    REHEARSAL_DATES,
    REHEARSAL_EVENTS,
)
from .items import SyncableItem, date_items

Fetcher = Callable[[AsyncSession, uuid.UUID, tzinfo], Awaitable[list[SyncableItem]]]


async def fetch_audition_slots(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """Slots of auditions the user owns."""
    stmt = (
        select(AuditionSlot)
        .join(Audition, AuditionSlot.audition_id == Audition.id)
        .where(Audition.user_id == user_id)
        .options(selectinload(AuditionSlot.audition).selectinload(Audition.show))
        .order_by(AuditionSlot.start_time)
    )
    slots = (await db.execute(stmt)).scalars().all()
    return [
        SyncableItem(
            category=AUDITION_SLOTS,
            local_id=str(slot.id),
            title=f"{slot.audition.show_title} - Audition Slot",
            description=f"Audition slot for {slot.audition.show_title}",
            location=slot.location or slot.audition.audition_location,
            start=as_utc(slot.start_time),
            end=as_utc(slot.end_time),
        )
        for slot in slots
    ]


async def fetch_audition_signups(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """Audition slots the user signed up for."""
    stmt = (
        select(AuditionSignup)
        .where(AuditionSignup.user_id == user_id)
        .options(
            selectinload(AuditionSignup.slot)
            .selectinload(AuditionSlot.audition)
            .selectinload(Audition.show)
        )
    )
    signups = (await db.execute(stmt)).scalars().all()
    return [
        SyncableItem(
            category=AUDITIONS,
            local_id=str(signup.id),
            title=f"{signup.slot.audition.show_title} - Audition",
            description=f"Your audition for {signup.slot.audition.show_title}",
            location=signup.slot.location or signup.slot.audition.audition_location,
            start=as_utc(signup.slot.start_time),
            end=as_utc(signup.slot.end_time),
        )
        for signup in signups
    ]


async def fetch_callbacks(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """Callback invitations the user accepted."""
    stmt = (
        select(CallbackInvitation)
        .where(
            CallbackInvitation.user_id == user_id,
            CallbackInvitation.status == "accepted",
        )
        .options(
            selectinload(CallbackInvitation.callback_slot),
            selectinload(CallbackInvitation.audition).selectinload(Audition.show),
        )
    )
    invitations = (await db.execute(stmt)).scalars().all()
    return [
        SyncableItem(
            category=CALLBACKS,
            local_id=str(inv.id),
            title=f"{inv.audition.show_title} - Callback",
            description=f"Callback for {inv.audition.show_title}",
            location=inv.callback_slot.location or inv.audition.audition_location,
            start=as_utc(inv.callback_slot.start_time),
            end=as_utc(inv.callback_slot.end_time),
        )
        for inv in invitations
    ]


async def _cast_auditions(db: AsyncSession, user_id: uuid.UUID) -> list[Audition]:
    stmt = (
        select(Audition)
        .join(CastMember, CastMember.audition_id == Audition.id)
        .where(CastMember.user_id == user_id)
        .options(selectinload(Audition.show))
    )
    return list((await db.execute(stmt)).scalars().all())


async def fetch_rehearsal_dates(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """All-day rehearsal dates of productions the user is cast in."""
    items: list[SyncableItem] = []
    for audition in await _cast_auditions(db, user_id):
        items.extend(
            date_items(
                REHEARSAL_DATES,
                audition.id,
                audition.rehearsal_dates,
                title=f"{audition.show_title} - Rehearsal",
                description=f"Rehearsal for {audition.show_title}",
                location=audition.rehearsal_location,
            )
        )
    return items


async def fetch_performance_dates(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """All-day performance dates of productions the user is cast in."""
    items: list[SyncableItem] = []
    for audition in await _cast_auditions(db, user_id):
        items.extend(
            date_items(
                PERFORMANCES,
                audition.id,
                audition.performance_dates,
                title=f"{audition.show_title} - Performance",
                description=f"Performance of {audition.show_title}",
                location=audition.performance_location,
            )
        )
    return items


async def fetch_rehearsal_events(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """Rehearsal events of productions the user owns or is cast in."""
    owned = select(Audition.id).where(Audition.user_id == user_id)
    cast = select(CastMember.audition_id).where(CastMember.user_id == user_id)
    stmt = (
        select(RehearsalEvent)
        .where(or_(RehearsalEvent.audition_id.in_(owned), RehearsalEvent.audition_id.in_(cast)))
        .options(selectinload(RehearsalEvent.audition).selectinload(Audition.show))
        .order_by(RehearsalEvent.date, RehearsalEvent.start_time)
    )
    events = (await db.execute(stmt)).scalars().all()
    return [
        SyncableItem(
            category=REHEARSAL_EVENTS,
            local_id=str(ev.id),
            title=f"{ev.audition.show_title} - Rehearsal",
            description=ev.notes or f"Rehearsal for {ev.audition.show_title}",
            location=ev.location or ev.audition.rehearsal_location,
            start=local_datetime(ev.date, ev.start_time, tz),
            end=local_datetime(ev.date, ev.end_time, tz),
        )
        for ev in events
    ]


async def fetch_agenda_items(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[SyncableItem]:
    """Rehearsal agenda items the user is assigned to."""
    stmt = (
        select(RehearsalAgendaItem)
        .join(AgendaAssignment, AgendaAssignment.agenda_item_id == RehearsalAgendaItem.id)
        .where(AgendaAssignment.user_id == user_id)
        .options(
            selectinload(RehearsalAgendaItem.rehearsal_event)
            .selectinload(RehearsalEvent.audition)
            .selectinload(Audition.show)
        )
    )
    agenda_items = (await db.execute(stmt)).scalars().all()
    items = []
    for item in agenda_items:
        ev = item.rehearsal_event
        items.append(
            SyncableItem(
                category=AGENDA_ITEMS,
                local_id=str(item.id),
                title=f"{ev.audition.show_title} - {item.title}",
                description=item.description or f"Rehearsal agenda item for {ev.audition.show_title}",
                location=ev.location or ev.audition.rehearsal_location,
                start=local_datetime(ev.date, item.start_time, tz),
                end=local_datetime(ev.date, item.end_time, tz),
            )
        )
    return items


FETCHERS: dict[str, Fetcher] = {
    AUDITION_SLOTS: fetch_audition_slots,
    AUDITIONS: fetch_audition_signups,
    CALLBACKS: fetch_callbacks,
    REHEARSAL_DATES: fetch_rehearsal_dates,
    REHEARSAL_EVENTS: fetch_rehearsal_events,
    AGENDA_ITEMS: fetch_agenda_items,
    PERFORMANCES: fetch_performance_dates,
}


async def fetch_items(
    db: AsyncSession, user_id: uuid.UUID, namespace: str, tz: tzinfo
) -> list[SyncableItem]:
    return await FETCHERS[namespace](db, user_id, tz)
