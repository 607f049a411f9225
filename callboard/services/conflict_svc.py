"""Interval conflict detection across a user's commitments."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta, tzinfo
from typing import Any, Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..config import settings
from ..models.event import PersonalEvent
from ..models.production import ProductionEvent, ProductionEventAssignment
from ..models.profile import Profile
from ..models.rehearsal import RehearsalAgendaItem, RehearsalEvent
from ..models.show import Audition
from ..sync import sources
from ..sync.categories import AGENDA_ITEMS, AUDITIONS, CALLBACKS
from ..timeutil import as_utc, local_datetime, local_day_bounds

# Commitment kinds per source namespace
COMMITMENT_KINDS = {
    AUDITIONS: "audition",
    CALLBACKS: "callback",
    AGENDA_ITEMS: "rehearsal",
}
PRODUCTION_KIND = "production_event"
PERSONAL_KIND = "personal"
DEFAULT_PERSONAL_DURATION = timedelta(hours=1)


def overlaps(a_start: datetime, a_end: datetime, b_start: datetime, b_end: datetime) -> bool:
    """Half-open interval overlap. Non-positive durations never overlap."""
    if a_start >= a_end or b_start >= b_end:
        return False
    return a_start < b_end and b_start < a_end


@dataclass(frozen=True)
class Commitment:
    kind: str
    source_id: str
    title: str
    start: datetime
    end: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind,
            "source_id": self.source_id,
            "title": self.title,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
        }


@dataclass(frozen=True)
class ScheduledBlock:
    """A block of time some users are assigned to (e.g. one agenda item)."""

    block_id: str
    title: str
    start: datetime
    end: datetime
    user_ids: tuple[str, ...] = field(default_factory=tuple)


def find_conflict(
    start: datetime, end: datetime, commitments: Iterable[Commitment]
) -> Commitment | None:
    """Return the first commitment overlapping [start, end), or None."""
    start, end = as_utc(start), as_utc(end)
    for commitment in commitments:
        if overlaps(start, end, commitment.start, commitment.end):
            return commitment
    return None


def conflict_report(
    blocks: Iterable[ScheduledBlock],
    commitments_by_user: dict[str, list[Commitment]],
) -> dict[str, list[dict[str, Any]]]:
    """Group overlaps as {block_id: [{user_id, conflicting_items}]}.

    Blocks without conflicting users are omitted, and a block never
    conflicts with the commitment it is itself the source of.
    """
    report: dict[str, list[dict[str, Any]]] = {}
    for block in blocks:
        entries = []
        for user_id in block.user_ids:
            conflicting = [
                c for c in commitments_by_user.get(user_id, [])
                if c.source_id != block.block_id
                and overlaps(block.start, block.end, c.start, c.end)
            ]
            if conflicting:
                entries.append({
                    "user_id": user_id,
                    "conflicting_items": [c.to_dict() for c in conflicting],
                })
        if entries:
            report[block.block_id] = entries
    return report


def _all_day_bounds(ev: PersonalEvent, tz: tzinfo) -> tuple[datetime, datetime]:
    """Local-day window of an all-day event.

    All-day rows store bare dates (UTC midnight); the end date is exclusive.
    A missing or non-increasing end blocks just the first day.
    """
    first_day = as_utc(ev.start_time).date()
    last_day = as_utc(ev.end_time).date() if ev.end_time is not None else first_day
    if last_day <= first_day:
        last_day = first_day + timedelta(days=1)
    start, _ = local_day_bounds(first_day, tz)
    end, _ = local_day_bounds(last_day, tz)
    return start, end


async def _personal_commitments(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[Commitment]:
    stmt = select(PersonalEvent).where(PersonalEvent.user_id == user_id)
    commitments = []
    for ev in (await db.execute(stmt)).scalars().all():
        start = as_utc(ev.start_time)
        if ev.all_day:
            start, end = _all_day_bounds(ev, tz)
        elif ev.end_time is not None:
            end = as_utc(ev.end_time)
        else:
            end = start + DEFAULT_PERSONAL_DURATION
        commitments.append(Commitment(PERSONAL_KIND, str(ev.id), ev.title, start, end))
    return commitments


async def _production_commitments(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo
) -> list[Commitment]:
    """Timed production events the user is called for. Untimed calls block nothing."""
    stmt = (
        select(ProductionEvent)
        .join(
            ProductionEventAssignment,
            ProductionEventAssignment.production_event_id == ProductionEvent.id,
        )
        .where(
            ProductionEventAssignment.user_id == user_id,
            ProductionEvent.start_time.is_not(None),
            ProductionEvent.end_time.is_not(None),
        )
        .options(
            selectinload(ProductionEvent.event_type),
            selectinload(ProductionEvent.audition).selectinload(Audition.show),
        )
    )
    return [
        Commitment(
            PRODUCTION_KIND,
            str(ev.id),
            f"{ev.audition.show_title} - {ev.type_name}",
            local_datetime(ev.date, ev.start_time, tz),
            local_datetime(ev.date, ev.end_time, tz),
        )
        for ev in (await db.execute(stmt)).scalars().all()
    ]


async def user_commitments(
    db: AsyncSession, user_id: uuid.UUID, tz: tzinfo | None = None
) -> list[Commitment]:
    """Everything the user is committed to, sorted by start time."""
    tz = tz or settings.tz
    commitments: list[Commitment] = []
    for namespace, kind in COMMITMENT_KINDS.items():
        for item in await sources.fetch_items(db, user_id, namespace, tz):
            commitments.append(Commitment(kind, item.local_id, item.title, item.start, item.end))
    commitments.extend(await _production_commitments(db, user_id, tz))
    commitments.extend(await _personal_commitments(db, user_id, tz))
    commitments.sort(key=lambda c: c.start)
    return commitments


async def check_conflict(
    db: AsyncSession, user_id: uuid.UUID, start: datetime, end: datetime
) -> Commitment | None:
    return find_conflict(start, end, await user_commitments(db, user_id))


async def rehearsal_event_conflicts(
    db: AsyncSession, rehearsal_event_id: uuid.UUID, tz: tzinfo | None = None
) -> dict[str, list[dict[str, Any]]] | None:
    """Conflict report for every agenda item of a rehearsal event.

    Returns None when the rehearsal event does not exist.
    """
    tz = tz or settings.tz
    stmt = (
        select(RehearsalEvent)
        .where(RehearsalEvent.id == rehearsal_event_id)
        .options(
            selectinload(RehearsalEvent.agenda_items).selectinload(
                RehearsalAgendaItem.assignments
            )
        )
    )
    event = (await db.execute(stmt)).scalar_one_or_none()
    if event is None:
        return None

    blocks = []
    user_ids: set[uuid.UUID] = set()
    for item in event.agenda_items:
        assigned = [a.user_id for a in item.assignments]
        user_ids.update(assigned)
        blocks.append(
            ScheduledBlock(
                block_id=str(item.id),
                title=item.title,
                start=local_datetime(event.date, item.start_time, tz),
                end=local_datetime(event.date, item.end_time, tz),
                user_ids=tuple(str(u) for u in assigned),
            )
        )

    return await _named_report(db, blocks, user_ids, tz)


async def production_event_conflicts(
    db: AsyncSession, production_event_id: uuid.UUID, tz: tzinfo | None = None
) -> dict[str, list[dict[str, Any]]] | None:
    """Conflict report for one production event against its assigned users.

    Returns None when the production event does not exist. Untimed events
    report no conflicts.
    """
    tz = tz or settings.tz
    stmt = (
        select(ProductionEvent)
        .where(ProductionEvent.id == production_event_id)
        .options(
            selectinload(ProductionEvent.assignments),
            selectinload(ProductionEvent.event_type),
        )
    )
    event = (await db.execute(stmt)).scalar_one_or_none()
    if event is None:
        return None
    if event.start_time is None or event.end_time is None:
        return {}

    user_ids = {a.user_id for a in event.assignments}
    block = ScheduledBlock(
        block_id=str(event.id),
        title=event.type_name,
        start=local_datetime(event.date, event.start_time, tz),
        end=local_datetime(event.date, event.end_time, tz),
        user_ids=tuple(str(u) for u in user_ids),
    )
    return await _named_report(db, [block], user_ids, tz)


async def _named_report(
    db: AsyncSession,
    blocks: list[ScheduledBlock],
    user_ids: set[uuid.UUID],
    tz: tzinfo,
) -> dict[str, list[dict[str, Any]]]:
    commitments_by_user = {
        str(uid): await user_commitments(db, uid, tz) for uid in user_ids
    }
    report = conflict_report(blocks, commitments_by_user)

    if report:
        profiles = (
            await db.execute(select(Profile).where(Profile.id.in_(user_ids)))
        ).scalars().all()
        names = {str(p.id): p.full_name for p in profiles}
        for entries in report.values():
            for entry in entries:
                entry["full_name"] = names.get(entry["user_id"], "Unknown User")
    return report
