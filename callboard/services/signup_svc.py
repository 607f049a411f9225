"""Audition signup service - one signup per audition, no double-booking."""

from __future__ import annotations

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.audition import AuditionSignup, AuditionSlot
from . import conflict_svc
from .conflict_svc import Commitment


class SignupError(Exception):
    pass


class SlotNotFound(SignupError):
    pass


class SlotFull(SignupError):
    pass


class AlreadySignedUp(SignupError):
    pass


class SlotConflict(SignupError):
    def __init__(self, conflict: Commitment):
        super().__init__(f"This time conflicts with {conflict.title}")
        self.conflict = conflict


async def create_signup(
    db: AsyncSession, user_id: uuid.UUID, slot_id: uuid.UUID
) -> AuditionSignup:
    """Sign a user up for an audition slot.

    Raises:
        SlotNotFound: Unknown slot
        AlreadySignedUp: The user already holds a slot in this audition
        SlotFull: The slot reached max_signups
        SlotConflict: The slot overlaps another commitment of the user
    """
    slot = await db.get(AuditionSlot, slot_id)
    if slot is None:
        raise SlotNotFound("Audition slot not found")

    existing = await db.execute(
        select(AuditionSignup.id)
        .join(AuditionSlot, AuditionSignup.slot_id == AuditionSlot.id)
        .where(
            AuditionSignup.user_id == user_id,
            AuditionSlot.audition_id == slot.audition_id,
        )
        .limit(1)
    )
    if existing.scalar_one_or_none() is not None:
        raise AlreadySignedUp("You already have a slot for this audition")

    taken = (
        await db.execute(
            select(func.count(AuditionSignup.id)).where(AuditionSignup.slot_id == slot.id)
        )
    ).scalar_one()
    if taken >= slot.max_signups:
        raise SlotFull("This slot is full")

    conflict = await conflict_svc.check_conflict(db, user_id, slot.start_time, slot.end_time)
    if conflict is not None:
        raise SlotConflict(conflict)

    signup = AuditionSignup(user_id=user_id, slot_id=slot.id)
    db.add(signup)
    await db.commit()
    await db.refresh(signup)
    return signup
