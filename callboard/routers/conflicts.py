"""Conflict checking routes."""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.conflict import CommitmentOut, ConflictCheckOut, ConflictCheckRequest
from ..services import conflict_svc

router = APIRouter(tags=["conflicts"])


@router.post("/api/conflicts/check", response_model=ConflictCheckOut)
async def check_conflict(body: ConflictCheckRequest, db: AsyncSession = Depends(get_db)):
    conflict = await conflict_svc.check_conflict(db, body.user_id, body.start, body.end)
    return ConflictCheckOut(
        has_conflict=conflict is not None,
        conflict=CommitmentOut(
            kind=conflict.kind,
            source_id=conflict.source_id,
            title=conflict.title,
            start=conflict.start,
            end=conflict.end,
        ) if conflict else None,
    )


@router.get("/api/rehearsal-events/{event_id}/conflicts")
async def rehearsal_event_conflicts(event_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    report = await conflict_svc.rehearsal_event_conflicts(db, event_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Rehearsal event not found")
    return {"conflicts": report}


@router.get("/api/production-events/{event_id}/conflicts")
async def production_event_conflicts(event_id: uuid.UUID, db: AsyncSession = Depends(get_db)):
    report = await conflict_svc.production_event_conflicts(db, event_id)
    if report is None:
        raise HTTPException(status_code=404, detail="Production event not found")
    return {"conflicts": report}
