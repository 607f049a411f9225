"""Audition signup routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.conflict import SignupOut, SignupRequest
from ..services import signup_svc

router = APIRouter(tags=["signups"])


@router.post("/api/signups", response_model=SignupOut, status_code=201)
async def create_signup(body: SignupRequest, db: AsyncSession = Depends(get_db)):
    try:
        signup = await signup_svc.create_signup(db, body.user_id, body.slot_id)
    except signup_svc.SlotNotFound as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except signup_svc.SignupError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return SignupOut(
        id=signup.id, user_id=signup.user_id, slot_id=signup.slot_id, status=signup.status,
    )
