"""Liveness and readiness checks for the Callboard service."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select, text
from sqlalchemy.ext.asyncio import AsyncSession

from .. import __version__
from ..config import settings
from ..database import get_db
from ..models.google import GoogleEventMapping

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(db: AsyncSession = Depends(get_db)):
    await db.execute(text("SELECT 1"))
    return {"status": "healthy", "service": "callboard", "version": __version__}


@router.get("/ready")
async def readiness_check(db: AsyncSession = Depends(get_db)):
    """Ready once the sync tables exist; also reports whether token refresh can work."""
    await db.execute(select(func.count()).select_from(GoogleEventMapping))
    return {
        "status": "ready",
        "service": "callboard",
        "google_oauth_configured": settings.google_configured,
    }
