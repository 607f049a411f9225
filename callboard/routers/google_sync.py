"""Google Calendar push-sync routes, with SSE progress streaming."""

from __future__ import annotations

import asyncio
import logging
import uuid

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from starlette.responses import StreamingResponse

from ..database import get_db, get_session_factory
from ..deps import get_calendar_client, get_oauth_client
from ..google import GoogleCalendarClient, GoogleOAuthClient
from ..schemas.sync import (
    PreferencesOut,
    PreferencesUpdateRequest,
    SyncSettingOut,
    SyncStatusOut,
)
from ..services import sync_setting_svc
from ..sync.progress import QueueProgressSink, error_event, format_sse
from ..sync.push_sync import PushSyncEngine

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/google/sync", tags=["google-sync"])

# Runs outlive a disconnected client; hold references until they finish
_running_syncs: set[asyncio.Task] = set()


async def _read_body(request: Request) -> dict:
    try:
        body = await request.json()
    except Exception as exc:
        raise HTTPException(status_code=422, detail="Invalid sync payload") from exc
    if not isinstance(body, dict):
        raise HTTPException(status_code=422, detail="Invalid sync payload")
    return body


def _user_id(body: dict) -> uuid.UUID:
    raw = body.get("userId")
    if not raw:
        raise HTTPException(status_code=400, detail="User ID required")
    try:
        return uuid.UUID(str(raw))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid user ID") from exc


@router.post("/push")
async def push_sync(
    request: Request,
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    calendar: GoogleCalendarClient = Depends(get_calendar_client),
    oauth: GoogleOAuthClient | None = Depends(get_oauth_client),
):
    """Push local events to Google Calendar, streaming progress via SSE."""
    user_id = _user_id(await _read_body(request))
    sink = QueueProgressSink()

    async def run_sync():
        try:
            async with session_factory() as db:
                await PushSyncEngine(db, calendar, oauth).run(user_id, sink)
        except Exception:
            logger.exception("Push sync crashed for user %s", user_id)
            await sink.emit(error_event("Failed to sync"))
            await sink.close()

    async def event_stream():
        task = asyncio.create_task(run_sync())
        _running_syncs.add(task)
        task.add_done_callback(_running_syncs.discard)
        async for event in sink:
            yield format_sse(event)

    return StreamingResponse(
        event_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",
        },
    )


@router.post("/status", response_model=SyncStatusOut)
async def sync_status(request: Request, db: AsyncSession = Depends(get_db)):
    user_id = _user_id(await _read_body(request))
    status = await sync_setting_svc.sync_status(db, user_id)
    return SyncStatusOut(
        calendars_setup=status["calendarsSetup"],
        calendars=[SyncSettingOut.model_validate(c) for c in status["calendars"]],
        missing_types=status["missingTypes"],
    )


@router.post("/preferences", response_model=PreferencesOut)
async def list_preferences(request: Request, db: AsyncSession = Depends(get_db)):
    user_id = _user_id(await _read_body(request))
    settings_rows = await sync_setting_svc.list_preferences(db, user_id)
    return PreferencesOut(preferences=[SyncSettingOut.model_validate(s) for s in settings_rows])


@router.put("/preferences")
async def update_preferences(request: Request, db: AsyncSession = Depends(get_db)):
    body = await _read_body(request)
    user_id = _user_id(body)
    try:
        payload = PreferencesUpdateRequest.model_validate(body)
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail="Invalid preferences payload") from exc

    try:
        updated = await sync_setting_svc.update_preferences(
            db, user_id, [p.model_dump() for p in payload.preferences]
        )
    except sync_setting_svc.UnknownEventType as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return {"success": True, "updated": updated}
