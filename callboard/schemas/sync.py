"""Google sync schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SyncSettingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    event_type: str
    google_calendar_id: str
    calendar_name: str | None = None
    sync_enabled: bool
    last_synced_at: datetime | None = None


class SyncStatusOut(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    calendars_setup: bool
    calendars: list[SyncSettingOut] = []
    missing_types: list[str] = []


class PreferenceUpdate(BaseModel):
    event_type: str
    sync_enabled: bool


class PreferencesUpdateRequest(BaseModel):
    preferences: list[PreferenceUpdate]


class PreferencesOut(BaseModel):
    preferences: list[SyncSettingOut] = []
