"""Conflict and signup schemas."""

from __future__ import annotations

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ConflictCheckRequest(CamelModel):
    user_id: uuid.UUID
    start: datetime
    end: datetime

    @model_validator(mode="after")
    def _end_after_start(self):
        if self.end <= self.start:
            raise ValueError("end must be after start")
        return self


class CommitmentOut(CamelModel):
    kind: str
    source_id: str
    title: str
    start: datetime
    end: datetime


class ConflictCheckOut(CamelModel):
    has_conflict: bool
    conflict: CommitmentOut | None = None


class SignupRequest(CamelModel):
    user_id: uuid.UUID
    slot_id: uuid.UUID


class SignupOut(CamelModel):
    id: uuid.UUID
    user_id: uuid.UUID
    slot_id: uuid.UUID
    status: str
