"""Google Calendar token, sync setting, and event mapping models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, UUIDMixin, TimestampMixin, UserOwnedMixin


class GoogleCalendarToken(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "google_calendar_token"

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profile.id", ondelete="CASCADE"), unique=True
    )
    access_token: Mapped[str] = mapped_column(Text)
    refresh_token: Mapped[str | None] = mapped_column(Text, default=None)
    expiry_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=None)


class GoogleCalendarSync(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    """Per-user, per-category push-sync setting."""

    __tablename__ = "google_calendar_sync"
    __table_args__ = (
        UniqueConstraint("user_id", "event_type", name="uq_google_calendar_sync"),
    )

    event_type: Mapped[str] = mapped_column(String(40))
    google_calendar_id: Mapped[str] = mapped_column(String(255))
    calendar_name: Mapped[str | None] = mapped_column(String(255), default=None)
    sync_enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    last_synced_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), default=None
    )


class GoogleEventMapping(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    """Links one local schedulable item to the Google event created for it."""

    __tablename__ = "google_event_mapping"
    __table_args__ = (
        UniqueConstraint("user_id", "event_type", "event_id", name="uq_google_event_mapping"),
    )

    event_type: Mapped[str] = mapped_column(String(40), index=True)
    # Local identity: a primary key, or "{auditionId}_{YYYY-MM-DD}" for date-derived items
    event_id: Mapped[str] = mapped_column(String(120))
    google_calendar_id: Mapped[str] = mapped_column(String(255))
    google_event_id: Mapped[str] = mapped_column(String(255))
