"""Production event type, production event, and assignment models."""

from __future__ import annotations

import uuid
import datetime as dt

from sqlalchemy import Date, ForeignKey, Index, String, Text, Time, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, UserOwnedMixin


class ProductionEventType(UUIDMixin, TimestampMixin, Base):
    """A kind of production call (tech, photo call, fitting). Shared when owner_id is null."""

    __tablename__ = "production_event_type"

    owner_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("profile.id", ondelete="CASCADE"), default=None, index=True
    )
    name: Mapped[str] = mapped_column(String(100))
    color: Mapped[str] = mapped_column(String(20), default="#5a8ff0")


class ProductionEvent(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "production_event"
    __table_args__ = (
        Index("ix_production_event_audition_date", "audition_id", "date"),
    )

    audition_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition.id", ondelete="CASCADE"), index=True
    )
    event_type_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, ForeignKey("production_event_type.id", ondelete="SET NULL"), default=None
    )
    date: Mapped[dt.date] = mapped_column(Date)
    # Wall-clock times in settings.calendar_timezone; untimed calls have neither
    start_time: Mapped[dt.time | None] = mapped_column(Time, default=None)
    end_time: Mapped[dt.time | None] = mapped_column(Time, default=None)
    location: Mapped[str | None] = mapped_column(String(300), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    audition: Mapped["Audition"] = relationship()  # noqa: F821
    event_type: Mapped[ProductionEventType | None] = relationship()
    assignments: Mapped[list["ProductionEventAssignment"]] = relationship(
        back_populates="production_event", cascade="all, delete-orphan",
    )

    @property
    def type_name(self) -> str:
        return self.event_type.name if self.event_type else "Production Event"


class ProductionEventAssignment(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    __tablename__ = "production_event_assignment"
    __table_args__ = (
        UniqueConstraint("production_event_id", "user_id", name="uq_production_event_assignment"),
    )

    production_event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("production_event.id", ondelete="CASCADE"), index=True
    )

    # Relationships
    production_event: Mapped["ProductionEvent"] = relationship(back_populates="assignments")
