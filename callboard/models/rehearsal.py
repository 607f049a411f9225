"""Rehearsal event, agenda item, and agenda assignment models."""

from __future__ import annotations

import uuid
import datetime as dt

from sqlalchemy import Date, ForeignKey, Index, String, Text, Time, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, UserOwnedMixin


class RehearsalEvent(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "rehearsal_event"
    __table_args__ = (
        Index("ix_rehearsal_event_audition_date", "audition_id", "date"),
    )

    audition_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition.id", ondelete="CASCADE"), index=True
    )
    date: Mapped[dt.date] = mapped_column(Date)
    # Wall-clock times in settings.calendar_timezone
    start_time: Mapped[dt.time] = mapped_column(Time)
    end_time: Mapped[dt.time] = mapped_column(Time)
    location: Mapped[str | None] = mapped_column(String(300), default=None)
    notes: Mapped[str | None] = mapped_column(Text, default=None)

    # Relationships
    audition: Mapped["Audition"] = relationship()  # noqa: F821
    agenda_items: Mapped[list["RehearsalAgendaItem"]] = relationship(
        back_populates="rehearsal_event", cascade="all, delete-orphan",
        order_by="RehearsalAgendaItem.start_time",
    )


class RehearsalAgendaItem(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "rehearsal_agenda_item"

    rehearsal_event_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("rehearsal_event.id", ondelete="CASCADE"), index=True
    )
    title: Mapped[str] = mapped_column(String(200))
    description: Mapped[str | None] = mapped_column(Text, default=None)
    start_time: Mapped[dt.time] = mapped_column(Time)
    end_time: Mapped[dt.time] = mapped_column(Time)

    # Relationships
    rehearsal_event: Mapped["RehearsalEvent"] = relationship(back_populates="agenda_items")
    assignments: Mapped[list["AgendaAssignment"]] = relationship(
        back_populates="agenda_item", cascade="all, delete-orphan",
    )


class AgendaAssignment(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    __tablename__ = "agenda_assignment"
    __table_args__ = (
        UniqueConstraint("agenda_item_id", "user_id", name="uq_agenda_assignment"),
    )

    agenda_item_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("rehearsal_agenda_item.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending/accepted/declined/conflict

    # Relationships
    agenda_item: Mapped["RehearsalAgendaItem"] = relationship(back_populates="assignments")
