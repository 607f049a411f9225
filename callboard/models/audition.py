"""Audition slot, signup, and callback models."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, UserOwnedMixin


class AuditionSlot(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "audition_slot"
    __table_args__ = (
        Index("ix_audition_slot_audition_time", "audition_id", "start_time"),
    )

    audition_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition.id", ondelete="CASCADE"), index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    location: Mapped[str | None] = mapped_column(String(300), default=None)
    max_signups: Mapped[int] = mapped_column(Integer, default=1)

    # Relationships
    audition: Mapped["Audition"] = relationship()  # noqa: F821
    signups: Mapped[list["AuditionSignup"]] = relationship(
        back_populates="slot", cascade="all, delete-orphan",
    )


class AuditionSignup(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    __tablename__ = "audition_signup"

    slot_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition_slot.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[str] = mapped_column(String(20), default="signed_up")

    # Relationships
    slot: Mapped["AuditionSlot"] = relationship(back_populates="signups")


class CallbackSlot(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "callback_slot"

    audition_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition.id", ondelete="CASCADE"), index=True
    )
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    location: Mapped[str | None] = mapped_column(String(300), default=None)

    # Relationships
    audition: Mapped["Audition"] = relationship()  # noqa: F821


class CallbackInvitation(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    __tablename__ = "callback_invitation"

    callback_slot_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("callback_slot.id", ondelete="CASCADE"), index=True
    )
    audition_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition.id", ondelete="CASCADE"), index=True
    )
    status: Mapped[str] = mapped_column(String(20), default="pending")  # pending/accepted/declined

    # Relationships
    callback_slot: Mapped["CallbackSlot"] = relationship()
    audition: Mapped["Audition"] = relationship()  # noqa: F821
