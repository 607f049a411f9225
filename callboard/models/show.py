"""Show, Audition, and CastMember models."""

from __future__ import annotations

import uuid

from sqlalchemy import JSON, ForeignKey, String, Text, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, UUIDMixin, TimestampMixin, UserOwnedMixin


class Show(UUIDMixin, TimestampMixin, Base):
    __tablename__ = "show"

    title: Mapped[str] = mapped_column(String(200))
    author: Mapped[str | None] = mapped_column(String(200), default=None)
    description: Mapped[str | None] = mapped_column(Text, default=None)


class Audition(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    """A production's audition; user_id is the managing owner."""

    __tablename__ = "audition"

    show_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("show.id", ondelete="CASCADE"), index=True
    )
    audition_location: Mapped[str | None] = mapped_column(String(300), default=None)
    rehearsal_location: Mapped[str | None] = mapped_column(String(300), default=None)
    performance_location: Mapped[str | None] = mapped_column(String(300), default=None)
    # Lists of "YYYY-MM-DD" strings
    rehearsal_dates: Mapped[list[str] | None] = mapped_column(JSON, default=None)
    performance_dates: Mapped[list[str] | None] = mapped_column(JSON, default=None)

    # Relationships
    show: Mapped["Show"] = relationship()
    cast_members: Mapped[list["CastMember"]] = relationship(
        back_populates="audition", cascade="all, delete-orphan",
    )

    @property
    def show_title(self) -> str:
        return self.show.title if self.show else "Untitled Show"


class CastMember(UUIDMixin, TimestampMixin, UserOwnedMixin, Base):
    __tablename__ = "cast_member"
    __table_args__ = (
        UniqueConstraint("audition_id", "user_id", name="uq_cast_member"),
    )

    audition_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("audition.id", ondelete="CASCADE"), index=True
    )
    role_name: Mapped[str | None] = mapped_column(String(200), default=None)

    # Relationships
    audition: Mapped["Audition"] = relationship(back_populates="cast_members")
