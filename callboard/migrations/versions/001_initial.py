"""Initial callboard schema.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-17
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "001_initial"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def _user_fk(unique: bool = False) -> sa.Column:
    return sa.Column(
        "user_id", sa.Uuid(), sa.ForeignKey("profile.id", ondelete="CASCADE"),
        nullable=False, unique=unique,
    )


def upgrade() -> None:
    op.create_table(
        "profile",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("first_name", sa.String(length=100), nullable=True),
        sa.Column("last_name", sa.String(length=100), nullable=True),
        sa.Column("email", sa.String(length=255), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_profile_email", "profile", ["email"])

    op.create_table(
        "show",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("author", sa.String(length=200), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "audition",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("show_id", sa.Uuid(), sa.ForeignKey("show.id", ondelete="CASCADE"), nullable=False),
        sa.Column("audition_location", sa.String(length=300), nullable=True),
        sa.Column("rehearsal_location", sa.String(length=300), nullable=True),
        sa.Column("performance_location", sa.String(length=300), nullable=True),
        sa.Column("rehearsal_dates", sa.JSON(), nullable=True),
        sa.Column("performance_dates", sa.JSON(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_audition_user_id", "audition", ["user_id"])
    op.create_index("ix_audition_show_id", "audition", ["show_id"])

    op.create_table(
        "cast_member",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("audition_id", sa.Uuid(), sa.ForeignKey("audition.id", ondelete="CASCADE"), nullable=False),
        sa.Column("role_name", sa.String(length=200), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("audition_id", "user_id", name="uq_cast_member"),
    )
    op.create_index("ix_cast_member_user_id", "cast_member", ["user_id"])
    op.create_index("ix_cast_member_audition_id", "cast_member", ["audition_id"])

    op.create_table(
        "audition_slot",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("audition_id", sa.Uuid(), sa.ForeignKey("audition.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(length=300), nullable=True),
        sa.Column("max_signups", sa.Integer(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_audition_slot_audition_id", "audition_slot", ["audition_id"])
    op.create_index("ix_audition_slot_audition_time", "audition_slot", ["audition_id", "start_time"])

    op.create_table(
        "audition_signup",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("slot_id", sa.Uuid(), sa.ForeignKey("audition_slot.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_audition_signup_user_id", "audition_signup", ["user_id"])
    op.create_index("ix_audition_signup_slot_id", "audition_signup", ["slot_id"])

    op.create_table(
        "callback_slot",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("audition_id", sa.Uuid(), sa.ForeignKey("audition.id", ondelete="CASCADE"), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("location", sa.String(length=300), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_callback_slot_audition_id", "callback_slot", ["audition_id"])

    op.create_table(
        "callback_invitation",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("callback_slot_id", sa.Uuid(), sa.ForeignKey("callback_slot.id", ondelete="CASCADE"), nullable=False),
        sa.Column("audition_id", sa.Uuid(), sa.ForeignKey("audition.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_callback_invitation_user_id", "callback_invitation", ["user_id"])
    op.create_index("ix_callback_invitation_callback_slot_id", "callback_invitation", ["callback_slot_id"])
    op.create_index("ix_callback_invitation_audition_id", "callback_invitation", ["audition_id"])

    op.create_table(
        "rehearsal_event",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("audition_id", sa.Uuid(), sa.ForeignKey("audition.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("location", sa.String(length=300), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_rehearsal_event_audition_id", "rehearsal_event", ["audition_id"])
    op.create_index("ix_rehearsal_event_audition_date", "rehearsal_event", ["audition_id", "date"])

    op.create_table(
        "rehearsal_agenda_item",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column(
            "rehearsal_event_id", sa.Uuid(),
            sa.ForeignKey("rehearsal_event.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        *_timestamps(),
    )
    op.create_index(
        "ix_rehearsal_agenda_item_rehearsal_event_id", "rehearsal_agenda_item", ["rehearsal_event_id"]
    )

    op.create_table(
        "agenda_assignment",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column(
            "agenda_item_id", sa.Uuid(),
            sa.ForeignKey("rehearsal_agenda_item.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("status", sa.String(length=20), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("agenda_item_id", "user_id", name="uq_agenda_assignment"),
    )
    op.create_index("ix_agenda_assignment_user_id", "agenda_assignment", ["user_id"])
    op.create_index("ix_agenda_assignment_agenda_item_id", "agenda_assignment", ["agenda_item_id"])

    op.create_table(
        "personal_event",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("all_day", sa.Boolean(), nullable=False),
        sa.Column("location", sa.String(length=300), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_personal_event_user_id", "personal_event", ["user_id"])
    op.create_index("ix_personal_event_user_start", "personal_event", ["user_id", "start_time"])

    op.create_table(
        "google_calendar_token",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(unique=True),
        sa.Column("access_token", sa.Text(), nullable=False),
        sa.Column("refresh_token", sa.Text(), nullable=True),
        sa.Column("expiry_date", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "google_calendar_sync",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("event_type", sa.String(length=40), nullable=False),
        sa.Column("google_calendar_id", sa.String(length=255), nullable=False),
        sa.Column("calendar_name", sa.String(length=255), nullable=True),
        sa.Column("sync_enabled", sa.Boolean(), nullable=False),
        sa.Column("last_synced_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "event_type", name="uq_google_calendar_sync"),
    )
    op.create_index("ix_google_calendar_sync_user_id", "google_calendar_sync", ["user_id"])

    op.create_table(
        "google_event_mapping",
        sa.Column("id", sa.Uuid(), primary_key=True),
        _user_fk(),
        sa.Column("event_type", sa.String(length=40), nullable=False),
        sa.Column("event_id", sa.String(length=120), nullable=False),
        sa.Column("google_calendar_id", sa.String(length=255), nullable=False),
        sa.Column("google_event_id", sa.String(length=255), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("user_id", "event_type", "event_id", name="uq_google_event_mapping"),
    )
    op.create_index("ix_google_event_mapping_user_id", "google_event_mapping", ["user_id"])
    op.create_index("ix_google_event_mapping_event_type", "google_event_mapping", ["event_type"])


def downgrade() -> None:
    for table in (
        "google_event_mapping",
        "google_calendar_sync",
        "google_calendar_token",
        "personal_event",
        "agenda_assignment",
        "rehearsal_agenda_item",
        "rehearsal_event",
        "callback_invitation",
        "callback_slot",
        "audition_signup",
        "audition_slot",
        "cast_member",
        "audition",
        "show",
        "profile",
    ):
        op.drop_table(table)
