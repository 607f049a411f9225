"""Add production event types, events, and assignments.

Revision ID: 002_production_events
Revises: 001_initial
Create Date: 2026-10-17
"""

from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "002_production_events"
down_revision: Union[str, Sequence[str], None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "production_event_type",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("owner_id", sa.Uuid(), sa.ForeignKey("profile.id", ondelete="CASCADE"), nullable=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("color", sa.String(length=20), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_production_event_type_owner_id", "production_event_type", ["owner_id"])

    op.create_table(
        "production_event",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("audition_id", sa.Uuid(), sa.ForeignKey("audition.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "event_type_id", sa.Uuid(),
            sa.ForeignKey("production_event_type.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=True),
        sa.Column("end_time", sa.Time(), nullable=True),
        sa.Column("location", sa.String(length=300), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_production_event_audition_id", "production_event", ["audition_id"])
    op.create_index("ix_production_event_audition_date", "production_event", ["audition_id", "date"])

    op.create_table(
        "production_event_assignment",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("user_id", sa.Uuid(), sa.ForeignKey("profile.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "production_event_id", sa.Uuid(),
            sa.ForeignKey("production_event.id", ondelete="CASCADE"), nullable=False,
        ),
        *_timestamps(),
        sa.UniqueConstraint("production_event_id", "user_id", name="uq_production_event_assignment"),
    )
    op.create_index("ix_production_event_assignment_user_id", "production_event_assignment", ["user_id"])
    op.create_index(
        "ix_production_event_assignment_production_event_id",
        "production_event_assignment",
        ["production_event_id"],
    )


def downgrade() -> None:
    op.drop_table("production_event_assignment")
    op.drop_table("production_event")
    op.drop_table("production_event_type")
