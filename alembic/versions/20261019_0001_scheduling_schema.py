"""scheduling schema

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


profile_role = postgresql.ENUM(
    "owner", "admin", "leader", "volunteer", "member", name="profile_role", create_type=False
)
event_type = postgresql.ENUM(
    "service", "rehearsal", "meeting", "special_event", "other", name="event_type", create_type=False
)
event_status = postgresql.ENUM("draft", "published", "cancelled", name="event_status", create_type=False)
assignment_status = postgresql.ENUM(
    "invited", "accepted", "declined", "expired", name="assignment_status", create_type=False
)


def _uuid_pk() -> sa.Column:
    return sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False)


def _church_fk() -> sa.Column:
    return sa.Column("church_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("churches.id"), nullable=False)


def upgrade() -> None:
    profile_role.create(op.get_bind(), checkfirst=True)
    event_type.create(op.get_bind(), checkfirst=True)
    event_status.create(op.get_bind(), checkfirst=True)
    assignment_status.create(op.get_bind(), checkfirst=True)

    op.create_table(
        "churches",
        _uuid_pk(),
        sa.Column("slug", sa.String(length=64), nullable=False, unique=True),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        "campuses",
        _uuid_pk(),
        _church_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=True),
    )
    op.create_index("ix_campuses_church_id", "campuses", ["church_id"])

    op.create_table(
        "ministries",
        _uuid_pk(),
        _church_fk(),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("color", sa.String(length=16), nullable=True),
        sa.UniqueConstraint("church_id", "name", name="uq_ministries_church_name"),
    )
    op.create_index("ix_ministries_church_id", "ministries", ["church_id"])

    op.create_table(
        "profiles",
        _uuid_pk(),
        _church_fk(),
        sa.Column("first_name", sa.String(length=128), nullable=False),
        sa.Column("last_name", sa.String(length=128), nullable=False),
        sa.Column("email", sa.String(length=320), nullable=False),
        sa.Column("role", profile_role, nullable=False),
        sa.Column("active", sa.Boolean(), nullable=False, server_default=sa.text("true")),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("email", name="uq_profiles_email"),
    )
    op.create_index("ix_profiles_church_id", "profiles", ["church_id"])

    op.create_table(
        "songs",
        _uuid_pk(),
        _church_fk(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("default_key", sa.String(length=8), nullable=True),
    )
    op.create_index("ix_songs_church_id", "songs", ["church_id"])

    op.create_table(
        "events",
        _uuid_pk(),
        _church_fk(),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("event_type", event_type, nullable=False),
        sa.Column("status", event_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("end_time >= start_time", name="ck_events_end_after_start"),
    )
    op.create_index("ix_events_church_status_start", "events", ["church_id", "status", "start_time"])

    op.create_table(
        "event_campuses",
        _uuid_pk(),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("campus_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("campuses.id"), nullable=False),
        sa.UniqueConstraint("event_id", "campus_id", name="uq_event_campuses_event_campus"),
    )

    op.create_table(
        "event_agenda_items",
        _uuid_pk(),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.String(length=2000), nullable=True),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("song_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("songs.id"), nullable=True),
        sa.Column("song_key", sa.String(length=8), nullable=True),
        sa.Column("is_song_placeholder", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("leader_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id"), nullable=True),
        sa.Column("ministry_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("ministries.id"), nullable=True),
    )
    op.create_index("ix_event_agenda_items_event_id", "event_agenda_items", ["event_id"])

    op.create_table(
        "event_positions",
        _uuid_pk(),
        sa.Column("event_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("ministry_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("ministries.id"), nullable=True),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("sort_order", sa.Integer(), nullable=False, server_default=sa.text("0")),
    )
    op.create_index("ix_event_positions_event_id", "event_positions", ["event_id"])

    op.create_table(
        "event_assignments",
        _uuid_pk(),
        sa.Column(
            "position_id",
            postgresql.UUID(as_uuid=True),
            sa.ForeignKey("event_positions.id"),
            nullable=False,
        ),
        sa.Column("profile_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("status", assignment_status, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_event_assignments_position_id", "event_assignments", ["position_id"])
    op.create_index("ix_event_assignments_profile_id", "event_assignments", ["profile_id"])

    op.create_table(
        "volunteer_unavailability",
        _uuid_pk(),
        _church_fk(),
        sa.Column("profile_id", postgresql.UUID(as_uuid=True), sa.ForeignKey("profiles.id"), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("reason", sa.String(length=500), nullable=True),
        sa.CheckConstraint("end_date >= start_date", name="ck_volunteer_unavailability_range"),
    )
    op.create_index("ix_volunteer_unavailability_church_id", "volunteer_unavailability", ["church_id"])
    op.create_index("ix_volunteer_unavailability_profile_id", "volunteer_unavailability", ["profile_id"])


def downgrade() -> None:
    op.drop_index("ix_volunteer_unavailability_profile_id", table_name="volunteer_unavailability")
    op.drop_index("ix_volunteer_unavailability_church_id", table_name="volunteer_unavailability")
    op.drop_table("volunteer_unavailability")
    op.drop_index("ix_event_assignments_profile_id", table_name="event_assignments")
    op.drop_index("ix_event_assignments_position_id", table_name="event_assignments")
    op.drop_table("event_assignments")
    op.drop_index("ix_event_positions_event_id", table_name="event_positions")
    op.drop_table("event_positions")
    op.drop_index("ix_event_agenda_items_event_id", table_name="event_agenda_items")
    op.drop_table("event_agenda_items")
    op.drop_table("event_campuses")
    op.drop_index("ix_events_church_status_start", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_songs_church_id", table_name="songs")
    op.drop_table("songs")
    op.drop_index("ix_profiles_church_id", table_name="profiles")
    op.drop_table("profiles")
    op.drop_index("ix_ministries_church_id", table_name="ministries")
    op.drop_table("ministries")
    op.drop_index("ix_campuses_church_id", table_name="campuses")
    op.drop_table("campuses")
    op.drop_table("churches")

    assignment_status.drop(op.get_bind(), checkfirst=True)
    event_status.drop(op.get_bind(), checkfirst=True)
    event_type.drop(op.get_bind(), checkfirst=True)
    profile_role.drop(op.get_bind(), checkfirst=True)
