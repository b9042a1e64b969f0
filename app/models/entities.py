"""ORM entities for church scheduling schema."""

from __future__ import annotations

import enum
import uuid
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.db.base import Base


class ProfileRole(str, enum.Enum):
    OWNER = "owner"
    ADMIN = "admin"
    LEADER = "leader"
    VOLUNTEER = "volunteer"
    MEMBER = "member"


class EventType(str, enum.Enum):
    SERVICE = "service"
    REHEARSAL = "rehearsal"
    MEETING = "meeting"
    SPECIAL_EVENT = "special_event"
    OTHER = "other"


class EventStatus(str, enum.Enum):
    DRAFT = "draft"
    PUBLISHED = "published"
    CANCELLED = "cancelled"


class AssignmentStatus(str, enum.Enum):
    INVITED = "invited"
    ACCEPTED = "accepted"
    DECLINED = "declined"
    EXPIRED = "expired"


def _enum_column(enum_cls: type[enum.Enum], name: str) -> SQLEnum:
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [member.value for member in members],
    )


class Church(Base):
    __tablename__ = "churches"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    slug: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)


class Campus(Base):
    __tablename__ = "campuses"
    __table_args__ = (Index("ix_campuses_church_id", "church_id"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("churches.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)


class Ministry(Base):
    __tablename__ = "ministries"
    __table_args__ = (
        Index("ix_ministries_church_id", "church_id"),
        UniqueConstraint("church_id", "name", name="uq_ministries_church_name"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("churches.id"), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    color: Mapped[str | None] = mapped_column(String(16), nullable=True)


class Profile(Base):
    __tablename__ = "profiles"
    __table_args__ = (
        Index("ix_profiles_church_id", "church_id"),
        UniqueConstraint("email", name="uq_profiles_email"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("churches.id"), nullable=False)
    first_name: Mapped[str] = mapped_column(String(128), nullable=False)
    last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    role: Mapped[ProfileRole] = mapped_column(
        _enum_column(ProfileRole, "profile_role"),
        nullable=False,
        default=ProfileRole.MEMBER,
    )
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)


class Song(Base):
    __tablename__ = "songs"
    __table_args__ = (Index("ix_songs_church_id", "church_id"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("churches.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    default_key: Mapped[str | None] = mapped_column(String(8), nullable=True)


class Event(Base):
    __tablename__ = "events"
    __table_args__ = (
        CheckConstraint("end_time >= start_time", name="ck_events_end_after_start"),
        Index("ix_events_church_status_start", "church_id", "status", "start_time"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("churches.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    event_type: Mapped[EventType] = mapped_column(
        _enum_column(EventType, "event_type"),
        nullable=False,
        default=EventType.SERVICE,
    )
    status: Mapped[EventStatus] = mapped_column(
        _enum_column(EventStatus, "event_status"),
        nullable=False,
        default=EventStatus.DRAFT,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)

    event_campuses: Mapped[list[EventCampus]] = relationship(cascade="all, delete-orphan")
    event_agenda_items: Mapped[list[EventAgendaItem]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: [EventAgendaItem.sort_order, EventAgendaItem.id],
    )
    event_positions: Mapped[list[EventPosition]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: [EventPosition.sort_order, EventPosition.id],
    )


class EventCampus(Base):
    __tablename__ = "event_campuses"
    __table_args__ = (UniqueConstraint("event_id", "campus_id", name="uq_event_campuses_event_campus"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("events.id"), nullable=False)
    campus_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("campuses.id"), nullable=False)

    campus: Mapped[Campus | None] = relationship()


class EventAgendaItem(Base):
    __tablename__ = "event_agenda_items"
    __table_args__ = (Index("ix_event_agenda_items_event_id", "event_id"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("events.id"), nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(2000), nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    song_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), ForeignKey("songs.id"), nullable=True)
    song_key: Mapped[str | None] = mapped_column(String(8), nullable=True)
    is_song_placeholder: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    leader_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("profiles.id"), nullable=True
    )
    ministry_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("ministries.id"), nullable=True
    )

    song: Mapped[Song | None] = relationship()
    leader: Mapped[Profile | None] = relationship()
    ministry: Mapped[Ministry | None] = relationship()


class EventPosition(Base):
    __tablename__ = "event_positions"
    __table_args__ = (Index("ix_event_positions_event_id", "event_id"),)

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    event_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("events.id"), nullable=False)
    ministry_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("ministries.id"), nullable=True
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    ministry: Mapped[Ministry | None] = relationship()
    event_assignments: Mapped[list[EventAssignment]] = relationship(
        cascade="all, delete-orphan",
        order_by=lambda: [EventAssignment.created_at, EventAssignment.id],
    )


class EventAssignment(Base):
    __tablename__ = "event_assignments"
    __table_args__ = (
        Index("ix_event_assignments_position_id", "position_id"),
        Index("ix_event_assignments_profile_id", "profile_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    position_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("event_positions.id"), nullable=False
    )
    profile_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("profiles.id"), nullable=False)
    status: Mapped[AssignmentStatus] = mapped_column(
        _enum_column(AssignmentStatus, "assignment_status"),
        nullable=False,
        default=AssignmentStatus.INVITED,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=datetime.utcnow)

    profile: Mapped[Profile | None] = relationship()


class VolunteerUnavailability(Base):
    __tablename__ = "volunteer_unavailability"
    __table_args__ = (
        CheckConstraint("end_date >= start_date", name="ck_volunteer_unavailability_range"),
        Index("ix_volunteer_unavailability_church_id", "church_id"),
        Index("ix_volunteer_unavailability_profile_id", "profile_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    church_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("churches.id"), nullable=False)
    profile_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), ForeignKey("profiles.id"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    reason: Mapped[str | None] = mapped_column(String(500), nullable=True)

    profile: Mapped[Profile | None] = relationship()
