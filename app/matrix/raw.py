"""Upstream event and unavailability records as they enter the matrix engine.

The upstream join layer sometimes returns a to-one relation (an agenda item's
song, a position's ministry, an assignment's profile) as a single record and
sometimes as a one-element list. These models accept either shape, from ORM
objects or plain mappings, and normalize it to an optional value so that the
rest of the engine never sees the ambiguity.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timezone
from typing import Annotated, Any, TypeVar
from uuid import UUID

from pydantic import AfterValidator, BaseModel, BeforeValidator, ConfigDict, field_validator

T = TypeVar("T")


def _one(value: Any) -> Any:
    if isinstance(value, (list, tuple)):
        return value[0] if value else None
    return value


def _many(value: Any) -> Any:
    if value is None:
        return ()
    return value


def _utc_if_naive(value: datetime) -> datetime:
    # Naive timestamps are read as UTC so they order against aware ones.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


ToOne = Annotated[T | None, BeforeValidator(_one)]
ToMany = Annotated[tuple[T, ...], BeforeValidator(_many)]
Timestamp = Annotated[datetime, AfterValidator(_utc_if_naive)]


class RawRecord(BaseModel):
    model_config = ConfigDict(frozen=True, from_attributes=True, extra="ignore")


class RawCampus(RawRecord):
    id: UUID
    name: str
    color: str | None = None


class RawMinistry(RawRecord):
    id: UUID
    name: str
    color: str | None = None


class RawProfile(RawRecord):
    id: UUID
    first_name: str
    last_name: str


class RawSong(RawRecord):
    id: UUID
    title: str
    default_key: str | None = None


class RawEventCampus(RawRecord):
    campus: ToOne[RawCampus] = None


class RawAgendaItem(RawRecord):
    id: UUID
    title: str
    description: str | None = None
    sort_order: int = 0
    song_id: UUID | None = None
    song_key: str | None = None
    is_song_placeholder: bool = False
    leader_id: UUID | None = None
    ministry_id: UUID | None = None
    song: ToOne[RawSong] = None
    leader: ToOne[RawProfile] = None
    ministry: ToOne[RawMinistry] = None

    @property
    def resolved_ministry_id(self) -> UUID | None:
        if self.ministry is not None:
            return self.ministry.id
        return self.ministry_id


class RawAssignment(RawRecord):
    id: UUID
    profile_id: UUID
    status: str
    profile: ToOne[RawProfile] = None

    @field_validator("status", mode="before")
    @classmethod
    def enum_value(cls, value: Any) -> Any:
        return getattr(value, "value", value)


class RawPosition(RawRecord):
    id: UUID
    title: str
    sort_order: int = 0
    ministry: ToOne[RawMinistry] = None
    event_assignments: ToMany[RawAssignment] = ()


class RawEvent(RawRecord):
    id: UUID
    title: str
    start_time: Timestamp
    end_time: Timestamp | None = None
    event_type: str
    status: str
    event_campuses: ToMany[RawEventCampus] = ()
    event_agenda_items: ToMany[RawAgendaItem] = ()
    event_positions: ToMany[RawPosition] = ()

    @field_validator("event_type", "status", mode="before")
    @classmethod
    def enum_value(cls, value: Any) -> Any:
        return getattr(value, "value", value)


class RawUnavailability(RawRecord):
    profile_id: UUID
    start_date: date
    end_date: date
    reason: str | None = None
    profile: ToOne[RawProfile] = None


def load_events(records: Iterable[Any]) -> list[RawEvent]:
    """Validate upstream event records (ORM rows or mappings) into raw events."""

    return [RawEvent.model_validate(record) for record in records]


def load_unavailability(records: Iterable[Any]) -> list[RawUnavailability]:
    """Validate upstream unavailability windows (ORM rows or mappings)."""

    return [RawUnavailability.model_validate(record) for record in records]
