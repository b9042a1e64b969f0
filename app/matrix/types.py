"""Immutable values produced by the scheduling matrix engine."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Literal, TypeVar
from uuid import UUID

DEFAULT_MINISTRY_COLOR = "#3B82F6"


@dataclass(frozen=True, slots=True)
class MatrixFilters:
    campus_id: UUID | None = None
    ministry_ids: frozenset[UUID] = frozenset()
    event_type: str | None = None

    @property
    def filters_ministries(self) -> bool:
        return bool(self.ministry_ids)


@dataclass(frozen=True, slots=True)
class MatrixCampus:
    id: UUID
    name: str
    color: str | None


@dataclass(frozen=True, slots=True)
class MatrixAgendaItem:
    agenda_item_id: UUID
    title: str
    description: str | None
    is_song: bool
    is_placeholder: bool
    song_id: UUID | None
    song_title: str | None
    song_key: str | None
    leader_id: UUID | None
    leader_first_name: str | None
    leader_last_name: str | None
    ministry_id: UUID | None
    ministry_name: str | None
    ministry_color: str | None

    @property
    def slot_title(self) -> str:
        """Song title for song slots, the item's own title otherwise."""

        if self.is_song and self.song_title:
            return self.song_title
        return self.title

    @property
    def leader_name(self) -> str | None:
        parts = [part for part in (self.leader_first_name, self.leader_last_name) if part]
        return " ".join(parts) or None


@dataclass(frozen=True, slots=True)
class MatrixAssignment:
    assignment_id: UUID
    profile_id: UUID
    first_name: str
    last_name: str
    status: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True, slots=True)
class MatrixPosition:
    position_id: UUID
    title: str
    assignment: MatrixAssignment | None


@dataclass(frozen=True, slots=True)
class MatrixMinistryGroup:
    ministry_id: UUID
    ministry_name: str
    ministry_color: str
    positions: tuple[MatrixPosition, ...]

    def find_position(self, title: str) -> MatrixPosition | None:
        for position in self.positions:
            if position.title == title:
                return position
        return None


@dataclass(frozen=True, slots=True)
class MatrixEvent:
    id: UUID
    title: str
    start_time: datetime
    end_time: datetime | None
    event_type: str
    campuses: tuple[MatrixCampus, ...]
    agenda_items: tuple[MatrixAgendaItem, ...]
    positions_by_ministry: tuple[MatrixMinistryGroup, ...]

    def find_ministry(self, ministry_id: UUID) -> MatrixMinistryGroup | None:
        for group in self.positions_by_ministry:
            if group.ministry_id == ministry_id:
                return group
        return None

    def assigned_positions(self) -> list[tuple[str, MatrixAssignment]]:
        """Filled positions as ``(title, assignment)`` in board order."""

        return [
            (position.title, position.assignment)
            for group in self.positions_by_ministry
            for position in group.positions
            if position.assignment is not None
        ]


# ---------- Rows ----------
@dataclass(frozen=True, slots=True)
class AgendaHeaderRow:
    kind: Literal["agenda-header"] = "agenda-header"
    key: str = "agenda-header"
    label: str = "Agenda"


@dataclass(frozen=True, slots=True)
class AgendaItemRow:
    agenda_index: int
    kind: Literal["agenda-item"] = "agenda-item"

    @property
    def key(self) -> str:
        return f"agenda-{self.agenda_index}"

    @property
    def label(self) -> str:
        return f"{self.agenda_index + 1}."


@dataclass(frozen=True, slots=True)
class MinistryHeaderRow:
    ministry_id: UUID
    ministry_name: str
    ministry_color: str
    kind: Literal["ministry-header"] = "ministry-header"

    @property
    def key(self) -> str:
        return f"ministry-{self.ministry_id}"

    @property
    def label(self) -> str:
        return self.ministry_name


@dataclass(frozen=True, slots=True)
class PositionRow:
    ministry_id: UUID
    ministry_color: str
    position_title: str
    kind: Literal["position"] = "position"

    @property
    def key(self) -> str:
        return f"position-{self.ministry_id}-{self.position_title}"

    @property
    def label(self) -> str:
        return self.position_title


@dataclass(frozen=True, slots=True)
class AvailabilityHeaderRow:
    kind: Literal["availability-header"] = "availability-header"
    key: str = "availability-header"
    label: str = "Availability"


MatrixRow = AgendaHeaderRow | AgendaItemRow | MinistryHeaderRow | PositionRow | AvailabilityHeaderRow


# ---------- Conflicts ----------
@dataclass(frozen=True, slots=True)
class MatrixUnavailability:
    profile_id: UUID
    first_name: str
    last_name: str
    reason: str | None
    positions: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class MatrixMultiAssignment:
    profile_id: UUID
    first_name: str
    last_name: str
    positions: tuple[str, ...]


K = TypeVar("K")
V = TypeVar("V")


class FrozenMap(Mapping[K, V]):
    """Read-only mapping that pickles and copies like a plain dict."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[K, V] | None = None) -> None:
        self._data = dict(data or {})

    def __getitem__(self, key: K) -> V:
        return self._data[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"FrozenMap({self._data!r})"

    def __reduce__(self) -> tuple[type[FrozenMap[K, V]], tuple[dict[K, V]]]:
        return (type(self), (self._data,))


@dataclass(frozen=True, slots=True)
class MatrixData:
    events: tuple[MatrixEvent, ...]
    rows: tuple[MatrixRow, ...]
    unavailability_by_event: FrozenMap[UUID, tuple[MatrixUnavailability, ...]]
    multi_assignments_by_event: FrozenMap[UUID, tuple[MatrixMultiAssignment, ...]]
