"""Normalization of filtered raw events into matrix events."""

from __future__ import annotations

from uuid import UUID

from app.matrix.raw import RawAgendaItem, RawAssignment, RawEvent, RawPosition
from app.matrix.types import (
    DEFAULT_MINISTRY_COLOR,
    MatrixAgendaItem,
    MatrixAssignment,
    MatrixCampus,
    MatrixEvent,
    MatrixMinistryGroup,
    MatrixPosition,
)


def _board_order(record: RawAgendaItem | RawPosition) -> tuple[int, str]:
    # Ties on sort_order fall back to id.
    return (record.sort_order, str(record.id))


def transform_agenda_item(item: RawAgendaItem) -> MatrixAgendaItem:
    song = item.song
    leader = item.leader
    ministry = item.ministry
    return MatrixAgendaItem(
        agenda_item_id=item.id,
        title=item.title,
        description=item.description,
        # Unfilled song placeholders occupy the same slot kind as chosen songs.
        is_song=item.song_id is not None or item.is_song_placeholder,
        is_placeholder=item.is_song_placeholder,
        song_id=song.id if song else None,
        song_title=song.title if song else None,
        song_key=item.song_key or (song.default_key if song else None),
        leader_id=leader.id if leader else None,
        leader_first_name=leader.first_name if leader else None,
        leader_last_name=leader.last_name if leader else None,
        ministry_id=item.resolved_ministry_id,
        ministry_name=ministry.name if ministry else None,
        ministry_color=ministry.color if ministry else None,
    )


def primary_assignment(assignments: tuple[RawAssignment, ...]) -> MatrixAssignment | None:
    """First assignment record of a position; at most one is surfaced per position."""

    if not assignments:
        return None
    first = assignments[0]
    if first.profile is None:
        return None
    return MatrixAssignment(
        assignment_id=first.id,
        profile_id=first.profile.id,
        first_name=first.profile.first_name,
        last_name=first.profile.last_name,
        status=first.status,
    )


def _campuses(event: RawEvent) -> tuple[MatrixCampus, ...]:
    seen: dict[UUID, MatrixCampus] = {}
    for link in event.event_campuses:
        campus = link.campus
        if campus is None or campus.id in seen:
            continue
        seen[campus.id] = MatrixCampus(id=campus.id, name=campus.name, color=campus.color)
    return tuple(seen.values())


def _ministry_groups(event: RawEvent) -> tuple[MatrixMinistryGroup, ...]:
    groups: dict[UUID, tuple[str, str]] = {}
    positions: dict[UUID, list[MatrixPosition]] = {}

    for position in sorted(event.event_positions, key=_board_order):
        ministry = position.ministry
        if ministry is None:
            continue
        if ministry.id not in groups:
            groups[ministry.id] = (ministry.name, ministry.color or DEFAULT_MINISTRY_COLOR)
            positions[ministry.id] = []
        positions[ministry.id].append(
            MatrixPosition(
                position_id=position.id,
                title=position.title,
                assignment=primary_assignment(position.event_assignments),
            )
        )

    return tuple(
        MatrixMinistryGroup(
            ministry_id=ministry_id,
            ministry_name=name,
            ministry_color=color,
            positions=tuple(positions[ministry_id]),
        )
        for ministry_id, (name, color) in groups.items()
    )


def transform_event(event: RawEvent) -> MatrixEvent:
    agenda = sorted(event.event_agenda_items, key=_board_order)
    return MatrixEvent(
        id=event.id,
        title=event.title,
        start_time=event.start_time,
        end_time=event.end_time,
        event_type=event.event_type,
        campuses=_campuses(event),
        agenda_items=tuple(transform_agenda_item(item) for item in agenda),
        positions_by_ministry=_ministry_groups(event),
    )
