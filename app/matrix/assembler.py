"""End-to-end matrix pipeline and its JSON-safe serialization."""

from __future__ import annotations

from collections.abc import Iterable
from typing import assert_never

from app.matrix.cells import MatrixCell, event_column
from app.matrix.conflicts import multi_assignments_by_event, unavailability_by_event
from app.matrix.filters import filter_events
from app.matrix.raw import RawEvent, RawUnavailability
from app.matrix.rows import compute_rows, event_order_key
from app.matrix.transform import transform_event
from app.matrix.types import (
    AgendaHeaderRow,
    AgendaItemRow,
    AvailabilityHeaderRow,
    FrozenMap,
    MatrixAgendaItem,
    MatrixData,
    MatrixEvent,
    MatrixFilters,
    MatrixMinistryGroup,
    MatrixMultiAssignment,
    MatrixRow,
    MatrixUnavailability,
    MinistryHeaderRow,
    PositionRow,
)


def build_matrix_data(
    filters: MatrixFilters,
    raw_events: Iterable[RawEvent],
    windows: Iterable[RawUnavailability],
) -> MatrixData:
    """Filter, transform, align and annotate a batch of events.

    Events are ordered by start time (ties by id) before any ordering-sensitive
    step, so identical inputs always yield identical rows.
    """

    events = tuple(
        sorted(
            (transform_event(event) for event in filter_events(raw_events, filters)),
            key=event_order_key,
        )
    )
    return MatrixData(
        events=events,
        rows=compute_rows(events),
        unavailability_by_event=FrozenMap(unavailability_by_event(events, windows)),
        multi_assignments_by_event=FrozenMap(multi_assignments_by_event(events)),
    )


# ---------- Serialization ----------
def serialize_row(row: MatrixRow) -> dict[str, object]:
    payload: dict[str, object] = {"type": row.kind, "key": row.key, "label": row.label}
    if isinstance(row, (AgendaHeaderRow, AvailabilityHeaderRow)):
        return payload
    if isinstance(row, AgendaItemRow):
        payload["agenda_index"] = row.agenda_index
        return payload
    if isinstance(row, MinistryHeaderRow):
        payload["ministry_id"] = str(row.ministry_id)
        payload["ministry_color"] = row.ministry_color
        return payload
    if isinstance(row, PositionRow):
        payload["ministry_id"] = str(row.ministry_id)
        payload["ministry_color"] = row.ministry_color
        payload["position_title"] = row.position_title
        return payload
    assert_never(row)


def _optional_str(value: object | None) -> str | None:
    return str(value) if value is not None else None


def serialize_agenda_item(item: MatrixAgendaItem) -> dict[str, object]:
    return {
        "agenda_item_id": str(item.agenda_item_id),
        "title": item.title,
        "slot_title": item.slot_title,
        "description": item.description,
        "is_song": item.is_song,
        "is_placeholder": item.is_placeholder,
        "song_id": _optional_str(item.song_id),
        "song_title": item.song_title,
        "song_key": item.song_key,
        "leader_id": _optional_str(item.leader_id),
        "leader_first_name": item.leader_first_name,
        "leader_last_name": item.leader_last_name,
        "leader_name": item.leader_name,
        "ministry_id": _optional_str(item.ministry_id),
        "ministry_name": item.ministry_name,
        "ministry_color": item.ministry_color,
    }


def serialize_ministry_group(group: MatrixMinistryGroup) -> dict[str, object]:
    return {
        "ministry_id": str(group.ministry_id),
        "ministry_name": group.ministry_name,
        "ministry_color": group.ministry_color,
        "positions": [
            {
                "position_id": str(position.position_id),
                "title": position.title,
                "assignment": (
                    {
                        "assignment_id": str(position.assignment.assignment_id),
                        "profile_id": str(position.assignment.profile_id),
                        "first_name": position.assignment.first_name,
                        "last_name": position.assignment.last_name,
                        "status": position.assignment.status,
                    }
                    if position.assignment is not None
                    else None
                ),
            }
            for position in group.positions
        ],
    }


def serialize_cell(cell: MatrixCell) -> dict[str, object]:
    payload: dict[str, object] = {"state": cell.state.value}
    if cell.agenda_item is not None:
        payload["agenda_item_id"] = str(cell.agenda_item.agenda_item_id)
    if cell.position is not None:
        payload["position_id"] = str(cell.position.position_id)
    return payload


def serialize_event(event: MatrixEvent, rows: tuple[MatrixRow, ...]) -> dict[str, object]:
    return {
        "id": str(event.id),
        "title": event.title,
        "start_time": event.start_time.isoformat(),
        "end_time": event.end_time.isoformat() if event.end_time is not None else None,
        "event_type": event.event_type,
        "campuses": [
            {"id": str(campus.id), "name": campus.name, "color": campus.color} for campus in event.campuses
        ],
        "agenda_items": [serialize_agenda_item(item) for item in event.agenda_items],
        "positions_by_ministry": [serialize_ministry_group(group) for group in event.positions_by_ministry],
        "cells": [serialize_cell(cell) for cell in event_column(event, rows)],
    }


def serialize_unavailability(entry: MatrixUnavailability) -> dict[str, object]:
    return {
        "profile_id": str(entry.profile_id),
        "first_name": entry.first_name,
        "last_name": entry.last_name,
        "reason": entry.reason,
        "positions": list(entry.positions),
    }


def serialize_multi_assignment(entry: MatrixMultiAssignment) -> dict[str, object]:
    return {
        "profile_id": str(entry.profile_id),
        "first_name": entry.first_name,
        "last_name": entry.last_name,
        "positions": list(entry.positions),
    }


def serialize_matrix_data(data: MatrixData) -> dict[str, object]:
    """Plain, JSON-compatible structure for transport to a rendering layer."""

    return {
        "events": [serialize_event(event, data.rows) for event in data.events],
        "rows": [serialize_row(row) for row in data.rows],
        "unavailability_by_event": {
            str(event_id): [serialize_unavailability(entry) for entry in entries]
            for event_id, entries in data.unavailability_by_event.items()
        },
        "multi_assignments_by_event": {
            str(event_id): [serialize_multi_assignment(entry) for entry in entries]
            for event_id, entries in data.multi_assignments_by_event.items()
        },
    }
