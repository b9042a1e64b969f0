"""Unified row layout shared by every event column of the matrix."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from uuid import UUID

from app.matrix.types import (
    AgendaHeaderRow,
    AgendaItemRow,
    AvailabilityHeaderRow,
    MatrixEvent,
    MatrixRow,
    MinistryHeaderRow,
    PositionRow,
)


@dataclass(slots=True)
class _MinistryRows:
    ministry_id: UUID
    ministry_name: str
    ministry_color: str
    titles: set[str] = field(default_factory=set)


def event_order_key(event: MatrixEvent) -> tuple[object, str]:
    return (event.start_time, str(event.id))


def agenda_rows(events: Sequence[MatrixEvent]) -> list[MatrixRow]:
    max_agenda = max((len(event.agenda_items) for event in events), default=0)
    if max_agenda == 0:
        return []
    return [AgendaHeaderRow(), *(AgendaItemRow(agenda_index=index) for index in range(max_agenda))]


def ministry_rows(events: Sequence[MatrixEvent]) -> list[MatrixRow]:
    """Ministry headers in first-seen order, each followed by its sorted position titles.

    Positions are matched across events by title, so identically named
    positions of one ministry share a single row.
    """

    ministries: dict[UUID, _MinistryRows] = {}
    for event in sorted(events, key=event_order_key):
        for group in event.positions_by_ministry:
            entry = ministries.get(group.ministry_id)
            if entry is None:
                entry = _MinistryRows(
                    ministry_id=group.ministry_id,
                    ministry_name=group.ministry_name,
                    ministry_color=group.ministry_color,
                )
                ministries[group.ministry_id] = entry
            entry.titles.update(position.title for position in group.positions)

    rows: list[MatrixRow] = []
    for entry in ministries.values():
        rows.append(
            MinistryHeaderRow(
                ministry_id=entry.ministry_id,
                ministry_name=entry.ministry_name,
                ministry_color=entry.ministry_color,
            )
        )
        rows.extend(
            PositionRow(
                ministry_id=entry.ministry_id,
                ministry_color=entry.ministry_color,
                position_title=title,
            )
            for title in sorted(entry.titles)
        )
    return rows


def compute_rows(events: Sequence[MatrixEvent]) -> tuple[MatrixRow, ...]:
    """Row list valid for all ``events`` at once; always ends with the availability header."""

    return (*agenda_rows(events), *ministry_rows(events), AvailabilityHeaderRow())
