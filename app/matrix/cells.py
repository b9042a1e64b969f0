"""Resolution of one event column against one unified row."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import assert_never

from app.matrix.types import (
    AgendaHeaderRow,
    AgendaItemRow,
    AvailabilityHeaderRow,
    MatrixAgendaItem,
    MatrixEvent,
    MatrixPosition,
    MatrixRow,
    MinistryHeaderRow,
    PositionRow,
)


class CellState(str, enum.Enum):
    HEADER = "header"
    # The event has nothing at this row at all.
    NO_DATA = "no_data"
    # The slot exists but is an unchosen song placeholder.
    PLACEHOLDER = "placeholder"
    # The position exists but nobody is assigned.
    EMPTY = "empty"
    FILLED = "filled"


@dataclass(frozen=True, slots=True)
class MatrixCell:
    state: CellState
    agenda_item: MatrixAgendaItem | None = None
    position: MatrixPosition | None = None


HEADER_CELL = MatrixCell(state=CellState.HEADER)
NO_DATA_CELL = MatrixCell(state=CellState.NO_DATA)


def _agenda_cell(event: MatrixEvent, row: AgendaItemRow) -> MatrixCell:
    if row.agenda_index >= len(event.agenda_items):
        return NO_DATA_CELL
    item = event.agenda_items[row.agenda_index]
    if item.is_placeholder and item.song_id is None:
        return MatrixCell(state=CellState.PLACEHOLDER, agenda_item=item)
    return MatrixCell(state=CellState.FILLED, agenda_item=item)


def _position_cell(event: MatrixEvent, row: PositionRow) -> MatrixCell:
    group = event.find_ministry(row.ministry_id)
    position = group.find_position(row.position_title) if group is not None else None
    if position is None:
        return NO_DATA_CELL
    if position.assignment is None:
        return MatrixCell(state=CellState.EMPTY, position=position)
    return MatrixCell(state=CellState.FILLED, position=position)


def resolve_cell(event: MatrixEvent, row: MatrixRow) -> MatrixCell:
    if isinstance(row, (AgendaHeaderRow, MinistryHeaderRow, AvailabilityHeaderRow)):
        return HEADER_CELL
    if isinstance(row, AgendaItemRow):
        return _agenda_cell(event, row)
    if isinstance(row, PositionRow):
        return _position_cell(event, row)
    assert_never(row)


def event_column(event: MatrixEvent, rows: tuple[MatrixRow, ...]) -> tuple[MatrixCell, ...]:
    return tuple(resolve_cell(event, row) for row in rows)
