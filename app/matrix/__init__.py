"""Scheduling matrix engine."""

from app.matrix.assembler import build_matrix_data, serialize_matrix_data
from app.matrix.cells import CellState, MatrixCell, resolve_cell
from app.matrix.raw import RawEvent, RawUnavailability, load_events, load_unavailability
from app.matrix.types import (
    AgendaHeaderRow,
    AgendaItemRow,
    AvailabilityHeaderRow,
    MatrixData,
    MatrixEvent,
    MatrixFilters,
    MatrixRow,
    MinistryHeaderRow,
    PositionRow,
)

__all__ = [
    "AgendaHeaderRow",
    "AgendaItemRow",
    "AvailabilityHeaderRow",
    "CellState",
    "MatrixCell",
    "MatrixData",
    "MatrixEvent",
    "MatrixFilters",
    "MatrixRow",
    "MinistryHeaderRow",
    "PositionRow",
    "RawEvent",
    "RawUnavailability",
    "build_matrix_data",
    "load_events",
    "load_unavailability",
    "resolve_cell",
    "serialize_matrix_data",
]
