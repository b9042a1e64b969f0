"""Campus, ministry and event-type filtering of raw events."""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from app.matrix.raw import RawEvent
from app.matrix.types import MatrixFilters


def event_campus_ids(event: RawEvent) -> list[UUID]:
    return [link.campus.id for link in event.event_campuses if link.campus is not None]


def event_ministry_ids(event: RawEvent) -> set[UUID]:
    """Ministries referenced by an event's positions and by its agenda items."""

    position_ids = {position.ministry.id for position in event.event_positions if position.ministry is not None}
    agenda_ids = {
        item.resolved_ministry_id
        for item in event.event_agenda_items
        if item.resolved_ministry_id is not None
    }
    return position_ids | agenda_ids


def matches_event_type(event: RawEvent, filters: MatrixFilters) -> bool:
    if filters.event_type is None:
        return True
    return event.event_type == filters.event_type


def matches_campus(event: RawEvent, filters: MatrixFilters) -> bool:
    # Events without a campus link are church-wide.
    if filters.campus_id is None:
        return True
    campus_ids = event_campus_ids(event)
    return not campus_ids or filters.campus_id in campus_ids


def matches_ministries(event: RawEvent, filters: MatrixFilters) -> bool:
    if not filters.filters_ministries:
        return True
    return not event_ministry_ids(event).isdisjoint(filters.ministry_ids)


def prune_to_ministries(event: RawEvent, filters: MatrixFilters) -> RawEvent:
    """Copy of ``event`` keeping only agenda items and positions of filtered ministries."""

    if not filters.filters_ministries:
        return event
    return event.model_copy(
        update={
            "event_agenda_items": tuple(
                item for item in event.event_agenda_items if item.resolved_ministry_id in filters.ministry_ids
            ),
            "event_positions": tuple(
                position
                for position in event.event_positions
                if position.ministry is not None and position.ministry.id in filters.ministry_ids
            ),
        }
    )


def filter_events(events: Iterable[RawEvent], filters: MatrixFilters) -> list[RawEvent]:
    """Apply event-level predicates, then prune the content of surviving events."""

    return [
        prune_to_ministries(event, filters)
        for event in events
        if matches_event_type(event, filters) and matches_campus(event, filters) and matches_ministries(event, filters)
    ]
