"""Conflict passes over transformed events: unavailability and double-booking."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from uuid import UUID

from app.matrix.raw import RawUnavailability
from app.matrix.types import MatrixAssignment, MatrixEvent, MatrixMultiAssignment, MatrixUnavailability


def window_applies(window: RawUnavailability, on_date: date) -> bool:
    return window.start_date <= on_date <= window.end_date


def assigned_profile_ids(events: Iterable[MatrixEvent]) -> set[UUID]:
    return {
        assignment.profile_id
        for event in events
        for _, assignment in event.assigned_positions()
    }


def _titles_by_profile(event: MatrixEvent) -> dict[UUID, tuple[MatrixAssignment, list[str]]]:
    """Distinct position titles per assigned profile, in first-seen board order."""

    holdings: dict[UUID, tuple[MatrixAssignment, list[str]]] = {}
    for title, assignment in event.assigned_positions():
        _, titles = holdings.setdefault(assignment.profile_id, (assignment, []))
        if title not in titles:
            titles.append(title)
    return holdings


def windows_by_profile(
    windows: Iterable[RawUnavailability],
    profile_ids: set[UUID],
) -> dict[UUID, list[RawUnavailability]]:
    grouped: dict[UUID, list[RawUnavailability]] = {}
    for window in windows:
        if window.profile_id in profile_ids:
            grouped.setdefault(window.profile_id, []).append(window)
    for profile_windows in grouped.values():
        profile_windows.sort(key=lambda row: (row.start_date, row.end_date, row.reason or ""))
    return grouped


def event_unavailability(
    event: MatrixEvent,
    windows: dict[UUID, list[RawUnavailability]],
) -> tuple[MatrixUnavailability, ...]:
    event_date = event.start_time.date()
    flagged: list[MatrixUnavailability] = []
    for profile_id, (assignment, titles) in _titles_by_profile(event).items():
        applicable = [window for window in windows.get(profile_id, []) if window_applies(window, event_date)]
        if not applicable:
            continue
        flagged.append(
            MatrixUnavailability(
                profile_id=profile_id,
                first_name=assignment.first_name,
                last_name=assignment.last_name,
                reason=applicable[0].reason,
                positions=tuple(titles),
            )
        )
    return tuple(flagged)


def unavailability_by_event(
    events: Sequence[MatrixEvent],
    windows: Iterable[RawUnavailability],
) -> dict[UUID, tuple[MatrixUnavailability, ...]]:
    """Assigned profiles of each event whose unavailability covers the event's date."""

    relevant = windows_by_profile(windows, assigned_profile_ids(events))
    return {event.id: event_unavailability(event, relevant) for event in events}


def event_multi_assignments(event: MatrixEvent) -> tuple[MatrixMultiAssignment, ...]:
    return tuple(
        MatrixMultiAssignment(
            profile_id=profile_id,
            first_name=assignment.first_name,
            last_name=assignment.last_name,
            positions=tuple(titles),
        )
        for profile_id, (assignment, titles) in _titles_by_profile(event).items()
        if len(titles) > 1
    )


def multi_assignments_by_event(
    events: Sequence[MatrixEvent],
) -> dict[UUID, tuple[MatrixMultiAssignment, ...]]:
    """Profiles holding two or more distinct positions within the same event."""

    return {event.id: event_multi_assignments(event) for event in events}
