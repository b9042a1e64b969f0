from __future__ import annotations

import uuid

from app.matrix import MatrixFilters, build_matrix_data, load_events, load_unavailability
from app.matrix.conflicts import assigned_profile_ids, multi_assignments_by_event, unavailability_by_event
from app.matrix.transform import transform_event


def _profile(first_name: str) -> dict[str, object]:
    return {"id": str(uuid.uuid4()), "first_name": first_name, "last_name": "Jones"}


USHERS = {"id": str(uuid.uuid4()), "name": "Hospitality", "color": "#00AA00"}
PAT = _profile("Pat")
SAM = _profile("Sam")


def _position(title: str, *assignees: dict[str, object], sort_order: int = 0) -> dict[str, object]:
    return {
        "id": str(uuid.uuid4()),
        "title": title,
        "sort_order": sort_order,
        "ministry": USHERS,
        "event_assignments": [
            {"id": str(uuid.uuid4()), "profile_id": profile["id"], "status": "invited", "profile": profile}
            for profile in assignees
        ],
    }


def _event(start_time: str, *positions: dict[str, object]) -> dict[str, object]:
    return {
        "id": str(uuid.uuid4()),
        "title": f"Service {start_time}",
        "start_time": start_time,
        "event_type": "service",
        "status": "published",
        "event_positions": list(positions),
    }


def _window(profile: dict[str, object], start: str, end: str, reason: str | None = None) -> dict[str, object]:
    return {"profile_id": profile["id"], "start_date": start, "end_date": end, "reason": reason, "profile": profile}


def _transform(*events: dict[str, object]):
    return [transform_event(event) for event in load_events(events)]


def test_profile_holding_two_positions_is_flagged_with_titles() -> None:
    event = _event(
        "2024-05-05T09:00:00",
        _position("Usher 1", PAT, sort_order=1),
        _position("Usher 2", PAT, sort_order=2),
        _position("Greeter", SAM, sort_order=3),
    )
    (matrix_event,) = _transform(event)

    flagged = multi_assignments_by_event([matrix_event])[matrix_event.id]

    assert len(flagged) == 1
    assert flagged[0].profile_id == uuid.UUID(PAT["id"])
    assert flagged[0].positions == ("Usher 1", "Usher 2")
    assert flagged[0].first_name == "Pat"


def test_repeated_title_is_not_a_double_booking() -> None:
    event = _event("2024-05-05T09:00:00", _position("Usher", PAT), _position("Usher", PAT))
    (matrix_event,) = _transform(event)

    assert multi_assignments_by_event([matrix_event]) == {matrix_event.id: ()}


def test_multi_assignment_is_never_computed_across_events() -> None:
    first = _event("2024-05-05T09:00:00", _position("Usher 1", PAT))
    second = _event("2024-05-12T09:00:00", _position("Usher 2", PAT))
    events = _transform(first, second)

    result = multi_assignments_by_event(events)

    assert set(result) == {event.id for event in events}
    assert all(entries == () for entries in result.values())


def test_unavailability_window_is_inclusive_by_calendar_date() -> None:
    inside = _event("2024-05-05T09:00:00", _position("Usher 1", PAT))
    first_day = _event("2024-05-01T07:00:00", _position("Usher 1", PAT))
    last_day_late = _event("2024-05-10T23:30:00", _position("Usher 1", PAT))
    after = _event("2024-05-11T09:00:00", _position("Usher 1", PAT))
    events = _transform(inside, first_day, last_day_late, after)
    windows = load_unavailability([_window(PAT, "2024-05-01", "2024-05-10", reason="Travel")])

    result = unavailability_by_event(events, windows)

    for event in events[:3]:
        (entry,) = result[event.id]
        assert entry.profile_id == uuid.UUID(PAT["id"])
        assert entry.reason == "Travel"
        assert entry.positions == ("Usher 1",)
    assert result[events[3].id] == ()


def test_unavailability_only_reports_the_events_own_assignees() -> None:
    event = _event("2024-05-05T09:00:00", _position("Usher 1", PAT), _position("Greeter"))
    other = _event("2024-05-06T09:00:00", _position("Greeter", SAM))
    events = _transform(event, other)
    windows = load_unavailability(
        [
            _window(SAM, "2024-05-01", "2024-05-31", reason="Sabbatical"),
            _window(_profile("Nobody"), "2024-05-01", "2024-05-31"),
        ]
    )

    result = unavailability_by_event(events, windows)

    assert assigned_profile_ids(events) == {uuid.UUID(PAT["id"]), uuid.UUID(SAM["id"])}
    assert result[events[0].id] == ()
    (entry,) = result[events[1].id]
    assert entry.first_name == "Sam"
    assert entry.reason == "Sabbatical"


def test_overlapping_windows_report_profile_once_with_earliest_reason() -> None:
    event = _event("2024-05-05T09:00:00", _position("Usher 1", PAT))
    windows = load_unavailability(
        [
            _window(PAT, "2024-05-04", "2024-05-06", reason="Wedding"),
            _window(PAT, "2024-05-01", "2024-05-31", reason="Travel"),
        ]
    )

    data = build_matrix_data(MatrixFilters(), load_events([event]), windows)

    (entries,) = data.unavailability_by_event.values()
    assert [entry.reason for entry in entries] == ["Travel"]
