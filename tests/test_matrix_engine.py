from __future__ import annotations

import copy
import json
import pickle
import uuid

from app.matrix import (
    AgendaHeaderRow,
    AgendaItemRow,
    AvailabilityHeaderRow,
    CellState,
    MatrixFilters,
    MinistryHeaderRow,
    PositionRow,
    build_matrix_data,
    load_events,
    resolve_cell,
    serialize_matrix_data,
)
from app.matrix.types import DEFAULT_MINISTRY_COLOR


def _ministry(name: str, color: str | None = "#112233") -> dict[str, object]:
    return {"id": str(uuid.uuid4()), "name": name, "color": color}


def _profile(first_name: str, last_name: str = "Smith") -> dict[str, object]:
    return {"id": str(uuid.uuid4()), "first_name": first_name, "last_name": last_name}


def _campus(name: str) -> dict[str, object]:
    return {"id": str(uuid.uuid4()), "name": name, "color": "#445566"}


WORSHIP = _ministry("Worship")
TECH = _ministry("Tech")
ALICE = _profile("Alice")
BOB = _profile("Bob")
CAROL = _profile("Carol")


def _position(
    title: str,
    ministry: dict[str, object] | None,
    *assignees: dict[str, object],
    sort_order: int = 0,
) -> dict[str, object]:
    return {
        "id": str(uuid.uuid4()),
        "title": title,
        "sort_order": sort_order,
        "ministry": ministry,
        "event_assignments": [
            {"id": str(uuid.uuid4()), "profile_id": profile["id"], "status": "accepted", "profile": profile}
            for profile in assignees
        ],
    }


def _item(title: str, sort_order: int, **fields: object) -> dict[str, object]:
    return {"id": str(uuid.uuid4()), "title": title, "sort_order": sort_order, **fields}


def _event(
    title: str,
    day: str,
    *,
    agenda: list[dict[str, object]] | None = None,
    positions: list[dict[str, object]] | None = None,
    campuses: list[dict[str, object]] | None = None,
    event_type: str = "service",
) -> dict[str, object]:
    return {
        "id": str(uuid.uuid4()),
        "title": title,
        "start_time": f"{day}T10:00:00",
        "end_time": f"{day}T12:00:00",
        "event_type": event_type,
        "status": "published",
        "event_campuses": [{"campus": campus} for campus in campuses or []],
        "event_agenda_items": agenda or [],
        "event_positions": positions or [],
    }


def _build(*events: dict[str, object], filters: MatrixFilters | None = None):
    return build_matrix_data(filters or MatrixFilters(), load_events(events), [])


def _row_summary(rows) -> list[tuple[str, str]]:
    return [(row.kind, row.label) for row in rows]


def test_two_event_board_shares_ministry_and_position_rows() -> None:
    event_a = _event(
        "Sunday A",
        "2024-06-02",
        positions=[_position("Guitar", WORSHIP, ALICE, sort_order=1), _position("Sound", TECH, BOB, sort_order=2)],
    )
    event_b = _event(
        "Sunday B",
        "2024-06-09",
        positions=[_position("Guitar", WORSHIP, ALICE, sort_order=1), _position("Vocals", WORSHIP, CAROL, sort_order=2)],
    )

    data = _build(event_b, event_a)

    assert _row_summary(data.rows) == [
        ("ministry-header", "Worship"),
        ("position", "Guitar"),
        ("position", "Vocals"),
        ("ministry-header", "Tech"),
        ("position", "Sound"),
        ("availability-header", "Availability"),
    ]
    first, second = data.events
    assert first.title == "Sunday A"
    vocals_row = data.rows[2]
    sound_row = data.rows[4]
    assert resolve_cell(first, vocals_row).state is CellState.NO_DATA
    assert resolve_cell(second, sound_row).state is CellState.NO_DATA
    assert resolve_cell(first, data.rows[1]).state is CellState.FILLED
    assert all(not entries for entries in data.multi_assignments_by_event.values())
    assert all(not entries for entries in data.unavailability_by_event.values())


def test_agenda_rows_follow_longest_agenda() -> None:
    short = _event("No agenda", "2024-06-02")
    long = _event(
        "Full agenda",
        "2024-06-09",
        agenda=[_item("Welcome", 1), _item("Sermon", 2), _item("Benediction", 3)],
    )

    data = _build(short, long)

    kinds = [row.kind for row in data.rows]
    assert kinds.count("agenda-header") == 1
    assert kinds.count("agenda-item") == 3
    agenda_rows = [row for row in data.rows if isinstance(row, AgendaItemRow)]
    assert [row.agenda_index for row in agenda_rows] == [0, 1, 2]
    assert [row.label for row in agenda_rows] == ["1.", "2.", "3."]

    empty_event = data.events[0]
    assert all(resolve_cell(empty_event, row).state is CellState.NO_DATA for row in agenda_rows)


def test_rows_without_agenda_or_positions_keep_availability_header() -> None:
    assert _build().rows == (AvailabilityHeaderRow(),)
    assert _build(_event("Bare", "2024-06-02")).rows == (AvailabilityHeaderRow(),)


def test_row_count_lower_bound() -> None:
    event_a = _event(
        "A",
        "2024-06-02",
        agenda=[_item("Welcome", 1), _item("Song", 2, is_song_placeholder=True)],
        positions=[_position("Guitar", WORSHIP), _position("Sound", TECH), _position("Lights", TECH)],
    )
    event_b = _event("B", "2024-06-09", positions=[_position("Guitar", WORSHIP), _position("Keys", WORSHIP)])

    data = _build(event_a, event_b)

    agenda_rows = 2
    distinct_pairs = 4
    ministry_headers = 2
    assert len(data.rows) >= agenda_rows + distinct_pairs + ministry_headers + 1
    assert isinstance(data.rows[0], AgendaHeaderRow)
    assert isinstance(data.rows[-1], AvailabilityHeaderRow)


def test_ministry_filter_prunes_rows_and_agenda_items() -> None:
    mixed = _event(
        "Mixed",
        "2024-06-02",
        agenda=[
            _item("Opening song", 1, is_song_placeholder=True, ministry_id=WORSHIP["id"], ministry=WORSHIP),
            _item("Stream check", 2, ministry_id=TECH["id"], ministry=TECH),
            _item("Announcements", 3),
        ],
        positions=[_position("Guitar", WORSHIP), _position("Sound", TECH)],
    )
    tech_only = _event("Tech night", "2024-06-09", positions=[_position("Sound", TECH)])

    worship_id = uuid.UUID(WORSHIP["id"])
    data = _build(mixed, tech_only, filters=MatrixFilters(ministry_ids=frozenset({worship_id})))

    assert [event.title for event in data.events] == ["Mixed"]
    for row in data.rows:
        if isinstance(row, (MinistryHeaderRow, PositionRow)):
            assert row.ministry_id == worship_id
    (event,) = data.events
    assert [item.title for item in event.agenda_items] == ["Opening song"]
    assert all(item.ministry_id == worship_id for item in event.agenda_items)


def test_ministry_filter_accepts_events_tagged_only_through_agenda() -> None:
    songs_only = _event(
        "Songs only",
        "2024-06-02",
        agenda=[_item("Song", 1, song_id=None, is_song_placeholder=True, ministry_id=WORSHIP["id"])],
        positions=[_position("Sound", TECH)],
    )

    data = _build(songs_only, filters=MatrixFilters(ministry_ids=frozenset({uuid.UUID(WORSHIP["id"])})))

    assert len(data.events) == 1
    assert data.events[0].positions_by_ministry == ()
    assert len(data.events[0].agenda_items) == 1


def test_campus_filter_keeps_church_wide_events() -> None:
    north = _campus("North")
    south = _campus("South")
    church_wide = _event("Church wide", "2024-06-02")
    north_event = _event("North service", "2024-06-03", campuses=[north])
    south_event = _event("South service", "2024-06-04", campuses=[south])
    both = _event("Joint service", "2024-06-05", campuses=[south, north])

    data = _build(
        church_wide,
        north_event,
        south_event,
        both,
        filters=MatrixFilters(campus_id=uuid.UUID(north["id"])),
    )

    assert [event.title for event in data.events] == ["Church wide", "North service", "Joint service"]


def test_event_type_filter() -> None:
    service = _event("Service", "2024-06-02")
    rehearsal = _event("Rehearsal", "2024-06-01", event_type="rehearsal")

    data = _build(service, rehearsal, filters=MatrixFilters(event_type="rehearsal"))

    assert [event.title for event in data.events] == ["Rehearsal"]


def test_duplicate_campus_links_are_collapsed() -> None:
    north = _campus("North")
    event = _event("Twice linked", "2024-06-02", campuses=[north, north])
    event["event_campuses"].append({"campus": []})

    (matrix_event,) = _build(event).events

    assert [campus.name for campus in matrix_event.campuses] == ["North"]


def test_songs_and_placeholders_share_agenda_slots() -> None:
    song = {"id": str(uuid.uuid4()), "title": "Amazing Grace", "default_key": "G"}
    leader = _profile("Dana", "Lee")
    event = _event(
        "Service",
        "2024-06-02",
        agenda=[
            _item("Song 2", 2, song_id=song["id"], song=song, song_key="A", leader=leader),
            _item("Song 1", 1, song_id=song["id"], song=[song]),
            _item("Song 3", 3, is_song_placeholder=True),
            _item("Sermon", 4, description="Series part 2"),
        ],
    )

    data = _build(event)
    (matrix_event,) = data.events
    first, second, placeholder, sermon = matrix_event.agenda_items

    assert first.slot_title == "Amazing Grace"
    assert first.song_key == "G"
    assert second.song_key == "A"
    assert second.leader_name == "Dana Lee"
    assert placeholder.is_song and placeholder.is_placeholder
    assert placeholder.slot_title == "Song 3"
    assert not sermon.is_song
    assert sermon.slot_title == "Sermon"
    assert sermon.description == "Series part 2"

    agenda_rows = [row for row in data.rows if isinstance(row, AgendaItemRow)]
    states = [resolve_cell(matrix_event, row).state for row in agenda_rows]
    assert states == [CellState.FILLED, CellState.FILLED, CellState.PLACEHOLDER, CellState.FILLED]


def test_positions_without_ministry_are_skipped_and_first_assignment_is_primary() -> None:
    event = _event(
        "Service",
        "2024-06-02",
        positions=[
            _position("Orphan", None, ALICE, sort_order=1),
            _position("Guitar", {"id": WORSHIP["id"], "name": "Worship", "color": None}, BOB, CAROL, sort_order=2),
            _position("Keys", WORSHIP, sort_order=3),
        ],
    )

    (matrix_event,) = _build(event).events

    (group,) = matrix_event.positions_by_ministry
    assert group.ministry_color == DEFAULT_MINISTRY_COLOR
    assert [position.title for position in group.positions] == ["Guitar", "Keys"]
    guitar, keys = group.positions
    assert guitar.assignment is not None
    assert guitar.assignment.first_name == "Bob"
    assert keys.assignment is None


def test_position_cell_distinguishes_empty_slot_from_missing_position() -> None:
    event_a = _event("A", "2024-06-02", positions=[_position("Guitar", WORSHIP)])
    event_b = _event("B", "2024-06-09", positions=[_position("Guitar", WORSHIP, ALICE), _position("Bass", WORSHIP)])

    data = _build(event_a, event_b)
    bass_row, guitar_row = [row for row in data.rows if isinstance(row, PositionRow)]

    assert bass_row.position_title == "Bass"
    assert resolve_cell(data.events[0], bass_row).state is CellState.NO_DATA
    assert resolve_cell(data.events[0], guitar_row).state is CellState.EMPTY
    assert resolve_cell(data.events[1], bass_row).state is CellState.EMPTY
    assert resolve_cell(data.events[1], guitar_row).state is CellState.FILLED


def test_ministry_order_follows_earliest_event() -> None:
    later = _event("Later", "2024-07-07", positions=[_position("Guitar", WORSHIP, sort_order=1)])
    earlier = _event(
        "Earlier",
        "2024-06-02",
        positions=[_position("Sound", TECH, sort_order=1), _position("Drums", WORSHIP, sort_order=2)],
    )

    forward = _build(earlier, later)
    backward = _build(later, earlier)

    headers = [row.label for row in forward.rows if isinstance(row, MinistryHeaderRow)]
    assert headers == ["Tech", "Worship"]
    assert forward.rows == backward.rows
    worship_titles = [
        row.position_title
        for row in forward.rows
        if isinstance(row, PositionRow) and row.ministry_id == uuid.UUID(WORSHIP["id"])
    ]
    assert worship_titles == ["Drums", "Guitar"]


def test_one_element_join_lists_match_single_records() -> None:
    song = {"id": str(uuid.uuid4()), "title": "Holy", "default_key": "D"}
    as_records = _event(
        "Service",
        "2024-06-02",
        agenda=[_item("Song", 1, song_id=song["id"], song=song, ministry=WORSHIP)],
        positions=[_position("Guitar", WORSHIP, ALICE)],
    )
    as_lists = json.loads(json.dumps(as_records))
    as_lists["event_agenda_items"][0]["song"] = [song]
    as_lists["event_agenda_items"][0]["ministry"] = [WORSHIP]
    as_lists["event_positions"][0]["ministry"] = [WORSHIP]
    as_lists["event_positions"][0]["event_assignments"][0]["profile"] = [ALICE]

    assert _build(as_records) == _build(as_lists)


def test_pipeline_is_idempotent_and_serializable() -> None:
    events = (
        _event(
            "A",
            "2024-06-02",
            agenda=[_item("Welcome", 1)],
            positions=[_position("Usher 1", TECH, ALICE), _position("Usher 2", TECH, ALICE)],
        ),
        _event("B", "2024-06-09", positions=[_position("Guitar", WORSHIP, BOB)]),
    )

    first = _build(*events)
    second = _build(*events)

    assert first == second
    payload = serialize_matrix_data(first)
    assert json.dumps(payload, sort_keys=True) == json.dumps(serialize_matrix_data(second), sort_keys=True)
    assert [row["type"] for row in payload["rows"]] == [
        "agenda-header",
        "agenda-item",
        "ministry-header",
        "position",
        "position",
        "ministry-header",
        "position",
        "availability-header",
    ]
    event_payload = payload["events"][1]
    assert len(event_payload["cells"]) == len(payload["rows"])
    assert event_payload["cells"][1] == {"state": "no_data"}
    assert set(payload["multi_assignments_by_event"]) == {event["id"] for event in events}


def test_tied_sort_order_is_broken_by_id_regardless_of_arrival_order() -> None:
    guitar = _position("Guitar", WORSHIP, ALICE)
    sound = _position("Sound", TECH, BOB)
    welcome = _item("Welcome", 0)
    prayer = _item("Prayer", 0)
    forward = _event("Service", "2024-06-02", agenda=[welcome, prayer], positions=[guitar, sound])
    backward = dict(forward, event_agenda_items=[prayer, welcome], event_positions=[sound, guitar])

    first = _build(forward)
    second = _build(backward)

    assert first.rows == second.rows
    assert first.events == second.events
    leading = min((guitar, sound), key=lambda position: position["id"])
    headers = [row for row in first.rows if isinstance(row, MinistryHeaderRow)]
    assert str(headers[0].ministry_id) == leading["ministry"]["id"]
    agenda_titles = [item.title for item in first.events[0].agenda_items]
    assert agenda_titles[0] == min((welcome, prayer), key=lambda item: item["id"])["title"]


def test_mixed_naive_and_aware_start_times_are_ordered() -> None:
    naive = _event("Naive", "2024-06-09")
    aware = _event("Aware", "2024-06-02")
    aware["start_time"] = "2024-06-02T10:00:00Z"

    data = _build(naive, aware)

    assert [event.title for event in data.events] == ["Aware", "Naive"]
    assert all(event.start_time.tzinfo is not None for event in data.events)


def test_matrix_data_survives_pickle_and_deepcopy() -> None:
    data = _build(
        _event(
            "A",
            "2024-06-02",
            agenda=[_item("Welcome", 1)],
            positions=[_position("Usher 1", TECH, ALICE), _position("Usher 2", TECH, ALICE)],
        ),
        _event("B", "2024-06-09", positions=[_position("Guitar", WORSHIP, BOB)]),
    )

    restored = pickle.loads(pickle.dumps(data))

    assert restored == data
    assert copy.deepcopy(data) == data
    assert dict(restored.multi_assignments_by_event) == dict(data.multi_assignments_by_event)
    assert serialize_matrix_data(restored) == serialize_matrix_data(data)
