"""Itinerary -> workflow graph conversion tests."""

import datetime as dt

from trip_workflow.adapters.itinerary_graph import (
    activity_to_node,
    build_workflow_days,
    coerce_duration,
    coerce_node_type,
    coerce_start_time,
    grid_position,
)
from trip_workflow.adapters.seed import build_seed_days
from trip_workflow.domain.enums import LoadStatus, NodeType


def _trip(*days):
    return {"itinerary": {"days": list(days)}}


def test_node_type_is_case_insensitive():
    assert coerce_node_type("restaurant") == NodeType.MEAL
    assert coerce_node_type("Restaurant") == NodeType.MEAL
    assert coerce_node_type("HOTEL") == NodeType.HOTEL
    assert coerce_node_type("transportation") == NodeType.TRANSIT
    assert coerce_node_type("freetime") == NodeType.FREE_TIME
    assert coerce_node_type("Decision") == NodeType.DECISION


def test_unknown_node_type_falls_back_to_attraction():
    assert coerce_node_type("spaceship") == NodeType.ATTRACTION
    assert coerce_node_type(None) == NodeType.ATTRACTION
    assert coerce_node_type("") == NodeType.ATTRACTION


def test_start_time_clock_strings():
    assert coerce_start_time("14:30") == "14:30"
    assert coerce_start_time("9:05") == "09:05"
    assert coerce_start_time(" 07:00 ") == "07:00"


def test_start_time_invalid_values_default():
    assert coerce_start_time(None) == "09:00"
    assert coerce_start_time("") == "09:00"
    assert coerce_start_time("25:00") == "09:00"
    assert coerce_start_time("lunchtime") == "09:00"


def test_start_time_from_datetime_and_iso():
    assert coerce_start_time(dt.datetime(2024, 3, 15, 10, 45)) == "10:45"
    assert coerce_start_time(dt.time(16, 5)) == "16:05"
    assert coerce_start_time("2024-03-15T11:20:00") == "11:20"


def test_start_time_from_epoch_milliseconds():
    moment = dt.datetime(2024, 3, 15, 13, 15)
    millis = int(moment.timestamp() * 1000)
    assert coerce_start_time(millis) == "13:15"
    assert coerce_start_time(int(moment.timestamp())) == "13:15"


def test_duration_numeric_minutes():
    assert coerce_duration(90) == 90
    assert coerce_duration(45.4) == 45
    assert coerce_duration(-20) == 0


def test_duration_strings():
    assert coerce_duration("2 hours") == 120
    assert coerce_duration("1.5 hrs") == 90
    assert coerce_duration("1 hr 30 min") == 90
    assert coerce_duration("45 min") == 45
    assert coerce_duration("2") == 120


def test_duration_garbage_defaults():
    assert coerce_duration(None) == 120
    assert coerce_duration("a while") == 120
    assert coerce_duration(True) == 120


def test_grid_positions_three_columns():
    assert (grid_position(0).x, grid_position(0).y) == (200, 200)
    assert (grid_position(2).x, grid_position(2).y) == (800, 200)
    assert (grid_position(3).x, grid_position(3).y) == (200, 400)


def test_linear_edges_and_grid():
    result = build_workflow_days(
        _trip(
            {
                "dayNumber": 1,
                "date": "2024-03-15",
                "nodes": [
                    {"id": "a", "title": "A", "type": "attraction", "timing": {"startTime": "09:00", "durationMin": 60}},
                    {"id": "b", "title": "B", "type": "restaurant", "timing": {"startTime": "11:00", "durationMin": 45}},
                    {"id": "c", "title": "C", "type": "hotel", "timing": {"startTime": "15:00", "durationMin": 30}},
                    {"id": "d", "title": "D", "type": "transport", "timing": {"startTime": "17:00", "durationMin": 20}},
                ],
            }
        )
    )
    assert result.status == LoadStatus.READY
    day = result.days[0]
    assert day.day_number == 1
    assert day.date == "2024-03-15"
    assert [(e.source, e.target) for e in day.edges] == [("a", "b"), ("b", "c"), ("c", "d")]
    assert [e.id for e in day.edges] == ["e1-0", "e1-1", "e1-2"]
    assert [n.type for n in day.nodes] == [NodeType.ATTRACTION, NodeType.MEAL, NodeType.HOTEL, NodeType.TRANSIT]
    assert day.nodes[3].position.x == 200 and day.nodes[3].position.y == 400


def test_field_lookups_from_nested_records():
    node = activity_to_node(
        {
            "name": "Fort",
            "category": "sightseeing",
            "timing": {"startTime": "10:00", "duration": "2 hours"},
            "cost": {"pricePerPerson": 350},
            "details": {"rating": 4.6, "tags": ["history", "history", "views"], "openingHours": "09:00 - 17:00"},
            "location": {"address": "Old Town", "coordinates": {"lat": 12.5, "lng": 77.1}},
            "travel": {"distanceFromPrevious": 3.2},
        },
        node_id="n1",
        index=0,
    )
    assert node.title == "Fort"
    assert node.type == NodeType.ATTRACTION
    assert node.duration_minutes == 120
    assert node.cost == 350
    assert node.tags == ["history", "views"]
    assert node.metadata.rating == 4.6
    assert (node.metadata.open, node.metadata.close) == ("09:00", "17:00")
    assert node.metadata.address == "Old Town"
    assert node.metadata.distance_km == 3.2
    assert (node.metadata.lat, node.metadata.lng) == (12.5, 77.1)


def test_defaults_for_sparse_record():
    node = activity_to_node({}, node_id="x", index=0)
    assert node.title == "Untitled"
    assert node.type == NodeType.ATTRACTION
    assert node.start == "09:00"
    assert node.duration_minutes == 120
    assert node.cost == 0
    assert node.tags == []
    assert node.metadata.rating == 4.0
    assert node.metadata.address == "Unknown"
    assert node.metadata.open is None


def test_type_becomes_tag_when_no_tags():
    node = activity_to_node({"type": "restaurant"}, node_id="x", index=0)
    assert node.tags == ["restaurant"]


def test_estimated_location_is_not_treated_as_real():
    node = activity_to_node(
        {"title": "X", "location": {"lat": 28.65, "lng": 77.25, "estimated": True}},
        node_id="x",
        index=0,
    )
    assert not node.metadata.has_coordinates


def test_malformed_records_never_raise():
    result = build_workflow_days(
        _trip(
            {
                "activities": [
                    "not a record",
                    {"title": "Ok", "time": "10:00", "duration": 60},
                    {"title": "Bad times", "time": {"nested": True}, "duration": [1, 2], "cost": "lots"},
                ]
            }
        )
    )
    day = result.days[0]
    assert [n.title for n in day.nodes] == ["Ok", "Bad times"]
    assert day.nodes[1].start == "09:00"
    assert day.nodes[1].duration_minutes == 120
    assert day.nodes[1].cost == 0


def test_missing_and_duplicate_ids_are_generated():
    result = build_workflow_days(
        _trip(
            {
                "dayNumber": 2,
                "nodes": [{"title": "A"}, {"id": "dup", "title": "B"}, {"id": "dup", "title": "C"}],
            }
        )
    )
    ids = [n.id for n in result.days[0].nodes]
    assert ids[0] == "day2-node0"
    assert ids[1] == "dup"
    assert ids[2] == "day2-node2"
    assert len(set(ids)) == 3


def test_empty_trip_reports_empty_status():
    assert build_workflow_days(None).status == LoadStatus.EMPTY
    assert build_workflow_days({}).is_empty
    empty = build_workflow_days(_trip({"dayNumber": 1, "nodes": []}))
    assert empty.status == LoadStatus.EMPTY
    assert empty.days == []


def test_top_level_days_shape_is_accepted():
    result = build_workflow_days({"days": [{"activities": [{"name": "Walk", "time": "08:00"}]}]})
    assert result.status == LoadStatus.READY
    assert result.days[0].nodes[0].title == "Walk"


def test_seed_days_are_demo_graphs():
    days = build_seed_days()
    assert len(days) == 3
    assert all(day.is_demo for day in days)
    for day in days:
        ids = [n.id for n in day.nodes]
        assert len(ids) == len(set(ids))
        assert len(day.edges) == len(day.nodes) - 1
