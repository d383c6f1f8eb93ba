"""Timeline reconciliation tests."""

import random

from trip_workflow.adapters.itinerary_graph import build_workflow_days
from trip_workflow.application.reconcile import describe, reconcile
from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.enums import NodeType
from trip_workflow.domain.models import NodeMetadata, WorkflowDay, WorkflowEdge, WorkflowNode


def _day():
    return WorkflowDay(
        day_number=1,
        date="2024-03-15",
        nodes=[
            WorkflowNode(id="c", title="Dinner", type=NodeType.MEAL, start="19:00", tags=["rooftop"]),
            WorkflowNode(
                id="a",
                title="Fort",
                start="09:00",
                cost=250,
                metadata=NodeMetadata(lat=12.5, lng=77.1, open="09:00", close="17:00", address="Hill"),
            ),
            WorkflowNode(id="b", title="Lunch", type=NodeType.MEAL, start="13:00"),
            WorkflowNode(id="d", title="Mystery", start="soon"),
        ],
        # Edges point against chronology; they must not affect order.
        edges=[WorkflowEdge(id="e1", source="c", target="a"), WorkflowEdge(id="e2", source="a", target="b")],
    )


def test_activities_ordered_by_start_time():
    schedule = reconcile([_day()], rng=random.Random(1))
    assert [a.id for a in schedule.days[0].activities] == ["a", "b", "c", "d"]


def test_projection_fields():
    schedule = reconcile([_day()], rng=random.Random(1))
    fort = schedule.days[0].activities[0]
    assert fort.type == "attraction"
    assert fort.time == "09:00"
    assert fort.duration == 120
    assert fort.cost == 250
    assert fort.opening_hours == "09:00 - 17:00"
    assert fort.address == "Hill"
    assert (fort.location.lat, fort.location.lng) == (12.5, 77.1)
    assert not fort.location.estimated


def test_missing_coordinates_are_estimated_near_reference():
    settings = EditorSettings()
    schedule = reconcile([_day()], settings=settings, rng=random.Random(3))
    lunch = schedule.days[0].activities[1]
    assert lunch.location.estimated
    assert settings.reference_lat <= lunch.location.lat <= settings.reference_lat + settings.coordinate_jitter
    assert settings.reference_lng <= lunch.location.lng <= settings.reference_lng + settings.coordinate_jitter


def test_seeded_rng_is_reproducible():
    first = reconcile([_day()], rng=random.Random(5)).model_dump()
    second = reconcile([_day()], rng=random.Random(5)).model_dump()
    assert first == second


def test_description_text():
    dinner = WorkflowNode(id="x", type=NodeType.MEAL, tags=["rooftop", "views"])
    assert describe(dinner) == "Meal activity with rooftop, views features"
    assert describe(WorkflowNode(id="y")) == "Attraction activity"


def test_payload_uses_persisted_field_names():
    payload = reconcile([_day()], rng=random.Random(1)).to_payload()
    day = payload["itinerary"]["days"][0]
    assert day["day"] == 1
    assert day["date"] == "2024-03-15"
    assert day["activities"][0]["openingHours"] == "09:00 - 17:00"
    assert "opening_hours" not in day["activities"][0]


def test_reconciled_payload_loads_back():
    schedule = reconcile([_day()], rng=random.Random(1))
    reloaded = build_workflow_days(schedule.to_payload())
    nodes = reloaded.days[0].nodes
    assert [n.title for n in nodes] == ["Fort", "Lunch", "Dinner", "Mystery"]
    assert [n.start for n in nodes] == ["09:00", "13:00", "19:00", "09:00"]
    assert nodes[0].metadata.has_coordinates
    assert not nodes[1].metadata.has_coordinates
    assert (nodes[0].metadata.open, nodes[0].metadata.close) == ("09:00", "17:00")
    assert nodes[2].type == NodeType.MEAL


def test_demo_flag_carries_through():
    day = _day()
    day.is_demo = True
    assert reconcile([day]).is_demo


def test_always_open_hours_survive_reload():
    day = WorkflowDay(
        nodes=[WorkflowNode(id="t", title="Terminal", type=NodeType.TRANSIT, metadata=NodeMetadata(open="24/7", close="24/7"))]
    )
    payload = reconcile([day], rng=random.Random(1)).to_payload()
    assert payload["itinerary"]["days"][0]["activities"][0]["openingHours"] == "24/7"
    node = build_workflow_days(payload).days[0].nodes[0]
    assert (node.metadata.open, node.metadata.close) == ("24/7", "24/7")
