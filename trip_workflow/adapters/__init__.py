"""Adapters between upstream itinerary data, map picks, and the graph editor."""

from trip_workflow.adapters.apply_sink import HttpApplySink, RecordingApplySink
from trip_workflow.adapters.itinerary_graph import build_workflow_days
from trip_workflow.adapters.places import PlaceData, node_from_place
from trip_workflow.adapters.seed import build_seed_days

__all__ = [
    "HttpApplySink",
    "PlaceData",
    "RecordingApplySink",
    "build_seed_days",
    "build_workflow_days",
    "node_from_place",
]
