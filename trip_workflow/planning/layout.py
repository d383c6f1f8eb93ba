"""Deterministic node layout.

Both layouts only rewrite ``position``; node order and every other field are
left untouched, so applying a layout twice yields the same result as once.
"""

from __future__ import annotations

from trip_workflow.adapters.itinerary_graph import grid_position
from trip_workflow.domain.constants import LAYOUT_ORIGIN_X, LAYOUT_ORIGIN_Y, LAYOUT_STAGGER_Y, LAYOUT_STEP_X
from trip_workflow.domain.models import Position, WorkflowNode
from trip_workflow.domain.timeparse import start_minutes


def chronological_ranks(nodes: list[WorkflowNode]) -> dict[str, int]:
    order = sorted(range(len(nodes)), key=lambda index: (start_minutes(nodes[index].start), index))
    return {nodes[index].id: rank for rank, index in enumerate(order)}


def timeline_position(rank: int) -> Position:
    return Position(x=LAYOUT_ORIGIN_X + rank * LAYOUT_STEP_X, y=LAYOUT_ORIGIN_Y + (rank % 2) * LAYOUT_STAGGER_Y)


def auto_layout(nodes: list[WorkflowNode]) -> list[WorkflowNode]:
    ranks = chronological_ranks(nodes)
    return [
        node.model_copy(update={"position": timeline_position(ranks[node.id])}, deep=True)
        for node in nodes
    ]


def grid_layout(nodes: list[WorkflowNode]) -> list[WorkflowNode]:
    return [
        node.model_copy(update={"position": grid_position(index)}, deep=True)
        for index, node in enumerate(nodes)
    ]


__all__ = ["auto_layout", "chronological_ranks", "grid_layout", "timeline_position"]
