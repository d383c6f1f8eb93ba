"""Overlap validator: flag activities whose time windows collide."""

from __future__ import annotations

from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import ValidationFinding, WorkflowNode
from trip_workflow.domain.timeparse import parse_hhmm

NodeFindings = list[tuple[str, ValidationFinding]]


def validate_overlap(nodes: list[WorkflowNode]) -> NodeFindings:
    timed = [(parse_hhmm(node.start), index, node) for index, node in enumerate(nodes)]
    ordered = sorted((row for row in timed if row[0] is not None), key=lambda row: (row[0], row[1]))

    clashes: dict[str, list[str]] = {}
    for i, (start_a, _, node_a) in enumerate(ordered):
        end_a = start_a + node_a.duration_minutes
        for start_b, _, node_b in ordered[i + 1:]:
            if start_b >= end_a:
                break
            clashes.setdefault(node_a.id, []).append(node_b.title)
            clashes.setdefault(node_b.id, []).append(node_a.title)

    findings: NodeFindings = []
    for node in nodes:
        titles = clashes.get(node.id)
        if not titles:
            continue
        findings.append(
            (
                node.id,
                ValidationFinding(
                    code="OVERLAP",
                    status=ValidationStatus.ERROR,
                    message=f"Overlaps with {', '.join(titles)}",
                ),
            )
        )
    return findings
