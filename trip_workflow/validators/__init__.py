"""Validator orchestration.

``validate_day`` is a pure function of the day's node list and the settings:
it never mutates its input and always returns fresh node copies whose
``validation`` field is recomputed from scratch.
"""

from __future__ import annotations

from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.constants import STATUS_RANK
from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import NodeValidation, ValidationFinding, WorkflowDay, WorkflowNode
from trip_workflow.validators.cost_validator import validate_cost
from trip_workflow.validators.distance_validator import validate_distance
from trip_workflow.validators.open_hours_validator import validate_open_hours
from trip_workflow.validators.overlap_validator import NodeFindings, validate_overlap
from trip_workflow.validators.time_validator import validate_day_length

_DEFAULT_SETTINGS = EditorSettings()


def _collect(nodes: list[WorkflowNode], settings: EditorSettings) -> NodeFindings:
    findings: NodeFindings = []
    findings.extend(validate_overlap(nodes))
    findings.extend(validate_open_hours(nodes))
    findings.extend(validate_cost(nodes, settings))
    findings.extend(validate_distance(nodes, settings))
    findings.extend(validate_day_length(nodes, settings))
    return findings


def summarize_findings(findings: list[ValidationFinding]) -> NodeValidation:
    if not findings:
        return NodeValidation()
    # Stable sort keeps rule order within the same severity.
    ordered = sorted(findings, key=lambda row: -STATUS_RANK[row.status])
    return NodeValidation(
        status=ordered[0].status,
        message="; ".join(row.message for row in ordered),
        findings=ordered,
    )


def validate_nodes(nodes: list[WorkflowNode], settings: EditorSettings | None = None) -> list[WorkflowNode]:
    settings = settings or _DEFAULT_SETTINGS
    per_node: dict[str, list[ValidationFinding]] = {}
    for node_id, finding in _collect(nodes, settings):
        per_node.setdefault(node_id, []).append(finding)
    return [
        node.model_copy(update={"validation": summarize_findings(per_node.get(node.id, []))}, deep=True)
        for node in nodes
    ]


def validate_day(day: WorkflowDay, settings: EditorSettings | None = None) -> list[WorkflowNode]:
    return validate_nodes(day.nodes, settings)


def validate_days(days: list[WorkflowDay], settings: EditorSettings | None = None) -> list[WorkflowDay]:
    return [day.model_copy(update={"nodes": validate_day(day, settings)}, deep=True) for day in days]


def count_by_status(nodes: list[WorkflowNode]) -> dict[ValidationStatus, int]:
    counts = {status: 0 for status in ValidationStatus}
    for node in nodes:
        counts[node.validation.status] += 1
    return counts


__all__ = [
    "count_by_status",
    "summarize_findings",
    "validate_day",
    "validate_days",
    "validate_nodes",
]
