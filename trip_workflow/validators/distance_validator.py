"""Distance validator: flag long hops from the previous stop."""

from __future__ import annotations

from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import ValidationFinding, WorkflowNode
from trip_workflow.validators.overlap_validator import NodeFindings


def validate_distance(nodes: list[WorkflowNode], settings: EditorSettings) -> NodeFindings:
    findings: NodeFindings = []
    for node in nodes:
        distance = node.metadata.distance_km
        if distance is None or distance <= settings.max_distance_km:
            continue
        findings.append(
            (
                node.id,
                ValidationFinding(
                    code="DISTANCE",
                    status=ValidationStatus.WARNING,
                    message=f"Distance too far ({distance:g}km)",
                ),
            )
        )
    return findings
