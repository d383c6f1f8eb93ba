"""Time validator: ensure the day's total duration is not excessive."""

from __future__ import annotations

from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import ValidationFinding, WorkflowNode
from trip_workflow.validators.overlap_validator import NodeFindings


def validate_day_length(nodes: list[WorkflowNode], settings: EditorSettings) -> NodeFindings:
    total = sum(node.duration_minutes for node in nodes)
    if total <= settings.max_day_minutes:
        return []
    finding = ValidationFinding(
        code="OVERBOOKED",
        status=ValidationStatus.WARNING,
        message=f"Day is overbooked ({round(total / 60)}h total)",
    )
    return [(node.id, finding.model_copy()) for node in nodes]
