"""Opening-hours validator: activity window must sit inside declared hours."""

from __future__ import annotations

from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import ValidationFinding, WorkflowNode
from trip_workflow.domain.timeparse import MINUTES_PER_DAY, parse_hhmm, parse_open_window
from trip_workflow.validators.overlap_validator import NodeFindings


def validate_open_hours(nodes: list[WorkflowNode]) -> NodeFindings:
    findings: NodeFindings = []
    for node in nodes:
        window = parse_open_window(node.metadata.open, node.metadata.close)
        start = parse_hhmm(node.start)
        if window is None or start is None:
            continue
        open_at, close_at = window
        # Overnight window: an after-midnight start belongs to the previous evening.
        if close_at > MINUTES_PER_DAY and start < open_at:
            start += MINUTES_PER_DAY
        end = start + node.duration_minutes
        if start < open_at or end > close_at:
            findings.append(
                (
                    node.id,
                    ValidationFinding(
                        code="OPEN_HOURS",
                        status=ValidationStatus.WARNING,
                        message=f"Activity outside opening hours ({node.metadata.open} - {node.metadata.close})",
                    ),
                )
            )
    return findings
