"""Cost validator: negative costs and outliers against the day's typical spend."""

from __future__ import annotations

import statistics

from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.enums import ValidationStatus
from trip_workflow.domain.models import ValidationFinding, WorkflowNode
from trip_workflow.validators.overlap_validator import NodeFindings


def validate_cost(nodes: list[WorkflowNode], settings: EditorSettings) -> NodeFindings:
    findings: NodeFindings = []
    positive = [node.cost for node in nodes if node.cost > 0]
    typical = statistics.median(positive) if len(positive) >= settings.cost_outlier_min_samples else None

    for node in nodes:
        if node.cost < 0:
            findings.append(
                (
                    node.id,
                    ValidationFinding(
                        code="NEGATIVE_COST",
                        status=ValidationStatus.WARNING,
                        message=f"Negative cost ({node.cost:g})",
                    ),
                )
            )
        elif typical is not None and node.cost > typical * settings.cost_outlier_multiplier:
            findings.append(
                (
                    node.id,
                    ValidationFinding(
                        code="COST_OUTLIER",
                        status=ValidationStatus.WARNING,
                        message=(
                            f"Cost {node.cost:g} is more than "
                            f"{settings.cost_outlier_multiplier:g}x the day's typical {typical:g}"
                        ),
                    ),
                )
            )
    return findings
