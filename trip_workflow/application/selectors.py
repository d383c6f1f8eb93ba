"""Pure derived views over the canonical day graphs."""

from __future__ import annotations

from typing import Any

from trip_workflow.application.reconcile import chronological
from trip_workflow.domain.enums import NodeType, ValidationStatus
from trip_workflow.domain.models import WorkflowDay
from trip_workflow.domain.timeparse import format_hhmm, parse_hhmm
from trip_workflow.services.formatting import format_duration
from trip_workflow.validators import count_by_status


def day_timeline(day: WorkflowDay) -> list[dict[str, Any]]:
    rows: list[dict[str, Any]] = []
    for node in chronological(day.nodes):
        start = parse_hhmm(node.start)
        rows.append(
            {
                "id": node.id,
                "time": node.start,
                "end": format_hhmm(start + node.duration_minutes) if start is not None else None,
                "title": node.title,
                "type": node.type.value,
                "duration": node.duration_minutes,
                "duration_label": format_duration(node.duration_minutes),
                "cost": node.cost,
                "status": node.validation.status.value,
                "message": node.validation.message,
            }
        )
    return rows


def day_totals(day: WorkflowDay) -> dict[str, Any]:
    by_type = {node_type.value: 0 for node_type in NodeType}
    for node in day.nodes:
        by_type[node.type.value] += 1
    statuses = count_by_status(day.nodes)
    minutes = sum(node.duration_minutes for node in day.nodes)
    return {
        "day_number": day.day_number,
        "node_count": len(day.nodes),
        "edge_count": len(day.edges),
        "total_cost": sum(node.cost for node in day.nodes),
        "total_minutes": minutes,
        "duration_label": format_duration(minutes),
        "by_type": by_type,
        "warnings": statuses[ValidationStatus.WARNING],
        "errors": statuses[ValidationStatus.ERROR],
    }


def trip_overview(days: list[WorkflowDay]) -> dict[str, Any]:
    totals = [day_totals(day) for day in days]
    return {
        "day_count": len(days),
        "node_count": sum(row["node_count"] for row in totals),
        "total_cost": sum(row["total_cost"] for row in totals),
        "warnings": sum(row["warnings"] for row in totals),
        "errors": sum(row["errors"] for row in totals),
        "is_demo": any(day.is_demo for day in days),
        "days": totals,
    }


__all__ = ["day_timeline", "day_totals", "trip_overview"]
