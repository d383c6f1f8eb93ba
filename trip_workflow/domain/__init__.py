"""Domain package exports."""

from trip_workflow.domain.constants import ACTIVITY_TYPE_ALIASES, DEFAULT_DURATION_MINUTES, DEFAULT_START
from trip_workflow.domain.enums import LoadStatus, NodeType, ValidationStatus
from trip_workflow.domain.exceptions import CoercionError, DomainError
from trip_workflow.domain.models import (
    EditSnapshot,
    GraphLoad,
    NodeMetadata,
    NodeValidation,
    Position,
    ValidationFinding,
    WorkflowDay,
    WorkflowEdge,
    WorkflowNode,
)

__all__ = [
    "ACTIVITY_TYPE_ALIASES",
    "CoercionError",
    "DEFAULT_DURATION_MINUTES",
    "DEFAULT_START",
    "DomainError",
    "EditSnapshot",
    "GraphLoad",
    "LoadStatus",
    "NodeMetadata",
    "NodeType",
    "NodeValidation",
    "Position",
    "ValidationFinding",
    "ValidationStatus",
    "WorkflowDay",
    "WorkflowEdge",
    "WorkflowNode",
]
