"""Pydantic domain models."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from trip_workflow.domain.constants import DEFAULT_ADDRESS, DEFAULT_DURATION_MINUTES, DEFAULT_RATING, DEFAULT_START
from trip_workflow.domain.enums import LoadStatus, NodeType, ValidationStatus


class Position(BaseModel):
    x: float = 0.0
    y: float = 0.0


class NodeMetadata(BaseModel):
    rating: float = DEFAULT_RATING
    open: Optional[str] = None
    close: Optional[str] = None
    address: str = DEFAULT_ADDRESS
    distance_km: Optional[float] = None
    lat: Optional[float] = None
    lng: Optional[float] = None

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lng is not None


class ValidationFinding(BaseModel):
    code: str
    status: ValidationStatus = ValidationStatus.WARNING
    message: str = ""


class NodeValidation(BaseModel):
    status: ValidationStatus = ValidationStatus.VALID
    message: Optional[str] = None
    findings: list[ValidationFinding] = Field(default_factory=list)


class WorkflowNode(BaseModel):
    id: str
    type: NodeType = NodeType.ATTRACTION
    title: str = "Untitled"
    tags: list[str] = Field(default_factory=list)
    start: str = DEFAULT_START
    duration_minutes: int = Field(default=DEFAULT_DURATION_MINUTES, ge=0)
    cost: float = 0.0
    position: Position = Field(default_factory=Position)
    metadata: NodeMetadata = Field(default_factory=NodeMetadata)
    validation: NodeValidation = Field(default_factory=NodeValidation)

    @field_validator("tags")
    @classmethod
    def _dedupe_tags(cls, value: list[str]) -> list[str]:
        seen: set[str] = set()
        rows: list[str] = []
        for tag in value:
            text = str(tag).strip()
            if not text or text in seen:
                continue
            seen.add(text)
            rows.append(text)
        return rows


class WorkflowEdge(BaseModel):
    id: str
    source: str
    target: str


class WorkflowDay(BaseModel):
    day_number: int = 1
    date: Optional[str] = None
    nodes: list[WorkflowNode] = Field(default_factory=list)
    edges: list[WorkflowEdge] = Field(default_factory=list)
    is_demo: bool = False

    def find_node(self, node_id: str) -> WorkflowNode | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def has_edge(self, source: str, target: str) -> bool:
        return any(edge.source == source and edge.target == target for edge in self.edges)


class EditSnapshot(BaseModel):
    """Deep copy of every day graph at one point in time."""

    model_config = ConfigDict(frozen=True)

    days: tuple[WorkflowDay, ...] = ()

    @classmethod
    def capture(cls, days: list[WorkflowDay]) -> "EditSnapshot":
        return cls(days=tuple(day.model_copy(deep=True) for day in days))

    def restore(self) -> list[WorkflowDay]:
        return [day.model_copy(deep=True) for day in self.days]


class GraphLoad(BaseModel):
    status: LoadStatus = LoadStatus.EMPTY
    days: list[WorkflowDay] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return self.status == LoadStatus.EMPTY
