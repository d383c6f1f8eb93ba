"""API request/response models."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field

from trip_workflow.domain.models import Position, WorkflowDay

_SESSION_ID_PATTERN = r"^[A-Za-z0-9_-]+$"


class CreateSessionRequest(BaseModel):
    session_id: Optional[str] = Field(
        default=None,
        min_length=1,
        max_length=64,
        pattern=_SESSION_ID_PATTERN,
        description="Session id; generated when omitted",
    )
    trip: dict[str, Any] = Field(default_factory=dict, description="Trip payload from the itinerary service")


class LoadTripRequest(BaseModel):
    trip: dict[str, Any] = Field(default_factory=dict)


class ActiveDayRequest(BaseModel):
    day_index: int = Field(ge=0)


class AddNodeRequest(BaseModel):
    type: str = Field(default="Attraction", description="Node type; unknown values become Attraction")
    position: Optional[Position] = None


class AddPlaceRequest(BaseModel):
    place: dict[str, Any]
    position: Optional[Position] = None


class UpdateNodeRequest(BaseModel):
    fields: dict[str, Any] = Field(default_factory=dict)


class MoveNodeRequest(BaseModel):
    position: Position


class ConnectRequest(BaseModel):
    source: str = Field(min_length=1)
    target: str = Field(min_length=1)


class SessionResponse(BaseModel):
    session_id: str
    status: str = Field(description="ready / empty")
    is_demo: bool = False
    active_day: int = 0
    revision: int = 0
    can_undo: bool = False
    can_redo: bool = False
    days: list[WorkflowDay] = Field(default_factory=list)


class OperationResponse(BaseModel):
    applied: bool = Field(description="False when the request was a no-op")
    node_id: Optional[str] = None
    session: SessionResponse


class TimelineResponse(BaseModel):
    day_index: int
    rows: list[dict[str, Any]] = Field(default_factory=list)
    totals: dict[str, Any] = Field(default_factory=dict)


class ApplyResponse(BaseModel):
    delivered: bool = False
    is_demo: bool = False
    itinerary: dict[str, Any] = Field(default_factory=dict)
    response: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    sessions: int = 0
