"""Project edited day graphs back into the persisted, time-ordered schedule."""

from __future__ import annotations

import random
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from trip_workflow.config.settings import EditorSettings
from trip_workflow.domain.constants import ALWAYS_OPEN
from trip_workflow.domain.models import WorkflowDay, WorkflowNode
from trip_workflow.domain.timeparse import start_minutes


class ActivityLocation(BaseModel):
    lat: float
    lng: float
    estimated: bool = False


class ScheduledActivity(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str
    type: str
    time: str
    duration: int
    cost: float
    description: str
    location: ActivityLocation
    rating: float
    opening_hours: str = Field(default="", serialization_alias="openingHours")
    address: str
    tags: list[str] = Field(default_factory=list)


class ScheduledDay(BaseModel):
    day: int
    date: Optional[str] = None
    is_demo: bool = False
    activities: list[ScheduledActivity] = Field(default_factory=list)


class PersistedSchedule(BaseModel):
    days: list[ScheduledDay] = Field(default_factory=list)

    @property
    def is_demo(self) -> bool:
        return any(day.is_demo for day in self.days)

    def to_payload(self) -> dict[str, Any]:
        return {"itinerary": self.model_dump(mode="json", by_alias=True)}


def describe(node: WorkflowNode) -> str:
    if not node.tags:
        return f"{node.type.value} activity"
    return f"{node.type.value} activity with {', '.join(node.tags)} features"


def opening_hours_text(node: WorkflowNode) -> str:
    open_time, close_time = node.metadata.open, node.metadata.close
    if not open_time or not close_time:
        return ""
    if open_time.strip().lower() in ALWAYS_OPEN and close_time.strip().lower() in ALWAYS_OPEN:
        return open_time.strip()
    return f"{open_time} - {close_time}"


def _location(node: WorkflowNode, settings: EditorSettings, rng: random.Random) -> ActivityLocation:
    meta = node.metadata
    if meta.lat is not None and meta.lng is not None:
        return ActivityLocation(lat=meta.lat, lng=meta.lng)
    # No real coordinates: reference point plus jitter, flagged as estimated.
    return ActivityLocation(
        lat=settings.reference_lat + rng.random() * settings.coordinate_jitter,
        lng=settings.reference_lng + rng.random() * settings.coordinate_jitter,
        estimated=True,
    )


def project_node(node: WorkflowNode, settings: EditorSettings, rng: random.Random) -> ScheduledActivity:
    return ScheduledActivity(
        id=node.id,
        title=node.title,
        type=node.type.value.lower(),
        time=node.start,
        duration=node.duration_minutes,
        cost=node.cost,
        description=describe(node),
        location=_location(node, settings, rng),
        rating=node.metadata.rating,
        opening_hours=opening_hours_text(node),
        address=node.metadata.address,
        tags=list(node.tags),
    )


def chronological(nodes: list[WorkflowNode]) -> list[WorkflowNode]:
    """Nodes by parsed start time; edges never influence the order."""
    return [node for _, node in sorted(enumerate(nodes), key=lambda row: (start_minutes(row[1].start), row[0]))]


def reconcile(
    days: list[WorkflowDay],
    *,
    settings: EditorSettings | None = None,
    rng: random.Random | None = None,
) -> PersistedSchedule:
    settings = settings or EditorSettings()
    rng = rng or random.Random()
    return PersistedSchedule(
        days=[
            ScheduledDay(
                day=day.day_number,
                date=day.date,
                is_demo=day.is_demo,
                activities=[project_node(node, settings, rng) for node in chronological(day.nodes)],
            )
            for day in days
        ]
    )


__all__ = [
    "ActivityLocation",
    "PersistedSchedule",
    "ScheduledActivity",
    "ScheduledDay",
    "chronological",
    "describe",
    "reconcile",
]
