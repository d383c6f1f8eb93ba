"""Workflow editor session: the only place day graphs are mutated.

Every structural or field mutation follows the same sequence: check it would
change something (no-ops are ignored and leave history untouched), record a
pre-mutation snapshot of *all* days, apply the change, then re-validate the
affected day. Day graphs are rebuilt wholesale by ``load`` whenever upstream
itinerary data changes; unapplied edits and history are discarded then.
"""

from __future__ import annotations

import copy
import random
import uuid
from collections.abc import Callable, Mapping
from typing import Any, Optional

from pydantic import BaseModel, ValidationError

from trip_workflow.adapters.itinerary_graph import (
    build_workflow_days,
    coerce_duration,
    coerce_node_type,
    coerce_start_time,
    grid_position,
)
from trip_workflow.adapters.places import PlaceData, node_from_place
from trip_workflow.adapters.seed import build_seed_days
from trip_workflow.application.history import EditHistory
from trip_workflow.application.reconcile import PersistedSchedule, reconcile
from trip_workflow.application.selectors import day_timeline, day_totals, trip_overview
from trip_workflow.config.settings import EditorSettings, resolve_editor_settings
from trip_workflow.domain.constants import NEW_NODE_DEFAULTS, NEW_NODE_START
from trip_workflow.domain.enums import LoadStatus, NodeType
from trip_workflow.domain.models import EditSnapshot, NodeMetadata, Position, WorkflowDay, WorkflowEdge, WorkflowNode
from trip_workflow.infrastructure.logging import StructuredLogger, get_logger
from trip_workflow.planning.layout import auto_layout, grid_layout
from trip_workflow.validators import validate_day, validate_days

ApplyCallback = Callable[[dict[str, Any]], Optional[dict[str, Any]]]

_DURATION_KEYS = ("duration_minutes", "durationMinutes", "durationMin", "duration")
_READONLY_KEYS = {"id", "validation"}


class ApplyOutcome(BaseModel):
    schedule: PersistedSchedule
    delivered: bool = False
    response: Optional[dict[str, Any]] = None


def _coerce_position(value: Any) -> Position | None:
    if isinstance(value, Position):
        return value.model_copy()
    if isinstance(value, Mapping):
        try:
            return Position.model_validate(value)
        except ValidationError:
            return None
    return None


def _coerce_tags(value: Any) -> list[str] | None:
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple, set)):
        return [str(tag) for tag in value]
    return None


def _coerce_cost(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class WorkflowEditor:
    def __init__(
        self,
        trip: Mapping[str, Any] | None = None,
        *,
        settings: EditorSettings | None = None,
        logger: StructuredLogger | None = None,
        rng: random.Random | None = None,
    ):
        self._settings = settings or resolve_editor_settings()
        self._logger = logger or get_logger()
        self._rng = rng or random.Random()
        self._history = EditHistory(limit=self._settings.history_limit)
        self._trip: dict[str, Any] | None = None
        self._days: list[WorkflowDay] = []
        self._active = 0
        self._status = LoadStatus.EMPTY
        self._revision = 0
        self._derived: dict[tuple[str, int], tuple[int, Any]] = {}
        self.load(trip)

    # ── state access ─────────────────────────────────

    @property
    def settings(self) -> EditorSettings:
        return self._settings

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def is_demo(self) -> bool:
        return any(day.is_demo for day in self._days)

    @property
    def revision(self) -> int:
        return self._revision

    @property
    def active_day_index(self) -> int:
        return self._active

    @property
    def days(self) -> list[WorkflowDay]:
        return [day.model_copy(deep=True) for day in self._days]

    @property
    def active_day(self) -> WorkflowDay | None:
        day = self._current()
        return day.model_copy(deep=True) if day is not None else None

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def node(self, node_id: str) -> WorkflowNode | None:
        day = self._current()
        found = day.find_node(node_id) if day is not None else None
        return found.model_copy(deep=True) if found is not None else None

    def _current(self) -> WorkflowDay | None:
        if 0 <= self._active < len(self._days):
            return self._days[self._active]
        return None

    # ── loading ─────────────────────────────────────

    def load(self, trip: Mapping[str, Any] | None) -> LoadStatus:
        """Rebuild every day graph from upstream data, discarding local edits."""
        self._trip = copy.deepcopy(dict(trip)) if isinstance(trip, Mapping) else None
        graph = build_workflow_days(self._trip)
        days = graph.days if not graph.is_empty else build_seed_days()
        self._days = validate_days(days, self._settings)
        self._status = graph.status
        self._active = 0
        self._history.clear()
        self._touch()
        self._logger.event(
            "load",
            status=self._status.value,
            is_demo=self.is_demo,
            day_count=len(self._days),
            node_count=sum(len(day.nodes) for day in self._days),
        )
        return self._status

    def reset(self) -> LoadStatus:
        return self.load(self._trip)

    def set_active_day(self, index: int) -> bool:
        if not 0 <= index < len(self._days) or index == self._active:
            return False
        self._active = index
        return True

    # ── mutation plumbing ───────────────────────────

    def _touch(self) -> None:
        self._revision += 1
        self._derived.clear()

    def _record(self) -> None:
        self._history.record(EditSnapshot.capture(self._days))

    def _commit(self, day: WorkflowDay, operation: str, **extra: Any) -> None:
        day.nodes = validate_day(day, self._settings)
        self._touch()
        self._logger.mutation(operation, day_number=day.day_number, revision=self._revision, **extra)

    def _noop(self, operation: str, reason: str, **extra: Any) -> bool:
        self._logger.noop(operation, reason, **extra)
        return False

    def _new_node_id(self, day: WorkflowDay) -> str:
        while True:
            node_id = f"day{day.day_number}-{uuid.uuid4().hex[:10]}"
            if day.find_node(node_id) is None:
                return node_id

    # ── node operations ─────────────────────────────

    def add_node(self, node_type: NodeType | str, position: Position | Mapping[str, Any] | None = None) -> str | None:
        day = self._current()
        if day is None:
            self._noop("add_node", "no_active_day")
            return None
        resolved = coerce_node_type(node_type)
        title, minutes = NEW_NODE_DEFAULTS[resolved]
        node = WorkflowNode(
            id=self._new_node_id(day),
            type=resolved,
            title=title,
            tags=[],
            start=NEW_NODE_START,
            duration_minutes=minutes,
            cost=0.0,
            position=_coerce_position(position) or grid_position(len(day.nodes)),
        )
        self._record()
        day.nodes.append(node)
        self._commit(day, "add_node", node_id=node.id, node_type=resolved.value)
        return node.id

    def add_place(self, place: PlaceData | Mapping[str, Any], position: Position | Mapping[str, Any] | None = None) -> str | None:
        day = self._current()
        if day is None:
            self._noop("add_place", "no_active_day")
            return None
        try:
            data = place if isinstance(place, PlaceData) else PlaceData.model_validate(place)
        except ValidationError:
            self._noop("add_place", "invalid_place")
            return None
        node = node_from_place(
            data,
            day_number=day.day_number,
            position=_coerce_position(position) or grid_position(len(day.nodes)),
        )
        while day.find_node(node.id) is not None:
            node = node.model_copy(update={"id": self._new_node_id(day)})
        self._record()
        day.nodes.append(node)
        self._commit(day, "add_place", node_id=node.id, node_type=node.type.value)
        return node.id

    def _merged_node(self, node: WorkflowNode, fields: Mapping[str, Any]) -> WorkflowNode | None:
        changes: dict[str, Any] = {}
        for key, value in fields.items():
            if key in _READONLY_KEYS:
                continue
            if key == "type":
                changes["type"] = coerce_node_type(value)
            elif key == "title" and value is not None:
                changes["title"] = str(value)
            elif key == "tags":
                tags = _coerce_tags(value)
                if tags is not None:
                    changes["tags"] = tags
            elif key == "start":
                changes["start"] = coerce_start_time(value)
            elif key in _DURATION_KEYS:
                changes["duration_minutes"] = coerce_duration(value)
            elif key == "cost":
                cost = _coerce_cost(value)
                if cost is not None:
                    changes["cost"] = cost
            elif key == "position":
                position = _coerce_position(value)
                if position is not None:
                    changes["position"] = position
            elif key == "metadata" and isinstance(value, Mapping):
                merged = {**node.metadata.model_dump(), **dict(value)}
                try:
                    changes["metadata"] = NodeMetadata.model_validate(merged)
                except ValidationError:
                    continue
        if not changes:
            return None
        try:
            return WorkflowNode.model_validate({**node.model_dump(), **changes})
        except ValidationError:
            return None

    def update_node(self, node_id: str, fields: Mapping[str, Any]) -> bool:
        day = self._current()
        node = day.find_node(node_id) if day is not None else None
        if day is None or node is None:
            return self._noop("update_node", "unknown_node", node_id=node_id)
        updated = self._merged_node(node, fields)
        if updated is None or updated.model_dump(exclude={"validation"}) == node.model_dump(exclude={"validation"}):
            return self._noop("update_node", "unchanged", node_id=node_id)
        self._record()
        day.nodes = [updated if row.id == node_id else row for row in day.nodes]
        self._commit(day, "update_node", node_id=node_id, fields=sorted(fields))
        return True

    def delete_node(self, node_id: str) -> bool:
        day = self._current()
        if day is None or day.find_node(node_id) is None:
            return self._noop("delete_node", "unknown_node", node_id=node_id)
        self._record()
        day.nodes = [node for node in day.nodes if node.id != node_id]
        day.edges = [edge for edge in day.edges if edge.source != node_id and edge.target != node_id]
        self._commit(day, "delete_node", node_id=node_id)
        return True

    def move_node(self, node_id: str, position: Position | Mapping[str, Any]) -> bool:
        day = self._current()
        node = day.find_node(node_id) if day is not None else None
        target = _coerce_position(position)
        if day is None or node is None or target is None:
            return self._noop("move_node", "unknown_node", node_id=node_id)
        if node.position == target:
            return self._noop("move_node", "unchanged", node_id=node_id)
        self._record()
        node.position = target
        self._commit(day, "move_node", node_id=node_id)
        return True

    # ── edge operations ─────────────────────────────

    def connect(self, source: str, target: str) -> bool:
        day = self._current()
        if day is None or day.find_node(source) is None or day.find_node(target) is None:
            return self._noop("connect", "unknown_node", source=source, target=target)
        if source == target:
            return self._noop("connect", "self_loop", source=source)
        if day.has_edge(source, target):
            return self._noop("connect", "duplicate_edge", source=source, target=target)
        self._record()
        day.edges.append(WorkflowEdge(id=f"e{day.day_number}-{source}-{target}", source=source, target=target))
        self._commit(day, "connect", source=source, target=target)
        return True

    def disconnect(self, source: str, target: str) -> bool:
        day = self._current()
        if day is None or not day.has_edge(source, target):
            return self._noop("disconnect", "unknown_edge", source=source, target=target)
        self._record()
        day.edges = [edge for edge in day.edges if not (edge.source == source and edge.target == target)]
        self._commit(day, "disconnect", source=source, target=target)
        return True

    # ── layout ──────────────────────────────────────

    def _relayout(self, operation: str, arranged: list[WorkflowNode]) -> bool:
        day = self._current()
        if day is None:
            return self._noop(operation, "no_active_day")
        if [node.position for node in arranged] == [node.position for node in day.nodes]:
            return self._noop(operation, "unchanged")
        self._record()
        day.nodes = arranged
        self._commit(day, operation, node_count=len(arranged))
        return True

    def auto_layout(self) -> bool:
        day = self._current()
        return self._relayout("auto_layout", auto_layout(day.nodes) if day is not None else [])

    def reset_grid(self) -> bool:
        day = self._current()
        return self._relayout("reset_grid", grid_layout(day.nodes) if day is not None else [])

    # ── history ─────────────────────────────────────

    def undo(self) -> bool:
        previous = self._history.undo(EditSnapshot.capture(self._days))
        if previous is None:
            return self._noop("undo", "empty_stack")
        self._days = previous.restore()
        self._active = min(self._active, max(0, len(self._days) - 1))
        self._touch()
        self._logger.event("undo", revision=self._revision, undo_depth=self._history.undo_depth)
        return True

    def redo(self) -> bool:
        following = self._history.redo(EditSnapshot.capture(self._days))
        if following is None:
            return self._noop("redo", "empty_stack")
        self._days = following.restore()
        self._active = min(self._active, max(0, len(self._days) - 1))
        self._touch()
        self._logger.event("redo", revision=self._revision, redo_depth=self._history.redo_depth)
        return True

    # ── derived views ───────────────────────────────

    def _memo(self, name: str, index: int, build: Callable[[], Any]) -> Any:
        key = (name, index)
        cached = self._derived.get(key)
        if cached is not None and cached[0] == self._revision:
            return cached[1]
        value = build()
        self._derived[key] = (self._revision, value)
        return value

    def timeline(self, index: int | None = None) -> list[dict[str, Any]]:
        index = self._active if index is None else index
        if not 0 <= index < len(self._days):
            return []
        return copy.deepcopy(self._memo("timeline", index, lambda: day_timeline(self._days[index])))

    def totals(self, index: int | None = None) -> dict[str, Any]:
        index = self._active if index is None else index
        if not 0 <= index < len(self._days):
            return {}
        return copy.deepcopy(self._memo("totals", index, lambda: day_totals(self._days[index])))

    def overview(self) -> dict[str, Any]:
        return copy.deepcopy(self._memo("overview", -1, lambda: trip_overview(self._days)))

    # ── apply ───────────────────────────────────────

    def reconcile(self) -> PersistedSchedule:
        return reconcile(self._days, settings=self._settings, rng=self._rng)

    def apply(self, callback: ApplyCallback | None = None) -> ApplyOutcome:
        """Reconcile all days and hand the payload to the persistence callback.

        Demonstration graphs are reconciled but never delivered. Failures
        raised by the callback propagate to the caller.
        """
        schedule = self.reconcile()
        if callback is None or schedule.is_demo:
            reason = "demo_graph" if schedule.is_demo else "no_callback"
            self._logger.event("apply", delivered=False, reason=reason, day_count=len(schedule.days))
            return ApplyOutcome(schedule=schedule)
        try:
            response = callback(schedule.to_payload())
        except Exception as exc:
            self._logger.error("apply", str(exc), day_count=len(schedule.days))
            raise
        self._logger.event("apply", delivered=True, day_count=len(schedule.days))
        return ApplyOutcome(schedule=schedule, delivered=True, response=response)


__all__ = ["ApplyCallback", "ApplyOutcome", "WorkflowEditor"]
