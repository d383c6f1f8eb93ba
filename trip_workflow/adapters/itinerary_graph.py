"""Itinerary -> workflow graph conversion.

Upstream itinerary payloads come in more than one shape (normalized nodes with
``title``/``timing``/``cost`` sub-objects, legacy trip components with
``name``, or previously reconciled activities with ``time``/``duration``).
Every lookup here is tolerant: a malformed record degrades to defaults and the
conversion as a whole never raises.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

from trip_workflow.domain.constants import (
    ACTIVITY_TYPE_ALIASES,
    DEFAULT_ADDRESS,
    DEFAULT_DURATION_MINUTES,
    DEFAULT_RATING,
    DEFAULT_START,
    GRID_COLUMN_WIDTH,
    GRID_COLUMNS,
    GRID_ORIGIN_X,
    GRID_ORIGIN_Y,
    GRID_ROW_HEIGHT,
)
from trip_workflow.domain.enums import LoadStatus, NodeType
from trip_workflow.domain.exceptions import CoercionError
from trip_workflow.domain.models import GraphLoad, NodeMetadata, Position, WorkflowDay, WorkflowEdge, WorkflowNode
from trip_workflow.domain.timeparse import format_hhmm, parse_hhmm, split_hours_range

_logger = logging.getLogger("trip-workflow.adapter")

_NUMBER_PATTERN = re.compile(r"(\d+(?:\.\d+)?)")
_HOURS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(?:hours?|hrs?)")
_MINUTES_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*min")
_DAY_CONTAINER_KEYS = ("nodes", "components", "activities")
# Epoch values above this are treated as milliseconds.
_EPOCH_MS_THRESHOLD = 10_000_000_000


def _dig(record: Mapping[str, Any], path: str) -> Any:
    current: Any = record
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current


def _first(record: Mapping[str, Any], *paths: str) -> Any:
    for path in paths:
        value = _dig(record, path)
        if value is None:
            continue
        if isinstance(value, str) and not value.strip():
            continue
        return value
    return None


def _as_float(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


# ── coercions ────────────────────────────────────────


def coerce_node_type(value: Any) -> NodeType:
    if isinstance(value, NodeType):
        return value
    text = str(value or "").strip()
    for member in NodeType:
        if text.lower() == member.value.lower():
            return member
    return ACTIVITY_TYPE_ALIASES.get(text.lower(), NodeType.ATTRACTION)


def _parse_clock(value: Any) -> str:
    if isinstance(value, (dt.datetime, dt.time)):
        return f"{value.hour:02d}:{value.minute:02d}"
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = value / 1000 if value > _EPOCH_MS_THRESHOLD else value
        try:
            moment = dt.datetime.fromtimestamp(seconds)
        except (OverflowError, OSError, ValueError) as exc:
            raise CoercionError("start", value) from exc
        return f"{moment.hour:02d}:{moment.minute:02d}"
    if not isinstance(value, str):
        raise CoercionError("start", value)

    text = value.strip()
    if not text:
        raise CoercionError("start", value)
    minutes = parse_hhmm(text)
    if minutes is not None:
        return format_hhmm(minutes)
    try:
        moment = dt.datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError as exc:
        raise CoercionError("start", value) from exc
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return f"{moment.hour:02d}:{moment.minute:02d}"


def coerce_start_time(value: Any) -> str:
    try:
        return _parse_clock(value)
    except CoercionError:
        return DEFAULT_START


def _parse_duration(value: Any) -> int:
    if isinstance(value, bool):
        raise CoercionError("duration", value)
    if isinstance(value, (int, float)):
        if math.isnan(value) or math.isinf(value):
            raise CoercionError("duration", value)
        return max(0, int(round(value)))
    if not isinstance(value, str):
        raise CoercionError("duration", value)

    text = value.strip().lower()
    if not text:
        raise CoercionError("duration", value)
    if "hour" in text or "hr" in text:
        hours = _HOURS_PATTERN.search(text) or _NUMBER_PATTERN.search(text)
        if not hours:
            raise CoercionError("duration", value)
        total = float(hours.group(1)) * 60
        minutes = _MINUTES_PATTERN.search(text[hours.end():])
        if minutes:
            total += float(minutes.group(1))
        return int(round(total))
    if "min" in text:
        minutes = _NUMBER_PATTERN.search(text)
        if not minutes:
            raise CoercionError("duration", value)
        return int(round(float(minutes.group(1))))
    number = _NUMBER_PATTERN.search(text)
    if not number:
        raise CoercionError("duration", value)
    return int(round(float(number.group(1)) * 60))


def coerce_duration(value: Any) -> int:
    try:
        return _parse_duration(value)
    except CoercionError:
        return DEFAULT_DURATION_MINUTES


def grid_position(index: int) -> Position:
    row, col = divmod(max(0, index), GRID_COLUMNS)
    return Position(x=GRID_ORIGIN_X + col * GRID_COLUMN_WIDTH, y=GRID_ORIGIN_Y + row * GRID_ROW_HEIGHT)


# ── record conversion ───────────────────────────────


def _tags(record: Mapping[str, Any], raw_type: Any) -> list[str]:
    tags = _first(record, "details.tags", "tags")
    if isinstance(tags, str):
        return [tags]
    if isinstance(tags, Sequence):
        return [str(tag) for tag in tags if tag is not None]
    return [str(raw_type)] if raw_type else []


def _metadata(record: Mapping[str, Any]) -> NodeMetadata:
    rating = _as_float(_first(record, "details.rating", "rating", "meta.rating"))
    address = _first(record, "location.address", "location.name", "address", "meta.address")

    open_time = _first(record, "meta.open", "open", "details.open")
    close_time = _first(record, "meta.close", "close", "details.close")
    if open_time is None or close_time is None:
        hours = split_hours_range(_first(record, "details.openingHours", "openingHours", "opening_hours"))
        if hours is not None:
            open_time, close_time = hours

    lat = _as_float(_first(record, "location.lat", "location.coordinates.lat", "lat"))
    lng = _as_float(_first(record, "location.lng", "location.coordinates.lng", "lng"))
    # A persisted activity whose location was only estimated carries no real coordinates.
    if _dig(record, "location.estimated") is True:
        lat = lng = None

    return NodeMetadata(
        rating=DEFAULT_RATING if rating is None else rating,
        open=str(open_time) if open_time is not None else None,
        close=str(close_time) if close_time is not None else None,
        address=str(address) if address is not None else DEFAULT_ADDRESS,
        distance_km=_as_float(_first(record, "travel.distanceFromPrevious", "distanceKm", "meta.distanceKm")),
        lat=lat if lng is not None else None,
        lng=lng if lat is not None else None,
    )


def _cost(record: Mapping[str, Any]) -> float:
    raw = _first(record, "cost.pricePerPerson", "cost.amountPerPerson", "cost.amount", "price")
    if raw is None:
        raw = record.get("cost")
    value = _as_float(raw)
    return 0.0 if value is None else value


def activity_to_node(record: Mapping[str, Any], *, node_id: str, index: int) -> WorkflowNode:
    raw_type = _first(record, "type", "category")
    start = _first(record, "timing.startTime", "startTime", "start_time", "start", "time")
    duration = _first(
        record,
        "timing.durationMin",
        "timing.duration",
        "durationMin",
        "duration_minutes",
        "durationMinutes",
        "duration",
    )
    return WorkflowNode(
        id=node_id,
        type=coerce_node_type(raw_type),
        title=str(_first(record, "title", "name") or "Untitled"),
        tags=_tags(record, raw_type),
        start=coerce_start_time(start),
        duration_minutes=coerce_duration(duration),
        cost=_cost(record),
        position=grid_position(index),
        metadata=_metadata(record),
    )


def _activities(day: Mapping[str, Any]) -> list[Any]:
    for key in _DAY_CONTAINER_KEYS:
        rows = day.get(key)
        if isinstance(rows, list):
            return rows
    return []


def _unique_id(raw: Any, *, day_number: int, index: int, seen: set[str]) -> str:
    candidate = str(raw).strip() if raw is not None else ""
    if not candidate or candidate in seen:
        base = f"day{day_number}-node{index}"
        candidate = base
        suffix = 1
        while candidate in seen:
            suffix += 1
            candidate = f"{base}-{suffix}"
    seen.add(candidate)
    return candidate


def _day_number(day: Mapping[str, Any], fallback: int) -> int:
    raw = _first(day, "dayNumber", "day_number", "day")
    try:
        number = int(raw)
    except (TypeError, ValueError):
        return fallback
    return number if number > 0 else fallback


def _convert_day(day: Any, day_index: int) -> WorkflowDay:
    if not isinstance(day, Mapping):
        return WorkflowDay(day_number=day_index + 1)

    day_number = _day_number(day, day_index + 1)
    seen: set[str] = set()
    nodes: list[WorkflowNode] = []
    for index, record in enumerate(_activities(day)):
        if not isinstance(record, Mapping):
            _logger.warning("Skipping non-mapping activity day=%s index=%s", day_number, index)
            continue
        node_id = _unique_id(record.get("id"), day_number=day_number, index=index, seen=seen)
        try:
            node = activity_to_node(record, node_id=node_id, index=len(nodes))
        except Exception as exc:
            _logger.warning("Activity degraded to defaults day=%s id=%s: %s", day_number, node_id, exc)
            node = WorkflowNode(id=node_id, position=grid_position(len(nodes)))
        nodes.append(node)

    edges = [
        WorkflowEdge(id=f"e{day_number}-{i}", source=nodes[i].id, target=nodes[i + 1].id)
        for i in range(len(nodes) - 1)
    ]
    date = day.get("date")
    return WorkflowDay(day_number=day_number, date=str(date) if date else None, nodes=nodes, edges=edges)


def _trip_days(trip: Any) -> list[Any]:
    if not isinstance(trip, Mapping):
        return []
    itinerary = trip.get("itinerary")
    if isinstance(itinerary, Mapping) and isinstance(itinerary.get("days"), list):
        return itinerary["days"]
    if isinstance(trip.get("days"), list):
        return trip["days"]
    return []


def build_workflow_days(trip: Mapping[str, Any] | None) -> GraphLoad:
    """Convert a trip payload into one day graph per itinerary day.

    Returns ``LoadStatus.EMPTY`` with no days when the trip has no itinerary
    days or no day holds a single activity; callers decide what to show then.
    """
    raw_days = _trip_days(trip)
    days = [_convert_day(day, index) for index, day in enumerate(raw_days)]
    if not any(day.nodes for day in days):
        return GraphLoad(status=LoadStatus.EMPTY, days=[])
    return GraphLoad(status=LoadStatus.READY, days=days)


__all__ = [
    "activity_to_node",
    "build_workflow_days",
    "coerce_duration",
    "coerce_node_type",
    "coerce_start_time",
    "grid_position",
]
