"""Build workflow nodes from map place picks."""

from __future__ import annotations

import uuid
from typing import Optional

from pydantic import BaseModel, Field

from trip_workflow.domain.constants import NEW_NODE_START
from trip_workflow.domain.enums import NodeType
from trip_workflow.domain.models import NodeMetadata, Position, WorkflowNode

_MEAL_TYPES = {"restaurant", "food", "meal_takeaway", "cafe", "bar"}
_MEAL_WORDS = ("restaurant", "cafe", "dining")
_HOTEL_TYPES = {"lodging", "hotel", "accommodation"}
_HOTEL_WORDS = ("hotel", "resort", "inn")
_TRANSIT_TYPES = {"transit_station", "bus_station", "train_station", "airport", "subway_station"}
_TRANSIT_WORDS = ("station", "airport", "terminal")

_PLACE_TYPE_TAGS = {
    "tourist_attraction": ("sightseeing", "culture"),
    "museum": ("culture", "education"),
    "park": ("nature", "outdoor"),
    "shopping_mall": ("shopping", "retail"),
    "restaurant": ("dining", "local"),
    "cafe": ("dining", "coffee"),
    "bar": ("nightlife", "drinks"),
    "lodging": ("accommodation",),
    "transit_station": ("transport",),
    "church": ("religion", "culture"),
    "temple": ("religion", "culture"),
    "mosque": ("religion", "culture"),
    "synagogue": ("religion", "culture"),
    "zoo": ("family", "animals"),
    "aquarium": ("family", "marine"),
    "amusement_park": ("family", "entertainment"),
    "stadium": ("sports", "entertainment"),
    "theater": ("culture", "entertainment"),
    "cinema": ("entertainment", "movies"),
    "library": ("education", "culture"),
    "university": ("education",),
}

# duration minutes, default cost
_PLACE_DEFAULTS = {
    NodeType.MEAL: (60, 500.0),
    NodeType.HOTEL: (480, 2000.0),
    NodeType.TRANSIT: (30, 200.0),
    NodeType.ATTRACTION: (120, 300.0),
}


class PlaceData(BaseModel):
    name: str = Field(min_length=1)
    address: Optional[str] = None
    lat: float
    lng: float
    types: list[str] = Field(default_factory=list)
    rating: Optional[float] = None
    user_rating_count: Optional[int] = None


def determine_node_type(place: PlaceData) -> NodeType:
    types = set(place.types)
    name = place.name.lower()
    if types & _MEAL_TYPES or any(word in name for word in _MEAL_WORDS):
        return NodeType.MEAL
    if types & _HOTEL_TYPES or any(word in name for word in _HOTEL_WORDS):
        return NodeType.HOTEL
    if types & _TRANSIT_TYPES or any(word in name for word in _TRANSIT_WORDS):
        return NodeType.TRANSIT
    return NodeType.ATTRACTION


def place_tags(place: PlaceData) -> list[str]:
    tags: list[str] = []
    for place_type in place.types:
        tags.extend(_PLACE_TYPE_TAGS.get(place_type, ()))
    if place.rating is not None:
        if place.rating >= 4.5:
            tags.append("highly-rated")
        elif place.rating >= 4.0:
            tags.append("well-rated")
    if place.user_rating_count and place.user_rating_count > 100:
        tags.append("popular")
    return list(dict.fromkeys(tags))


def node_from_place(place: PlaceData, *, day_number: int, position: Position) -> WorkflowNode:
    node_type = determine_node_type(place)
    minutes, cost = _PLACE_DEFAULTS[node_type]
    return WorkflowNode(
        id=f"day{day_number}-{uuid.uuid4().hex[:10]}",
        type=node_type,
        title=place.name,
        tags=place_tags(place),
        start=NEW_NODE_START,
        duration_minutes=minutes,
        cost=cost,
        position=position,
        metadata=NodeMetadata(
            rating=place.rating if place.rating is not None else 4.0,
            address=place.address or f"{place.lat:.5f}, {place.lng:.5f}",
            lat=place.lat,
            lng=place.lng,
        ),
    )


__all__ = ["PlaceData", "determine_node_type", "node_from_place", "place_tags"]
