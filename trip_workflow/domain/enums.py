"""Domain enums."""

from enum import Enum


class NodeType(str, Enum):
    ATTRACTION = "Attraction"
    MEAL = "Meal"
    TRANSIT = "Transit"
    HOTEL = "Hotel"
    FREE_TIME = "FreeTime"
    DECISION = "Decision"


class ValidationStatus(str, Enum):
    VALID = "valid"
    WARNING = "warning"
    ERROR = "error"


class LoadStatus(str, Enum):
    READY = "ready"
    EMPTY = "empty"
