"""Domain constants shared by deterministic logic."""

from trip_workflow.domain.enums import NodeType, ValidationStatus

DEFAULT_START = "09:00"
NEW_NODE_START = "12:00"
DEFAULT_DURATION_MINUTES = 120
DEFAULT_RATING = 4.0
DEFAULT_ADDRESS = "Unknown"

# Initial 3-column grid used when a day is first converted.
GRID_COLUMNS = 3
GRID_ORIGIN_X = 200.0
GRID_ORIGIN_Y = 200.0
GRID_COLUMN_WIDTH = 300.0
GRID_ROW_HEIGHT = 200.0

# Chronological arrangement produced by auto layout.
LAYOUT_ORIGIN_X = 150.0
LAYOUT_ORIGIN_Y = 200.0
LAYOUT_STEP_X = 280.0
LAYOUT_STAGGER_Y = 180.0

# Case-insensitive activity type lookup; unknown strings fall back to Attraction.
ACTIVITY_TYPE_ALIASES = {
    "attraction": NodeType.ATTRACTION,
    "activity": NodeType.ATTRACTION,
    "sightseeing": NodeType.ATTRACTION,
    "restaurant": NodeType.MEAL,
    "meal": NodeType.MEAL,
    "food": NodeType.MEAL,
    "hotel": NodeType.HOTEL,
    "accommodation": NodeType.HOTEL,
    "transport": NodeType.TRANSIT,
    "transportation": NodeType.TRANSIT,
    "transit": NodeType.TRANSIT,
    "freetime": NodeType.FREE_TIME,
    "free_time": NodeType.FREE_TIME,
    "decision": NodeType.DECISION,
}

NEW_NODE_DEFAULTS = {
    NodeType.ATTRACTION: ("New Attraction", 120),
    NodeType.MEAL: ("New Restaurant", 60),
    NodeType.TRANSIT: ("Transportation", 60),
    NodeType.HOTEL: ("Hotel Stay", 120),
    NodeType.FREE_TIME: ("Free Time", 60),
    NodeType.DECISION: ("Decision Point", 60),
}

STATUS_RANK = {
    ValidationStatus.VALID: 0,
    ValidationStatus.WARNING: 1,
    ValidationStatus.ERROR: 2,
}

ALWAYS_OPEN = {"24/7", "24h", "always"}
