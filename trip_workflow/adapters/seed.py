"""Fixed three-day demonstration graph shown when a trip has no activities."""

from __future__ import annotations

from trip_workflow.domain.enums import NodeType
from trip_workflow.domain.models import NodeMetadata, Position, WorkflowDay, WorkflowEdge, WorkflowNode

# (slug, type, title, tags, start, minutes, cost, rating, open, close, address, distance_km, x, y)
_SEED_ROWS: tuple[tuple[str, tuple[tuple, ...]], ...] = (
    (
        "2024-03-15",
        (
            ("airport", NodeType.TRANSIT, "Airport Arrival", ("transport", "arrival"), "08:00", 60, 0, 4.0, "24/7", "24/7", "Indira Gandhi International Airport", None, 100, 100),
            ("hotel", NodeType.HOTEL, "Hotel Check-in", ("accommodation", "checkin"), "10:00", 30, 0, 4.2, "24/7", "24/7", "Connaught Place, New Delhi", 15, 350, 100),
            ("cafe", NodeType.MEAL, "Breakfast Cafe", ("cafe", "veg", "breakfast"), "11:00", 45, 600, 4.3, "07:00", "22:00", "Khan Market, New Delhi", 2, 600, 100),
            ("museum", NodeType.ATTRACTION, "National Museum", ("museum", "heritage", "culture"), "13:00", 120, 250, 4.4, "10:00", "18:00", "Janpath, New Delhi", 3, 350, 300),
            ("market", NodeType.ATTRACTION, "Night Market", ("market", "shopping", "local"), "18:00", 180, 1000, 4.1, "17:00", "23:00", "Palika Bazaar, New Delhi", 1, 600, 300),
        ),
    ),
    (
        "2024-03-16",
        (
            ("breakfast", NodeType.MEAL, "Breakfast Cafe", ("cafe", "veg", "breakfast"), "08:30", 45, 500, 4.5, "07:00", "22:00", "Hotel Restaurant", None, 100, 100),
            ("walk", NodeType.ATTRACTION, "Heritage Walk", ("walking", "heritage", "guided"), "10:00", 180, 800, 4.6, "09:00", "17:00", "Old Delhi", 8, 350, 100),
            ("gallery", NodeType.ATTRACTION, "Art Gallery", ("art", "culture", "indoor"), "14:00", 90, 300, 4.2, "10:00", "19:00", "India Gate Area", 5, 600, 100),
            ("dinner", NodeType.MEAL, "Rooftop Dinner", ("dinner", "rooftop", "fine-dining"), "19:00", 120, 2500, 4.7, "18:00", "23:00", "Connaught Place", 3, 350, 300),
        ),
    ),
    (
        "2024-03-17",
        (
            ("transit", NodeType.TRANSIT, "Early Transit", ("transport", "early"), "07:00", 90, 800, 4.0, "24/7", "24/7", "To Hill Station", 45, 100, 100),
            ("trek", NodeType.ATTRACTION, "Hill Trek", ("trekking", "nature", "adventure"), "09:00", 240, 1200, 4.8, "06:00", "18:00", "Hill Station Base", None, 350, 100),
            ("lunch", NodeType.MEAL, "Local Lunch", ("local", "veg", "authentic"), "13:30", 60, 400, 4.3, "11:00", "22:00", "Hill Station Market", None, 600, 100),
            ("park", NodeType.ATTRACTION, "Lakeside Park", ("nature", "relaxation", "scenic"), "15:00", 120, 200, 4.5, "06:00", "20:00", "Lake View Point", 2, 350, 300),
            ("return", NodeType.TRANSIT, "Return to Hotel", ("transport", "return"), "17:30", 90, 800, 4.0, "24/7", "24/7", "Back to Delhi", 45, 600, 300),
        ),
    ),
)


def _seed_node(day_number: int, row: tuple) -> WorkflowNode:
    slug, node_type, title, tags, start, minutes, cost, rating, open_, close, address, distance, x, y = row
    return WorkflowNode(
        id=f"day{day_number}-{slug}",
        type=node_type,
        title=title,
        tags=list(tags),
        start=start,
        duration_minutes=minutes,
        cost=float(cost),
        position=Position(x=x, y=y),
        metadata=NodeMetadata(rating=rating, open=open_, close=close, address=address, distance_km=distance),
    )


def build_seed_days() -> list[WorkflowDay]:
    days: list[WorkflowDay] = []
    for index, (date, rows) in enumerate(_SEED_ROWS):
        day_number = index + 1
        nodes = [_seed_node(day_number, row) for row in rows]
        edges = [
            WorkflowEdge(id=f"e{day_number}-{i + 1}", source=nodes[i].id, target=nodes[i + 1].id)
            for i in range(len(nodes) - 1)
        ]
        days.append(WorkflowDay(day_number=day_number, date=date, nodes=nodes, edges=edges, is_demo=True))
    return days


__all__ = ["build_seed_days"]
