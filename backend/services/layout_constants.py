"""
Centralized Layout Constants — single source of truth for room categories.

Each room category tag maps to:
  - the integer class id understood by the layout generation backend
  - the display colour used by the connectivity graph

The set is closed; unknown tags are rejected rather than added on the fly.
"""

from enum import Enum
from typing import Dict, List

from config import CANVAS_HEIGHT, CANVAS_WIDTH

# Graph surface the room nodes are scattered on (same size as the boundary canvas)
GRAPH_WIDTH = CANVAS_WIDTH
GRAPH_HEIGHT = CANVAS_HEIGHT

# Drag-to-connect hit radius around a room node centre
NODE_HIT_RADIUS = 20


class RoomCategory(Enum):
    """Room tag -> (generator class id, display colour)."""

    LIVING_ROOM = ("living_room", 1, "#FF6B6B")
    KITCHEN = ("kitchen", 2, "#4ECDC4")
    BEDROOM = ("bedroom", 3, "#45B7D1")
    BATHROOM = ("bathroom", 4, "#66D7D1")
    BALCONY = ("balcony", 5, "#95E1D3")
    ENTRANCE = ("entrance", 6, "#FCE38A")
    DINING_ROOM = ("dining room", 7, "#F38181")
    STUDY_ROOM = ("study room", 8, "#A8D8EA")
    STORAGE = ("storage", 10, "#AA96DA")
    FRONT_DOOR = ("front door", 11, "#FCBAD3")
    INTERIOR_DOOR = ("interior_door", 12, "#E3FDFD")
    UNKNOWN = ("unknown", 13, "#FFFFD2")

    def __init__(self, tag: str, class_id: int, color: str):
        self.tag = tag
        self.class_id = class_id
        self.color = color

    @classmethod
    def from_tag(cls, tag: str) -> "RoomCategory":
        for category in cls:
            if category.tag == tag:
                return category
        raise ValueError(
            f"Unknown room type '{tag}'. Available: {[c.tag for c in cls]}"
        )


ROOM_CLASS: Dict[str, int] = {c.tag: c.class_id for c in RoomCategory}
ROOM_COLORS: Dict[str, str] = {c.tag: c.color for c in RoomCategory}


def room_class(tag: str) -> int:
    """Integer class id for a room tag."""
    if tag not in ROOM_CLASS:
        RoomCategory.from_tag(tag)  # raises with the list of known tags
    return ROOM_CLASS[tag]


def room_color(tag: str) -> str:
    """Display colour for a room tag."""
    if tag not in ROOM_COLORS:
        RoomCategory.from_tag(tag)
    return ROOM_COLORS[tag]


def list_categories() -> List[Dict]:
    """Category table in class-id order, for the frontend room picker."""
    return [
        {"type": tag, "class_id": room_class(tag), "color": room_color(tag)}
        for tag in sorted(ROOM_CLASS, key=ROOM_CLASS.get)
    ]
