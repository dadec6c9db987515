"""
Room graph editing and layout serialization.

Rooms and connectivity edges are plain dicts so they serialize straight
into the layout description sent to the generation backend:

  room:  {"id", "x", "y", "type", "number", "size"}
  edge:  {"source", "target", "value"}   value 1 = connected, -1 = not

Every operation returns new lists and leaves its inputs untouched.
"""

import logging
import random
from typing import Dict, List, Optional, Tuple

from services.boundary import POINT_TOLERANCE, extract_boundary_vertices_as_dicts
from services.layout_constants import (
    GRAPH_HEIGHT,
    GRAPH_WIDTH,
    NODE_HIT_RADIUS,
    RoomCategory,
    room_class,
)

logger = logging.getLogger(__name__)

CONNECTED = 1
NOT_CONNECTED = -1


def add_room(
    rooms: List[Dict],
    connectivity: List[Dict],
    room_type: str,
    number: str,
    size: str,
    rng: Optional[random.Random] = None,
) -> Tuple[List[Dict], List[Dict], Dict]:
    """
    Append a room at a random spot on the graph surface.

    The new room gets an unconnected (-1) edge from every existing room so
    the user only has to toggle the ones that matter.

    Returns:
        (rooms, connectivity, new_room)
    """
    if not (room_type and number and size):
        raise ValueError("Room type, number and size are all required")
    RoomCategory.from_tag(room_type)

    rng = rng or random
    new_room = {
        "id": len(rooms),
        "x": rng.random() * GRAPH_WIDTH,
        "y": rng.random() * GRAPH_HEIGHT,
        "type": room_type,
        "number": number,
        "size": size,
    }

    new_edges = [
        {"source": room["id"], "target": new_room["id"], "value": NOT_CONNECTED}
        for room in rooms
    ]
    logger.debug("Added room %s (%s) with %d edges", new_room["id"], room_type, len(new_edges))
    return rooms + [new_room], connectivity + new_edges, new_room


def toggle_connection(connectivity: List[Dict], source: int, target: int) -> List[Dict]:
    """Flip the value of the source->target edge between 1 and -1."""
    updated = []
    found = False
    for edge in connectivity:
        if edge["source"] == source and edge["target"] == target:
            found = True
            edge = {**edge, "value": NOT_CONNECTED if edge["value"] == CONNECTED else CONNECTED}
        updated.append(edge)
    if not found:
        raise ValueError(f"No edge from room {source} to room {target}")
    return updated


def link_rooms(connectivity: List[Dict], source: int, target: int) -> List[Dict]:
    """
    Drag-to-connect: remove an existing source->target edge, otherwise add a
    connected one. Direction matters, target->source is a different edge.
    """
    if source == target:
        raise ValueError("Cannot link a room to itself")

    exists = any(e["source"] == source and e["target"] == target for e in connectivity)
    if exists:
        return [
            e for e in connectivity
            if not (e["source"] == source and e["target"] == target)
        ]
    return connectivity + [{"source": source, "target": target, "value": CONNECTED}]


def room_at_position(x: float, y: float, rooms: List[Dict],
                     radius: float = NODE_HIT_RADIUS) -> Optional[Dict]:
    """First room whose centre is within *radius* on both axes."""
    for room in rooms:
        if abs(room["x"] - x) < radius and abs(room["y"] - y) < radius:
            return room
    return None


def serialize_layout(rooms: List[Dict], connectivity: List[Dict], rectangles,
                     tolerance: float = POINT_TOLERANCE) -> Dict:
    """Layout description consumed by the generation backend."""
    used_types = []
    for room in rooms:
        if room["type"] not in used_types:
            used_types.append(room["type"])

    return {
        "rooms": [dict(r) for r in rooms],
        "connectivity": [dict(e) for e in connectivity],
        "boundary": extract_boundary_vertices_as_dicts(rectangles, tolerance),
        "room_classes": {t: room_class(t) for t in used_types},
    }
