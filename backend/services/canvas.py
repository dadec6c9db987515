"""Boundary canvas: the ordered rectangle list and its drag-to-draw input.

The canvas is the only owner of the rectangle list. A drag goes
``idle -> drawing -> idle``; the rectangle is committed when the pointer is
released or leaves the canvas, so no half-drawn rectangle survives.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from services.boundary import Point, Rectangle, extract_boundary_vertices

logger = logging.getLogger(__name__)


class DrawState(Enum):
    IDLE = "idle"
    DRAWING = "drawing"


def normalize_rectangle(x0: float, y0: float, x1: float, y1: float) -> Rectangle:
    """Rectangle spanned by two drag points, with non-negative size."""
    return Rectangle(
        x=min(x0, x1),
        y=min(y0, y1),
        width=abs(x1 - x0),
        height=abs(y1 - y0),
    )


class BoundaryCanvas:
    """Holds the drawn rectangles and tracks the current drag."""

    def __init__(self, rectangles: Optional[List[Rectangle]] = None):
        self._rectangles: List[Rectangle] = [Rectangle.from_any(r) for r in (rectangles or [])]
        self.state = DrawState.IDLE
        self._start: Optional[Tuple[float, float]] = None
        self.preview: Optional[Rectangle] = None

    @property
    def rectangles(self) -> List[Rectangle]:
        """Snapshot of the rectangle list in draw order."""
        return list(self._rectangles)

    def add_rectangle(self, rect) -> Rectangle:
        rect = Rectangle.from_any(rect)
        self._rectangles.append(rect)
        logger.debug("Committed boundary rectangle %s (total %d)", rect, len(self._rectangles))
        return rect

    def clear(self) -> None:
        self._rectangles = []
        self._reset_drag()

    def vertices(self) -> List[Point]:
        return extract_boundary_vertices(self._rectangles)

    # -- pointer events --------------------------------------------------

    def press(self, x: float, y: float) -> None:
        self.state = DrawState.DRAWING
        self._start = (x, y)
        self.preview = normalize_rectangle(x, y, x, y)

    def move(self, x: float, y: float) -> Optional[Rectangle]:
        """Update the translucent preview; nothing is committed."""
        if self.state is not DrawState.DRAWING:
            return None
        self.preview = normalize_rectangle(self._start[0], self._start[1], x, y)
        return self.preview

    def release(self, x: float, y: float) -> Optional[Rectangle]:
        """Finish the drag and commit the rectangle. Ignored while idle."""
        if self.state is not DrawState.DRAWING:
            return None
        rect = normalize_rectangle(self._start[0], self._start[1], x, y)
        self._reset_drag()
        return self.add_rectangle(rect)

    def leave(self, x: float, y: float) -> Optional[Rectangle]:
        """Pointer left the canvas mid-drag: commit like a release."""
        return self.release(x, y)

    def _reset_drag(self) -> None:
        self.state = DrawState.IDLE
        self._start = None
        self.preview = None
