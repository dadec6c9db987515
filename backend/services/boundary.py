"""Boundary vertex extraction from user-drawn rectangles.

The boundary canvas produces an ordered list of axis-aligned rectangles.
This module turns that list into the set of vertices lying on the outer
(and inner) boundary of their union:

1. corner enumeration (exact dedup)
2. pairwise edge intersection (16 edge pairs per rectangle pair)
3. tolerance dedup over corners + intersections
4. removal of points strictly inside any rectangle

The result is an unordered vertex set, not a polygon. ``union_polygon``
builds the traversal-ordered outline with Shapely for callers that need one.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from shapely.geometry import MultiPolygon, Polygon, box
from shapely.ops import unary_union

logger = logging.getLogger(__name__)

POINT_TOLERANCE = 1e-10


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned rectangle, ``(x, y)`` is the top-left corner (y grows down)."""
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def from_any(cls, value) -> "Rectangle":
        """Build from a Rectangle, a ``{x, y, width, height}`` mapping or any
        object exposing those attributes."""
        if isinstance(value, cls):
            return value
        if isinstance(value, dict):
            return cls(
                float(value["x"]), float(value["y"]),
                float(value["width"]), float(value["height"]),
            )
        return cls(
            float(value.x), float(value.y),
            float(value.width), float(value.height),
        )

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def corners(self) -> List[Point]:
        """Top-left, top-right, bottom-left, bottom-right."""
        return [
            Point(self.x, self.y),
            Point(self.right, self.y),
            Point(self.x, self.bottom),
            Point(self.right, self.bottom),
        ]

    def edges(self) -> List[Tuple[Point, Point]]:
        """Top, right, bottom, left, each traversed clockwise on screen."""
        tl = Point(self.x, self.y)
        tr = Point(self.right, self.y)
        br = Point(self.right, self.bottom)
        bl = Point(self.x, self.bottom)
        return [(tl, tr), (tr, br), (br, bl), (bl, tl)]

    def strictly_contains(self, p: Point) -> bool:
        """True when *p* is inside the rectangle and not on its boundary."""
        return self.x < p.x < self.right and self.y < p.y < self.bottom


def coerce_rectangles(rectangles) -> List[Rectangle]:
    """
    Normalise caller input into a list of Rectangles.

    Anything that is not a list or tuple is treated as "no rectangles".
    Entries that cannot be read as a rectangle are skipped.
    """
    if not isinstance(rectangles, (list, tuple)):
        return []

    result = []
    for item in rectangles:
        try:
            result.append(Rectangle.from_any(item))
        except (KeyError, AttributeError, TypeError, ValueError):
            logger.debug("Skipping malformed rectangle entry: %r", item)
    return result


# ---------------------------------------------------------------------------
# Corners
# ---------------------------------------------------------------------------

def enumerate_corners(rectangles: Iterable[Rectangle]) -> List[Point]:
    """Four corners per rectangle, merged only on exact coordinate equality."""
    corners: List[Point] = []
    seen = set()
    for rect in rectangles:
        for corner in rect.corners():
            key = (corner.x, corner.y)
            if key in seen:
                continue
            seen.add(key)
            corners.append(corner)
    return corners


# ---------------------------------------------------------------------------
# Edge intersections
# ---------------------------------------------------------------------------

def segment_intersection(p1: Point, p2: Point, p3: Point, p4: Point) -> Optional[Point]:
    """
    Intersection of the closed segments ``p1-p2`` and ``p3-p4``.

    Parallel and collinear segments (zero denominator) return ``None`` even
    when they overlap. Touching at an endpoint counts as an intersection.
    """
    denom = (p1.x - p2.x) * (p3.y - p4.y) - (p1.y - p2.y) * (p3.x - p4.x)
    if denom == 0:
        return None

    t = ((p1.x - p3.x) * (p3.y - p4.y) - (p1.y - p3.y) * (p3.x - p4.x)) / denom
    u = ((p1.x - p3.x) * (p1.y - p2.y) - (p1.y - p3.y) * (p1.x - p2.x)) / denom

    if 0 <= t <= 1 and 0 <= u <= 1:
        return Point(p1.x + t * (p2.x - p1.x), p1.y + t * (p2.y - p1.y))
    return None


def find_edge_intersections(rectangles: List[Rectangle]) -> List[Point]:
    """
    Every edge/edge crossing between each pair of rectangles, in pair order.

    Duplicates are kept; they are resolved by ``dedupe_points``.
    """
    points: List[Point] = []
    edges = [rect.edges() for rect in rectangles]
    for i in range(len(rectangles)):
        for j in range(i + 1, len(rectangles)):
            for a1, a2 in edges[i]:
                for b1, b2 in edges[j]:
                    hit = segment_intersection(a1, a2, b1, b2)
                    if hit is not None:
                        points.append(hit)
    return points


# ---------------------------------------------------------------------------
# Dedup / elimination
# ---------------------------------------------------------------------------

def check_tolerance(tolerance: float) -> float:
    """Return *tolerance* if it is a positive finite number, else raise ValueError."""
    if not isinstance(tolerance, (int, float)) or not math.isfinite(tolerance) or tolerance <= 0:
        raise ValueError(f"Point tolerance must be a positive number, got {tolerance!r}")
    return tolerance


def points_close(a: Point, b: Point, tolerance: float = POINT_TOLERANCE) -> bool:
    return abs(a.x - b.x) < tolerance and abs(a.y - b.y) < tolerance


def dedupe_points(points: Iterable[Point], tolerance: float = POINT_TOLERANCE) -> List[Point]:
    """Drop points within *tolerance* of an already kept point (first wins)."""
    check_tolerance(tolerance)
    kept: List[Point] = []
    for p in points:
        if not any(points_close(p, q, tolerance) for q in kept):
            kept.append(p)
    return kept


def remove_interior_points(points: Iterable[Point], rectangles: List[Rectangle]) -> List[Point]:
    """Drop points strictly inside any rectangle; boundary points are kept."""
    return [
        p for p in points
        if not any(rect.strictly_contains(p) for rect in rectangles)
    ]


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def extract_boundary_vertices(rectangles, tolerance: float = POINT_TOLERANCE) -> List[Point]:
    """
    Vertices on the boundary of the union of *rectangles*.

    Args:
        rectangles: sequence of Rectangles or ``{x, y, width, height}``
            mappings. Widths and heights are expected to be non-negative
            already. Non-list input yields an empty result.
        tolerance: coordinate tolerance for merging near-duplicate points.
            Must be positive.

    Returns:
        Unordered list of Points; empty only when there are no rectangles.

    Raises:
        ValueError: if *tolerance* is not a positive finite number.
    """
    check_tolerance(tolerance)
    rects = coerce_rectangles(rectangles)
    if not rects:
        return []

    points = enumerate_corners(rects)
    points.extend(find_edge_intersections(rects))
    points = dedupe_points(points, tolerance)
    vertices = remove_interior_points(points, rects)

    logger.debug(
        "Extracted %d boundary vertices from %d rectangles",
        len(vertices), len(rects),
    )
    return vertices


def extract_boundary_vertices_as_dicts(rectangles, tolerance: float = POINT_TOLERANCE) -> List[dict]:
    """``extract_boundary_vertices`` serialised to ``{x, y}`` records."""
    return [p.to_dict() for p in extract_boundary_vertices(rectangles, tolerance)]


# ---------------------------------------------------------------------------
# Union outline (Shapely)
# ---------------------------------------------------------------------------

def union_polygon(rectangles) -> dict:
    """
    Traversal-ordered outline of the rectangle union.

    Zero-area rectangles do not contribute. Disjoint groups come back as
    separate polygons; holes are reported as interiors.
    """
    rects = [r for r in coerce_rectangles(rectangles) if r.width > 0 and r.height > 0]
    if not rects:
        return {"polygons": [], "area": 0.0, "perimeter": 0.0, "num_polygons": 0}

    merged = unary_union([box(r.x, r.y, r.right, r.bottom) for r in rects])
    merged = merged.simplify(0)  # drop collinear vertices left by the union

    if isinstance(merged, MultiPolygon):
        polys = list(merged.geoms)
    elif isinstance(merged, Polygon):
        polys = [merged]
    else:
        polys = [g for g in getattr(merged, "geoms", []) if isinstance(g, Polygon)]

    polygons = []
    for poly in polys:
        polygons.append({
            "exterior": [[round(c[0], 6), round(c[1], 6)] for c in poly.exterior.coords],
            "interiors": [
                [[round(c[0], 6), round(c[1], 6)] for c in ring.coords]
                for ring in poly.interiors
            ],
        })

    return {
        "polygons": polygons,
        "area": round(merged.area, 6),
        "perimeter": round(merged.length, 6),
        "num_polygons": len(polygons),
    }
