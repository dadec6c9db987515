"""Boundary vertex extraction: corners, crossings, dedup and interior removal."""
import copy
import itertools

import pytest

from services.boundary import (
    Point,
    Rectangle,
    dedupe_points,
    enumerate_corners,
    extract_boundary_vertices,
    extract_boundary_vertices_as_dicts,
    find_edge_intersections,
    remove_interior_points,
    segment_intersection,
    union_polygon,
)


def rect(x, y, w, h):
    return {"x": x, "y": y, "width": w, "height": h}


def as_set(points, ndigits=9):
    return {(round(p.x, ndigits), round(p.y, ndigits)) for p in points}


# ── Shapes ───────────────────────────────────────────────────────
SQUARE = [rect(0, 0, 10, 10)]
DISJOINT = [rect(0, 0, 2, 2), rect(5, 7, 3, 1)]
NESTED = [rect(0, 0, 10, 10), rect(2, 2, 2, 2)]
CROSS = [rect(0, 2, 8, 4), rect(2, 0, 4, 8)]
L_OVERLAP = [rect(0, 0, 10, 10), rect(5, 5, 10, 10)]
FLUSH_T = [rect(0, 0, 10, 10), rect(10, 2, 5, 4)]
RING = [rect(0, 0, 9, 3), rect(0, 6, 9, 3), rect(0, 0, 3, 9), rect(6, 0, 3, 9)]
# CROSS with a third rectangle covering the four crossings of the first two
CROSS_COVERED = CROSS + [rect(1, 1, 6, 6)]


# ── Segment intersection ─────────────────────────────────────────

def test_crossing_segments():
    hit = segment_intersection(Point(0, 2), Point(8, 2), Point(6, 0), Point(6, 8))
    assert hit == Point(6, 2)


def test_touching_at_endpoint_counts():
    hit = segment_intersection(Point(0, 0), Point(10, 0), Point(10, 0), Point(10, 10))
    assert hit == Point(10, 0)


def test_segments_apart_do_not_intersect():
    assert segment_intersection(Point(0, 0), Point(1, 0), Point(5, -1), Point(5, 1)) is None


def test_collinear_overlap_is_ignored():
    assert segment_intersection(Point(0, 0), Point(10, 0), Point(5, 0), Point(15, 0)) is None


def test_parallel_segments_are_ignored():
    assert segment_intersection(Point(0, 0), Point(10, 0), Point(0, 1), Point(10, 1)) is None


# ── Building blocks ──────────────────────────────────────────────

def test_rectangle_edges_order():
    edges = Rectangle(1, 2, 3, 4).edges()
    assert edges == [
        (Point(1, 2), Point(4, 2)),
        (Point(4, 2), Point(4, 6)),
        (Point(4, 6), Point(1, 6)),
        (Point(1, 6), Point(1, 2)),
    ]


def test_corner_enumeration_uses_exact_equality():
    rects = [Rectangle(0, 0, 1, 1), Rectangle(1e-12, 0, 1, 1)]
    # near-identical corners are kept apart at this stage
    assert len(enumerate_corners(rects)) == 8
    # the tolerance pass merges them in the final output
    assert as_set(extract_boundary_vertices(rects)) == {(0, 0), (1, 0), (0, 1), (1, 1)}


def test_corner_enumeration_merges_shared_corners():
    rects = [Rectangle(0, 0, 5, 5), Rectangle(5, 0, 5, 5)]
    assert len(enumerate_corners(rects)) == 6


def test_flush_edges_only_cross_perpendicular_sides():
    rects = [Rectangle.from_any(r) for r in FLUSH_T]
    assert find_edge_intersections(rects) == [Point(10, 2), Point(10, 6)]


def test_dedupe_first_occurrence_wins():
    points = [Point(1, 1), Point(1 + 1e-12, 1), Point(2, 2), Point(1, 1)]
    assert dedupe_points(points) == [Point(1, 1), Point(2, 2)]


def test_dedupe_respects_custom_tolerance():
    points = [Point(0, 0), Point(0.05, 0)]
    assert len(dedupe_points(points)) == 2
    assert len(dedupe_points(points, tolerance=0.1)) == 1


@pytest.mark.parametrize("tolerance", [0, -1e-10, float("nan"), float("inf")])
def test_non_positive_tolerance_is_rejected(tolerance):
    with pytest.raises(ValueError):
        dedupe_points([Point(0, 0), Point(0, 0)], tolerance=tolerance)
    with pytest.raises(ValueError):
        extract_boundary_vertices([rect(0, 0, 10, 10), rect(0, 0, 10, 10)], tolerance=tolerance)
    with pytest.raises(ValueError):
        extract_boundary_vertices([], tolerance=tolerance)


def test_identical_rectangles_give_four_vertices():
    vertices = extract_boundary_vertices([rect(0, 0, 10, 10), rect(0, 0, 10, 10)])
    assert len(vertices) == 4


def test_boundary_points_are_not_interior():
    rects = [Rectangle(0, 0, 10, 10)]
    points = [Point(0, 5), Point(10, 10), Point(5, 0), Point(5, 5)]
    assert remove_interior_points(points, rects) == [Point(0, 5), Point(10, 10), Point(5, 0)]


# ── Extraction scenarios ─────────────────────────────────────────

def test_single_rectangle():
    assert as_set(extract_boundary_vertices(SQUARE)) == {(0, 0), (10, 0), (0, 10), (10, 10)}


def test_disjoint_rectangles_keep_all_corners():
    vertices = extract_boundary_vertices(DISJOINT)
    assert len(vertices) == 8
    assert as_set(vertices) == {
        (0, 0), (2, 0), (0, 2), (2, 2),
        (5, 7), (8, 7), (5, 8), (8, 8),
    }


def test_nested_rectangle_is_swallowed():
    assert as_set(extract_boundary_vertices(NESTED)) == {(0, 0), (10, 0), (0, 10), (10, 10)}


def test_cross_shape():
    assert as_set(extract_boundary_vertices(CROSS)) == {
        (0, 2), (8, 2), (0, 6), (8, 6),
        (2, 0), (6, 0), (2, 8), (6, 8),
        (2, 2), (6, 2), (2, 6), (6, 6),
    }


def test_overlap_drops_swallowed_corners():
    assert as_set(extract_boundary_vertices(L_OVERLAP)) == {
        (0, 0), (10, 0), (0, 10),
        (15, 5), (5, 15), (15, 15),
        (10, 5), (5, 10),
    }


def test_flush_edge_junction_comes_from_corners():
    vertices = as_set(extract_boundary_vertices(FLUSH_T))
    assert vertices == {
        (0, 0), (10, 0), (0, 10), (10, 10),
        (10, 2), (15, 2), (10, 6), (15, 6),
    }


def test_ring_keeps_inner_boundary():
    vertices = as_set(extract_boundary_vertices(RING))
    assert {(3, 3), (6, 3), (3, 6), (6, 6)} <= vertices
    assert vertices == {(x, y) for x in (0, 3, 6, 9) for y in (0, 3, 6, 9)}


def test_third_rectangle_swallows_crossings():
    swallowed = {(2, 2), (6, 2), (2, 6), (6, 6)}
    rects = [Rectangle.from_any(r) for r in CROSS_COVERED]
    assert swallowed <= as_set(find_edge_intersections(rects))

    vertices = as_set(extract_boundary_vertices(CROSS_COVERED))
    assert not swallowed & vertices
    assert vertices == {
        (0, 2), (8, 2), (0, 6), (8, 6),
        (2, 0), (6, 0), (2, 8), (6, 8),
        (1, 1), (7, 1), (1, 7), (7, 7),
        (1, 2), (7, 2), (1, 6), (7, 6),
        (2, 1), (6, 1), (2, 7), (6, 7),
    }


def test_zero_area_rectangle_collapses_to_one_point():
    assert extract_boundary_vertices([rect(5, 5, 0, 0)]) == [Point(5, 5)]


@pytest.mark.parametrize("bad", [None, "rectangles", 42, rect(0, 0, 1, 1)])
def test_non_list_input_is_empty(bad):
    assert extract_boundary_vertices(bad) == []


def test_empty_input_is_empty():
    assert extract_boundary_vertices([]) == []


def test_malformed_entries_are_skipped():
    assert as_set(extract_boundary_vertices([{"x": 1}, rect(0, 0, 1, 1)])) == {
        (0, 0), (1, 0), (0, 1), (1, 1),
    }


def test_input_is_not_mutated():
    rects = copy.deepcopy(L_OVERLAP)
    extract_boundary_vertices(rects)
    assert rects == L_OVERLAP


def test_rectangle_objects_and_dicts_agree():
    objs = [Rectangle.from_any(r) for r in CROSS]
    assert as_set(extract_boundary_vertices(objs)) == as_set(extract_boundary_vertices(CROSS))


# ── Properties ───────────────────────────────────────────────────

@pytest.mark.parametrize("shape", [SQUARE, DISJOINT, NESTED, CROSS, L_OVERLAP, FLUSH_T, RING, CROSS_COVERED])
def test_idempotent(shape):
    assert as_set(extract_boundary_vertices(shape)) == as_set(extract_boundary_vertices(shape))


@pytest.mark.parametrize("shape", [CROSS, L_OVERLAP, FLUSH_T, RING, CROSS_COVERED])
def test_order_independent(shape):
    expected = as_set(extract_boundary_vertices(shape))
    for perm in itertools.permutations(shape):
        assert as_set(extract_boundary_vertices(list(perm))) == expected


@pytest.mark.parametrize("shape", [SQUARE, DISJOINT, NESTED, CROSS, L_OVERLAP, FLUSH_T, RING, CROSS_COVERED])
def test_no_two_vertices_within_tolerance(shape):
    vertices = extract_boundary_vertices(shape)
    for a, b in itertools.combinations(vertices, 2):
        assert not (abs(a.x - b.x) < 1e-10 and abs(a.y - b.y) < 1e-10)


def test_dict_output():
    assert extract_boundary_vertices_as_dicts([rect(5, 5, 0, 0)]) == [{"x": 5.0, "y": 5.0}]


# ── Union outline ────────────────────────────────────────────────

def test_union_single_rectangle():
    result = union_polygon(SQUARE)
    assert result["num_polygons"] == 1
    assert result["area"] == pytest.approx(100)
    assert result["perimeter"] == pytest.approx(40)


def test_union_overlap_area():
    result = union_polygon(L_OVERLAP)
    assert result["num_polygons"] == 1
    assert result["area"] == pytest.approx(175)


def test_union_disjoint_is_two_polygons():
    assert union_polygon(DISJOINT)["num_polygons"] == 2


def test_union_ring_has_hole():
    result = union_polygon(RING)
    assert result["num_polygons"] == 1
    assert len(result["polygons"][0]["interiors"]) == 1
    assert result["area"] == pytest.approx(72)


def test_union_ignores_zero_area():
    assert union_polygon([rect(5, 5, 0, 0)]) == {
        "polygons": [], "area": 0.0, "perimeter": 0.0, "num_polygons": 0,
    }
    assert union_polygon(None)["num_polygons"] == 0
