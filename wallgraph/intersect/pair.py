"""Exact evaluation and classification of a single segment pair."""

from __future__ import annotations

import math
from typing import Optional

from ..geometry import IntersectionKind, IntersectionResult, Point, Segment
from ..tolerance import Tolerance


def boxes_overlap(a: Segment, b: Segment, tolerance: Tolerance) -> bool:
    """Axis-aligned bounding-box test with epsilon slack."""

    eps = tolerance.epsilon
    return not (
        a.max_x < b.min_x - eps
        or a.min_x > b.max_x + eps
        or a.max_y < b.min_y - eps
        or a.min_y > b.max_y + eps
    )


def classify_contact(point: Point, a: Segment, b: Segment, tolerance: Tolerance) -> IntersectionKind:
    on_end_a = a.has_endpoint(point, tolerance)
    on_end_b = b.has_endpoint(point, tolerance)
    if on_end_a and on_end_b:
        return "corner"
    if on_end_a or on_end_b:
        return "t_junction"
    return "crossing"


def _snap_to_endpoint(point: Point, a: Segment, b: Segment, tolerance: Tolerance) -> Point:
    for candidate in (a.start, a.end, b.start, b.end):
        if tolerance.points_equal(point, candidate):
            return candidate
    return point


def _single_contact(point: Point, a: Segment, b: Segment, tolerance: Tolerance) -> IntersectionResult:
    point = _snap_to_endpoint(point, a, b, tolerance)
    return IntersectionResult(point, a, b, classify_contact(point, a, b, tolerance))


def _collinear_contact(a: Segment, b: Segment, tolerance: Tolerance) -> Optional[IntersectionResult]:
    dx, dy = a.direction
    len_sq = dx * dx + dy * dy
    length = math.sqrt(len_sq)
    if length <= 0.0:
        return None

    eps = tolerance.epsilon
    for p in (b.start, b.end):
        offset = (p.x - a.start.x) * dy - (p.y - a.start.y) * dx
        if abs(offset) / length >= eps:
            return None

    t0 = ((b.start.x - a.start.x) * dx + (b.start.y - a.start.y) * dy) / len_sq
    t1 = ((b.end.x - a.start.x) * dx + (b.end.y - a.start.y) * dy) / len_sq
    lo = max(0.0, min(t0, t1))
    hi = min(1.0, max(t0, t1))
    shared = (hi - lo) * length
    if shared < -eps:
        return None
    if shared <= eps:
        mid = min(1.0, max(0.0, 0.5 * (lo + hi)))
        return _single_contact(a.point_at(mid), a, b, tolerance)

    near = _snap_to_endpoint(a.point_at(lo), a, b, tolerance)
    far = _snap_to_endpoint(a.point_at(hi), a, b, tolerance)
    return IntersectionResult(near, a, b, "overlap", overlap_end=far)


def intersect_segments(a: Segment, b: Segment, tolerance: Tolerance) -> Optional[IntersectionResult]:
    """Return the contact between ``a`` and ``b`` or ``None``.

    Uses the determinant form ``ua``/``ub``.  When the determinant vanishes
    the pair is parallel; collinear pairs are then reported as an overlap
    (or a single touching point), any other parallel pair as no contact.
    """

    x1, y1 = a.start.x, a.start.y
    x2, y2 = a.end.x, a.end.y
    x3, y3 = b.start.x, b.start.y
    x4, y4 = b.end.x, b.end.y

    denom = (y4 - y3) * (x2 - x1) - (x4 - x3) * (y2 - y1)
    if tolerance.is_zero(denom):
        return _collinear_contact(a, b, tolerance)

    ua = ((x4 - x3) * (y1 - y3) - (y4 - y3) * (x1 - x3)) / denom
    ub = ((x2 - x1) * (y1 - y3) - (y2 - y1) * (x1 - x3)) / denom

    if not (
        tolerance.greater_or_equal(ua, 0.0)
        and tolerance.less_or_equal(ua, 1.0)
        and tolerance.greater_or_equal(ub, 0.0)
        and tolerance.less_or_equal(ub, 1.0)
    ):
        return None

    point = Point(x1 + ua * (x2 - x1), y1 + ua * (y2 - y1))
    return _single_contact(point, a, b, tolerance)


__all__ = ["boxes_overlap", "classify_contact", "intersect_segments"]
