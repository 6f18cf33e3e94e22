"""Point/segment value types and the small vector helpers built on them."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Hashable, Literal, Optional, Sequence, Tuple

from .tolerance import Tolerance

Coord = Tuple[float, float]
IntersectionKind = Literal["corner", "t_junction", "crossing", "overlap"]

INTERSECTION_KINDS: Tuple[IntersectionKind, ...] = ("corner", "t_junction", "crossing", "overlap")


@dataclass(frozen=True, order=True)
class Point:
    """Immutable 2D coordinate.

    ``==`` and ``hash`` are exact; geometric comparisons go through
    :class:`~wallgraph.tolerance.Tolerance`.  Exact equality is only relied on
    for welded vertices, which share one canonical representative.
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    def as_tuple(self) -> Coord:
        return (self.x, self.y)

    def almost_equals(self, other: "Point", tolerance: Tolerance) -> bool:
        return tolerance.points_equal(self, other)

    def __str__(self) -> str:
        return f"({self.x:.3f}, {self.y:.3f})"


def _as_point(value: object) -> Point:
    if isinstance(value, Point):
        return value
    x, y = value  # type: ignore[misc]
    return Point(x, y)


@dataclass(frozen=True)
class Segment:
    """Line segment canonicalised so that ``start <= end`` (x, then y).

    The order is the raw lexicographic one, not the tolerance comparison:
    it is a total order, and it is the order of the sweep-line event heap, so
    a segment's left event always precedes its right event.  For a segment
    whose x values differ by less than epsilon, ``start`` may therefore be
    the upper endpoint.

    ``source`` is an optional caller tag (wall id, layer name, ...).  It is
    carried through splitting and welding and ignored by equality.
    """

    start: Point
    end: Point
    source: Optional[Hashable] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        start = _as_point(self.start)
        end = _as_point(self.end)
        if (end.x, end.y) < (start.x, start.y):
            start, end = end, start
        object.__setattr__(self, "start", start)
        object.__setattr__(self, "end", end)

    @classmethod
    def from_coords(
        cls, x1: float, y1: float, x2: float, y2: float, source: Optional[Hashable] = None
    ) -> "Segment":
        return cls(Point(x1, y1), Point(x2, y2), source)

    @property
    def min_x(self) -> float:
        return min(self.start.x, self.end.x)

    @property
    def max_x(self) -> float:
        return max(self.start.x, self.end.x)

    @property
    def min_y(self) -> float:
        return min(self.start.y, self.end.y)

    @property
    def max_y(self) -> float:
        return max(self.start.y, self.end.y)

    @property
    def direction(self) -> Coord:
        return (self.end.x - self.start.x, self.end.y - self.start.y)

    @property
    def length(self) -> float:
        dx, dy = self.direction
        return math.hypot(dx, dy)

    def is_degenerate(self, tolerance: Tolerance) -> bool:
        return tolerance.points_equal(self.start, self.end)

    def has_endpoint(self, point: Point, tolerance: Tolerance) -> bool:
        return tolerance.points_equal(point, self.start) or tolerance.points_equal(point, self.end)

    def point_at(self, t: float) -> Point:
        dx, dy = self.direction
        return Point(self.start.x + t * dx, self.start.y + t * dy)

    def y_at(self, x: float, tolerance: Tolerance) -> float:
        """Return the y value at ``x``, clamped to the segment's x range.

        Vertical segments have no single y at their own x; they report the
        lower endpoint, callers clamp further when needed.
        """

        dx = self.end.x - self.start.x
        if tolerance.is_zero(dx):
            return self.start.y
        t = (x - self.start.x) / dx
        t = min(1.0, max(0.0, t))
        return self.start.y + t * (self.end.y - self.start.y)

    def with_endpoints(self, start: Point, end: Point) -> "Segment":
        """Return a new segment with the same ``source`` tag."""

        return Segment(start, end, self.source)

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class IntersectionResult:
    """One contact between two segments.

    For ``kind == "overlap"`` the shared collinear range runs from ``point``
    to ``overlap_end``; every other kind is a single point.
    """

    point: Point
    segment_a: Segment
    segment_b: Segment
    kind: IntersectionKind
    overlap_end: Optional[Point] = None

    @property
    def points(self) -> Tuple[Point, ...]:
        if self.overlap_end is None:
            return (self.point,)
        return (self.point, self.overlap_end)


def squared_distance(p: Point, q: Point) -> float:
    dx = p.x - q.x
    dy = p.y - q.y
    return dx * dx + dy * dy


def distance_to_segment(p: Point, segment: Segment) -> float:
    dx, dy = segment.direction
    len_sq = dx * dx + dy * dy
    if len_sq <= 0.0:
        return math.sqrt(squared_distance(p, segment.start))
    t = ((p.x - segment.start.x) * dx + (p.y - segment.start.y) * dy) / len_sq
    t = min(1.0, max(0.0, t))
    return math.sqrt(squared_distance(p, segment.point_at(t)))


def point_on_segment(p: Point, segment: Segment, tolerance: Tolerance) -> bool:
    """Return ``True`` when ``p`` lies on ``segment`` within ``tolerance``."""

    if segment.is_degenerate(tolerance):
        return tolerance.points_equal(p, segment.start)
    return distance_to_segment(p, segment) < tolerance.epsilon


def point_in_polygon(p: Point, polygon: Sequence[Point]) -> bool:
    """Even-odd ray casting test; boundary points may go either way."""

    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        pi = polygon[i]
        pj = polygon[j]
        if (pi.y > p.y) != (pj.y > p.y):
            x_cross = (pj.x - pi.x) * (p.y - pi.y) / (pj.y - pi.y) + pi.x
            if p.x < x_cross:
                inside = not inside
        j = i
    return inside


__all__ = [
    "Coord",
    "INTERSECTION_KINDS",
    "IntersectionKind",
    "IntersectionResult",
    "Point",
    "Segment",
    "distance_to_segment",
    "point_in_polygon",
    "point_on_segment",
    "squared_distance",
]
