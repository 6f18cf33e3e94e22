"""Cut segments at every point another segment touches them."""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Set, Tuple

from .geometry import Point, Segment, squared_distance
from .intersect import find_intersections
from .logging_utils import debug_log_call
from .tolerance import Tolerance, resolve_tolerance
from .validate import prepare_segments
from .welder import PointIndex

logger = logging.getLogger(__name__)


def _add_cut(cuts: List[Point], point: Point, tolerance: Tolerance) -> None:
    for existing in cuts:
        if tolerance.points_equal(existing, point):
            return
    cuts.append(point)


def split_segment(segment: Segment, cuts: Iterable[Point], tolerance: Tolerance) -> List[Segment]:
    """Split ``segment`` at ``cuts`` (points assumed to lie on it)."""

    interior = [p for p in cuts if not segment.has_endpoint(p, tolerance)]
    points = [segment.start, segment.end, *interior]
    points.sort(key=lambda p: squared_distance(segment.start, p))
    pieces: List[Segment] = []
    current = points[0]
    for nxt in points[1:]:
        if tolerance.points_equal(current, nxt):
            continue
        pieces.append(segment.with_endpoints(current, nxt))
        current = nxt
    return pieces


@debug_log_call(logger, log_result=False)
def split_at_intersections(
    segments: Iterable[object],
    *,
    tolerance: "Tolerance | float | None" = None,
    strategy: str = "brute_force",
    grid: float = 1e-4,
) -> List[Segment]:
    """Return a crossing-free segment set covering the same linework.

    Segments that nothing touches are returned unchanged (same objects).
    Pieces keep their parent's ``source`` tag; collinear overlaps yield the
    shared piece only once.
    """

    tol = resolve_tolerance(tolerance)
    originals = prepare_segments(segments, tol)
    hits = find_intersections(originals, tolerance=tol, strategy=strategy)

    cut_map: Dict[int, List[Point]] = {id(seg): [] for seg in originals}
    for hit in hits:
        for point in hit.points:
            _add_cut(cut_map[id(hit.segment_a)], point, tol)
            _add_cut(cut_map[id(hit.segment_b)], point, tol)

    index = PointIndex(tol, grid)
    seen: Set[Tuple[int, int]] = set()
    result: List[Segment] = []
    duplicates = 0
    for seg in originals:
        cuts = cut_map[id(seg)]
        pieces = split_segment(seg, cuts, tol) if cuts else [seg]
        if len(pieces) == 1:
            pieces = [seg]
        for piece in pieces:
            a = index.vertex_id(piece.start)
            b = index.vertex_id(piece.end)
            key = (a, b) if a <= b else (b, a)
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
            result.append(piece)

    logger.info(
        "Split %d segment(s) at %d intersection(s) into %d piece(s)",
        len(originals),
        len(hits),
        len(result),
    )
    if duplicates:
        logger.debug("Dropped %d duplicate piece(s) from collinear overlaps", duplicates)
    return result


__all__ = ["split_at_intersections", "split_segment"]
