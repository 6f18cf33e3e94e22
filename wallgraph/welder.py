"""Snap near-duplicate vertices onto one canonical representative."""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Tuple

from .geometry import Point, Segment
from .tolerance import Tolerance, resolve_tolerance
from .validate import prepare_segments

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]


class PointIndex:
    """Spatial hash of canonical vertices.

    Points are bucketed on a grid whose cell is at least ``epsilon`` wide, so
    every point within ``epsilon`` of a query sits in the query's cell or one
    of its eight neighbours.  The match itself is decided by the tolerance,
    which keeps hashing and equality consistent at cell borders.
    """

    def __init__(self, tolerance: Tolerance, grid: float = 1e-4):
        self.tolerance = tolerance
        self.cell_size = max(float(grid), tolerance.epsilon)
        self._cells: Dict[Cell, List[int]] = {}
        self.vertices: List[Point] = []

    def __len__(self) -> int:
        return len(self.vertices)

    def _cell(self, point: Point) -> Cell:
        return (math.floor(point.x / self.cell_size), math.floor(point.y / self.cell_size))

    def find(self, point: Point) -> int:
        """Return the id of the first vertex equal to ``point`` or ``-1``."""

        cx, cy = self._cell(point)
        best = -1
        for dx in (-1, 0, 1):
            for dy in (-1, 0, 1):
                for vid in self._cells.get((cx + dx, cy + dy), ()):
                    if (best < 0 or vid < best) and self.tolerance.points_equal(self.vertices[vid], point):
                        best = vid
        return best

    def vertex_id(self, point: Point) -> int:
        vid = self.find(point)
        if vid >= 0:
            return vid
        vid = len(self.vertices)
        self.vertices.append(point)
        self._cells.setdefault(self._cell(point), []).append(vid)
        return vid

    def canonical(self, point: Point) -> Point:
        return self.vertices[self.vertex_id(point)]


def weld_vertices(
    segments: Iterable[object],
    *,
    tolerance: "Tolerance | float | None" = None,
    grid: float = 1e-4,
) -> List[Segment]:
    """Remap every endpoint onto the first-seen vertex within tolerance.

    Segments that collapse onto a single vertex are dropped.
    """

    tol = resolve_tolerance(tolerance)
    prepared = prepare_segments(segments, tol)
    index = PointIndex(tol, grid)
    welded: List[Segment] = []
    collapsed = 0
    for seg in prepared:
        start = index.canonical(seg.start)
        end = index.canonical(seg.end)
        if start == end:
            collapsed += 1
            continue
        if start is seg.start and end is seg.end:
            welded.append(seg)
        else:
            welded.append(seg.with_endpoints(start, end))

    logger.debug(
        "Welded %d segment(s) onto %d vertex(es); %d collapsed",
        len(prepared),
        len(index),
        collapsed,
    )
    return welded


__all__ = ["PointIndex", "weld_vertices"]
