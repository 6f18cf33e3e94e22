"""Directed planar graph with per-vertex angular edge order."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Dict, Hashable, List, Optional, Sequence, Set, Tuple

from ..geometry import Point, Segment, point_on_segment
from ..tolerance import Tolerance
from ..welder import weld_vertices

logger = logging.getLogger(__name__)


def _polar_angle(origin: Point, target: Point) -> float:
    angle = math.atan2(target.y - origin.y, target.x - origin.x)
    # atan2(-0.0, x<0) yields -pi; keep every angle in (-pi, pi].
    if angle <= -math.pi:
        angle += 2.0 * math.pi
    return angle


@dataclass(eq=False)
class DirectedEdge:
    origin: Point
    target: Point
    index: int
    source: Optional[Hashable] = None
    angle: float = field(init=False)
    visited: bool = False

    def __post_init__(self) -> None:
        self.angle = _polar_angle(self.origin, self.target)

    def __repr__(self) -> str:
        return f"DirectedEdge({self.index}: {self.origin}->{self.target})"


class PlanarGraph:
    """Edges live in one list (the arena); vertices map to outgoing edge ids.

    Build once per computation from welded segments; traversal mutates the
    ``visited`` flags, so graphs are not shared between computations.
    """

    def __init__(self, tolerance: Tolerance):
        self.tolerance = tolerance
        self.edges: List[DirectedEdge] = []
        self.outgoing: Dict[Point, List[int]] = {}

    @classmethod
    def from_segments(
        cls, segments: Sequence[Segment], tolerance: Tolerance, grid: float = 1e-4
    ) -> "PlanarGraph":
        graph = cls(tolerance)
        seen: Set[Tuple[Point, Point]] = set()
        duplicates = 0
        for seg in weld_vertices(segments, tolerance=tolerance, grid=grid):
            key = (seg.start, seg.end)
            if key in seen:
                duplicates += 1
                continue
            seen.add(key)
            graph._add_edge(seg.start, seg.end, seg.source)
            graph._add_edge(seg.end, seg.start, seg.source)

        for edge_ids in graph.outgoing.values():
            edge_ids.sort(key=lambda eid: graph.edges[eid].angle)

        if duplicates:
            logger.debug("Skipped %d duplicate wall(s) while building graph", duplicates)
        logger.debug(
            "Planar graph: %d vertex(es), %d directed edge(s)", len(graph.outgoing), len(graph.edges)
        )
        return graph

    def _add_edge(self, origin: Point, target: Point, source: Optional[Hashable]) -> None:
        edge = DirectedEdge(origin, target, len(self.edges), source)
        self.edges.append(edge)
        self.outgoing.setdefault(origin, []).append(edge.index)

    @property
    def vertex_count(self) -> int:
        return len(self.outgoing)

    def reset(self) -> None:
        for edge in self.edges:
            edge.visited = False

    def next_edge(self, incoming: DirectedEdge) -> Optional[DirectedEdge]:
        """Pick the edge leaving ``incoming.target`` that bounds the same face.

        Takes the smallest angle strictly greater than the reversed incoming
        direction, wrapping to the first edge in angular order.
        """

        candidates = self.outgoing.get(incoming.target)
        if not candidates:
            return None
        back = incoming.angle + math.pi
        if back > math.pi:
            back -= 2.0 * math.pi
        threshold = back + self.tolerance.epsilon
        for eid in candidates:
            edge = self.edges[eid]
            if edge.angle > threshold:
                return edge
        return self.edges[candidates[0]]

    def edges_on(self, target: Segment) -> List[DirectedEdge]:
        """Directed edges lying on ``target`` in either direction."""

        tol = self.tolerance
        return [
            edge
            for edge in self.edges
            if point_on_segment(edge.origin, target, tol) and point_on_segment(edge.target, target, tol)
        ]


__all__ = ["DirectedEdge", "PlanarGraph"]
