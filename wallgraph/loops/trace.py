"""Face tracing over a :class:`~wallgraph.loops.graph.PlanarGraph`."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Literal, Optional

from .graph import DirectedEdge, PlanarGraph
from .model import Loop

logger = logging.getLogger(__name__)

TraceStatus = Literal["closed", "too_small", "merged", "dead_end", "iteration_cap"]


@dataclass
class TraceOutcome:
    status: TraceStatus
    edges: List[DirectedEdge]
    loop: Optional[Loop] = None


def trace_face(
    graph: PlanarGraph,
    start: DirectedEdge,
    *,
    min_area: float = 1e-3,
    max_iterations: int = 5000,
) -> TraceOutcome:
    """Walk from ``start`` until the face closes or the walk is abandoned.

    Edges are marked visited as they are walked, including on abandoned
    walks.  A walk that runs into an edge visited by another trace is
    discarded, as is one with fewer than three edges or a negligible area.
    """

    path: List[DirectedEdge] = []
    current = start
    for _ in range(max_iterations):
        if current.visited:
            return TraceOutcome("merged", path)
        current.visited = True
        path.append(current)

        nxt = graph.next_edge(current)
        if nxt is None:
            return TraceOutcome("dead_end", path)
        if nxt is start:
            loop = Loop(tuple(edge.origin for edge in path))
            if len(path) < 3 or loop.abs_area <= min_area:
                return TraceOutcome("too_small", path, loop)
            return TraceOutcome("closed", path, loop)
        current = nxt

    logger.warning(
        "Abandoned face trace from %s after %d step(s)", start, max_iterations
    )
    return TraceOutcome("iteration_cap", path)


def trace_all_faces(
    graph: PlanarGraph,
    starts: Optional[List[DirectedEdge]] = None,
    *,
    min_area: float = 1e-3,
    max_iterations: int = 5000,
) -> List[Loop]:
    loops: List[Loop] = []
    rejected = 0
    for edge in graph.edges if starts is None else starts:
        if edge.visited:
            continue
        outcome = trace_face(graph, edge, min_area=min_area, max_iterations=max_iterations)
        if outcome.status == "closed" and outcome.loop is not None:
            loops.append(outcome.loop)
        else:
            rejected += 1
            logger.debug("Discarded trace from %s: %s", edge, outcome.status)
    logger.debug("Traced %d loop(s), discarded %d trace(s)", len(loops), rejected)
    return loops


__all__ = ["TraceOutcome", "TraceStatus", "trace_all_faces", "trace_face"]
