"""Closed-loop (room) extraction from a welded, crossing-free segment set."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ..config import ArrangementOptions, resolve_options
from ..logging_utils import debug_log_call
from ..validate import prepare_segments, require_target
from .classify import classify_by_largest_face, classify_loops
from .graph import DirectedEdge, PlanarGraph
from .model import Loop, LoopClassification, LoopClassifier, signed_area
from .trace import TraceOutcome, trace_all_faces, trace_face

logger = logging.getLogger(__name__)


def _build_graph(segments: Iterable[object], opts: ArrangementOptions) -> PlanarGraph:
    tol = opts.tolerance
    prepared = prepare_segments(segments, tol)
    return PlanarGraph.from_segments(prepared, tol, grid=opts.grid)


@debug_log_call(logger, log_result=False)
def find_all_closed_loops(
    segments: Iterable[object],
    options: Optional[ArrangementOptions] = None,
    *,
    epsilon: Optional[float] = None,
) -> List[Loop]:
    """Trace every face of the graph, rooms and outer boundaries alike."""

    opts = resolve_options(options, epsilon=epsilon)
    graph = _build_graph(segments, opts)
    loops = trace_all_faces(
        graph, min_area=opts.min_loop_area, max_iterations=opts.max_trace_iterations
    )
    logger.info(
        "Traced %d closed loop(s) over %d vertex(es)", len(loops), graph.vertex_count
    )
    return loops


@debug_log_call(logger, log_result=False)
def find_minimal_closed_loops(
    segments: Iterable[object],
    options: Optional[ArrangementOptions] = None,
    *,
    epsilon: Optional[float] = None,
    classifier: LoopClassifier = classify_loops,
) -> List[Loop]:
    """Return the room loops, with the outer boundary filtered out."""

    loops = find_all_closed_loops(segments, options, epsilon=epsilon)
    if not loops:
        return []
    classification = classifier(loops)
    logger.info(
        "Classified %d loop(s): %d room(s), %d boundary",
        len(loops),
        len(classification.rooms),
        len(classification.boundary),
    )
    return list(classification.rooms)


@debug_log_call(logger, log_result=False)
def find_closed_loops_around_segment(
    segments: Iterable[object],
    target: object,
    options: Optional[ArrangementOptions] = None,
    *,
    epsilon: Optional[float] = None,
) -> List[Loop]:
    """Return every loop whose boundary runs along ``target``.

    Edges match when they coincide with ``target`` in either direction or
    are a split piece of it.  No rooms/boundary filtering is applied, so a
    wall on the outside of a plan yields its room and the outer boundary.
    """

    opts = resolve_options(options, epsilon=epsilon)
    target_seg = require_target(target, opts.tolerance)
    graph = _build_graph(segments, opts)
    starts = graph.edges_on(target_seg)
    if not starts:
        logger.info("No edge of the graph lies on %s", target_seg)
        return []
    loops = trace_all_faces(
        graph, starts, min_area=opts.min_loop_area, max_iterations=opts.max_trace_iterations
    )
    logger.info("Found %d loop(s) around %s", len(loops), target_seg)
    return loops


__all__ = [
    "DirectedEdge",
    "Loop",
    "LoopClassification",
    "LoopClassifier",
    "PlanarGraph",
    "TraceOutcome",
    "classify_by_largest_face",
    "classify_loops",
    "find_all_closed_loops",
    "find_closed_loops_around_segment",
    "find_minimal_closed_loops",
    "signed_area",
    "trace_all_faces",
    "trace_face",
]
