"""Full intersect -> split -> weld -> extract pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from .config import ArrangementOptions, STRATEGIES, resolve_options
from .geometry import IntersectionResult, Point, Segment
from .intersect import find_intersections
from .logging_utils import debug_log_call
from .loops import LoopClassifier, classify_loops
from .loops.graph import PlanarGraph
from .loops.model import Loop
from .loops.trace import trace_all_faces
from .splitter import split_at_intersections
from .validate import prepare_segments, require_choice
from .welder import weld_vertices

logger = logging.getLogger(__name__)


@dataclass
class ArrangementResult:
    """Everything one pipeline run produced."""

    segments: List[Segment]
    intersections: List[IntersectionResult]
    split_segments: List[Segment]
    welded_segments: List[Segment]
    loops: List[Loop]
    rooms: List[Loop]
    boundary: List[Loop]
    options: ArrangementOptions
    notes: List[str] = field(default_factory=list)

    def intersection_counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for hit in self.intersections:
            counts[hit.kind] = counts.get(hit.kind, 0) + 1
        return counts

    def room_at(self, point: Point) -> Optional[Loop]:
        """Return the smallest room containing ``point``, if any."""

        containing = [room for room in self.rooms if room.contains(point)]
        if not containing:
            return None
        return min(containing, key=lambda room: room.abs_area)

    @property
    def total_room_area(self) -> float:
        return sum(room.abs_area for room in self.rooms)


@debug_log_call(logger, log_result=False)
def build_arrangement(
    segments: Iterable[object],
    options: Optional[ArrangementOptions] = None,
    *,
    classifier: LoopClassifier = classify_loops,
    **overrides,
) -> ArrangementResult:
    """Run every stage on ``segments`` and keep the intermediate products."""

    opts = resolve_options(options, **overrides)
    require_choice(opts.strategy, STRATEGIES, "strategy")
    tol = opts.tolerance

    prepared = prepare_segments(segments, tol)
    notes: List[str] = []
    if not prepared:
        notes.append("no usable segments")
        logger.info("No usable segments; returning an empty arrangement")
        return ArrangementResult([], [], [], [], [], [], [], opts, notes)

    intersections = find_intersections(prepared, tolerance=tol, strategy=opts.strategy)
    split = split_at_intersections(prepared, tolerance=tol, strategy=opts.strategy, grid=opts.grid)
    welded = weld_vertices(split, tolerance=tol, grid=opts.grid)

    graph = PlanarGraph.from_segments(welded, tol, grid=opts.grid)
    loops = trace_all_faces(
        graph, min_area=opts.min_loop_area, max_iterations=opts.max_trace_iterations
    )
    classification = classifier(loops) if loops else None
    rooms = list(classification.rooms) if classification else []
    boundary = list(classification.boundary) if classification else []

    crossings = sum(1 for hit in intersections if hit.kind == "crossing")
    overlaps = sum(1 for hit in intersections if hit.kind == "overlap")
    if crossings:
        notes.append(f"{crossings} crossing wall pair(s) split")
    if overlaps:
        notes.append(f"{overlaps} overlapping wall pair(s) merged")

    logger.info(
        "Arrangement: %d segment(s) -> %d piece(s), %d loop(s), %d room(s)",
        len(prepared),
        len(welded),
        len(loops),
        len(rooms),
    )
    return ArrangementResult(
        segments=prepared,
        intersections=intersections,
        split_segments=split,
        welded_segments=welded,
        loops=loops,
        rooms=rooms,
        boundary=boundary,
        options=opts,
        notes=notes,
    )


__all__ = ["ArrangementResult", "build_arrangement"]
