"""Intersection engine facade.

Two interchangeable strategies produce the same records: ``"brute_force"``
(all pairs behind a bounding-box prefilter) and ``"sweep"`` (sweep-line).
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..geometry import IntersectionResult, Segment
from ..logging_utils import debug_log_call
from ..tolerance import Tolerance, resolve_tolerance
from ..validate import prepare_segments, require_choice, require_target
from . import brute_force, sweep
from .pair import boxes_overlap, classify_contact, intersect_segments

logger = logging.getLogger(__name__)

Strategy = Callable[[Sequence[Segment], Tolerance], List[IntersectionResult]]

_STRATEGIES: Dict[str, Strategy] = {
    "brute_force": brute_force.find_all,
    "sweep": sweep.find_all,
}


def intersections_with(
    segments: Sequence[Segment], target: Segment, tolerance: Tolerance
) -> List[IntersectionResult]:
    results: List[IntersectionResult] = []
    for other in segments:
        if other is target or other == target:
            continue
        if not boxes_overlap(target, other, tolerance):
            continue
        hit = intersect_segments(target, other, tolerance)
        if hit is not None:
            results.append(hit)
    return results


@debug_log_call(logger)
def find_intersections(
    segments: Iterable[object],
    target: Optional[object] = None,
    *,
    tolerance: "Tolerance | float | None" = None,
    strategy: str = "brute_force",
) -> List[IntersectionResult]:
    """Return every pairwise contact among ``segments``.

    With ``target`` only contacts between ``target`` and the other segments
    are returned (``segment_a`` is always the target); ``target`` itself is
    skipped if it is part of ``segments``.  Zero-length segments are ignored.
    """

    tol = resolve_tolerance(tolerance)
    require_choice(strategy, _STRATEGIES, "strategy")
    prepared = prepare_segments(segments, tol)

    if target is not None:
        target_seg = require_target(target, tol)
        results = intersections_with(prepared, target_seg, tol)
        logger.info("Found %d intersection(s) with target %s", len(results), target_seg)
        return results

    results = _STRATEGIES[strategy](prepared, tol)
    logger.info(
        "Found %d intersection(s) among %d segment(s) using %s",
        len(results),
        len(prepared),
        strategy,
    )
    return results


__all__ = [
    "boxes_overlap",
    "classify_contact",
    "find_intersections",
    "intersect_segments",
    "intersections_with",
]
