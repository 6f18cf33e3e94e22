"""All-pairs intersection search with a vectorised bounding-box prefilter."""

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple

import numpy as np

from ..geometry import IntersectionResult, Segment
from ..tolerance import Tolerance
from .pair import intersect_segments

logger = logging.getLogger(__name__)


def _bounds(segments: Sequence[Segment]) -> np.ndarray:
    return np.array(
        [(seg.min_x, seg.max_x, seg.min_y, seg.max_y) for seg in segments],
        dtype=float,
    ).reshape(-1, 4)


def candidate_pairs(segments: Sequence[Segment], tolerance: Tolerance) -> List[Tuple[int, int]]:
    """Return index pairs ``i < j`` whose epsilon-padded boxes overlap."""

    n = len(segments)
    if n < 2:
        return []
    bounds = _bounds(segments)
    eps = tolerance.epsilon
    min_x, max_x, min_y, max_y = bounds.T

    separated = (
        (max_x[:, None] < min_x[None, :] - eps)
        | (min_x[:, None] > max_x[None, :] + eps)
        | (max_y[:, None] < min_y[None, :] - eps)
        | (min_y[:, None] > max_y[None, :] + eps)
    )
    overlapping = np.triu(~separated, k=1)
    rows, cols = np.nonzero(overlapping)
    return list(zip(rows.tolist(), cols.tolist()))


def find_all(segments: Sequence[Segment], tolerance: Tolerance) -> List[IntersectionResult]:
    pairs = candidate_pairs(segments, tolerance)
    results: List[IntersectionResult] = []
    for i, j in pairs:
        hit = intersect_segments(segments[i], segments[j], tolerance)
        if hit is not None:
            results.append(hit)
    logger.debug(
        "Brute force: %d segment(s), %d box candidate(s), %d intersection(s)",
        len(segments),
        len(pairs),
        len(results),
    )
    return results


__all__ = ["candidate_pairs", "find_all"]
