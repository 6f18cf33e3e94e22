"""Sweep-line intersection search (Bentley-Ottmann style).

Events are processed in increasing raw ``(x, y)`` order, the heap order.  All
events that share a point (under the tolerance) are handled together: every
segment passing through the point is evaluated against the others, segments
ending there leave the active structure, and the remaining ones are
re-inserted in the order they take just to the right of the point, which
swaps crossing pairs.
Newly adjacent neighbours are tested and crossings ahead of the sweep, in the
same raw order, become intersection events.

Every pair is evaluated by :func:`~wallgraph.intersect.pair.intersect_segments`
with the lower input index first, so the records match the brute force search.
"""

from __future__ import annotations

import heapq
import itertools
import logging
import math
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..geometry import IntersectionResult, Point, Segment, point_on_segment
from ..tolerance import Tolerance
from .pair import intersect_segments

logger = logging.getLogger(__name__)

PairKey = Tuple[int, int]

# Coincident events: intersections first, then left endpoints, then right.
_RANK = {"intersection": 0, "left": 1, "right": 2}


@dataclass(order=True)
class Event:
    x: float
    y: float
    rank: int
    seq: int
    kind: str = field(compare=False)
    first: int = field(compare=False)
    second: Optional[int] = field(default=None, compare=False)

    @property
    def point(self) -> Point:
        return Point(self.x, self.y)


def _pair_key(i: int, j: int) -> PairKey:
    return (i, j) if i < j else (j, i)


class SweepLine:
    """One sweep over a fixed segment list; instances are single use."""

    def __init__(self, segments: Sequence[Segment], tolerance: Tolerance):
        self.segments = list(segments)
        self.tolerance = tolerance
        self._queue: List[Event] = []
        self._seq = itertools.count()
        self._active: List[int] = []
        self._scheduled: Set[PairKey] = set()
        self._tested: Set[PairKey] = set()
        self._found: Dict[PairKey, IntersectionResult] = {}
        self.events_processed = 0

    def run(self) -> List[IntersectionResult]:
        for idx, seg in enumerate(self.segments):
            self._push("left", seg.start, idx)
            self._push("right", seg.end, idx)

        while self._queue:
            batch = self._pop_batch()
            self._handle(batch[0].point, batch)

        logger.debug(
            "Sweep: %d segment(s), %d event(s), %d intersection(s)",
            len(self.segments),
            self.events_processed,
            len(self._found),
        )
        return [self._found[key] for key in sorted(self._found)]

    # -- queue -------------------------------------------------------------

    def _push(self, kind: str, point: Point, first: int, second: Optional[int] = None) -> None:
        event = Event(point.x, point.y, _RANK[kind], next(self._seq), kind, first, second)
        heapq.heappush(self._queue, event)

    def _pop_batch(self) -> List[Event]:
        """Pop the head event and every queued event tolerance-equal to it.

        Such events all have ``x`` within epsilon of the head, so they sit in
        the band at the front of the heap even when an event with a distant
        ``y`` is ordered between them; band events that do not match go back.
        """

        head = heapq.heappop(self._queue)
        batch = [head]
        anchor = head.point
        limit = head.x + self.tolerance.epsilon
        deferred: List[Event] = []
        while self._queue and self._queue[0].x < limit:
            event = heapq.heappop(self._queue)
            if self.tolerance.points_equal(event.point, anchor):
                batch.append(event)
            else:
                deferred.append(event)
        for event in deferred:
            heapq.heappush(self._queue, event)
        self.events_processed += len(batch)
        return batch

    # -- pair bookkeeping --------------------------------------------------

    def _evaluate(self, i: int, j: int) -> Optional[IntersectionResult]:
        key = _pair_key(i, j)
        if key in self._tested:
            return self._found.get(key)
        self._tested.add(key)
        hit = intersect_segments(self.segments[key[0]], self.segments[key[1]], self.tolerance)
        if hit is not None:
            self._found[key] = hit
        return hit

    def _check_neighbours(self, i: int, j: int, current: Point) -> None:
        key = _pair_key(i, j)
        if key in self._scheduled:
            return
        hit = self._evaluate(i, j)
        if hit is None:
            return
        # Heap order, not tolerance order: a hit just right of ``current`` but
        # lower in y is still ahead of the sweep.
        if (hit.point.x, hit.point.y) > (current.x, current.y):
            self._scheduled.add(key)
            self._push("intersection", hit.point, key[0], key[1])

    # -- active structure --------------------------------------------------

    def _sweep_y(self, idx: int, at: Point) -> float:
        seg = self.segments[idx]
        if self.tolerance.is_zero(seg.end.x - seg.start.x):
            return min(seg.max_y, max(seg.min_y, at.y))
        return seg.y_at(at.x, self.tolerance)

    def _slope_key(self, idx: int) -> Tuple[float, int]:
        dx, dy = self.segments[idx].direction
        return (math.atan2(dy, dx), idx)

    def _through(self, point: Point, extra: Iterable[int]) -> List[int]:
        extra_set = set(extra)
        return [
            idx
            for idx in self._active
            if idx in extra_set or point_on_segment(point, self.segments[idx], self.tolerance)
        ]

    def _handle(self, point: Point, batch: List[Event]) -> None:
        tol = self.tolerance
        active_set = set(self._active)

        starting: List[int] = []
        hinted: List[int] = []
        for event in batch:
            if event.kind == "left":
                if event.first not in starting:
                    starting.append(event.first)
            elif event.kind == "right":
                if event.first not in active_set:
                    logger.debug(
                        "Right event for segment %d at %s but it is not active; skipping",
                        event.first,
                        point,
                    )
                    continue
                hinted.append(event.first)
            else:
                for idx in (event.first, event.second):
                    if idx is not None and idx in active_set:
                        hinted.append(idx)

        through = self._through(point, hinted)
        involved = sorted(set(through) | set(starting))
        for i, j in itertools.combinations(involved, 2):
            self._evaluate(i, j)

        ending = {idx for idx in through if tol.points_equal(self.segments[idx].end, point)}
        for event in batch:
            if event.kind == "right" and event.first in active_set:
                ending.add(event.first)

        through_set = set(through)
        remaining = [idx for idx in self._active if idx not in through_set]
        upper = [idx for idx in set(through) | set(starting) if idx not in ending]
        upper.sort(key=self._slope_key)

        ys = [self._sweep_y(idx, point) for idx in remaining]
        pos = bisect_left(ys, point.y)
        self._active = remaining[:pos] + upper + remaining[pos:]

        if not upper:
            if 0 < pos < len(self._active):
                self._check_neighbours(self._active[pos - 1], self._active[pos], point)
            return

        if pos > 0:
            self._check_neighbours(self._active[pos - 1], self._active[pos], point)
        last = pos + len(upper) - 1
        if last + 1 < len(self._active):
            self._check_neighbours(self._active[last], self._active[last + 1], point)


def find_all(segments: Sequence[Segment], tolerance: Tolerance) -> List[IntersectionResult]:
    return SweepLine(segments, tolerance).run()


__all__ = ["Event", "SweepLine", "find_all"]
