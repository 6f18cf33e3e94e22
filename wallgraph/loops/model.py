"""Value types produced by the loop extractor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

import numpy as np

from ..geometry import Point, Segment, point_in_polygon


def signed_area(vertices: Sequence[Point]) -> float:
    """Shoelace area; positive for counter-clockwise vertex order."""

    if len(vertices) < 3:
        return 0.0
    xs = np.fromiter((p.x for p in vertices), dtype=float, count=len(vertices))
    ys = np.fromiter((p.y for p in vertices), dtype=float, count=len(vertices))
    return 0.5 * float(np.dot(xs, np.roll(ys, -1)) - np.dot(np.roll(xs, -1), ys))


@dataclass(frozen=True)
class Loop:
    """Closed vertex sequence; the last vertex connects back to the first."""

    vertices: Tuple[Point, ...]
    area: float = field(init=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "vertices", tuple(self.vertices))
        object.__setattr__(self, "area", signed_area(self.vertices))

    @property
    def is_clockwise(self) -> bool:
        return self.area < 0.0

    @property
    def abs_area(self) -> float:
        return abs(self.area)

    def __len__(self) -> int:
        return len(self.vertices)

    def segments(self) -> List[Segment]:
        n = len(self.vertices)
        return [Segment(self.vertices[i], self.vertices[(i + 1) % n]) for i in range(n)]

    def reversed(self) -> "Loop":
        return Loop(tuple(reversed(self.vertices)))

    def contains(self, point: Point) -> bool:
        return point_in_polygon(point, self.vertices)

    def canonical_key(self) -> Tuple[Tuple[float, float], ...]:
        """Vertex key equal for loops that differ only by rotation or direction."""

        coords = [p.as_tuple() for p in self.vertices]
        n = len(coords)
        if n == 0:
            return tuple()
        candidates = []
        for seq in (coords, coords[::-1]):
            low = min(seq)
            for i in range(n):
                if seq[i] == low:
                    candidates.append(tuple(seq[i:] + seq[:i]))
        return min(candidates)


@dataclass
class LoopClassification:
    rooms: List[Loop] = field(default_factory=list)
    boundary: List[Loop] = field(default_factory=list)


LoopClassifier = Callable[[Sequence[Loop]], LoopClassification]


__all__ = ["Loop", "LoopClassification", "LoopClassifier", "signed_area"]
