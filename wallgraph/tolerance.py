"""Epsilon-based comparison primitives shared by every geometric predicate."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover - import cycle guard
    from .geometry import Point


@dataclass(frozen=True)
class Tolerance:
    """Fixed absolute tolerance used to compare drawing coordinates.

    ``epsilon`` is chosen relative to the drawing units (``1e-5`` suits
    millimetre plans); it is never rescaled automatically.
    """

    epsilon: float = 1e-5

    def __post_init__(self) -> None:
        object.__setattr__(self, "epsilon", float(self.epsilon))
        if not self.epsilon > 0.0:
            raise ValueError(f"epsilon must be positive, got {self.epsilon!r}")

    def equals(self, a: float, b: float) -> bool:
        return abs(a - b) < self.epsilon

    def less_or_equal(self, a: float, b: float) -> bool:
        return a < b + self.epsilon

    def greater_or_equal(self, a: float, b: float) -> bool:
        return a > b - self.epsilon

    def is_zero(self, value: float) -> bool:
        return abs(value) < self.epsilon

    def compare(self, a: float, b: float) -> int:
        """Three-way comparison where values within epsilon compare equal."""

        if self.equals(a, b):
            return 0
        return -1 if a < b else 1

    def points_equal(self, p: "Point", q: "Point") -> bool:
        return self.equals(p.x, q.x) and self.equals(p.y, q.y)

    def compare_points(self, p: "Point", q: "Point") -> int:
        """Order points by x, then y, both under the tolerance."""

        cx = self.compare(p.x, q.x)
        if cx != 0:
            return cx
        return self.compare(p.y, q.y)


DEFAULT_TOLERANCE = Tolerance()


def resolve_tolerance(tolerance: "Tolerance | float | None") -> Tolerance:
    """Accept a :class:`Tolerance`, a bare epsilon or ``None`` (default)."""

    if tolerance is None:
        return DEFAULT_TOLERANCE
    if isinstance(tolerance, Tolerance):
        return tolerance
    return Tolerance(float(tolerance))


__all__ = ["DEFAULT_TOLERANCE", "Tolerance", "resolve_tolerance"]
