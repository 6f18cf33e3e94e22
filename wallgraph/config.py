"""Configuration for arrangement computations."""

from __future__ import annotations

import copy
from dataclasses import dataclass, replace
from typing import Any, Optional

from .tolerance import Tolerance

STRATEGIES = ("brute_force", "sweep")


@dataclass
class ArrangementOptions:
    """Knobs shared by every stage of the pipeline.

    ``epsilon`` is in drawing units.  ``weld_grid`` is the hashing cell size
    used by the welder and is never allowed below ``epsilon``.
    """

    epsilon: float = 1e-5
    weld_grid: float = 1e-4
    min_loop_area: float = 1e-3
    max_trace_iterations: int = 5000
    strategy: str = "brute_force"

    @property
    def tolerance(self) -> Tolerance:
        return Tolerance(self.epsilon)

    @property
    def grid(self) -> float:
        return max(float(self.weld_grid), float(self.epsilon))


def resolve_options(options: Optional[ArrangementOptions] = None, **overrides: Any) -> ArrangementOptions:
    """Return a private copy of ``options`` with non-``None`` overrides applied."""

    base = copy.deepcopy(options) if options is not None else ArrangementOptions()
    changes = {key: value for key, value in overrides.items() if value is not None}
    if changes:
        base = replace(base, **changes)
    return base


__all__ = ["ArrangementOptions", "STRATEGIES", "resolve_options"]
