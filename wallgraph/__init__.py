from .tolerance import DEFAULT_TOLERANCE, Tolerance
from .geometry import (
    IntersectionKind,
    IntersectionResult,
    Point,
    Segment,
    point_in_polygon,
    point_on_segment,
)
from .config import ArrangementOptions, resolve_options
from .validate import ValidationError
from .intersect import find_intersections
from .splitter import split_at_intersections
from .welder import PointIndex, weld_vertices
from .loops import (
    Loop,
    LoopClassification,
    classify_by_largest_face,
    classify_loops,
    find_all_closed_loops,
    find_closed_loops_around_segment,
    find_minimal_closed_loops,
    signed_area,
)
from .pipeline import ArrangementResult, build_arrangement

__all__ = [
    'DEFAULT_TOLERANCE',
    'Tolerance',
    'IntersectionKind',
    'IntersectionResult',
    'Point',
    'Segment',
    'point_in_polygon',
    'point_on_segment',
    'ArrangementOptions',
    'resolve_options',
    'ValidationError',
    'find_intersections',
    'split_at_intersections',
    'PointIndex',
    'weld_vertices',
    'Loop',
    'LoopClassification',
    'classify_by_largest_face',
    'classify_loops',
    'find_all_closed_loops',
    'find_closed_loops_around_segment',
    'find_minimal_closed_loops',
    'signed_area',
    'ArrangementResult',
    'build_arrangement',
]
