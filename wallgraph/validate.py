import logging
import math
from typing import Iterable, List, Optional

from .geometry import Point, Segment
from .tolerance import Tolerance

logger = logging.getLogger(__name__)


class ValidationError(ValueError):
    pass


def _coerce_point(value: object, where: str) -> Point:
    if isinstance(value, Point):
        point = value
    else:
        try:
            x, y = value  # type: ignore[misc]
            point = Point(float(x), float(y))
        except (TypeError, ValueError) as exc:
            raise ValidationError(f'{where}: expected an (x, y) pair, got {value!r}') from exc
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise ValidationError(f'{where}: coordinates must be finite, got {point}')
    return point


def coerce_segment(item: object, where: str = 'segment') -> Segment:
    """Accept a :class:`Segment` or a ``((x1, y1), (x2, y2))`` pair."""
    if isinstance(item, Segment):
        _coerce_point(item.start, where)
        _coerce_point(item.end, where)
        return item
    try:
        first, second = item  # type: ignore[misc]
    except (TypeError, ValueError) as exc:
        raise ValidationError(f'{where}: expected a Segment or a pair of points, got {item!r}') from exc
    return Segment(_coerce_point(first, where), _coerce_point(second, where))


def prepare_segments(segments: Optional[Iterable[object]], tolerance: Tolerance, name: str = 'segments') -> List[Segment]:
    """Coerce ``segments`` and drop zero-length entries.

    ``None`` is a caller error; degenerate segments are ordinary noise in
    drawings and are filtered without raising.
    """
    if segments is None:
        raise ValidationError(f'{name} must be an iterable of segments, got None')
    if isinstance(segments, (str, bytes)):
        raise ValidationError(f'{name} must be an iterable of segments, got {type(segments).__name__}')
    prepared: List[Segment] = []
    dropped = 0
    for idx, item in enumerate(segments):
        seg = coerce_segment(item, f'{name}[{idx}]')
        if seg.is_degenerate(tolerance):
            dropped += 1
            continue
        prepared.append(seg)
    if dropped:
        logger.debug('Dropped %d zero-length segment(s) from %s', dropped, name)
    return prepared


def require_target(target: Optional[object], tolerance: Tolerance) -> Segment:
    if target is None:
        raise ValidationError('target segment is required, got None')
    seg = coerce_segment(target, 'target')
    if seg.is_degenerate(tolerance):
        raise ValidationError(f'target segment {seg} has zero length')
    return seg


def require_choice(value: str, choices: Iterable[str], name: str) -> str:
    options = tuple(choices)
    if value not in options:
        raise ValidationError(f'unknown {name} {value!r}; expected one of {", ".join(options)}')
    return value
