import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from wallgraph import (
    ArrangementOptions,
    Segment,
    ValidationError,
    build_arrangement,
    find_closed_loops_around_segment,
)
from wallgraph.config import STRATEGIES
from wallgraph.validate import coerce_segment

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    log_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _parse_target(value: Optional[str]) -> Optional[Segment]:
    if not value:
        return None
    parts = [part.strip() for part in value.split(",") if part.strip()]
    if len(parts) != 4:
        raise ValidationError(f"--around expects X1,Y1,X2,Y2, got {value!r}")
    try:
        x1, y1, x2, y2 = (float(part) for part in parts)
    except ValueError as exc:
        raise ValidationError(f"--around expects numbers, got {value!r}") from exc
    return Segment.from_coords(x1, y1, x2, y2)


def load_segments(path: Path) -> List[Segment]:
    """Read walls from a JSON file.

    Accepts a bare list of ``[[x1, y1], [x2, y2]]`` pairs or an object with a
    ``segments`` list whose entries carry ``start``, ``end`` and optional ``id``.
    """

    with path.open("r", encoding="utf-8") as fh:
        data = json.load(fh)
    if isinstance(data, dict):
        data = data.get("segments")
    if not isinstance(data, list):
        raise ValidationError(f"{path}: expected a list of segments")

    segments: List[Segment] = []
    for idx, entry in enumerate(data):
        if isinstance(entry, dict):
            if "start" not in entry or "end" not in entry:
                raise ValidationError(f"{path}: segments[{idx}] needs 'start' and 'end'")
            seg = coerce_segment((entry["start"], entry["end"]), f"{path}: segments[{idx}]")
            segments.append(Segment(seg.start, seg.end, entry.get("id")))
        elif isinstance(entry, (list, tuple)) and len(entry) == 2:
            segments.append(coerce_segment(entry, f"{path}: segments[{idx}]"))
        else:
            raise ValidationError(f"{path}: segments[{idx}] is not a segment: {entry!r}")
    return segments


def _loop_payload(loop) -> Dict[str, Any]:
    return {
        "area": loop.area,
        "clockwise": loop.is_clockwise,
        "vertices": [list(p.as_tuple()) for p in loop.vertices],
    }


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Extract rooms from 2D wall segments")
    parser.add_argument("path", help="Path to a JSON file with wall segments")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (default: INFO)",
    )
    parser.add_argument(
        "--strategy",
        choices=list(STRATEGIES),
        default="brute_force",
        help="Intersection search strategy (default: brute_force)",
    )
    parser.add_argument(
        "--epsilon",
        type=float,
        default=1e-5,
        help="Coordinate tolerance in drawing units (default: 1e-5)",
    )
    parser.add_argument(
        "--min-area",
        type=float,
        default=1e-3,
        help="Discard loops whose area is not above this value (default: 1e-3)",
    )
    parser.add_argument(
        "--around",
        help="Only report loops touching the wall X1,Y1,X2,Y2",
    )
    parser.add_argument(
        "--json-output",
        help="Write rooms and intersections as JSON to the given path",
    )
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)

    options = ArrangementOptions(
        epsilon=args.epsilon,
        min_loop_area=args.min_area,
        strategy=args.strategy,
    )
    try:
        segments = load_segments(Path(args.path))
        target = _parse_target(args.around)
        logger.info("Loaded %d segment(s) from %s", len(segments), args.path)
        result = build_arrangement(segments, options)
        around = (
            find_closed_loops_around_segment(result.split_segments, target, options)
            if target is not None
            else None
        )
    except (OSError, ValueError) as exc:
        logger.error("%s", exc)
        raise SystemExit(1)

    print("Intersections:")
    counts = result.intersection_counts()
    if counts:
        for kind in sorted(counts):
            print(f"  {kind}: {counts[kind]}")
    else:
        print("  (none)")
    print(f"Segments after split: {len(result.split_segments)}")

    loops = around if around is not None else result.rooms
    print("Loops around target:" if around is not None else "Rooms:")
    if not loops:
        print("  (none)")
    for idx, loop in enumerate(loops):
        print(f"  [{idx}] area={loop.abs_area:.6f} vertices={len(loop)}")
        for p in loop.vertices:
            print(f"      ({p.x:.6f}, {p.y:.6f})")
    for note in result.notes:
        print(f"Note: {note}")

    if args.json_output:
        output_path = Path(args.json_output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Writing JSON report to %s", output_path)
        payload = {
            "intersections": [
                {
                    "kind": hit.kind,
                    "point": list(hit.point.as_tuple()),
                    "overlap_end": list(hit.overlap_end.as_tuple()) if hit.overlap_end else None,
                }
                for hit in result.intersections
            ],
            "rooms": [_loop_payload(loop) for loop in result.rooms],
            "boundary": [_loop_payload(loop) for loop in result.boundary],
        }
        if around is not None:
            payload["around"] = [_loop_payload(loop) for loop in around]
        output_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        print(f"JSON report written to {output_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
