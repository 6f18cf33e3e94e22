from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List

import pytest

from wallgraph import build_arrangement, find_minimal_closed_loops
from wallgraph.__main__ import load_segments


DATA_DIR = Path(__file__).resolve().parent / "plans"


@dataclass
class PlanCase:
    case_id: str
    path: Path
    expected_rooms: int
    room_areas: List[float]
    intersections: Dict[str, int] = field(default_factory=dict)


def _iter_cases() -> Iterable[PlanCase]:
    for plan_path in sorted(DATA_DIR.glob("*.json")):
        with plan_path.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
        expected = data.get("expected")
        if not isinstance(expected, dict):
            raise ValueError(f"{plan_path.name} must carry an 'expected' object")
        yield PlanCase(
            case_id=plan_path.stem,
            path=plan_path,
            expected_rooms=int(expected["rooms"]),
            room_areas=sorted(float(area) for area in expected.get("room_areas", [])),
            intersections={str(k): int(v) for k, v in expected.get("intersections", {}).items()},
        )


CASES = list(_iter_cases())


@pytest.mark.parametrize("strategy", ["brute_force", "sweep"])
@pytest.mark.parametrize("case", CASES, ids=[case.case_id for case in CASES])
def test_plan_rooms(case: PlanCase, strategy: str):
    segments = load_segments(case.path)

    result = build_arrangement(segments, strategy=strategy)

    assert len(result.rooms) == case.expected_rooms, result.notes
    areas = sorted(room.abs_area for room in result.rooms)
    assert areas == pytest.approx(case.room_areas, abs=1e-4)
    if case.intersections:
        assert result.intersection_counts() == case.intersections


@pytest.mark.parametrize("case", CASES, ids=[case.case_id for case in CASES])
def test_rooms_are_stable_when_re_extracted(case: PlanCase):
    result = build_arrangement(load_segments(case.path))

    again = find_minimal_closed_loops(result.welded_segments)

    assert {room.canonical_key() for room in again} == {
        room.canonical_key() for room in result.rooms
    }
