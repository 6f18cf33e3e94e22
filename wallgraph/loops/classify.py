"""Rooms-versus-boundary heuristics for traced faces."""

from __future__ import annotations

from typing import Sequence

from .model import Loop, LoopClassification


def classify_loops(loops: Sequence[Loop]) -> LoopClassification:
    """Split loops into rooms and outer boundary by orientation.

    Interior faces share one winding and the outer boundary of each
    connected component runs the other way, so the more numerous sign is
    taken as rooms.  On a count tie the sign whose largest face is smaller
    wins, since the outer boundary is expected to be the largest face; a
    complete tie goes to the clockwise (negative) group.

    This is a heuristic: nested components or isolated single rooms can
    defeat it.  Pass another classifier where that matters.
    """

    positive = [loop for loop in loops if loop.area > 0.0]
    negative = [loop for loop in loops if loop.area < 0.0]

    if len(positive) > len(negative):
        return LoopClassification(rooms=positive, boundary=negative)
    if len(negative) > len(positive):
        return LoopClassification(rooms=negative, boundary=positive)

    max_pos = max((loop.abs_area for loop in positive), default=0.0)
    max_neg = max((loop.abs_area for loop in negative), default=0.0)
    if max_pos < max_neg:
        return LoopClassification(rooms=positive, boundary=negative)
    return LoopClassification(rooms=negative, boundary=positive)


def classify_by_largest_face(loops: Sequence[Loop]) -> LoopClassification:
    """Treat only the single largest face as boundary; everything else is a room."""

    if not loops:
        return LoopClassification()
    largest = max(range(len(loops)), key=lambda idx: loops[idx].abs_area)
    rooms = [loop for idx, loop in enumerate(loops) if idx != largest]
    return LoopClassification(rooms=rooms, boundary=[loops[largest]])


__all__ = ["classify_by_largest_face", "classify_loops"]
