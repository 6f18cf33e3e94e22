import numpy as np
import pytest

from wallgraph import Point, Segment, Tolerance, find_intersections, split_at_intersections
from wallgraph.splitter import split_segment

TOL = Tolerance(1e-5)


def _square(size=5.0):
    return [
        Segment.from_coords(0, 0, size, 0, source='south'),
        Segment.from_coords(size, 0, size, size, source='east'),
        Segment.from_coords(size, size, 0, size, source='north'),
        Segment.from_coords(0, size, 0, 0, source='west'),
    ]


def test_crossing_free_input_is_returned_unchanged():
    walls = _square()

    pieces = split_at_intersections(walls)

    assert len(pieces) == len(walls)
    assert all(piece is wall for piece, wall in zip(pieces, walls))


def test_crossing_splits_both_segments():
    a = Segment.from_coords(0, 0, 4, 4)
    b = Segment.from_coords(0, 4, 4, 0)

    pieces = split_at_intersections([a, b])

    assert len(pieces) == 4
    for piece in pieces:
        assert TOL.points_equal(piece.start, Point(2, 2)) or TOL.points_equal(piece.end, Point(2, 2))


def test_t_junction_splits_the_long_wall_only():
    wall = Segment.from_coords(0, 0, 10, 0, source='wall')
    stub = Segment.from_coords(5, 0, 5, 5, source='stub')

    pieces = split_at_intersections([wall, stub])

    assert pieces == [
        Segment.from_coords(0, 0, 5, 0),
        Segment.from_coords(5, 0, 10, 0),
        Segment.from_coords(5, 0, 5, 5),
    ]
    assert [piece.source for piece in pieces] == ['wall', 'wall', 'stub']
    assert pieces[2] is stub


def test_collinear_overlap_keeps_shared_piece_once():
    short = Segment.from_coords(0, 0, 5, 0)
    long = Segment.from_coords(0, 0, 6, 0)

    pieces = split_at_intersections([short, long])

    assert pieces == [Segment.from_coords(0, 0, 5, 0), Segment.from_coords(5, 0, 6, 0)]
    assert pieces[0] is short


def test_split_segment_ignores_cuts_at_endpoints():
    seg = Segment.from_coords(0, 0, 10, 0)
    cuts = [Point(10 - 4e-6, 0), Point(7, 0), Point(3, 0), Point(3 + 2e-6, 0)]

    pieces = split_segment(seg, cuts, TOL)

    assert [(p.start.x, p.end.x) for p in pieces] == [(0, 3), (3, 7), (7, 10)]
    assert pieces[-1].end == seg.end


@pytest.mark.parametrize('strategy', ['brute_force', 'sweep'])
def test_split_output_only_touches_at_shared_endpoints(strategy):
    rng = np.random.default_rng(42)
    walls = [Segment.from_coords(*row) for row in rng.uniform(0, 10, size=(25, 4)).tolist()]

    pieces = split_at_intersections(walls, strategy=strategy)
    hits = find_intersections(pieces)

    assert len(pieces) > len(walls)
    assert {hit.kind for hit in hits} == {'corner'}


def test_grid_lines_split_into_unit_pieces():
    lines = [Segment.from_coords(0, y, 5, y) for y in range(6)]
    lines += [Segment.from_coords(x, 0, x, 5) for x in range(6)]

    pieces = split_at_intersections(lines)

    assert len(pieces) == 60
    assert all(piece.length == pytest.approx(1.0) for piece in pieces)
