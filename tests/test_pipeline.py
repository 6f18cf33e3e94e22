import pytest

from wallgraph import (
    ArrangementOptions,
    Point,
    Segment,
    ValidationError,
    build_arrangement,
    classify_by_largest_face,
    resolve_options,
)


def _grid_lines(n=5):
    horizontal = [Segment.from_coords(0, y, n, y) for y in range(n + 1)]
    vertical = [Segment.from_coords(x, 0, x, n) for x in range(n + 1)]
    return horizontal + vertical


@pytest.mark.parametrize('strategy', ['brute_force', 'sweep'])
def test_grid_of_lines_yields_25_rooms(strategy):
    result = build_arrangement(_grid_lines(), strategy=strategy)

    assert result.options.strategy == strategy
    assert result.intersection_counts() == {'corner': 4, 't_junction': 16, 'crossing': 16}
    assert len(result.split_segments) == 60
    assert len(result.welded_segments) == 60
    assert len(result.loops) == 26
    assert len(result.rooms) == 25
    assert len(result.boundary) == 1
    assert result.total_room_area == pytest.approx(25.0)
    assert result.notes == ['16 crossing wall pair(s) split']


def test_room_at_returns_the_room_under_a_point():
    result = build_arrangement(_grid_lines())

    room = result.room_at(Point(2.5, 3.5))

    assert room is not None
    assert room.abs_area == pytest.approx(1.0)
    xs = sorted({round(p.x, 6) for p in room.vertices})
    ys = sorted({round(p.y, 6) for p in room.vertices})
    assert xs == [2.0, 3.0]
    assert ys == [3.0, 4.0]
    assert result.room_at(Point(9, 9)) is None


def test_overlapping_walls_are_noted_and_merged():
    walls = [
        ((0, 0), (3, 0)),
        ((3, 0), (3, 3)),
        ((3, 3), (0, 3)),
        ((0, 3), (0, 0)),
        ((3, 1), (7, 1)),
        ((7, 1), (7, 3)),
        ((7, 3), (3, 3)),
        ((3, 3), (3, 1)),
    ]

    result = build_arrangement(walls)

    assert result.intersection_counts()['overlap'] == 1
    assert 'overlapping wall pair(s) merged' in result.notes[0]
    assert sorted(room.abs_area for room in result.rooms) == pytest.approx([8.0, 9.0])


def test_empty_input_returns_empty_result():
    result = build_arrangement([((1, 1), (1, 1))])

    assert result.segments == []
    assert result.rooms == []
    assert result.notes == ['no usable segments']


def test_classifier_and_options_are_forwarded():
    options = ArrangementOptions(min_loop_area=2.0)

    result = build_arrangement(_grid_lines(2), options, classifier=classify_by_largest_face)

    assert result.loops == [loop for loop in result.loops if loop.abs_area > 2.0]
    assert len(result.loops) == 1
    assert result.rooms == []
    assert options.min_loop_area == 2.0


def test_resolve_options_copies_and_overrides():
    base = ArrangementOptions(epsilon=1e-4)

    opts = resolve_options(base, strategy='sweep', epsilon=None)

    assert opts is not base
    assert opts.strategy == 'sweep'
    assert opts.epsilon == 1e-4
    assert base.strategy == 'brute_force'
    assert ArrangementOptions(epsilon=1e-3, weld_grid=1e-4).grid == 1e-3


def test_unknown_strategy_is_rejected():
    with pytest.raises(ValidationError):
        build_arrangement(_grid_lines(), strategy='quadtree')
