import pytest

from wallgraph import DEFAULT_TOLERANCE, Point, Tolerance
from wallgraph.tolerance import resolve_tolerance


def test_values_within_epsilon_compare_equal():
    tol = Tolerance(1e-5)

    assert tol.equals(1.0, 1.0 + 5e-6)
    assert not tol.equals(1.0, 1.0 + 2e-5)
    assert tol.compare(1.0, 1.0 + 5e-6) == 0
    assert tol.compare(1.0, 2.0) == -1
    assert tol.compare(2.0, 1.0) == 1


@pytest.mark.parametrize(
    'a, b, le, ge',
    [
        (1.0, 1.0, True, True),
        (1.0 + 5e-6, 1.0, True, True),
        (1.0 + 5e-5, 1.0, False, True),
        (1.0 - 5e-5, 1.0, True, False),
    ],
)
def test_inequalities_are_relaxed_by_epsilon(a, b, le, ge):
    tol = Tolerance(1e-5)

    assert tol.less_or_equal(a, b) is le
    assert tol.greater_or_equal(a, b) is ge


def test_point_comparison_orders_by_x_then_y():
    tol = Tolerance(1e-5)

    assert tol.points_equal(Point(1.0, 2.0), Point(1.0 + 1e-6, 2.0 - 1e-6))
    assert tol.compare_points(Point(0.0, 5.0), Point(1.0, 0.0)) == -1
    assert tol.compare_points(Point(1.0 + 1e-6, 0.0), Point(1.0, 3.0)) == -1
    assert tol.compare_points(Point(1.0, 3.0), Point(1.0, 3.0 + 1e-7)) == 0


@pytest.mark.parametrize('epsilon', [0.0, -1e-5])
def test_epsilon_must_be_positive(epsilon):
    with pytest.raises(ValueError):
        Tolerance(epsilon)


def test_resolve_tolerance_accepts_bare_epsilon():
    assert resolve_tolerance(None) is DEFAULT_TOLERANCE
    assert resolve_tolerance(1e-3) == Tolerance(1e-3)
    tol = Tolerance(1e-4)
    assert resolve_tolerance(tol) is tol
