import math
import pytest

from mathsolver.analysis import area, concavity, monotonicity, parity, positivity
from mathsolver.session import SolverSession
from mathsolver.types import Interval, Point

INF = math.inf


@pytest.mark.parametrize("expr, label", [
    ("y=x^2", "even"),
    ("y=x^3", "odd"),
    ("y=x^2+x", "neither"),
    ("y=x^4-3x^2+1", "even"),
    ("y=x^3-3x", "odd"),
    ("y=1+x^2", "even"),
    ("y=x^0.5", "neither"),
])
def test_parity(expr, label):
    assert parity(expr).label == label

def test_parity_compares_structure_not_text():
    # same polynomial written in a different order
    result = parity("y=x+x^3")
    assert result.is_odd
    assert result.f_of_minus_x == "-x-x^3"

def test_area_of_identity_line():
    result = area("y=x", [0, 2])
    assert result.ok
    assert result.value == pytest.approx(2.0)
    assert result.primitive == "y=0.5x^2"
    assert result.steps[-1] == "A = 2"

def test_area_is_unsigned_across_sign_change():
    result = area("y=x", [-1, 0, 1])
    assert result.value == pytest.approx(1.0)
    assert result.evaluations == [pytest.approx(0.5), 0.0, pytest.approx(0.5)]

def test_area_accepts_points_and_sorts():
    result = area("y=x^2-1", [Point(1, 0), Point(-1, 0)])
    assert result.xs == [-1.0, 1.0]
    assert result.value == pytest.approx(4 / 3)

@pytest.mark.parametrize("xs", [[], [2], [2, 2]])
def test_area_needs_two_distinct_points(xs):
    result = area("y=x", xs)
    assert not result.ok
    assert result.error

def test_monotonicity_of_parabola():
    session = SolverSession()
    result = monotonicity("y=x^2", session)
    assert result.derivative == "y'=2x"
    assert result.increasing == [Interval(0.0, INF)]
    assert result.decreasing == [Interval(-INF, 0.0)]
    assert result.maxima == []
    assert [(p.name, p.x, p.y) for p in result.minima] == [("A", 0.0, 0.0)]

def test_monotonicity_of_cubic():
    result = monotonicity("y=x^3-3x")
    assert [(p.x, p.y) for p in result.maxima] == [(-1.0, 2.0)]
    assert [(p.x, p.y) for p in result.minima] == [(1.0, -2.0)]
    assert result.increasing == [Interval(-INF, -1.0), Interval(1.0, INF)]

def test_monotonicity_of_line_has_no_extrema():
    result = monotonicity("y=2x+3")
    assert result.increasing == [Interval(-INF, INF)]
    assert result.maxima == [] and result.minima == []

def test_concavity():
    result = concavity("y=x^3")
    assert result.second_derivative == "y''=6x"
    assert result.upward == [Interval(0.0, INF)]
    assert result.downward == [Interval(-INF, 0.0)]

def test_positivity_matches_sign_analysis():
    result = positivity("y=x^2-4")
    assert result.positive == [Interval(-INF, -2.0), Interval(2.0, INF)]
    assert result.negative == [Interval(-2.0, 2.0)]
