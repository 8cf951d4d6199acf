from fractions import Fraction
import pytest

from mathsolver.config import Settings
from mathsolver.evaluator import EvaluationError, evaluate, is_zero
from mathsolver.function import Function
from mathsolver.parsing import DomainError
from mathsolver.ruffini import candidate_roots, factor_with_ruffini, find_divisors, synthetic_division
from mathsolver.tracer import Tracer


def test_find_divisors_with_negatives():
    assert find_divisors(6) == [-6, -3, -2, -1, 1, 2, 3, 6]

def test_find_divisors_positive_only():
    assert find_divisors(-4, include_negative=False) == [1, 2, 4]

@pytest.mark.parametrize("n", [0, 2.5])
def test_find_divisors_undefined(n):
    assert find_divisors(n) == []

@pytest.mark.parametrize("n", [1, 9, 12, 36, -15, 97])
def test_find_divisors_symmetric_and_sorted(n):
    divisors = find_divisors(n, True)
    assert len(divisors) % 2 == 0
    assert divisors == sorted(divisors)
    assert [-d for d in reversed(divisors)] == divisors

def test_candidate_order_starts_with_constant():
    candidates = candidate_roots(-6, 1)
    assert candidates[0] == -6
    assert candidates == [Fraction(c) for c in (-6, -3, -2, -1, 1, 2, 3, 6)]

def test_candidates_include_ratios():
    assert Fraction(-1, 2) in candidate_roots(-1, 4)

def test_synthetic_division():
    products, sums = synthetic_division([1, -6, 11, -6], 1)
    assert products == [1, -5, 6]
    assert sums == [1, -5, 6, 0]

def test_factor_cubic():
    tracer = Tracer()
    result = factor_with_ruffini(Function.parse("y=x^3-6x^2+11x-6"), tracer)
    assert result.ok
    assert result.root == 1.0
    assert result.factors == ["x^2-5x+6", "x-1"]
    assert result.table.remainder == 0
    assert {"ruffini_candidates", "ruffini_root", "ruffini_table", "ruffini_factors"} <= set(tracer.kinds())

def test_factor_picks_first_candidate_in_order():
    # -2 is probed before 1 and -1 because it is the constant term itself
    result = factor_with_ruffini(Function.parse("x^3+2x^2-x-2=0"))
    assert result.root == -2.0
    assert result.factors == ["x^2-1", "x+2"]

def test_factor_zero_root():
    result = factor_with_ruffini(Function.parse("y=x^3-x"))
    assert result.factors == ["x^2-1", "x"]

def test_factor_fractional_root():
    result = factor_with_ruffini(Function.parse("y=4x^2-1"))
    assert result.root == -0.5
    assert result.factors == ["4x-2", "x+0.5"]

@pytest.mark.parametrize("text", ["y=x^3-6x^2+11x-6", "y=x^3+2x^2-x-2", "y=2x^3-3x^2-11x+6", "y=x^4-5x^2+4"])
def test_factor_product_matches_polynomial(text):
    f = Function.parse(text)
    quotient, divisor = factor_with_ruffini(f).factors
    poly = f.polynomial().format()
    for x in (-3, -1.5, 0, 0.5, 2, 4):
        assert evaluate(quotient, x) * evaluate(divisor, x) == pytest.approx(evaluate(poly, x))

def test_unfactorable_is_not_an_error():
    tracer = Tracer()
    result = factor_with_ruffini(Function.parse("y=x^3+x+1"), tracer)
    assert not result.ok
    assert result.factors == []
    assert result.status == "unfactorable"
    assert "unfactorable" in tracer.kinds()

def test_evaluator_exact_zero():
    assert is_zero("4x^2-1", Fraction(-1, 2))
    assert not is_zero("x^2-2", 1.4142135623730951)
    assert evaluate("2x^2+3x-5", 2) == 9.0

def test_evaluator_binds_letter_as_symbol():
    assert evaluate("E^2", 3, letter="E") == 9.0

def test_evaluator_rejects_unbound_symbols():
    with pytest.raises(EvaluationError):
        evaluate("x+z", 1)

def test_degree_above_limit_is_rejected_before_allocating():
    with pytest.raises(DomainError):
        factor_with_ruffini(Function.parse("y=x^1000000000+1"))
    with pytest.raises(DomainError):
        factor_with_ruffini(Function.parse("y=x^5+1"), settings=Settings(max_degree=4))

def test_huge_constant_skips_divisor_search():
    tracer = Tracer()
    result = factor_with_ruffini(Function.parse("y=x^3+x+10000000000000061"), tracer)
    assert result.status == "unfactorable"
    assert "ruffini_candidates" not in tracer.kinds()

def test_divisor_limit_comes_from_settings():
    result = factor_with_ruffini(Function.parse("y=x^3-8"), settings=Settings(max_divisor=5))
    assert not result.ok
    assert factor_with_ruffini(Function.parse("y=x^3-8"), settings=Settings(max_divisor=8)).ok
