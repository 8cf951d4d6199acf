# -----------------------------------------------------------------------------
# Ruffini factoring
# Purpose:
#   Find a rational root of an integer-degree polynomial among the classic
#   candidates (constant term, its divisors, leading coefficient, its positive
#   divisors, divisor ratios), then divide by (x - root) with synthetic
#   division. The polynomial is returned as [quotient, divisor] factor strings.
# Notes:
#   - Candidate probing is exact: the evaluator substitutes rationals.
#   - Division runs on Fractions; results are exported as floats.
#   - No root found is a normal outcome (status 'unfactorable'), not an error.
#   - Leading or constant coefficients above Settings.max_divisor are not
#     searched (trial division is O(sqrt(n))); the result is 'unfactorable'.
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import math
from fractions import Fraction
from typing import List, Optional, Tuple

from .config import Settings
from .evaluator import is_zero
from .function import Function, linear_factor
from .member import Member
from .rational import Number, exact, format_number
from .tracer import Tracer
from .types import Factorization, RuffiniTable, UNFACTORABLE

logger = logging.getLogger(__name__)


def find_divisors(n: Number, include_negative: bool = True) -> List[int]:
    """
    Divisors of |n| by trial division up to floor(sqrt(|n|)), ascending.
    With include_negative the opposite of each divisor is added too.
    n == 0 or a non-integral n has no divisors.
    """
    if n == 0 or float(n) != int(n):
        return []
    n = abs(int(n))
    divisors: List[int] = []
    for i in range(1, math.isqrt(n) + 1):
        if n % i == 0:
            divisors.append(i)
            if n // i != i:
                divisors.append(n // i)
    if include_negative:
        divisors += [-d for d in divisors]
    return sorted(divisors)


def candidate_roots(constant: Number, leading: Number) -> List[Fraction]:
    """Possible rational zeros, in probing order, without repeats."""
    constant_divisors = find_divisors(constant)
    leading_divisors = find_divisors(leading, include_negative=False)
    raw: List[Fraction] = [exact(constant)]
    raw += [Fraction(d) for d in constant_divisors]
    raw.append(exact(leading))
    raw += [Fraction(d) for d in leading_divisors]
    raw += [Fraction(d, l) for d in constant_divisors for l in leading_divisors]
    seen = set()
    out: List[Fraction] = []
    for c in raw:
        if c not in seen:
            seen.add(c)
            out.append(c)
    return out


def synthetic_division(coefficients: List[Number], root: Number) -> Tuple[List[Fraction], List[Fraction]]:
    """
    Ruffini's table for dividing coefficients (highest first) by (x - root).
    Returns (products, sums); sums[-1] is the remainder, sums[:-1] the quotient.
    """
    r = exact(root)
    coeffs = [exact(c) for c in coefficients]
    sums = [coeffs[0]]
    products: List[Fraction] = []
    for c in coeffs[1:]:
        product = sums[-1] * r
        products.append(product)
        sums.append(c + product)
    return products, sums


def _dense(poly: Member) -> List[float]:
    dense = poly.coefficients()
    while len(dense) > 1 and dense[0] == 0:
        dense = dense[1:]
    return dense


def factor_with_ruffini(
    function: Function,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> Factorization:
    """
    Factor the polynomial of `function` once:
      x^3-6x^2+11x-6  ->  ["x^2-5x+6", "x-1"]
    Factorization.factors is empty when none of the candidates is a zero, or
    when a coefficient is too large to enumerate its divisors.
    Raises DomainError above settings.max_degree.
    """
    settings = settings or Settings()
    tracer = tracer or Tracer()
    poly = function.polynomial()
    poly.normalize()
    letter = poly.letter
    text = poly.format()
    settings.check_degree(poly.degree, text)
    dense = _dense(poly)
    degree = len(dense) - 1

    if degree < 1:
        tracer.add("unfactorable", {"polynomial": text, "reason": "degree < 1"})
        return Factorization(polynomial=text, status=UNFACTORABLE)

    if max(abs(dense[0]), abs(dense[-1])) > settings.max_divisor:
        logger.info("coefficients of %s too large for divisor search", text)
        tracer.add("unfactorable", {"polynomial": text, "reason": "coefficient too large for divisor search"})
        return Factorization(polynomial=text, status=UNFACTORABLE)

    candidates = candidate_roots(dense[-1], dense[0])
    logger.debug("ruffini candidates for %s: %s", text, [str(c) for c in candidates])
    tracer.add("ruffini_candidates", {"polynomial": text, "candidates": [float(c) for c in candidates]})

    expr = Member.from_coefficients(dense, letter).format()
    root = next((c for c in candidates if is_zero(expr, c, letter)), None)
    if root is None:
        logger.info("no rational root for %s", text)
        tracer.add("unfactorable", {"polynomial": text, "reason": "no rational root among candidates"})
        return Factorization(polynomial=text, status=UNFACTORABLE)

    tracer.add("ruffini_root", {"polynomial": text, "root": float(root)})
    products, sums = synthetic_division(dense, root)
    table = RuffiniTable(
        coefficients=[float(c) for c in dense],
        root=float(root),
        products=[float(p) for p in products],
        sums=[float(s) for s in sums],
    )
    tracer.add("ruffini_table", table.to_dict())

    quotient = Member.from_coefficients(table.quotient, letter).format()
    divisor = linear_factor(float(root), letter)
    factors = [quotient, divisor]
    tracer.add("ruffini_factors", {"polynomial": text, "factors": factors,
                                   "product": f"({quotient})({divisor})"})
    logger.debug("ruffini %s = (%s)(%s), root %s", text, quotient, divisor, format_number(float(root)))
    return Factorization(polynomial=text, factors=factors, root=float(root), table=table)
