# -----------------------------------------------------------------------------
# Expression evaluator (SymPy-backed)
# Purpose:
#   Turn a polynomial string written in the term grammar ("2x^2+3x-5") into a
#   number at a given point. `^` is read as power, juxtaposition as product and
#   decimal literals are rationalized, so `is_zero` is an exact test.
# Notes:
#   - Inputs are strings produced by Member.format(); the variable letter is
#     bound to a plain Symbol so letters like E or I never resolve to constants.
# -----------------------------------------------------------------------------

from __future__ import annotations
from functools import lru_cache
from tokenize import TokenError
from typing import Union

from sympy import Rational, Symbol
from sympy.core.sympify import SympifyError
from sympy.parsing.sympy_parser import (
    convert_xor,
    implicit_multiplication_application,
    parse_expr,
    rationalize,
    standard_transformations,
)

from .rational import Number, exact

TRANSFORMATIONS = standard_transformations + (convert_xor, implicit_multiplication_application, rationalize)


class EvaluationError(ValueError): pass


@lru_cache(maxsize=512)
def compile_expression(expr: str, letter: str = "x"):
    """Parse `expr` once per (expr, letter); repeated probes hit the cache."""
    symbol = Symbol(letter)
    try:
        parsed = parse_expr(expr, local_dict={letter: symbol}, transformations=TRANSFORMATIONS)
    except (SympifyError, SyntaxError, TypeError, TokenError) as e:
        raise EvaluationError(f"Cannot parse expression {expr!r}: {e}") from e
    extra = parsed.free_symbols - {symbol}
    if extra:
        names = ", ".join(sorted(str(s) for s in extra))
        raise EvaluationError(f"Expression {expr!r} has unbound symbols: {names}")
    return parsed, symbol


def _substitute(expr: str, value: Union[Number, Rational], letter: str):
    parsed, symbol = compile_expression(expr, letter)
    if not isinstance(value, Rational):
        r = exact(value)
        value = Rational(r.numerator, r.denominator)
    return parsed.subs(symbol, value)


def evaluate(expr: str, x: Number, letter: str = "x") -> float:
    result = _substitute(expr, x, letter)
    if not result.is_number:
        raise EvaluationError(f"Expression {expr!r} did not reduce to a number at {letter}={x}")
    return float(result)


def is_zero(expr: str, x: Number, letter: str = "x") -> bool:
    """Exact zero test at a rational point (no float tolerance involved)."""
    result = _substitute(expr, x, letter)
    if not result.is_number:
        raise EvaluationError(f"Expression {expr!r} did not reduce to a number at {letter}={x}")
    return result == 0
