# -----------------------------------------------------------------------------
# Equation solving
# Responsibilities:
#   • Degree 0: identity / impossible
#   • Degree 1: root = -b/a
#   • Degree 2: discriminant, 0/1/2 real roots
#   • Degree >= 3: Ruffini factoring, then each factor = 0 recursively
#   • Axis intersections, registered as named points in the SolverSession
# Zero tests on coefficients and discriminants use Settings.zero_tolerance.
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import math
from typing import List, Optional, Union

from .config import Settings
from .function import Function
from .parsing import DomainError, ParseError
from .rational import format_number
from .ruffini import factor_with_ruffini
from .session import SolverSession
from .tracer import Tracer
from .types import (
    IDENTITY, IMPOSSIBLE, SOLVED, UNFACTORABLE,
    EquationSolution, Point,
)

__all__ = ["DomainError", "solve_equation", "solve_higher_degree", "intersect_axis", "as_function"]

logger = logging.getLogger(__name__)


def as_function(equation: Union[Function, str]) -> Function:
    """Accept a Function, a full equation string, or a bare polynomial (read as p=0)."""
    if isinstance(equation, Function):
        return equation
    if "=" not in equation:
        equation = f"{equation}=0"
    return Function.parse(equation)


def _axis_value(axis_label: str) -> float:
    # "y=0" -> 0.0, "y=3" -> 3.0
    _, _, value = axis_label.partition("=")
    try:
        return float(value) if value else 0.0
    except ValueError:
        raise ParseError(f"Invalid axis label: {axis_label!r}") from None


def _register(xs: List[float], y: float, session: Optional[SolverSession]) -> List[Point]:
    if session is None:
        return [Point(x=x, y=y) for x in xs]
    return [session.add_point(x, y) for x in xs]


def solve_equation(
    equation: Union[Function, str],
    degree: Optional[int] = None,
    axis_label: str = "y=0",
    session: Optional[SolverSession] = None,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
    depth: int = 0,
) -> EquationSolution:
    """
    Solve polynomial = 0 for the real roots.

    Roots are returned ascending and registered as points (root, axis value)
    when a session is given. Degrees >= 3 go through solve_higher_degree.
    Raises DomainError on a zero leading coefficient at the claimed degree.
    """
    settings = settings or Settings()
    tracer = tracer or Tracer()
    function = as_function(equation)
    poly = function.polynomial()
    poly.simplify()
    poly.normalize()
    degree = poly.degree if degree is None else degree
    settings.check_degree(degree, poly.format())
    if float(degree) != int(degree) or degree < 0:
        raise DomainError(f"Cannot solve an equation of degree {format_number(degree)}.")
    degree = int(degree)
    text = f"{poly.format()}=0"
    y = _axis_value(axis_label)
    tracer.add("equation", {"equation": text, "degree": degree, "axis": axis_label})

    if degree >= 3:
        return solve_higher_degree(function, degree, axis_label, session, tracer, settings, depth)

    coefficients = poly.coefficients(degree)

    if degree == 0:
        c = coefficients[0]
        status = IDENTITY if settings.is_zero(c) else IMPOSSIBLE
        logger.info("degree 0 equation %s: %s", text, status)
        tracer.add(status, {"equation": text})
        return EquationSolution(equation=text, degree=0, status=status, c=c)

    if degree == 1:
        a, b = coefficients
        if settings.is_zero(a):
            raise DomainError(f"Leading coefficient is zero in first-degree equation {text}.")
        root = -b / a + 0.0
        tracer.add("linear", {"equation": text, "a": a, "b": b, "root": root})
        points = _register([root], y, session)
        return EquationSolution(equation=text, degree=1, results=[root], a=a, b=b, points=points)

    a, b, c = coefficients
    if settings.is_zero(a):
        raise DomainError(f"Leading coefficient is zero in second-degree equation {text}.")
    delta = b * b - 4 * a * c
    tracer.add("discriminant", {"equation": text, "a": a, "b": b, "c": c, "delta": delta})
    if settings.is_zero(delta):
        results = [-b / (2 * a) + 0.0]
    elif delta < 0:
        logger.info("no real roots for %s (delta=%s)", text, format_number(delta))
        tracer.add(IMPOSSIBLE, {"equation": text, "reason": "negative discriminant"})
        return EquationSolution(equation=text, degree=2, status=IMPOSSIBLE, a=a, b=b, c=c, delta=delta)
    else:
        sq = math.sqrt(delta)
        results = sorted([(-b - sq) / (2 * a) + 0.0, (-b + sq) / (2 * a) + 0.0])
    tracer.add("roots", {"equation": text, "results": results})
    points = _register(results, y, session)
    return EquationSolution(equation=text, degree=2, results=results, a=a, b=b, c=c,
                            delta=delta, points=points)


def solve_higher_degree(
    equation: Union[Function, str],
    degree: int,
    axis_label: str = "y=0",
    session: Optional[SolverSession] = None,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
    depth: int = 0,
) -> EquationSolution:
    """
    Factor once with Ruffini and solve every factor = 0 through solve_equation.
    Roots from all factors are merged, deduplicated and sorted. A factor that
    cannot be split (or the depth limit) makes the status 'unfactorable'; the
    roots found elsewhere are still returned.
    """
    settings = settings or Settings()
    tracer = tracer or Tracer()
    function = as_function(equation)
    text = f"{function.polynomial().format()}=0"

    if depth >= settings.max_depth:
        logger.warning("depth limit %d reached while solving %s", settings.max_depth, text)
        tracer.add(UNFACTORABLE, {"equation": text, "reason": "depth limit"})
        return EquationSolution(equation=text, degree=degree, status=UNFACTORABLE)

    factorization = factor_with_ruffini(function, tracer, settings)
    if not factorization.ok:
        return EquationSolution(equation=text, degree=degree, status=UNFACTORABLE)

    results: List[float] = []
    points: List[Point] = []
    factored: List[str] = []
    status = SOLVED
    for factor in factorization.factors:
        logger.debug("solving factor %s=0 at depth %d", factor, depth + 1)
        sub = solve_equation(factor, None, axis_label, session, tracer, settings, depth + 1)
        results += sub.results
        points += [p for p in sub.points if p not in points]
        factored += sub.factored or [factor]
        if sub.status == UNFACTORABLE:
            status = UNFACTORABLE
    results = sorted(set(results))
    if not results and status == SOLVED:
        status = IMPOSSIBLE
    tracer.add("roots", {"equation": text, "results": results, "factored": factored})
    return EquationSolution(equation=text, degree=degree, results=results, status=status,
                            factored=factored, points=points)


def intersect_axis(
    function: Union[Function, str],
    axis: str,
    session: Optional[SolverSession] = None,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> EquationSolution:
    """
    y axis: the single point (0, constant term).
    x axis: the roots of polynomial = 0, registered on y = 0.
    """
    tracer = tracer or Tracer()
    function = as_function(function)
    if axis == "y":
        c = function.polynomial().constant_term + 0.0
        points = _register([0.0], c, session)
        tracer.add("intersect_y", {"function": function.format(), "point": points[0].to_dict()})
        return EquationSolution(equation=f"{function.format()}, x=0", degree=0, results=[c], points=points)
    if axis == "x":
        return solve_equation(function, None, "y=0", session, tracer, settings)
    raise ValueError(f"Unknown axis {axis!r}; expected 'x' or 'y'.")
