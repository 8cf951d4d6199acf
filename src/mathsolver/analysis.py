# -----------------------------------------------------------------------------
# Function study
# Responsibilities:
#   • Parity: compare f(-x) with f(x) and -f(x) structurally
#   • Positivity: sign analysis of f
#   • Monotonicity: sign analysis of f', local maxima/minima as points
#   • Concavity: sign analysis of f''
#   • Area: total unsigned area between consecutive x-points via F(x)
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Union

from .config import Settings
from .equations import as_function
from .function import Function
from .inequalities import function_greater_than_zero
from .member import Member
from .rational import format_number
from .session import SolverSession
from .tracer import Tracer
from .types import AreaResult, ConcavityResult, MonotonicityResult, ParityResult, Point, SignAnalysis

logger = logging.getLogger(__name__)

FunctionLike = Union[Function, str]


def parity(function: FunctionLike, tracer: Optional[Tracer] = None) -> ParityResult:
    """
    Even iff f(-x) == f(x), odd iff f(-x) == -f(x), compared on simplified,
    key-sorted terms. A non-integer exponent makes the function neither.
    """
    tracer = tracer or Tracer()
    poly = as_function(function).polynomial()
    minus_f = poly.negated()
    integral = all(float(t.exponent) == int(t.exponent) for t in poly)
    f_of_minus_x = Member(t.negated() if integral and int(t.exponent) % 2 else t for t in poly)
    if integral:
        is_even = f_of_minus_x.canonical() == poly.canonical()
        is_odd = f_of_minus_x.canonical() == minus_f.canonical()
    else:
        is_even = is_odd = False
    result = ParityResult(
        function=poly.format(),
        minus_f=minus_f.format(),
        f_of_minus_x=f_of_minus_x.format() if integral else "",
        is_even=is_even,
        is_odd=is_odd,
    )
    tracer.add("parity", result.to_dict())
    return result


def positivity(
    function: FunctionLike,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> SignAnalysis:
    return function_greater_than_zero(function, tracer, settings)


def monotonicity(
    function: FunctionLike,
    session: Optional[SolverSession] = None,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> MonotonicityResult:
    """
    Increasing where f' > 0, decreasing where f' < 0. A '+' interval followed
    by a '-' interval is a local maximum at the shared bound; '-' then '+' is
    a local minimum. Extrema are registered in the session when given.
    """
    tracer = tracer or Tracer()
    function = as_function(function)
    derivative = function.derive()
    tracer.add("derivative", {"function": function.format(), "derivative": derivative.format()})
    signs = function_greater_than_zero(derivative, tracer, settings)

    maxima: List[Point] = []
    minima: List[Point] = []
    # merged runs alternate in sign, so every shared bound is an extremum
    for before, _ in zip(signs.ordered, signs.ordered[1:]):
        x = before.interval.end
        y = function.evaluate(x) + 0.0
        point = session.add_point(x, y) if session is not None else Point(x=x, y=y)
        (maxima if before.sign > 0 else minima).append(point)
        tracer.add("extremum", {"kind": "max" if before.sign > 0 else "min", "x": x, "y": y})

    return MonotonicityResult(
        derivative=derivative.format(),
        increasing=signs.positive,
        decreasing=signs.negative,
        maxima=maxima,
        minima=minima,
        status=signs.status,
    )


def concavity(
    function: FunctionLike,
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> ConcavityResult:
    tracer = tracer or Tracer()
    second = as_function(function).derive(2)
    tracer.add("second_derivative", {"second_derivative": second.format()})
    signs = function_greater_than_zero(second, tracer, settings)
    return ConcavityResult(
        second_derivative=second.format(),
        upward=signs.positive,
        downward=signs.negative,
        status=signs.status,
    )


def area(
    function: FunctionLike,
    points: Iterable[Union[float, Point]],
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> AreaResult:
    """
    Total unsigned area between consecutive x-points: sum of |F(b) - F(a)|
    with F the antiderivative. This is not the signed definite integral; a
    region below the axis adds to the total instead of cancelling.
    """
    tracer = tracer or Tracer()
    settings = settings or Settings()
    xs = sorted({(p.x if isinstance(p, Point) else float(p)) + 0.0 for p in points})
    if len(xs) < 2:
        return AreaResult(ok=False, xs=xs, error="Area needs at least two distinct x values.")

    function = as_function(function)
    settings.check_degree(function.degree, function.format())
    primitive = function.primitive()
    F = primitive.function
    evaluations = [F.evaluate(x) for x in xs]
    steps = list(primitive.steps)
    value = 0.0
    for (a, fa), (b, fb) in zip(zip(xs, evaluations), zip(xs[1:], evaluations[1:])):
        piece = abs(fb - fa)
        value += piece
        steps.append(f"|F({format_number(b)})-F({format_number(a)})| = "
                     f"|{format_number(fb)}-({format_number(fa)})| = {format_number(piece)}")
    steps.append(f"A = {format_number(value)}")
    tracer.add("area", {"primitive": F.format(), "xs": xs, "evaluations": evaluations, "value": value})
    logger.debug("area of %s over %s = %s", F.format(), xs, value)
    return AreaResult(ok=True, value=value, primitive=F.format(), xs=xs,
                      evaluations=evaluations, steps=steps)
