# -----------------------------------------------------------------------------
# Sign analysis
# Purpose:
#   Decide where a polynomial is positive or negative. The polynomial is split
#   into first/second-degree pieces (Ruffini for degree >= 3); every piece
#   becomes an elementary Inequality ("piece > 0 where ..."); a sign table over
#   the sorted breakpoints multiplies the piece signs column by column.
# Notes:
#   - Comparisons are plain numeric predicates, nothing is evaluated from text.
#   - Each column is probed "just right" of its breakpoint: a '>' condition
#     holds at its own bound, a '<' condition does not.
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .config import Settings
from .equations import as_function, solve_equation
from .function import Function
from .member import Member
from .rational import format_number
from .ruffini import factor_with_ruffini
from .tracer import Tracer
from .types import IDENTITY, SOLVED, UNFACTORABLE, Interval, SignAnalysis, SignedInterval

logger = logging.getLogger(__name__)

ALL = "all"        # every condition holds
ANY = "any"        # at least one condition holds
ALWAYS = "always"
NEVER = "never"


@dataclass(frozen=True)
class Condition:
    op: str        # '>' or '<'
    bound: float

    def holds_right_of(self, x: float) -> bool:
        if self.op == ">":
            return x >= self.bound
        if self.op == "<":
            return x < self.bound
        raise ValueError(f"Unknown comparison operator {self.op!r}")

    def format(self, letter: str = "x") -> str:
        return f"{letter}{self.op}{format_number(self.bound)}"


@dataclass
class Inequality:
    """Where one factor is positive, as a combination of Conditions."""
    mode: str
    conditions: List[Condition] = field(default_factory=list)
    piece: str = ""

    @property
    def bounds(self) -> List[float]:
        return [c.bound for c in self.conditions]

    def sign_right_of(self, x: float) -> int:
        if self.mode == ALWAYS:
            return 1
        if self.mode == NEVER:
            return -1
        checks = [c.holds_right_of(x) for c in self.conditions]
        holds = all(checks) if self.mode == ALL else any(checks)
        return 1 if holds else -1

    def format(self, letter: str = "x") -> str:
        if self.mode == ALWAYS:
            return f"∀{letter}"
        if self.mode == NEVER:
            return "∅"
        if self.mode == ALL and len(self.conditions) == 2:
            low, high = sorted(self.bounds)
            return f"{format_number(low)}<{letter}<{format_number(high)}"
        joiner = " ∨ " if self.mode == ANY else " ∧ "
        return joiner.join(c.format(letter) for c in self.conditions)


def split_pieces(
    poly: Member,
    tracer: Tracer,
    settings: Settings,
    depth: int = 0,
) -> Tuple[List[Member], bool]:
    """
    Factor `poly` until every piece has degree <= 2.
    Returns (pieces, complete); complete is False when some degree >= 3 piece
    has no rational root or the depth limit was hit.
    Raises DomainError above settings.max_degree.
    """
    settings.check_degree(poly.degree, poly.format())
    if poly.degree <= 2:
        return [poly], True
    if depth >= settings.max_depth:
        logger.warning("depth limit %d reached while splitting %s", settings.max_depth, poly.format())
        return [], False
    factorization = factor_with_ruffini(Function(poly, Member([])), tracer, settings)
    if not factorization.ok:
        return [], False
    pieces: List[Member] = []
    for factor in factorization.factors:
        sub = Member.parse(factor)
        sub_pieces, ok = split_pieces(sub, tracer, settings, depth + 1)
        if not ok:
            return [], False
        pieces += sub_pieces
    return pieces, True


def piece_inequality(piece: Member, settings: Settings) -> Inequality:
    """Elementary inequality 'piece > 0' for a piece of degree 0, 1 or 2."""
    text = piece.format()
    degree = int(piece.degree)
    coefficients = piece.coefficients(degree)
    if degree == 0:
        return Inequality(ALWAYS if coefficients[0] > 0 else NEVER, piece=text)
    if degree == 1:
        a, b = coefficients
        root = -b / a + 0.0
        return Inequality(ALL, [Condition(">" if a > 0 else "<", root)], piece=text)

    a = coefficients[0]
    # quadratic roots only, no points registered for intermediate pieces
    solution = solve_equation(piece.format() + "=0", 2, settings=settings)
    if len(solution.results) < 2:
        return Inequality(ALWAYS if a > 0 else NEVER, piece=text)
    r1, r2 = solution.results
    if a > 0:
        return Inequality(ANY, [Condition("<", r1), Condition(">", r2)], piece=text)
    return Inequality(ALL, [Condition(">", r1), Condition("<", r2)], piece=text)


def solve_inequalities(
    inequalities: List[Inequality],
    letter: str = "x",
    tracer: Optional[Tracer] = None,
) -> SignAnalysis:
    """
    Sign table over the breakpoints of `inequalities`. Columns start at -inf
    and at each breakpoint; the column sign is the product of the row signs.
    Runs of equal sign merge into one interval ending at the next breakpoint.
    """
    tracer = tracer or Tracer()
    breakpoints = sorted({b for ineq in inequalities for b in ineq.bounds})
    probes = [-math.inf] + breakpoints

    rows: List[Dict[str, Any]] = []
    product = [1] * len(probes)
    for ineq in inequalities:
        signs = [ineq.sign_right_of(p) for p in probes]
        product = [s * q for s, q in zip(signs, product)]
        rows.append({"piece": ineq.piece, "inequality": ineq.format(letter), "signs": signs})
    rows.append({"piece": "product", "inequality": "", "signs": product})
    tracer.add("sign_table", {"breakpoints": breakpoints, "rows": rows})

    ordered: List[SignedInterval] = []
    i = 0
    while i < len(probes):
        j = i
        while j + 1 < len(probes) and product[j + 1] == product[i]:
            j += 1
        end = probes[j + 1] if j + 1 < len(probes) else math.inf
        ordered.append(SignedInterval(product[i], Interval(probes[i], end)))
        i = j + 1

    return SignAnalysis(
        positive=[s.interval for s in ordered if s.sign > 0],
        negative=[s.interval for s in ordered if s.sign < 0],
        ordered=ordered,
        breakpoints=breakpoints,
        rows=rows,
    )


def function_greater_than_zero(
    function: Union[Function, str],
    tracer: Optional[Tracer] = None,
    settings: Optional[Settings] = None,
) -> SignAnalysis:
    """
    Where is the polynomial of `function` > 0 (positive set) and < 0
    (negative set).
      x^2-1  ->  positive (-inf,-1) U (1,+inf), negative (-1,1)
    """
    tracer = tracer or Tracer()
    settings = settings or Settings()
    poly = as_function(function).polynomial()
    poly.simplify()
    poly.normalize()
    letter = poly.letter
    if not poly.terms:
        tracer.add("sign_identity", {"polynomial": "0"})
        return SignAnalysis(status=IDENTITY)

    pieces, complete = split_pieces(poly, tracer, settings)
    if not complete:
        logger.info("sign analysis of %s: polynomial cannot be split", poly.format())
        tracer.add(UNFACTORABLE, {"polynomial": poly.format(), "reason": "sign analysis needs a full factorization"})
        return SignAnalysis(status=UNFACTORABLE)

    inequalities = []
    for piece in pieces:
        ineq = piece_inequality(piece, settings)
        tracer.add("sign_piece", {"piece": ineq.piece, "positive_where": ineq.format(letter)})
        inequalities.append(ineq)
    analysis = solve_inequalities(inequalities, letter, tracer)
    analysis.status = SOLVED
    return analysis
