# -----------------------------------------------------------------------------
# Types module: Shared dataclasses for the MathSolver ecosystem
# Purpose:
#   Structured results passed between the equation solver, Ruffini factoring,
#   sign analysis, function study and the API layer. Every result exposes
#   to_dict() so it can be returned as JSON without further mapping.
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# EquationSolution.status values
SOLVED = "solved"
IMPOSSIBLE = "impossible"
IDENTITY = "identity"
UNFACTORABLE = "unfactorable"


def jsonable_number(value: Optional[float]) -> Optional[float]:
    # JSON has no infinities; open interval bounds become null
    if value is None or not math.isfinite(value):
        return None
    return value


@dataclass
class Point:
    """
    A named point on the cartesian plane.
    - name: assigned by the SolverSession (A, B, ..., Z, AA, ...)
    - background / foreground: optional display colors for the graph page
    """
    x: float
    y: float
    name: str | None = None
    background: str | None = None
    foreground: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "name": self.name,
                "background": self.background, "foreground": self.foreground}


@dataclass
class Interval:
    # Open interval (start, end); +-inf for unbounded sides.
    start: float
    end: float

    def to_dict(self) -> Dict[str, Any]:
        return {"start": jsonable_number(self.start), "end": jsonable_number(self.end)}


@dataclass
class SignedInterval:
    sign: int        # +1 or -1
    interval: Interval

    def to_dict(self) -> Dict[str, Any]:
        return {"sign": self.sign, **self.interval.to_dict()}


@dataclass
class EquationSolution:
    """
    Outcome of solve_equation.
    - results: real roots, ascending and distinct
    - a, b, delta: populated for degree 1 (a, b) and degree 2 (a, b, delta)
    - factored: factor strings when the equation went through Ruffini
    """
    equation: str
    degree: float
    results: List[float] = field(default_factory=list)
    status: str = SOLVED
    a: float | None = None
    b: float | None = None
    c: float | None = None
    delta: float | None = None
    factored: List[str] = field(default_factory=list)
    points: List[Point] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "equation": self.equation, "degree": self.degree, "results": self.results,
            "status": self.status, "a": self.a, "b": self.b, "c": self.c, "delta": self.delta,
            "factored": self.factored, "points": [p.to_dict() for p in self.points],
        }


@dataclass
class RuffiniTable:
    # Synthetic division of `coefficients` (highest first) by (x - root).
    coefficients: List[float]
    root: float
    products: List[float]
    sums: List[float]

    @property
    def quotient(self) -> List[float]:
        return self.sums[:-1]

    @property
    def remainder(self) -> float:
        return self.sums[-1]

    def to_dict(self) -> Dict[str, Any]:
        return {"coefficients": self.coefficients, "root": self.root,
                "products": self.products, "sums": self.sums}


@dataclass
class Factorization:
    """
    factor_with_ruffini output: factors == [quotient, divisor] on success,
    [] (status 'unfactorable') when no rational root was found.
    """
    polynomial: str
    factors: List[str] = field(default_factory=list)
    root: float | None = None
    table: RuffiniTable | None = None
    status: str = SOLVED

    @property
    def ok(self) -> bool:
        return bool(self.factors)

    def to_dict(self) -> Dict[str, Any]:
        return {"polynomial": self.polynomial, "factors": self.factors, "root": self.root,
                "table": self.table.to_dict() if self.table else None, "status": self.status}


@dataclass
class SignAnalysis:
    positive: List[Interval] = field(default_factory=list)
    negative: List[Interval] = field(default_factory=list)
    ordered: List[SignedInterval] = field(default_factory=list)
    breakpoints: List[float] = field(default_factory=list)
    rows: List[Dict[str, Any]] = field(default_factory=list)
    status: str = SOLVED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "positive": [i.to_dict() for i in self.positive],
            "negative": [i.to_dict() for i in self.negative],
            "ordered": [s.to_dict() for s in self.ordered],
            "breakpoints": self.breakpoints,
            "rows": self.rows,
            "status": self.status,
        }


@dataclass
class ParityResult:
    function: str
    minus_f: str
    f_of_minus_x: str
    is_even: bool
    is_odd: bool

    @property
    def label(self) -> str:
        if self.is_even:
            return "even"
        if self.is_odd:
            return "odd"
        return "neither"

    def to_dict(self) -> Dict[str, Any]:
        return {"function": self.function, "minus_f": self.minus_f, "f_of_minus_x": self.f_of_minus_x,
                "is_even": self.is_even, "is_odd": self.is_odd, "parity": self.label}


@dataclass
class MonotonicityResult:
    derivative: str
    increasing: List[Interval] = field(default_factory=list)
    decreasing: List[Interval] = field(default_factory=list)
    maxima: List[Point] = field(default_factory=list)
    minima: List[Point] = field(default_factory=list)
    status: str = SOLVED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "derivative": self.derivative,
            "increasing": [i.to_dict() for i in self.increasing],
            "decreasing": [i.to_dict() for i in self.decreasing],
            "maxima": [p.to_dict() for p in self.maxima],
            "minima": [p.to_dict() for p in self.minima],
            "status": self.status,
        }


@dataclass
class ConcavityResult:
    second_derivative: str
    upward: List[Interval] = field(default_factory=list)
    downward: List[Interval] = field(default_factory=list)
    status: str = SOLVED

    def to_dict(self) -> Dict[str, Any]:
        return {
            "second_derivative": self.second_derivative,
            "upward": [i.to_dict() for i in self.upward],
            "downward": [i.to_dict() for i in self.downward],
            "status": self.status,
        }


@dataclass
class AreaResult:
    ok: bool
    value: float | None = None
    primitive: str | None = None
    xs: List[float] = field(default_factory=list)
    evaluations: List[float] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    error: str | None = None

    def to_dict(self) -> Dict[str, Any]:
        return {"ok": self.ok, "value": self.value, "primitive": self.primitive, "xs": self.xs,
                "evaluations": self.evaluations, "steps": self.steps, "error": self.error}
