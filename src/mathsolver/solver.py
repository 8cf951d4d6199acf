# -----------------------------------------------------------------------------
# MathSolver: end-to-end facade over the polynomial engine
# Responsibilities:
#   • Parse the input once (equation string or bare polynomial)
#   • solve:  real roots of polynomial = 0 (linear, quadratic, Ruffini)
#   • factor: one Ruffini step with its synthetic-division table
#   • study:  intersections, slope, parity, sign, monotonicity, concavity,
#             derivative, primitive and area, each as a result section
#   • Uniform error funnel: every call returns a SolverResult with the trace
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence

from .analysis import area, concavity, monotonicity, parity, positivity
from .config import Settings
from .equations import as_function, intersect_axis, solve_equation
from .evaluator import EvaluationError
from .formatters import render_ruffini_table, render_steps
from .function import Function
from .parsing import DomainError, ParseError
from .ruffini import factor_with_ruffini
from .session import SolverSession
from .tracer import Tracer

logger = logging.getLogger(__name__)

STUDY_OPERATIONS = (
    "intersections", "slope", "parity", "positivity", "monotonicity",
    "concavity", "derivative", "primitive", "area",
)


@dataclass
class SolverResult:
    # Structured response used by the API layer
    ok: bool
    function: str | None
    sections: Dict[str, Any]
    points: List[Dict[str, Any]]
    steps: List[str]
    full_trace: List[Dict[str, Any]]
    error: str | None = None
    error_kind: str | None = None  # "user_input" | "agent"

    def to_dict(self) -> Dict[str, Any]:
        return _jsonable(asdict(self))


def _jsonable(value: Any) -> Any:
    # JSON has no infinities or NaN; unbounded interval ends become None
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value


class MathSolver:
    def __init__(self, settings: Optional[Settings] = None, session: Optional[SolverSession] = None):
        self.settings = settings or Settings()
        self.session = session if session is not None else SolverSession()

    # ---------------- internal helpers ----------------

    def _classify_error(self, e: Exception) -> str:
        """
        Map raw exceptions to a coarse error_kind for the API:
          - 'user_input': malformed equations, degenerate or unsupported input
          - 'agent': anything else (a bug in the engine)
        """
        if isinstance(e, (ParseError, DomainError, EvaluationError)):
            return "user_input"
        if "unknown study operation" in str(e).lower():
            return "user_input"
        return "agent"

    def _result(self, function: Optional[Function], sections: Dict[str, Any], trace: Tracer) -> SolverResult:
        steps = trace.steps()
        return SolverResult(
            ok=True,
            function=function.format() if function is not None else None,
            sections=sections,
            points=[p.to_dict() for p in self.session.points],
            steps=render_steps(steps, latex=self.settings.trace_format == "latex"),
            full_trace=steps,
        )

    def _failure(self, e: Exception, function: Optional[Function], trace: Tracer) -> SolverResult:
        kind = self._classify_error(e)
        if kind == "agent":
            logger.exception("unexpected solver failure")
        else:
            logger.info("rejected input: %s", e)
        trace.add("error", {"kind": kind, "message": str(e)})
        steps = trace.steps()
        return SolverResult(
            ok=False,
            function=function.format() if function is not None else None,
            sections={},
            points=[p.to_dict() for p in self.session.points],
            steps=render_steps(steps, latex=self.settings.trace_format == "latex"),
            full_trace=steps,
            error=str(e),
            error_kind=kind,
        )

    # ---------------- public API ----------------

    def solve(self, equation: str) -> SolverResult:
        trace = Tracer()
        function = None
        try:
            function = as_function(equation)
            trace.add("inputs", {"equation": function.format()})
            solution = solve_equation(function, None, "y=0", self.session, trace, self.settings)
            return self._result(function, {"solution": solution.to_dict()}, trace)
        except Exception as e:
            return self._failure(e, function, trace)

    def factor(self, expression: str) -> SolverResult:
        trace = Tracer()
        function = None
        try:
            function = as_function(expression)
            trace.add("inputs", {"expression": function.format()})
            factorization = factor_with_ruffini(function, trace, self.settings)
            section = factorization.to_dict()
            if factorization.table is not None:
                section["table_text"] = render_ruffini_table(factorization.table)
            return self._result(function, {"factorization": section}, trace)
        except Exception as e:
            return self._failure(e, function, trace)

    def study(
        self,
        expression: str,
        operations: Optional[Sequence[str]] = None,
        area_points: Optional[Sequence[float]] = None,
    ) -> SolverResult:
        """
        Run the requested study operations on one function. Without an
        explicit list every operation runs, except area when no x-points
        were given.
        """
        trace = Tracer()
        function = None
        try:
            if operations is None:
                operations = [op for op in STUDY_OPERATIONS if op != "area" or area_points]
            unknown = [op for op in operations if op not in STUDY_OPERATIONS]
            if unknown:
                raise ValueError(f"Unknown study operation(s): {', '.join(unknown)}")
            function = as_function(expression)
            trace.add("inputs", {"function": function.format(), "operations": list(operations)})
            sections = {op: self._study_one(op, function, area_points or [], trace) for op in operations}
            return self._result(function, sections, trace)
        except Exception as e:
            return self._failure(e, function, trace)

    def _study_one(self, op: str, function: Function, area_points: Sequence[float], trace: Tracer) -> Any:
        settings = self.settings
        if op == "intersections":
            return {
                "x": intersect_axis(function, "x", self.session, trace, settings).to_dict(),
                "y": intersect_axis(function, "y", self.session, trace, settings).to_dict(),
            }
        if op == "slope":
            slope = function.slope
            return asdict(slope) if slope else None
        if op == "parity":
            return parity(function, trace).to_dict()
        if op == "positivity":
            return positivity(function, trace, settings).to_dict()
        if op == "monotonicity":
            return monotonicity(function, self.session, trace, settings).to_dict()
        if op == "concavity":
            return concavity(function, trace, settings).to_dict()
        if op == "derivative":
            return {"function": function.derive().format()}
        if op == "primitive":
            result = function.primitive()
            return {"function": result.function.format(as_fraction=True), "steps": result.steps}
        if op == "area":
            return area(function, area_points, trace, settings).to_dict()
        raise ValueError(f"Unknown study operation: {op}")
