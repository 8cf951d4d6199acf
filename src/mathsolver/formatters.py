# -----------------------------------------------------------------------------
# Trace & result rendering
# Purpose:
#   Keep presentation out of the algorithms: turn Tracer steps into readable
#   lines (plain text or LaTeX), interval sets into "(-∞,-1) ∪ (1,+∞)", a
#   RuffiniTable into a text grid, and function/point lists into the query
#   parameters consumed by the graph page.
# -----------------------------------------------------------------------------

from __future__ import annotations
import json
import math
from typing import Any, Dict, Iterable, List, Optional

from .rational import rational_display
from .types import Interval, Point, RuffiniTable


def _num(value: Optional[float], latex: bool = False) -> str:
    return rational_display(value, latex=latex)


def intervals_to_string(intervals: Iterable[Interval], latex: bool = False) -> str:
    parts = [f"({_num(i.start, latex)},{_num(i.end, latex)})" for i in intervals]
    if not parts:
        return "\\emptyset" if latex else "∅"
    return (" \\cup " if latex else " ∪ ").join(parts)


def render_ruffini_table(table: RuffiniTable, latex: bool = False) -> str:
    """
    Three-row synthetic-division grid:
          |  1   -6   11   -6
        1 |       1   -5    6
          |  1   -5    6    0
    """
    def cells(values): return [_num(v, latex) for v in values]
    top = cells(table.coefficients)
    middle = [""] + cells(table.products)
    bottom = cells(table.sums)
    width = max(len(c) for c in top + middle + bottom + [_num(table.root, latex)])
    left = max(len(_num(table.root, latex)), 1)
    if latex:
        header = "c|" + "r" * len(top)
        rows = [
            " & " + " & ".join(top),
            _num(table.root, True) + " & " + " & ".join(middle),
            " & " + " & ".join(bottom),
        ]
        return "\\begin{array}{" + header + "}" + " \\\\ ".join(rows) + "\\end{array}"
    def fmt(row): return " ".join(c.rjust(width) for c in row)
    return "\n".join([
        " " * left + " | " + fmt(top),
        _num(table.root).rjust(left) + " | " + fmt(middle),
        " " * left + " | " + fmt(bottom),
    ])


def render_step(step: Dict[str, Any], latex: bool = False) -> Optional[str]:
    """One trace step as a line of text; None for steps with no reader-facing form."""
    kind, d = step["kind"], step["detail"]
    def n(v): return _num(v, latex)
    if kind == "equation":
        return f"Solve {d['equation']} (degree {d['degree']})"
    if kind == "linear":
        return f"{d['equation']}: x = -({n(d['b'])})/({n(d['a'])}) = {n(d['root'])}"
    if kind == "discriminant":
        delta = "\\Delta" if latex else "Δ"
        return f"{delta} = b^2-4ac = ({n(d['b'])})^2-4({n(d['a'])})({n(d['c'])}) = {n(d['delta'])}"
    if kind == "roots":
        roots = ", ".join(n(r) for r in d["results"]) or ("\\emptyset" if latex else "∅")
        return f"Roots of {d['equation']}: {roots}"
    if kind == "impossible":
        return f"{d['equation']}: no real solutions"
    if kind == "identity":
        return f"{d['equation']}: true for every x"
    if kind == "unfactorable":
        return f"{d.get('polynomial') or d.get('equation')}: cannot factor ({d['reason']})"
    if kind == "ruffini_candidates":
        return f"Candidate zeros of {d['polynomial']}: " + ", ".join(n(c) for c in d["candidates"])
    if kind == "ruffini_root":
        return f"P({n(d['root'])}) = 0"
    if kind == "ruffini_table":
        return render_ruffini_table(RuffiniTable(**d), latex)
    if kind == "ruffini_factors":
        return f"{d['polynomial']} = {d['product']}"
    if kind == "sign_piece":
        return f"{d['piece']} > 0 for {d['positive_where']}"
    if kind == "sign_table":
        cols = [n(-math.inf)] + [n(b) for b in d["breakpoints"]]
        lines = ["sign right of: " + " ".join(cols)]
        for row in d["rows"]:
            label = row["piece"] if row["piece"] != "product" else "f"
            lines.append(f"{label}: " + " ".join("+" if s > 0 else "-" for s in row["signs"]))
        return "\n".join(lines)
    if kind in ("derivative", "second_derivative"):
        return f"{d.get('derivative') or d.get('second_derivative')}"
    if kind == "extremum":
        label = "Maximum" if d["kind"] == "max" else "Minimum"
        return f"{label} at ({n(d['x'])}, {n(d['y'])})"
    if kind == "intersect_y":
        p = d["point"]
        return f"y-axis intersection ({n(p['x'])}, {n(p['y'])})"
    if kind == "parity":
        return f"f(-x) = {d['f_of_minus_x']}, -f(x) = {d['minus_f']}: {d['parity']}"
    if kind == "area":
        return f"A = {n(d['value'])}"
    if kind == "error":
        return f"Error: {d['message']}"
    return None


def render_steps(steps: List[Dict[str, Any]], latex: bool = False) -> List[str]:
    lines = [line for line in (render_step(s, latex) for s in steps) if line]
    if latex:
        return [f"\\[ {line} \\]" for line in lines]
    return lines


def _point_json(p: Point) -> Dict[str, Any]:
    return {k: v for k, v in p.to_dict().items() if v is not None and not (isinstance(v, float) and not math.isfinite(v))}


def graph_params(functions: Iterable[str], points: Iterable[Point] = ()) -> Dict[str, str]:
    """Serialized parameters for the graph page: function strings and named points."""
    return {
        "functions": json.dumps(list(functions)),
        "points": json.dumps([_point_json(p) for p in points]),
    }
