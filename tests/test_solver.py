import json
import math

import pytest

from mathsolver.config import Settings, load_settings
from mathsolver.formatters import graph_params, intervals_to_string, render_ruffini_table, render_steps
from mathsolver.solver import STUDY_OPERATIONS, MathSolver
from mathsolver.types import Interval, Point, RuffiniTable


def test_solve_quadratic():
    res = MathSolver().solve("x^2-3x+2=0")
    assert res.ok
    assert res.sections["solution"]["results"] == [1.0, 2.0]
    assert [p["name"] for p in res.points] == ["A", "B"]
    assert any("Δ" in s for s in res.steps)

def test_solve_bare_polynomial():
    res = MathSolver().solve("x^2-4")
    assert res.ok
    assert res.function == "x^2-4=0"
    assert res.sections["solution"]["results"] == [-2.0, 2.0]

@pytest.mark.parametrize("equation", ["x^2+=", "x=1=2", "2x^a=0", "x^inf-1=0", "x^nan=0", "y=1_0x", "x^1e3=0"])
def test_parse_errors_are_user_input(equation):
    res = MathSolver().solve(equation)
    assert not res.ok
    assert res.error_kind == "user_input"
    assert res.full_trace[-1]["kind"] == "error"

def test_domain_errors_are_user_input():
    res = MathSolver().solve("x^2.5=1")
    assert not res.ok
    assert res.error_kind == "user_input"

@pytest.mark.parametrize("call", [
    lambda s: s.solve("x^1000000000+1=0"),
    lambda s: s.factor("x^200-1"),
    lambda s: s.study("y=x^500", ["positivity", "area"], [0, 2]),
])
def test_degree_limit_is_user_input(call):
    res = call(MathSolver())
    assert not res.ok
    assert res.error_kind == "user_input"
    assert "exceeds the limit" in res.error

def test_factor():
    res = MathSolver().factor("x^3-6x^2+11x-6")
    section = res.sections["factorization"]
    assert section["factors"] == ["x^2-5x+6", "x-1"]
    assert section["table"]["sums"] == [1.0, -5.0, 6.0, 0.0]
    assert "|" in section["table_text"]

def test_study_runs_every_operation_but_area_by_default():
    res = MathSolver().study("y=x^3-3x")
    assert res.ok
    assert set(res.sections) == set(STUDY_OPERATIONS) - {"area"}
    assert res.sections["parity"]["parity"] == "odd"
    assert res.sections["derivative"]["function"] == "y'=3x^2-3"
    assert res.sections["slope"] is None

def test_study_area_and_primitive():
    res = MathSolver().study("y=x", ["area", "primitive"], [0, 2])
    assert res.sections["area"]["value"] == pytest.approx(2.0)
    assert res.sections["primitive"]["function"] == "y=1/2x^2"

def test_study_unknown_operation():
    res = MathSolver().study("y=x", ["volume"])
    assert not res.ok
    assert res.error_kind == "user_input"

def test_result_to_dict_has_no_infinities():
    d = MathSolver().study("y=x^2-1", ["positivity"]).to_dict()
    positive = d["sections"]["positivity"]["positive"]
    assert positive[0] == {"start": None, "end": -1.0}
    json.dumps(d, allow_nan=False)

def test_latex_trace():
    res = MathSolver(Settings(trace_format="latex")).solve("x^2-1=0")
    assert res.steps
    assert all(s.startswith("\\[ ") and s.endswith(" \\]") for s in res.steps)

def test_intervals_to_string():
    text = intervals_to_string([Interval(-math.inf, -1.0), Interval(1.0, math.inf)])
    assert text == "(-∞,-1) ∪ (1,+∞)"
    assert intervals_to_string([]) == "∅"

def test_render_ruffini_table():
    table = RuffiniTable(coefficients=[1.0, -6.0, 11.0, -6.0], root=1.0,
                         products=[1.0, -5.0, 6.0], sums=[1.0, -5.0, 6.0, 0.0])
    lines = render_ruffini_table(table).splitlines()
    assert len(lines) == 3
    assert lines[1].startswith("1 |")
    assert lines[2].split("|")[1].split() == ["1", "-5", "6", "0"]

def test_render_steps_skips_unknown_kinds():
    steps = [{"kind": "inputs", "detail": {}}, {"kind": "roots", "detail": {"equation": "x=0", "results": []}}]
    assert render_steps(steps) == ["Roots of x=0: ∅"]

def test_graph_params():
    params = graph_params(["y=x^2-1"], [Point(1.0, 0.0, "A")])
    assert json.loads(params["functions"]) == ["y=x^2-1"]
    assert json.loads(params["points"]) == [{"x": 1.0, "y": 0.0, "name": "A"}]

def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("MATHSOLVER_MAX_DEPTH", "3")
    monkeypatch.setenv("MATHSOLVER_TRACE_FORMAT", "LaTeX")
    monkeypatch.setenv("MATHSOLVER_ZERO_TOLERANCE", "1e-6")
    settings = load_settings()
    assert settings.max_depth == 3
    assert settings.trace_format == "latex"
    assert settings.is_zero(5e-7)

def test_load_settings_rejects_unknown_trace_format(monkeypatch):
    monkeypatch.setenv("MATHSOLVER_TRACE_FORMAT", "html")
    with pytest.raises(ValueError):
        load_settings()
