# -----------------------------------------------------------------------------
# Worksheet loader & runner
# Purpose: Parse a YAML worksheet (a titled list of functions to study) into
# typed entries and run each entry through a MathSolver.
# - Depends on .solver (MathSolver, SolverResult) for the batch run.
# -----------------------------------------------------------------------------

from __future__ import annotations
import yaml
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .solver import STUDY_OPERATIONS, MathSolver, SolverResult

# Domain-specific error to signal malformed worksheets, missing fields, etc.
class WorksheetError(Exception): pass

@dataclass
class WorksheetEntry:
    id: str
    expr: str
    operations: Optional[List[str]] = None      # None: every study operation
    area_points: List[float] = field(default_factory=list)
    notes: str = ""

@dataclass
class Worksheet:
    title: str
    entries: List[WorksheetEntry]

    @staticmethod
    def from_yaml_dict(d: Dict[str, Any]) -> "Worksheet":
        """
        Build a Worksheet from a pre-parsed YAML dictionary.
        Expected YAML shape:
          title: "Cubic functions"
          functions:
            - id: cubic_1
              expr: "y=x^3-6x^2+11x-6"
              operations: [intersections, monotonicity]   # optional
              area_points: [1, 3]                          # optional
              notes: "..."                                 # optional
        """
        if not isinstance(d, dict):
            raise WorksheetError("Worksheet must be a mapping with 'title' and 'functions'.")
        functions = d.get("functions")
        if not isinstance(functions, list) or not functions:
            raise WorksheetError("Worksheet needs a non-empty 'functions' list.")
        entries: List[WorksheetEntry] = []
        seen = set()
        for i, fd in enumerate(functions):
            if not isinstance(fd, dict) or "expr" not in fd:
                raise WorksheetError(f"Entry #{i + 1} has no 'expr'.")
            entry_id = str(fd.get("id") or f"f{i + 1}")
            if entry_id in seen:
                raise WorksheetError(f"Duplicate entry id: {entry_id}")
            seen.add(entry_id)
            ops = fd.get("operations")
            if ops is not None:
                ops = [str(op) for op in ops]
                unknown = [op for op in ops if op not in STUDY_OPERATIONS]
                if unknown:
                    raise WorksheetError(f"Entry {entry_id}: unknown operation(s) {', '.join(unknown)}")
            try:
                area_points = [float(x) for x in (fd.get("area_points") or [])]
            except (TypeError, ValueError):
                raise WorksheetError(f"Entry {entry_id}: area_points must be numbers.") from None
            entries.append(WorksheetEntry(
                id=entry_id, expr=str(fd["expr"]), operations=ops,
                area_points=area_points, notes=str(fd.get("notes", "")),
            ))
        return Worksheet(title=str(d.get("title", "")), entries=entries)

    @staticmethod
    def from_yaml_text(text: str) -> "Worksheet":
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise WorksheetError(f"Invalid YAML: {e}") from e
        return Worksheet.from_yaml_dict(data)

    @staticmethod
    def from_file(path: str) -> "Worksheet":
        with open(path, "r", encoding="utf-8") as f:
            return Worksheet.from_yaml_text(f.read())

    def list_entries(self) -> List[Dict[str, Any]]:
        return [{"id": e.id, "expr": e.expr, "operations": e.operations,
                 "area_points": e.area_points, "notes": e.notes} for e in self.entries]

    def run(self, solver: MathSolver) -> Dict[str, SolverResult]:
        """
        Study every entry in order; a failing entry does not stop the others.
        Each entry starts from an empty point registry.
        """
        results: Dict[str, SolverResult] = {}
        for e in self.entries:
            solver.session.reset()
            results[e.id] = solver.study(e.expr, e.operations, e.area_points)
        return results
