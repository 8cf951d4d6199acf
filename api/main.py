# --- MathSolver: Polynomial Solver API (FastAPI) -------------------------------
# Purpose: Minimal API over the polynomial engine: solve equations, factor with
# Ruffini, study functions, run YAML worksheets and build graph parameters.
# Every call gets its own point registry, so point names restart at A.
# ------------------------------------------------------------------------------

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from mathsolver.config import configure_logging, load_settings
from mathsolver.formatters import graph_params
from mathsolver.session import SolverSession
from mathsolver.solver import MathSolver
from mathsolver.types import Point
from mathsolver.worksheet import Worksheet, WorksheetError

# Load .env for external configuration (depth limit, tolerance, trace format, worksheet path)
_settings = load_settings()
configure_logging(_settings)
logger = logging.getLogger("mathsolver.api")

app = FastAPI(title="MathSolver Polynomial API")


def _solver() -> MathSolver:
    return MathSolver(_settings, SolverSession())

# ----------------------------- Schemas ----------------------------------------
class SolveRequest(BaseModel):
    # Equation such as "x^2-3x+2=0"; a bare polynomial is read as "... = 0".
    equation: str

class FactorRequest(BaseModel):
    expression: str

class StudyRequest(BaseModel):
    # Function such as "y=x^3-3x"; operations default to every study operation.
    expression: str
    operations: Optional[List[str]] = None
    area_points: Optional[List[float]] = None

class WorksheetRequest(BaseModel):
    # Raw YAML text of a worksheet.
    yaml: str

class PointModel(BaseModel):
    x: float
    y: float
    name: Optional[str] = None
    background: Optional[str] = None
    foreground: Optional[str] = None

class GraphRequest(BaseModel):
    functions: List[str]
    points: Optional[List[PointModel]] = None

# ----------------------------- Routes -----------------------------------------
@app.get("/health")
def health(): return {"ok": True}

@app.post("/solve")
def solve(req: SolveRequest) -> Dict[str, Any]:
    logger.info("solve %s", req.equation)
    return _solver().solve(req.equation).to_dict()

@app.post("/factor")
def factor(req: FactorRequest) -> Dict[str, Any]:
    logger.info("factor %s", req.expression)
    return _solver().factor(req.expression).to_dict()

@app.post("/study")
def study(req: StudyRequest) -> Dict[str, Any]:
    logger.info("study %s %s", req.expression, req.operations or "all")
    return _solver().study(req.expression, req.operations, req.area_points).to_dict()

@app.get("/worksheet")
def default_worksheet() -> Dict[str, Any]:
    """List the entries of the worksheet configured with WORKSHEET_PATH."""
    if not _settings.worksheet_path:
        raise HTTPException(status_code=404, detail="WORKSHEET_PATH not set.")
    try:
        sheet = Worksheet.from_file(_settings.worksheet_path)
    except (OSError, WorksheetError) as e:
        raise HTTPException(status_code=500, detail=f"Cannot load worksheet: {e}")
    return {"title": sheet.title, "count": len(sheet.entries), "items": sheet.list_entries()}

@app.post("/worksheet")
def run_worksheet(req: WorksheetRequest) -> Dict[str, Any]:
    try:
        sheet = Worksheet.from_yaml_text(req.yaml)
    except WorksheetError as e:
        # 400: the worksheet itself is malformed; entries never ran
        raise HTTPException(status_code=400, detail=str(e))
    results = sheet.run(_solver())
    return {"title": sheet.title, "results": {k: r.to_dict() for k, r in results.items()}}

@app.post("/graph")
def graph(req: GraphRequest) -> Dict[str, str]:
    points = [Point(**p.model_dump()) for p in (req.points or [])]
    return graph_params(req.functions, points)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="127.0.0.1", port=8000)
