# -----------------------------------------------------------------------------
# Tracing utility
# Purpose:
#   Append-only collector for the derivation steps of a solve (parsed input,
#   Ruffini candidates and tables, discriminants, sign rows, ...). Exports a
#   JSON-friendly list; formatters.render_steps turns it into text or LaTeX.
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List

@dataclass
class TraceStep:
    # One trace record: a short 'kind' label plus structured detail.
    kind: str
    detail: Dict[str, Any]

class Tracer:
    def __init__(self): self._steps: List[TraceStep] = []
    def add(self, kind: str, detail: Dict[str, Any]): self._steps.append(TraceStep(kind, detail))
    def kinds(self) -> List[str]: return [s.kind for s in self._steps]
    def steps(self) -> List[Dict[str, Any]]:
        return [{"kind": s.kind, "detail": s.detail} for s in self._steps]
