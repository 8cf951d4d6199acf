# -----------------------------------------------------------------------------
# Configuration
# Purpose:
#   Read solver settings from the environment (optionally from a .env file)
#   and configure process-wide logging once.
#     MATHSOLVER_MAX_DEPTH       recursion limit for degree reduction (8)
#     MATHSOLVER_MAX_DEGREE      highest degree the algebraic routines accept (100)
#     MATHSOLVER_MAX_DIVISOR     largest |coefficient| whose divisors are enumerated (10^12)
#     MATHSOLVER_ZERO_TOLERANCE  absolute tolerance for a == 0, delta == 0 (1e-12)
#     MATHSOLVER_TRACE_FORMAT    'text' | 'latex'
#     MATHSOLVER_LOG_LEVEL       logging level name (INFO)
#     WORKSHEET_PATH             optional default worksheet YAML
# -----------------------------------------------------------------------------

from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .parsing import DomainError

TRACE_FORMATS = ("text", "latex")
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


@dataclass
class Settings:
    max_depth: int = 8
    max_degree: int = 100
    max_divisor: int = 10 ** 12
    zero_tolerance: float = 1e-12
    trace_format: str = "text"
    log_level: str = "INFO"
    worksheet_path: Optional[str] = None

    def is_zero(self, value: float) -> bool:
        return abs(value) <= self.zero_tolerance

    def check_degree(self, degree: float, text: str) -> None:
        if degree > self.max_degree:
            raise DomainError(f"Degree of {text} exceeds the limit of {self.max_degree}.")


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from os.environ after loading .env (existing vars win)."""
    load_dotenv(env_file)
    trace_format = os.getenv("MATHSOLVER_TRACE_FORMAT", "text").lower()
    if trace_format not in TRACE_FORMATS:
        raise ValueError(f"MATHSOLVER_TRACE_FORMAT must be one of {TRACE_FORMATS}, got {trace_format!r}")
    return Settings(
        max_depth=int(os.getenv("MATHSOLVER_MAX_DEPTH", "8")),
        max_degree=int(os.getenv("MATHSOLVER_MAX_DEGREE", "100")),
        max_divisor=int(os.getenv("MATHSOLVER_MAX_DIVISOR", str(10 ** 12))),
        zero_tolerance=float(os.getenv("MATHSOLVER_ZERO_TOLERANCE", "1e-12")),
        trace_format=trace_format,
        log_level=os.getenv("MATHSOLVER_LOG_LEVEL", "INFO").upper(),
        worksheet_path=os.getenv("WORKSHEET_PATH") or None,
    )


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
