# -----------------------------------------------------------------------------
# SolverSession: caller-owned registry of the points found while solving
# Purpose:
#   Collect intersections, extrema and other notable points so a graph page
#   can draw them. Points are deduplicated by exact coordinates and named
#   A, B, ..., Z, AA, AB, ... in registration order.
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import List, Optional

from .types import Point


def point_name(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA, 27 -> AB (spreadsheet column naming)."""
    name = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, 26)
        name = chr(ord("A") + rem) + name
    return name


class SolverSession:
    def __init__(self):
        self.points: List[Point] = []

    def add_point(self, x: float, y: float, background: Optional[str] = None,
                  foreground: Optional[str] = None) -> Point:
        # -0.0 and 0.0 are the same point
        x, y = x + 0.0, y + 0.0
        for p in self.points:
            if p.x == x and p.y == y:
                return p
        point = Point(x=x, y=y, name=point_name(len(self.points)),
                      background=background, foreground=foreground)
        self.points.append(point)
        return point

    def points_on_axis(self, axis: str) -> List[Point]:
        """Registered points lying on the x axis (y == 0) or the y axis (x == 0)."""
        if axis == "x":
            return [p for p in self.points if p.y == 0]
        if axis == "y":
            return [p for p in self.points if p.x == 0]
        raise ValueError(f"Unknown axis {axis!r}; expected 'x' or 'y'.")

    def reset(self) -> None:
        self.points = []
