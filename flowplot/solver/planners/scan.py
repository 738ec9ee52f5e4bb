"""
Scan Planner - Starts each stroke at the first remaining head in row-major order.
"""

from typing import Optional, Tuple

from ..base import PathPlanner
from ..factory import register_planner
from ..grid import Coord, Grid


@register_planner
class ScanPlanner(PathPlanner):
    """
    Simplest planner: ignores the pen position entirely.

    Produces the same strokes as the nearest planner but usually with
    longer jumps between them.
    """
    name = "scan"
    description = "Scan order - First unvisited head, row by row"

    def select_start(self, head_grid: Grid, reference: Coord) -> Optional[Tuple[Coord, int]]:
        return next(iter(head_grid.nonzero_cells()), None)
