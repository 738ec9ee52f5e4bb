"""
Nearest Planner - Starts each stroke at the head closest to the pen.
"""

from typing import Optional, Tuple

from ..base import PathPlanner
from ..factory import register_planner
from ..grid import Coord, Grid


@register_planner
class NearestPlanner(PathPlanner):
    """
    Greedy planner that minimizes pen-up travel between strokes.

    The next stroke starts at the unvisited head with the smallest squared
    Euclidean distance to where the previous stroke ended. Ties go to the
    first head in row-major order.
    """
    name = "nearest"
    description = "Nearest head - Shortest jump from the last stroke's end"

    def select_start(self, head_grid: Grid, reference: Coord) -> Optional[Tuple[Coord, int]]:
        best: Optional[Tuple[Coord, int]] = None
        best_distance = 0

        for (x, y), color in head_grid.nonzero_cells():
            distance = (x - reference[0]) ** 2 + (y - reference[1]) ** 2
            if best is None or distance < best_distance:
                best = ((x, y), color)
                best_distance = distance

        return best
