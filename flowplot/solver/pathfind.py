"""
Pathfinder Module - Entry points turning a solved grid into plotter instructions.
"""

from typing import List, Optional, Union

from .base import DEFAULT_START, PathPlanner
from .factory import create_planner
from .grid import Coord, Grid
from .instruction import Instruction
from .solution import PathPlan

# Register built-in planners
from . import planners  # noqa: F401

PlannerArg = Optional[Union[str, PathPlanner]]


def _resolve_planner(planner: PlannerArg) -> PathPlanner:
    if isinstance(planner, PathPlanner):
        return planner
    return create_planner(planner)


def plan_path(head_grid: Grid, solved_grid: Grid, planner: PlannerArg = None,
              start: Coord = DEFAULT_START) -> PathPlan:
    """
    Plan strokes for a solved grid.

    Args:
        head_grid: Sparse endpoint grid, cleared as heads are visited
        solved_grid: Solved (or best-effort) grid
        planner: Planner name or instance (default "nearest")
        start: Pen reference for the first stroke

    Returns:
        PathPlan with instructions and travel metrics
    """
    return _resolve_planner(planner).plan(head_grid, solved_grid, start)


def pathfind(head_grid: Grid, solved_grid: Grid, planner: PlannerArg = None,
             start: Coord = DEFAULT_START) -> List[Instruction]:
    """
    Ordered instruction sequence tracing every color's path.

    Consumes head_grid destructively; pass a copy to keep the original.
    """
    return plan_path(head_grid, solved_grid, planner, start).instructions
