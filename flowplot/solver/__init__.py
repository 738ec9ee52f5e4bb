"""
Solver Package - Flow puzzle solving and stroke planning engine.

This package fills a sparse grid of color endpoint pairs so every pair is
joined by one path and every cell is used, then orders the paths into a
stroke program a plotter can draw.

Public API:
    - Grid: Bounds-aware byte matrix
    - HeadPair, Puzzle, build_puzzle(): Solver input
    - solve(), solve_context(): Propagation solver with backtracking
    - advance(), sweep(): Single solver steps
    - Instruction: Plotter instruction
    - pathfind(), plan_path(): Stroke planning
    - create_planner(): Planner factory

Usage:
    from flowplot.solver import build_puzzle, solve, pathfind

    puzzle = build_puzzle(width, height, cells)
    grid, solved = solve(puzzle.grid, puzzle.heads)

    for instruction in pathfind(puzzle.head_grid(), grid):
        print(instruction)
"""

# Core data structures
from .errors import ContractViolation, MalformedPuzzleError
from .grid import (
    Coord,
    DISCARDED,
    Direction,
    EMPTY,
    Grid,
    MAX_COLOR,
    NEIGHBOR_ORDER,
    OUT_OF_BOUNDS,
)
from .puzzle import HeadPair, Puzzle, Side, UNSET, build_puzzle, copy_heads, puzzle_from_heads
from .instruction import Instruction, InstructionKind, PEN_DOWN, PEN_UP, TO_VIEW_AREA
from .solution import PathPlan, SolveMetrics, SolveResult
from .context import MAX_SOLVE_SWEEPS, SolveContext

# Solver
from .propagation import (
    Checkpoint,
    GuessTarget,
    Outcome,
    StepResult,
    SweepReport,
    advance,
    solve,
    solve_context,
    sweep,
)

# Planner framework
from .base import DEFAULT_START, PathPlanner
from .factory import (
    DEFAULT_PLANNER,
    create_planner,
    get_planner_info,
    get_planner_names,
    register_planner,
)
from .pathfind import pathfind, plan_path

__all__ = [
    # Errors
    "ContractViolation",
    "MalformedPuzzleError",
    # Grid
    "Coord",
    "DISCARDED",
    "Direction",
    "EMPTY",
    "Grid",
    "MAX_COLOR",
    "NEIGHBOR_ORDER",
    "OUT_OF_BOUNDS",
    # Input
    "HeadPair",
    "Puzzle",
    "Side",
    "UNSET",
    "build_puzzle",
    "copy_heads",
    "puzzle_from_heads",
    # Results
    "Instruction",
    "InstructionKind",
    "PEN_DOWN",
    "PEN_UP",
    "TO_VIEW_AREA",
    "PathPlan",
    "SolveMetrics",
    "SolveResult",
    "MAX_SOLVE_SWEEPS",
    "SolveContext",
    # Solver
    "Checkpoint",
    "GuessTarget",
    "Outcome",
    "StepResult",
    "SweepReport",
    "advance",
    "solve",
    "solve_context",
    "sweep",
    # Planners
    "DEFAULT_PLANNER",
    "DEFAULT_START",
    "PathPlanner",
    "create_planner",
    "get_planner_info",
    "get_planner_names",
    "register_planner",
    "pathfind",
    "plan_path",
]
