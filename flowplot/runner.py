"""
Runner Module - One solve-and-plan cycle for a single puzzle.

Wires the engine phases together for one external trigger:

    Puzzle -> solve -> plan strokes -> translate to device commands

The caller owns any threading; run_once is synchronous and keeps no state
between calls.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from flowplot.settings import DEFAULT_SETTINGS
from flowplot.solver import (
    PathPlan,
    Puzzle,
    SolveContext,
    SolveResult,
    TO_VIEW_AREA,
    plan_path,
    solve_context,
)
from flowplot.translator import DeviceCommand, translate

logger = logging.getLogger(__name__)


@dataclass
class RunResult:
    """
    Everything produced for one puzzle.

    Attributes:
        solve: Solver result (grid, solved flag, metrics)
        plan: Stroke program for the solved grid
        commands: Device commands for the stroke program
        elapsed_ms: Total time for the cycle
    """
    solve: SolveResult
    plan: PathPlan
    commands: List[DeviceCommand] = field(default_factory=list)
    elapsed_ms: float = 0.0

    @property
    def solved(self) -> bool:
        return self.solve.solved


def run_once(puzzle: Puzzle, settings: Optional[Dict[str, Any]] = None) -> RunResult:
    """
    Solve a puzzle, plan its strokes and translate them for the plotter.

    An unsolved puzzle is still planned on its best-effort grid so the
    partial result can be inspected.

    Args:
        puzzle: Grid and heads (not modified)
        settings: Settings dictionary (missing keys fall back to defaults)

    Returns:
        RunResult
    """
    config = DEFAULT_SETTINGS.copy()
    if settings:
        config.update(settings)

    start_time = time.perf_counter()

    context = SolveContext.from_puzzle(puzzle, max_sweeps=int(config["max_sweeps"]))
    result = solve_context(context)
    metrics = result.metrics
    if result.solved:
        logger.info(
            f"Solved in {metrics.sweeps} sweeps ({metrics.guesses} guesses, "
            f"{metrics.backtracks} backtracks, {metrics.computation_time_ms:.1f}ms)"
        )
    else:
        logger.warning(
            f"Not solved after {metrics.sweeps} sweeps "
            f"({metrics.guesses} guesses, {metrics.backtracks} backtracks)"
        )

    start = tuple(config["start_position"])
    plan = plan_path(puzzle.head_grid(), result.grid, config["planner"], start)
    if config["return_to_view"]:
        plan.instructions.append(TO_VIEW_AREA)
    logger.info(
        f"Planned {plan.stroke_count} strokes, {plan.step_count} steps "
        f"with '{plan.planner_name}' planner (travel {plan.travel})"
    )

    commands = translate(
        plan.instructions,
        cell_size=tuple(config["cell_size"]),
        origin=tuple(config["origin"]),
        view_position=tuple(config["view_position"]),
    )
    logger.debug(f"Translated to {len(commands)} device commands")

    elapsed_ms = (time.perf_counter() - start_time) * 1000
    return RunResult(solve=result, plan=plan, commands=commands, elapsed_ms=elapsed_ms)
