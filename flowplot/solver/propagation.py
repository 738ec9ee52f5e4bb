"""
Propagation Solver - Constraint propagation with speculative backtracking.

Every color grows from both of its ends at once. An end with exactly one
empty neighbor is forced into it. When a whole sweep makes no forced move,
the solver guesses on the last ambiguous end it saw and records a
checkpoint; when an end gets stuck it restores the most recent checkpoint
and tries the next candidate.

Algorithm:
    1. Sweep: advance both ends of every color once
    2. All ends met their partner and no cell is empty -> solved
    3. An end is stuck, or all ends met with cells left over
       -> backtrack (or fail if nothing to undo)
    4. Nothing advanced -> guess on the last ambiguous end
    5. Give up after max_sweeps sweeps
"""

import logging
import time
from dataclasses import dataclass, replace
from enum import Enum, auto
from typing import List, Optional, Tuple

from .context import MAX_SOLVE_SWEEPS, SolveContext
from .errors import ContractViolation
from .grid import Coord, EMPTY, Grid
from .puzzle import HeadPair, Side, copy_heads
from .solution import SolveMetrics, SolveResult

logger = logging.getLogger(__name__)


class Outcome(Enum):
    """Result of advancing one end."""
    COMPLETED = auto()
    ADVANCED = auto()
    STUCK = auto()
    AMBIGUOUS = auto()


@dataclass(frozen=True)
class StepResult:
    """
    Outcome of advance().

    Attributes:
        outcome: What happened to the end
        end: End coordinate after the step (moved only when ADVANCED)
        candidates: Empty neighbors in scan order (only when AMBIGUOUS)
    """
    outcome: Outcome
    end: Coord
    candidates: Tuple[Coord, ...] = ()


@dataclass(frozen=True)
class GuessTarget:
    """An ambiguous end the solver may branch on."""
    candidates: Tuple[Coord, ...]
    color: int
    index: int
    side: Side


@dataclass(frozen=True)
class SweepReport:
    """
    Totals for one sweep.

    Attributes:
        completed: Ends that met their partner
        progressed: True if any end advanced
        stuck: True if any end had nowhere to go
        guess_target: Last ambiguous end seen, if any
    """
    completed: int = 0
    progressed: bool = False
    stuck: bool = False
    guess_target: Optional[GuessTarget] = None


@dataclass(frozen=True)
class Checkpoint:
    """
    Snapshot taken when a guess is made.

    Holds the pre-guess grid and heads, and the candidates not yet tried.
    The snapshot is never mutated; restore() hands out fresh copies.
    """
    grid: Grid
    heads: Tuple[HeadPair, ...]
    candidates: Tuple[Coord, ...]
    color: int
    index: int
    side: Side

    @classmethod
    def capture(cls, grid: Grid, heads: List[HeadPair], target: GuessTarget,
                remaining: Tuple[Coord, ...]) -> 'Checkpoint':
        return cls(
            grid=grid.clone(),
            heads=tuple(copy_heads(heads)),
            candidates=remaining,
            color=target.color,
            index=target.index,
            side=target.side,
        )

    def restore(self) -> Tuple[Grid, List[HeadPair]]:
        """Independent copies of the saved grid and heads."""
        return self.grid.clone(), copy_heads(self.heads)

    def without_last(self) -> 'Checkpoint':
        """Same checkpoint with the last candidate removed."""
        return replace(self, candidates=self.candidates[:-1])


def advance(end: Coord, partner: Coord, grid: Grid) -> StepResult:
    """
    Try to grow one end of a color by a single cell.

    Args:
        end: Current end coordinate
        partner: The other end of the same color
        grid: Grid, written only on ADVANCED

    Returns:
        COMPLETED if the end touches (or is) its partner,
        STUCK if it has no empty neighbor,
        ADVANCED if it had exactly one (the cell is colored and the end moves),
        AMBIGUOUS with the candidates otherwise
    """
    if end == partner:
        return StepResult(Outcome.COMPLETED, end)

    candidates: List[Coord] = []
    for _, neighbor in grid.neighbors(*end):
        if neighbor == partner:
            return StepResult(Outcome.COMPLETED, end)
        if grid.read(*neighbor) == EMPTY:
            candidates.append(neighbor)

    if not candidates:
        return StepResult(Outcome.STUCK, end)

    if len(candidates) == 1:
        only_option = candidates[0]
        grid.write(only_option[0], only_option[1], grid.read(*end))
        return StepResult(Outcome.ADVANCED, only_option)

    return StepResult(Outcome.AMBIGUOUS, end, tuple(candidates))


def sweep(grid: Grid, heads: List[HeadPair]) -> SweepReport:
    """
    Advance both ends of every color once, updating heads in place.

    The first end of a pair moves before the second, so the second sees
    the first's new position as its partner.
    """
    completed = 0
    progressed = False
    stuck = False
    guess_target: Optional[GuessTarget] = None

    for index, pair in enumerate(heads):
        for side, other in ((Side.FIRST, Side.SECOND), (Side.SECOND, Side.FIRST)):
            end = pair.get(side)
            result = advance(end, pair.get(other), grid)

            if result.outcome is Outcome.COMPLETED:
                completed += 1
            elif result.outcome is Outcome.ADVANCED:
                pair.set(side, result.end)
                progressed = True
            elif result.outcome is Outcome.STUCK:
                stuck = True
            else:
                guess_target = GuessTarget(
                    candidates=result.candidates,
                    color=grid.read(*end),
                    index=index,
                    side=side,
                )

    return SweepReport(
        completed=completed,
        progressed=progressed,
        stuck=stuck,
        guess_target=guess_target,
    )


def _apply_choice(grid: Grid, heads: List[HeadPair], color: int, index: int,
                  side: Side, cell: Coord) -> None:
    """Color cell and move the branching end onto it."""
    grid.write(cell[0], cell[1], color)
    heads[index].set(side, cell)


def _build_result(grid: Grid, solved: bool, metrics: SolveMetrics,
                  start_time: float) -> SolveResult:
    """Build SolveResult from computation results."""
    metrics.computation_time_ms = (time.perf_counter() - start_time) * 1000
    return SolveResult(grid=grid, solved=solved, metrics=metrics)


def solve(grid: Grid, heads: List[HeadPair], max_sweeps: int = MAX_SOLVE_SWEEPS) -> SolveResult:
    """
    Fill the grid so every color's endpoints are joined.

    The inputs are not modified.

    Args:
        grid: Grid with the endpoints colored
        heads: HeadPair per color, indexed by color id - 1
        max_sweeps: Sweep bound

    Returns:
        SolveResult (unpacks as (grid, solved))
    """
    return solve_context(SolveContext(grid=grid, heads=heads, max_sweeps=max_sweeps))


def solve_context(context: SolveContext) -> SolveResult:
    """
    Run the solver described by a SolveContext.

    Args:
        context: Grid, heads, sweep bound and progress callback

    Returns:
        SolveResult with the final grid, solved flag and metrics

    Raises:
        ContractViolation: If a sweep stalls with no ambiguous end to guess on
    """
    start_time = time.perf_counter()

    grid = context.grid.clone()
    heads = copy_heads(context.heads)
    metrics = SolveMetrics()
    undo_stack: List[Checkpoint] = []
    total_ends = 2 * len(heads)

    if not heads:
        logger.debug("No colors to connect")
        return _build_result(grid, not grid.contains_empty_cell(), metrics, start_time)

    for sweep_number in range(1, context.max_sweeps + 1):
        metrics.sweeps = sweep_number
        report = sweep(grid, heads)
        context.report_progress(sweep_number, report.completed)

        logger.debug(f"Sweep {sweep_number}: {report.completed}/{total_ends} ends complete")

        joined = report.completed >= total_ends
        if joined:
            if not grid.contains_empty_cell():
                logger.debug(f"Solved after {sweep_number} sweeps")
                return _build_result(grid, True, metrics, start_time)
            # Every path is closed, so the leftover empty cells can never be filled
            logger.debug("All ends joined with empty cells left - treating as stuck")

        if report.stuck or joined:
            if not undo_stack:
                logger.debug("Stuck with nothing to undo - puzzle unsolvable")
                return _build_result(grid, False, metrics, start_time)

            checkpoint = undo_stack[-1]
            if checkpoint.candidates:
                next_choice = checkpoint.candidates[-1]
                undo_stack[-1] = checkpoint.without_last()
                grid, heads = checkpoint.restore()
                _apply_choice(grid, heads, checkpoint.color, checkpoint.index,
                              checkpoint.side, next_choice)
                metrics.backtracks += 1
                logger.debug(
                    f"Reverting to checkpoint and trying {next_choice} "
                    f"for color {checkpoint.color}"
                )
            else:
                undo_stack.pop()
                metrics.discarded_checkpoints += 1
                logger.debug("No candidate of the last guess worked - undoing guess")

        elif not report.progressed:
            target = report.guess_target
            if target is None:
                raise ContractViolation(
                    f"Sweep {sweep_number} stalled with no ambiguous end to guess on"
                )

            remaining = target.candidates[:-1]
            trial = target.candidates[-1]
            undo_stack.append(Checkpoint.capture(grid, heads, target, remaining))
            _apply_choice(grid, heads, target.color, target.index, target.side, trial)

            metrics.guesses += 1
            metrics.max_depth = max(metrics.max_depth, len(undo_stack))
            logger.debug(
                f"No progress - guessing {trial} for color {target.color}, "
                f"options were {list(target.candidates)}"
            )

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Grid:\n{grid}")

    logger.debug(f"Gave up after {context.max_sweeps} sweeps")
    return _build_result(grid, False, metrics, start_time)
