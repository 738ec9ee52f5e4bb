"""
Solution Module - Results of solving and path planning.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .grid import Coord, Grid
from .instruction import Instruction


@dataclass
class SolveMetrics:
    """
    Statistics for one solve call.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        sweeps: Number of sweeps run
        guesses: Checkpoints pushed on a stall
        backtracks: Checkpoint restorations after a stuck end
        discarded_checkpoints: Exhausted checkpoints popped
        max_depth: Deepest undo stack seen
    """
    computation_time_ms: float = 0.0
    sweeps: int = 0
    guesses: int = 0
    backtracks: int = 0
    discarded_checkpoints: int = 0
    max_depth: int = 0


@dataclass
class SolveResult:
    """
    Result of a solve call.

    Unpacks as (grid, solved) so callers can write
    ``grid, solved = solve(grid, heads)``.

    Attributes:
        grid: Final grid (fully filled when solved, best effort otherwise)
        solved: True if every color's two ends met
        metrics: Search statistics
    """
    grid: Grid
    solved: bool
    metrics: SolveMetrics = field(default_factory=SolveMetrics)

    def __iter__(self):
        yield self.grid
        yield self.solved


@dataclass
class PathPlan:
    """
    Ordered instruction program for one solved grid.

    Attributes:
        instructions: Ordered movement instructions
        planner_name: Name of the planner that produced them
        start_position: Pen reference used for the first stroke
    """
    instructions: List[Instruction] = field(default_factory=list)
    planner_name: str = ""
    start_position: Coord = (0, 0)

    @property
    def stroke_count(self) -> int:
        """Number of strokes (one GOTO each)."""
        return sum(1 for instr in self.instructions if instr.is_goto)

    @property
    def step_count(self) -> int:
        """Number of single-cell pen-down steps."""
        return sum(1 for instr in self.instructions if instr.is_step)

    @property
    def travel(self) -> int:
        """
        Sum of squared jump distances between strokes.

        The first jump is measured from start_position.
        """
        total = 0
        position: Optional[Coord] = self.start_position
        for instr in self.instructions:
            if instr.is_goto:
                total += (instr.x - position[0]) ** 2 + (instr.y - position[1]) ** 2
                position = instr.target
            elif instr.is_step:
                direction = instr.direction
                position = (position[0] + direction.dx, position[1] + direction.dy)
        return total

    def strokes(self) -> List[List[Instruction]]:
        """Split instructions into strokes, each starting with its GOTO."""
        result: List[List[Instruction]] = []
        for instr in self.instructions:
            if instr.is_goto or not result:
                result.append([instr])
            else:
                result[-1].append(instr)
        return result
