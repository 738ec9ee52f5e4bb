"""
Solve Context Module - Inputs and reporting hooks for one solve call.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional

from .grid import Grid
from .puzzle import HeadPair, Puzzle

MAX_SOLVE_SWEEPS = 100


@dataclass
class SolveContext:
    """
    Context passed to the solver.

    There is no cancellation; max_sweeps is the only termination bound.

    Attributes:
        grid: Initial grid with endpoints colored
        heads: HeadPair per color
        max_sweeps: Sweep bound before giving up
        progress_callback: Optional callback(sweep, completed_ends, total_ends)
    """
    grid: Grid
    heads: List[HeadPair]
    max_sweeps: int = MAX_SOLVE_SWEEPS
    progress_callback: Optional[Callable[[int, int, int], None]] = None

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle, **kwargs) -> 'SolveContext':
        return cls(grid=puzzle.grid, heads=puzzle.heads, **kwargs)

    def report_progress(self, sweep: int, completed_ends: int) -> None:
        """
        Report progress after a sweep.

        Args:
            sweep: 1-based sweep number
            completed_ends: Ends that met their partner this sweep
        """
        if self.progress_callback:
            self.progress_callback(sweep, completed_ends, 2 * len(self.heads))
