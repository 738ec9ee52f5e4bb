"""
Base Planner Module - Abstract base class for stroke-ordering path planners.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .grid import Coord, DISCARDED, EMPTY, Grid
from .instruction import Instruction
from .solution import PathPlan

logger = logging.getLogger(__name__)

# Pen reference for the very first stroke
DEFAULT_START: Coord = (0, 0)


class PathPlanner(ABC):
    """
    Abstract base class for all path planners.

    A planner turns a solved grid plus its sparse head grid into an ordered
    instruction program: one GOTO per stroke followed by single-cell steps
    along that color's path. Subclasses only decide which head starts the
    next stroke; the trace walk is shared.

    Attributes:
        name: Short identifier for the planner
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base planner"

    @abstractmethod
    def select_start(self, head_grid: Grid, reference: Coord) -> Optional[Tuple[Coord, int]]:
        """
        Pick the head cell that starts the next stroke.

        Args:
            head_grid: Remaining unvisited heads (non-zero cells)
            reference: Pen position left by the previous stroke

        Returns:
            ((x, y), color) of the chosen head, or None when none remain
        """
        pass

    def plan(self, head_grid: Grid, solved_grid: Grid,
             start: Coord = DEFAULT_START) -> PathPlan:
        """
        Produce the instruction program.

        Consumes head_grid: every visited head is cleared. Pass a copy if
        the original is still needed.

        Args:
            head_grid: Sparse grid of endpoint cells
            solved_grid: Solved (or best-effort) grid
            start: Pen reference for the first stroke

        Returns:
            PathPlan with the ordered instructions

        Raises:
            ValueError: If the two grids differ in size
        """
        if (head_grid.width, head_grid.height) != (solved_grid.width, solved_grid.height):
            raise ValueError(
                f"Head grid {head_grid.width}x{head_grid.height} does not match "
                f"solved grid {solved_grid.width}x{solved_grid.height}"
            )

        # Leftover endpoints have no stroke to draw
        for x, y in list(head_grid.cells_equal_to(DISCARDED)):
            logger.debug(f"Skipping discarded head at ({x}, {y})")
            head_grid.write(x, y, EMPTY)

        instructions: List[Instruction] = []
        reference = start

        while True:
            chosen = self.select_start(head_grid, reference)
            if chosen is None:
                break
            (x, y), color = chosen

            head_grid.write(x, y, EMPTY)
            instructions.append(Instruction.goto(x, y))

            reference = self.trace(x, y, color, solved_grid, instructions)
            head_grid.write(reference[0], reference[1], EMPTY)

        return PathPlan(instructions=instructions, planner_name=self.name,
                        start_position=start)

    def trace(self, x: int, y: int, color: int, solved_grid: Grid,
              instructions: List[Instruction]) -> Coord:
        """
        Walk one color's path from (x, y), appending a step per cell.

        Takes the first neighbor (East, West, South, North) holding color
        that is not the cell just left. Stops when there is none.

        Returns:
            Coordinate where the stroke ended
        """
        previous: Coord = (-1, -1)
        max_steps = solved_grid.width * solved_grid.height

        for _ in range(max_steps):
            for direction, (nx, ny) in solved_grid.neighbors(x, y):
                if solved_grid.get(nx, ny) == color and (nx, ny) != previous:
                    previous = (x, y)
                    x, y = nx, ny
                    instructions.append(Instruction.step(direction))
                    break
            else:
                return (x, y)

        logger.warning(f"Stroke for color {color} hit the step limit at ({x}, {y})")
        return (x, y)
