"""
Puzzle Module - Head pairs and construction of the initial grid from classifier cells.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Tuple

from .errors import MalformedPuzzleError
from .grid import Coord, DISCARDED, EMPTY, Grid, MAX_COLOR

logger = logging.getLogger(__name__)

# Coordinate of an endpoint that has not been observed
UNSET: Coord = (-1, -1)


class Side(Enum):
    """Which end of a HeadPair."""
    FIRST = 0
    SECOND = 1


@dataclass
class HeadPair:
    """
    The two live growing ends of one color's path.

    Starts at the color's two fixed endpoints and is moved in place by the
    solver as each end advances. An end that has reached its partner stops.

    Attributes:
        first: First end coordinate, or UNSET
        second: Second end coordinate, or UNSET
    """
    first: Coord = UNSET
    second: Coord = UNSET

    def get(self, side: Side) -> Coord:
        return self.first if side is Side.FIRST else self.second

    def set(self, side: Side, coord: Coord) -> None:
        if side is Side.FIRST:
            self.first = coord
        else:
            self.second = coord

    @property
    def is_complete(self) -> bool:
        """True if both endpoints have been observed."""
        return self.first != UNSET and self.second != UNSET

    def copy(self) -> 'HeadPair':
        return HeadPair(self.first, self.second)


def copy_heads(heads: Iterable[HeadPair]) -> List[HeadPair]:
    """Deep copy of a head list."""
    return [pair.copy() for pair in heads]


@dataclass
class Puzzle:
    """
    Initial solver input.

    Attributes:
        grid: Grid with every endpoint cell colored
        heads: HeadPair per color, indexed by color id - 1
    """
    grid: Grid
    heads: List[HeadPair] = field(default_factory=list)

    @property
    def color_count(self) -> int:
        return len(self.heads)

    def head_grid(self) -> Grid:
        """
        Sparse grid holding only the endpoint cells.

        Used by the path planner, which consumes it destructively.
        """
        heads_only = Grid(self.grid.width, self.grid.height)
        for color, pair in enumerate(self.heads, start=1):
            for end in (pair.first, pair.second):
                if end != UNSET:
                    heads_only.write(end[0], end[1], color)
        return heads_only

    def copy(self) -> 'Puzzle':
        return Puzzle(grid=self.grid.clone(), heads=copy_heads(self.heads))


def build_puzzle(width: int, height: int, cells: Iterable[int]) -> Puzzle:
    """
    Build the initial grid and head list from row-major classifier output.

    The first time a color id is seen its cell becomes that color's first
    head, the second time its second head. A color seen once keeps an UNSET
    partner (the solver reports that end as stuck). DISCARDED cells are stored
    as-is and never become heads.

    Args:
        width: Grid width
        height: Grid height
        cells: Flat sequence of width*height color ids (0 = empty)

    Returns:
        Puzzle with grid and heads

    Raises:
        MalformedPuzzleError: On invalid dimensions, cell count, values,
            a color appearing more than twice, or non-contiguous color ids
    """
    cells = list(cells)
    if width <= 0 or height <= 0:
        raise MalformedPuzzleError(f"Puzzle dimensions must be positive, got {width}x{height}")
    if len(cells) != width * height:
        raise MalformedPuzzleError(
            f"Expected {width * height} cells for {width}x{height} puzzle, got {len(cells)}"
        )

    grid = Grid(width, height)
    seen: dict = {}

    for offset, value in enumerate(cells):
        if not isinstance(value, int) or isinstance(value, bool):
            raise MalformedPuzzleError(f"Cell {offset} is not an integer: {value!r}")
        if value < 0 or value > 255:
            raise MalformedPuzzleError(f"Cell {offset} has invalid color id {value}")
        if value == EMPTY:
            continue

        grid.set_by_linear_offset(offset, value)
        if value == DISCARDED:
            logger.debug(f"Discarded endpoint at offset {offset}")
            continue

        coord = (offset % width, offset // width)
        ends = seen.setdefault(value, [])
        if len(ends) == 2:
            raise MalformedPuzzleError(
                f"Color {value} appears more than twice (at {ends[0]}, {ends[1]}, {coord})"
            )
        ends.append(coord)

    if len(seen) > MAX_COLOR:
        raise MalformedPuzzleError(f"At most {MAX_COLOR} colors supported, got {len(seen)}")

    colors = sorted(seen)
    if colors != list(range(1, len(colors) + 1)):
        raise MalformedPuzzleError(f"Color ids must be contiguous from 1, got {colors}")

    heads: List[HeadPair] = []
    for color in colors:
        ends = seen[color]
        if len(ends) == 1:
            logger.warning(f"Color {color} has a single endpoint at {ends[0]}")
            heads.append(HeadPair(ends[0], UNSET))
        else:
            heads.append(HeadPair(ends[0], ends[1]))

    return Puzzle(grid=grid, heads=heads)


def puzzle_from_heads(width: int, height: int,
                      pairs: Iterable[Tuple[Coord, Coord]]) -> Puzzle:
    """
    Build a Puzzle from explicit endpoint pairs (color = index + 1).

    Args:
        width: Grid width
        height: Grid height
        pairs: ((x1, y1), (x2, y2)) per color

    Returns:
        Puzzle with both endpoints of every color written to the grid
    """
    grid = Grid(width, height)
    heads: List[HeadPair] = []
    for color, (a, b) in enumerate(pairs, start=1):
        grid.write(a[0], a[1], color)
        grid.write(b[0], b[1], color)
        heads.append(HeadPair(tuple(a), tuple(b)))
    return Puzzle(grid=grid, heads=heads)
