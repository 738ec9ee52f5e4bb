"""
Grid Module - Fixed-size byte matrix with bounds-aware access.
"""

from enum import Enum
from typing import Iterator, Optional, Tuple

import numpy as np

from .errors import ContractViolation

Coord = Tuple[int, int]

EMPTY = 0

# Returned by Grid.read for any coordinate outside the grid
OUT_OF_BOUNDS = 255

# Stored in an in-bounds cell holding a leftover endpoint with no partner
DISCARDED = 255

MAX_COLOR = 254


class Direction(Enum):
    """Cardinal step with its (dx, dy) offset. Y grows downwards."""
    EAST = (1, 0)
    WEST = (-1, 0)
    SOUTH = (0, 1)
    NORTH = (0, -1)

    @property
    def dx(self) -> int:
        return self.value[0]

    @property
    def dy(self) -> int:
        return self.value[1]


# Fixed neighbor scan order. Decides which single candidate is taken and the
# order guesses are drawn in.
NEIGHBOR_ORDER: Tuple[Direction, ...] = (
    Direction.EAST,
    Direction.WEST,
    Direction.SOUTH,
    Direction.NORTH,
)


class Grid:
    """
    Fixed-dimension 2-D matrix of color ids.

    Storage is a contiguous numpy uint8 buffer indexed [y, x]. Coordinates
    in the public API are always (x, y).

    Reads outside the grid return OUT_OF_BOUNDS and never fail. Writes
    outside the grid raise ContractViolation. Copies never share storage.

    Attributes:
        width: Number of columns
        height: Number of rows
    """

    def __init__(self, width: int, height: int):
        """
        Allocate a zero-filled grid.

        Args:
            width: Number of columns (> 0)
            height: Number of rows (> 0)

        Raises:
            ValueError: If either dimension is not positive
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._cells = np.zeros((height, width), dtype=np.uint8)

    @classmethod
    def from_rows(cls, rows) -> 'Grid':
        """
        Create a Grid from a list of rows (row-major, rows[y][x]).

        Args:
            rows: Sequence of equal-length sequences of ints

        Returns:
            Grid instance
        """
        height = len(rows)
        width = len(rows[0]) if height > 0 else 0
        grid = cls(width, height)
        for y, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Row {y} has {len(row)} cells, expected {width}")
            for x, value in enumerate(row):
                grid.write(x, y, value)
        return grid

    def in_bounds(self, x: int, y: int) -> bool:
        """True if (x, y) lies inside the grid."""
        return 0 <= x < self.width and 0 <= y < self.height

    def read(self, x: int, y: int) -> int:
        """
        Get the value at (x, y).

        Returns:
            Stored value, or OUT_OF_BOUNDS for coordinates outside the grid
        """
        if not self.in_bounds(x, y):
            return OUT_OF_BOUNDS
        return int(self._cells[y, x])

    def get(self, x: int, y: int) -> Optional[int]:
        """
        Get the value at (x, y), or None outside the grid.

        Use this instead of read() when an out-of-range probe must not be
        confused with a DISCARDED cell.
        """
        if not self.in_bounds(x, y):
            return None
        return int(self._cells[y, x])

    def write(self, x: int, y: int, value: int) -> None:
        """
        Store a value at (x, y).

        Raises:
            ContractViolation: If (x, y) is outside the grid
            ValueError: If value does not fit in a byte
        """
        if not self.in_bounds(x, y):
            raise ContractViolation(
                f"Write out of bounds at ({x}, {y}) on {self.width}x{self.height} grid"
            )
        if not 0 <= value <= 255:
            raise ValueError(f"Cell value must be in [0, 255], got {value}")
        self._cells[y, x] = value

    def set_by_linear_offset(self, offset: int, value: int) -> None:
        """
        Store a value by row-major offset (used when populating from a flat list).

        Raises:
            ContractViolation: If offset is outside [0, width*height)
        """
        if not 0 <= offset < self.width * self.height:
            raise ContractViolation(
                f"Offset {offset} out of range for {self.width}x{self.height} grid"
            )
        self.write(offset % self.width, offset // self.width, value)

    def is_discarded(self, x: int, y: int) -> bool:
        """True if (x, y) is an in-bounds cell holding DISCARDED."""
        return self.get(x, y) == DISCARDED

    def neighbors(self, x: int, y: int) -> Iterator[Tuple[Direction, Coord]]:
        """
        Yield the four cardinal neighbors in NEIGHBOR_ORDER.

        Out-of-bounds coordinates are included; reading them gives the
        sentinel.
        """
        for direction in NEIGHBOR_ORDER:
            yield direction, (x + direction.dx, y + direction.dy)

    def contains_empty_cell(self) -> bool:
        """True if any cell is EMPTY."""
        return bool((self._cells == EMPTY).any())

    def cells_equal_to(self, value: int) -> Iterator[Coord]:
        """Yield coordinates holding value, row-major."""
        for y in range(self.height):
            for x in range(self.width):
                if self._cells[y, x] == value:
                    yield (x, y)

    def nonzero_cells(self) -> Iterator[Tuple[Coord, int]]:
        """Yield ((x, y), value) for every non-empty cell, row-major."""
        for y in range(self.height):
            for x in range(self.width):
                value = int(self._cells[y, x])
                if value != EMPTY:
                    yield (x, y), value

    def clone(self) -> 'Grid':
        """Full independent copy."""
        copy = Grid.__new__(Grid)
        copy.width = self.width
        copy.height = self.height
        copy._cells = self._cells.copy()
        return copy

    def to_list(self):
        """Convert to a row-major 2D list (rows[y][x])."""
        return self._cells.tolist()

    def __copy__(self) -> 'Grid':
        return self.clone()

    def __deepcopy__(self, memo) -> 'Grid':
        return self.clone()

    def __getitem__(self, coord: Coord) -> int:
        return self.read(*coord)

    def __setitem__(self, coord: Coord, value: int) -> None:
        self.write(coord[0], coord[1], value)

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return False
        return (self.width, self.height) == (other.width, other.height) and \
            bool(np.array_equal(self._cells, other._cells))

    __hash__ = None

    def __str__(self) -> str:
        # Compact digits when every value is a single digit
        if int(self._cells.max()) < 10:
            return "\n".join(
                "".join(str(v) for v in row) for row in self._cells.tolist()
            ) + "\n"
        return "\n".join(
            " ".join(f"{v:3d}" for v in row) for row in self._cells.tolist()
        ) + "\n"

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
