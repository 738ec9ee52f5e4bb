"""
Instruction Module - Movement instructions produced by the path planner.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .grid import Coord, Direction


class InstructionKind(Enum):
    """Tag of an Instruction."""
    NORTH = auto()
    SOUTH = auto()
    EAST = auto()
    WEST = auto()
    PEN_UP = auto()
    PEN_DOWN = auto()
    GOTO = auto()
    TO_VIEW_AREA = auto()


_STEP_KINDS = {
    Direction.NORTH: InstructionKind.NORTH,
    Direction.SOUTH: InstructionKind.SOUTH,
    Direction.EAST: InstructionKind.EAST,
    Direction.WEST: InstructionKind.WEST,
}

_KIND_DIRECTIONS = {kind: direction for direction, kind in _STEP_KINDS.items()}


@dataclass(frozen=True)
class Instruction:
    """
    One plotter instruction.

    Directional kinds move the pen one cell. GOTO is an absolute jump to
    (x, y) and is the only kind carrying coordinates.

    Attributes:
        kind: Instruction tag
        x: Target column for GOTO
        y: Target row for GOTO
    """
    kind: InstructionKind
    x: Optional[int] = None
    y: Optional[int] = None

    @classmethod
    def goto(cls, x: int, y: int) -> 'Instruction':
        return cls(InstructionKind.GOTO, x, y)

    @classmethod
    def step(cls, direction: Direction) -> 'Instruction':
        return cls(_STEP_KINDS[direction])

    @property
    def is_step(self) -> bool:
        return self.kind in _KIND_DIRECTIONS

    @property
    def is_goto(self) -> bool:
        return self.kind is InstructionKind.GOTO

    @property
    def direction(self) -> Optional[Direction]:
        """Direction of a step instruction, None for other kinds."""
        return _KIND_DIRECTIONS.get(self.kind)

    @property
    def target(self) -> Optional[Coord]:
        """GOTO destination, None for other kinds."""
        if self.is_goto:
            return (self.x, self.y)
        return None

    def __str__(self) -> str:
        if self.is_goto:
            return f"Goto({self.x}, {self.y})"
        return self.kind.name.title().replace("_", "")


PEN_UP = Instruction(InstructionKind.PEN_UP)
PEN_DOWN = Instruction(InstructionKind.PEN_DOWN)
TO_VIEW_AREA = Instruction(InstructionKind.TO_VIEW_AREA)
