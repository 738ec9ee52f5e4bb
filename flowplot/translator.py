"""
Translator Module - Converts planner instructions into plotter device commands.

Runs of identical steps collapse into a single straight move. Every GOTO
becomes a pen-up jump followed by a pen-down, and grid cells are scaled
to device units as origin + cell * cell_size.
"""

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from flowplot.solver import Instruction, InstructionKind

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


class CommandKind(Enum):
    """Tag of a DeviceCommand."""
    PEN_UP = auto()
    PEN_DOWN = auto()
    MOVE_TO = auto()


@dataclass(frozen=True)
class DeviceCommand:
    """
    One plotter command in device units.

    Attributes:
        kind: Command tag
        x: Target x for MOVE_TO
        y: Target y for MOVE_TO
    """
    kind: CommandKind
    x: Optional[float] = None
    y: Optional[float] = None

    @classmethod
    def move_to(cls, x: float, y: float) -> 'DeviceCommand':
        return cls(CommandKind.MOVE_TO, x, y)

    def __str__(self) -> str:
        if self.kind is CommandKind.MOVE_TO:
            return f"MOVE {self.x:g} {self.y:g}"
        return "PU" if self.kind is CommandKind.PEN_UP else "PD"


PEN_UP_COMMAND = DeviceCommand(CommandKind.PEN_UP)
PEN_DOWN_COMMAND = DeviceCommand(CommandKind.PEN_DOWN)


def translate(
    instructions: Iterable[Instruction],
    cell_size: Point = (1.0, 1.0),
    origin: Point = (0.0, 0.0),
    view_position: Point = (0.0, 0.0),
) -> List[DeviceCommand]:
    """
    Translate an instruction program into device commands.

    Args:
        instructions: Planner output (GOTOs and steps, optionally pen and
            view instructions)
        cell_size: Device units per grid cell (x, y)
        origin: Device position of cell (0, 0)
        view_position: Device position used by TO_VIEW_AREA

    Returns:
        Ordered device commands ending with the pen lifted
    """
    commands: List[DeviceCommand] = []
    location = (0, 0)
    previous: Optional[Instruction] = None

    def move_to(cell) -> DeviceCommand:
        return DeviceCommand.move_to(
            origin[0] + cell[0] * cell_size[0],
            origin[1] + cell[1] * cell_size[1],
        )

    def flush() -> None:
        # End the pending run at the current location
        if previous.is_goto:
            commands.append(PEN_UP_COMMAND)
            commands.append(move_to(location))
            commands.append(PEN_DOWN_COMMAND)
        else:
            commands.append(move_to(location))

    for instr in instructions:
        if previous is not None and previous != instr:
            flush()

        if instr.is_step:
            direction = instr.direction
            location = (location[0] + direction.dx, location[1] + direction.dy)
        elif instr.is_goto:
            location = instr.target
        elif instr.kind is InstructionKind.PEN_UP:
            commands.append(PEN_UP_COMMAND)
            previous = None
            continue
        elif instr.kind is InstructionKind.PEN_DOWN:
            commands.append(PEN_DOWN_COMMAND)
            previous = None
            continue
        elif instr.kind is InstructionKind.TO_VIEW_AREA:
            commands.append(PEN_UP_COMMAND)
            commands.append(DeviceCommand.move_to(*view_position))
            previous = None
            continue
        else:
            logger.warning(f"Not yet implemented: {instr}")
            continue

        previous = instr

    if previous is not None:
        flush()
    if commands and commands[-1] != PEN_UP_COMMAND:
        commands.append(PEN_UP_COMMAND)

    return commands


def format_commands(commands: Iterable[DeviceCommand]) -> str:
    """Render commands one per line (PU, PD, MOVE x y)."""
    return "\n".join(str(command) for command in commands)
