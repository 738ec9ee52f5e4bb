"""
Error Types - Exceptions raised by the solving and planning engine.

Recoverable outcomes (solved / unsolved) are returned as values and never
raised. Only the two categories below are exceptions.
"""


class ContractViolation(RuntimeError):
    """
    A programmer-level misuse of the engine.

    Raised for out-of-bounds writes and for a solver stall with no
    ambiguous target to guess on. Never caught inside the engine.
    """


class MalformedPuzzleError(ValueError):
    """
    Puzzle input that cannot be turned into a valid grid and head list.

    Examples: a color appearing more than twice, non-contiguous color ids,
    or a cell count that does not match the stated dimensions.
    """
