"""
Puzzle File Module - Loads puzzle definitions from disk.

Two formats are accepted:

JSON (``.json``)::

    {"width": 5, "height": 5, "cells": [0, 1, 0, ...]}
    {"rows": [[0, 1, 0, 0, 0], ...]}

Text (anything else), one grid row per line. Blank lines and lines
starting with ``#`` are ignored. A line containing whitespace is read as
integers; a line without whitespace is read one character per cell, with
``.`` meaning empty::

    .1...
    .2.2.
    # comment
    3 0 0 0 0
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from flowplot.solver import MalformedPuzzleError, Puzzle, build_puzzle

logger = logging.getLogger(__name__)


def _parse_text_row(line: str, line_number: int) -> List[int]:
    tokens = line.split()
    try:
        if len(tokens) > 1:
            return [int(token) for token in tokens]
        return [0 if char == "." else int(char) for char in tokens[0]]
    except ValueError:
        raise MalformedPuzzleError(f"Line {line_number}: cannot read cells from {line!r}")


def parse_text(text: str) -> Puzzle:
    """
    Parse the text row format.

    Raises:
        MalformedPuzzleError: On unreadable rows or ragged widths
    """
    rows: List[List[int]] = []
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        rows.append(_parse_text_row(line, line_number))
    return _from_rows(rows)


def parse_json(text: str) -> Puzzle:
    """
    Parse the JSON format.

    Raises:
        MalformedPuzzleError: On invalid JSON or missing keys
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise MalformedPuzzleError(f"Invalid puzzle JSON: {e}")

    if not isinstance(data, dict):
        raise MalformedPuzzleError("Puzzle JSON must be an object")

    if "rows" in data:
        return _from_rows(data["rows"])

    try:
        return build_puzzle(int(data["width"]), int(data["height"]), data["cells"])
    except (KeyError, TypeError) as e:
        raise MalformedPuzzleError(f"Puzzle JSON needs width, height and cells: {e}")


def _from_rows(rows) -> Puzzle:
    if not rows:
        raise MalformedPuzzleError("Puzzle has no rows")
    width = len(rows[0])
    for y, row in enumerate(rows):
        if len(row) != width:
            raise MalformedPuzzleError(f"Row {y} has {len(row)} cells, expected {width}")
    cells = [value for row in rows for value in row]
    return build_puzzle(width, len(rows), cells)


def load_puzzle(path: Union[str, Path]) -> Puzzle:
    """
    Load a puzzle file.

    Args:
        path: .json file or text row file

    Returns:
        Puzzle ready for the solver

    Raises:
        MalformedPuzzleError: If the file cannot be read or is invalid
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise MalformedPuzzleError(f"Cannot read puzzle file {path}: {e}")

    if path.suffix.lower() == ".json":
        puzzle = parse_json(text)
    else:
        puzzle = parse_text(text)

    logger.info(
        f"Loaded {puzzle.grid.width}x{puzzle.grid.height} puzzle with "
        f"{puzzle.color_count} colors from {path}"
    )
    return puzzle
