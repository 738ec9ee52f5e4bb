"""
flowplot - Entry Point

Solves a flow puzzle file and prints the filled grid, the stroke program
and the plotter commands.

Example:
    python main.py puzzles/5x5.txt
    python main.py puzzles/5x5.txt --planner scan --debug
    python main.py puzzle.json --return-to-view --save-settings
"""

import sys
import logging
import argparse
from datetime import datetime

from flowplot.debug import DEBUG_DIR, save_debug_image
from flowplot.puzzle_file import load_puzzle
from flowplot.runner import run_once
from flowplot.settings import load_settings, save_settings
from flowplot.solver import MalformedPuzzleError, get_planner_info, get_planner_names
from flowplot.translator import format_commands


logger = logging.getLogger(__name__)

EXIT_SOLVED = 0
EXIT_UNSOLVED = 1
EXIT_MALFORMED = 2


def configure_logging(verbose: bool) -> None:
    """Log to both console and file."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("flowplot.log", mode='w', encoding='utf-8')  # File output
        ]
    )


def parse_args(argv=None):
    """Parse command line arguments."""
    planners = ", ".join(f"{p['name']} ({p['description']})" for p in get_planner_info())
    parser = argparse.ArgumentParser(
        description="flowplot - Flow puzzle solver and plotter path planner"
    )
    parser.add_argument("puzzle", help="Puzzle file (.json or text rows)")
    parser.add_argument(
        "--planner", "-p",
        default=None,
        choices=get_planner_names(),
        help=f"Stroke planner: {planners}"
    )
    parser.add_argument(
        "--max-sweeps",
        type=int,
        default=None,
        help="Solver sweep bound (default from settings, 100)"
    )
    parser.add_argument(
        "--start",
        type=int,
        nargs=2,
        metavar=("X", "Y"),
        default=None,
        help="Pen position before the first stroke"
    )
    parser.add_argument(
        "--return-to-view",
        action="store_true",
        default=None,
        help="Move the pen out of the camera view when done"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Save a rendered PNG of the result to ./debug"
    )
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the effective settings to config.json"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log solver detail"
    )
    return parser.parse_args(argv)


def apply_overrides(settings: dict, args) -> dict:
    """CLI flags override saved settings."""
    result = dict(settings)
    if args.planner is not None:
        result["planner"] = args.planner
    if args.max_sweeps is not None:
        result["max_sweeps"] = args.max_sweeps
    if args.start is not None:
        result["start_position"] = list(args.start)
    if args.return_to_view:
        result["return_to_view"] = True
    if args.debug:
        result["debug_enabled"] = True
    return result


def main(argv=None) -> int:
    """Solve one puzzle file and print the results."""
    args = parse_args(argv)
    configure_logging(args.verbose)

    settings = apply_overrides(load_settings(), args)
    if args.save_settings:
        save_settings(settings)

    try:
        puzzle = load_puzzle(args.puzzle)
    except MalformedPuzzleError as e:
        logger.error(f"Malformed puzzle: {e}")
        return EXIT_MALFORMED

    result = run_once(puzzle, settings)

    print(result.solve.grid, end="")
    print(f"Solved: {result.solved}")
    print(" ".join(str(instr) for instr in result.plan.instructions))
    print(format_commands(result.commands))

    if settings.get("debug_enabled"):
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        path = DEBUG_DIR / f"debug_{timestamp}.png"
        save_debug_image(result.solve.grid, str(path), result.plan.instructions)
        logger.info(f"Debug image saved: {path}")

    return EXIT_SOLVED if result.solved else EXIT_UNSOLVED


if __name__ == "__main__":
    sys.exit(main())
