"""
Debug Utilities

Functions for saving rendered grid images and managing debug output.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from PIL import Image, ImageDraw

from flowplot.solver import DISCARDED, EMPTY, Grid, Instruction

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

CELL_PIXELS = 40

# Color palette, cycled by color id
PALETTE: Sequence[Tuple[int, int, int]] = (
    (255, 0, 0),
    (0, 0, 255),
    (0, 255, 0),
    (255, 255, 0),
    (255, 0, 255),
    (0, 255, 255),
    (125, 255, 125),
    (255, 128, 0),
)

EMPTY_COLOR = (0, 0, 0)
DISCARDED_COLOR = (255, 255, 255)
STROKE_COLOR = (40, 40, 40)


def cell_color(value: int) -> Tuple[int, int, int]:
    """
    Get RGB color for a cell value.

    Args:
        value: Cell value (0 empty, 255 discarded, else color id)

    Returns:
        RGB tuple
    """
    if value == EMPTY:
        return EMPTY_COLOR
    if value == DISCARDED:
        return DISCARDED_COLOR
    return PALETTE[(value - 1) % len(PALETTE)]


def render_grid(grid: Grid, instructions: Optional[Sequence[Instruction]] = None,
                cell_pixels: int = CELL_PIXELS) -> Image.Image:
    """
    Render a grid as an image, optionally overlaying stroke lines.

    Args:
        grid: Grid to render
        instructions: Planner output to draw as strokes
        cell_pixels: Side length of one cell in pixels

    Returns:
        RGB PIL Image
    """
    image = Image.new("RGB", (grid.width * cell_pixels, grid.height * cell_pixels))
    draw = ImageDraw.Draw(image)

    for y in range(grid.height):
        for x in range(grid.width):
            left, top = x * cell_pixels, y * cell_pixels
            draw.rectangle(
                [left, top, left + cell_pixels - 1, top + cell_pixels - 1],
                fill=cell_color(grid.read(x, y)),
                outline=(90, 90, 90),
            )

    if instructions:
        half = cell_pixels // 2

        def center(cell):
            return (cell[0] * cell_pixels + half, cell[1] * cell_pixels + half)

        position = (0, 0)
        for instr in instructions:
            if instr.is_goto:
                position = instr.target
                cx, cy = center(position)
                draw.ellipse([cx - 4, cy - 4, cx + 4, cy + 4], fill=STROKE_COLOR)
            elif instr.is_step:
                direction = instr.direction
                nxt = (position[0] + direction.dx, position[1] + direction.dy)
                draw.line([center(position), center(nxt)], fill=STROKE_COLOR, width=3)
                position = nxt

    return image


def save_debug_image(grid: Grid, path: str,
                     instructions: Optional[Sequence[Instruction]] = None) -> None:
    """
    Save a rendered grid as a PNG debug image.

    Args:
        grid: Grid to render
        path: Output file path
        instructions: Optional strokes to overlay
    """
    # Ensure debug directory exists
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)

    render_grid(grid, instructions).save(path, "PNG")

    # Cleanup old debug images
    _cleanup_debug_images()


def _cleanup_debug_images() -> None:
    """Remove old debug images, keeping only the most recent MAX_DEBUG_IMAGES."""
    if not DEBUG_DIR.exists():
        return

    # Get all debug images sorted by modification time
    debug_files = sorted(
        DEBUG_DIR.glob("debug_*.png"),
        key=lambda p: p.stat().st_mtime,
        reverse=True
    )

    # Remove old files
    for old_file in debug_files[MAX_DEBUG_IMAGES:]:
        try:
            old_file.unlink()
        except OSError as e:
            logger.debug(f"Could not remove {old_file}: {e}")
