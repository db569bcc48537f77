"""
ASCII rendering for puzzle grids.

Provides:
1. Single grid rendering with per-cell characters and colors
2. Renderers for beam, loop and rock-platform states
3. Flow layout placing several rendered grids side by side
"""

from __future__ import annotations

import logging
import re
from typing import Callable, TypeVar

import simple_chalk as chalk  # type: ignore[import-untyped]

from beams import Tile
from grid import Grid
from loops import Pipe, Region
from rocks import Platform, Rock

logger = logging.getLogger(__name__)

T = TypeVar("T")

Colorize = Callable[[str], str]

_ANSI = re.compile(r"\x1b\[[0-9;]*m")


def visible_width(text: str) -> int:
    """Length of `text` with ANSI color codes stripped."""
    return len(_ANSI.sub("", text))


# =============================================================================
# Single Grid Rendering
# =============================================================================


def render_grid(
    grid: Grid[T],
    char_fn: Callable[[T], str],
    color_fn: Callable[[tuple[int, int], T], Colorize] | None = None,
    border: bool = True,
) -> list[str]:
    """
    Render a grid to lines of text, one character per cell.

    Args:
        grid: The grid to render
        char_fn: Single-character representation of a cell
        color_fn: Optional color for a (coord, cell) pair
        border: Draw a box around the grid

    Returns:
        Rendered lines (with ANSI color codes when color_fn is given)
    """
    lines: list[str] = []
    if border:
        lines.append("┌" + "─" * grid.width + "┐")

    for y, row in enumerate(grid.lines):
        parts: list[str] = []
        for x, cell in enumerate(row):
            char = char_fn(cell)
            if color_fn is not None:
                char = color_fn((x, y), cell)(char)
            parts.append(char)
        line = "".join(parts)
        lines.append(f"│{line}│" if border else line)

    if border:
        lines.append("└" + "─" * grid.width + "┘")
    return lines


def render_beams(tiles: Grid[Tile], energized: Grid[int]) -> str:
    """Contraption with energized tiles in yellow."""

    def color(coord: tuple[int, int], _: Tile) -> Colorize:
        return chalk.yellow if energized[coord] else chalk.white

    return "\n".join(render_grid(tiles, lambda tile: tile.value, color))


# Box-drawing glyphs for pipe shapes
_PIPE_GLYPHS = {
    Pipe.VERTICAL: "│",
    Pipe.HORIZONTAL: "─",
    Pipe.NORTH_EAST: "└",
    Pipe.NORTH_WEST: "┘",
    Pipe.SOUTH_WEST: "┐",
    Pipe.SOUTH_EAST: "┌",
}

_REGION_COLORS: dict[Region, Colorize] = {
    Region.LOOP: chalk.yellow,
    Region.INSIDE: chalk.red,
    Region.OUTSIDE: chalk.blue,
}


def render_regions(pipes: Grid[Pipe | None], regions: Grid[Region]) -> str:
    """Maze with the loop in yellow, inside cells red and outside cells blue."""

    def char(cell: tuple[Pipe | None, Region]) -> str:
        pipe, region = cell
        if region is Region.LOOP and pipe is not None:
            return _PIPE_GLYPHS[pipe]
        return "I" if region is Region.INSIDE else "."

    combined = Grid([list(zip(p, r)) for p, r in zip(pipes.lines, regions.lines)])
    return "\n".join(
        render_grid(combined, char, lambda _, cell: _REGION_COLORS[cell[1]])
    )


_ROCK_COLORS: dict[Rock, Colorize] = {
    Rock.EMPTY: chalk.white,
    Rock.ROUND: chalk.yellow,
    Rock.CUBE: chalk.blue,
}


def render_platform(platform: Platform) -> str:
    return "\n".join(
        render_grid(platform, lambda rock: rock.value, lambda _, rock: _ROCK_COLORS[rock])
    )


# =============================================================================
# Flow Layout
# =============================================================================


def render_side_by_side(blocks: list[str], spacing: int = 2) -> str:
    """
    Place rendered blocks next to each other, top-aligned.

    Widths are measured with ANSI codes stripped so colored blocks line up.
    """
    split_blocks = [block.split("\n") for block in blocks]
    if not split_blocks:
        return ""
    widths = [max((visible_width(line) for line in lines), default=0) for lines in split_blocks]
    height = max(len(lines) for lines in split_blocks)
    logger.debug("Laying out %d blocks, widths=%s, height=%d", len(blocks), widths, height)

    output_lines: list[str] = []
    for line_idx in range(height):
        parts: list[str] = []
        for lines, width in zip(split_blocks, widths):
            line = lines[line_idx] if line_idx < len(lines) else ""
            parts.append(line + " " * (width - visible_width(line)))
        output_lines.append((" " * spacing).join(parts).rstrip())
    return "\n".join(output_lines)
