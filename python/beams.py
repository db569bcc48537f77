"""
Light beam propagation through a grid of mirrors and splitters.

Each cell remembers which directions a beam has already passed through it
in; re-entering a cell in a marked direction is pruned, which bounds the
work by width * height * 4 even when mirrors form loops.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Iterator

from grid import Grid
from grid_parser import parse_symbol_grid
from grid_types import Coord, Direction

logger = logging.getLogger(__name__)

__all__ = [
    "Tile",
    "border_entries",
    "energize",
    "energized_count",
    "max_energized",
    "parse_contraption",
]


class Tile(Enum):
    """Contents of a contraption cell."""

    EMPTY = "."
    MIRROR_SLASH = "/"
    MIRROR_BACKSLASH = "\\"
    SPLIT_VERTICAL = "|"
    SPLIT_HORIZONTAL = "-"

    def outputs(self, direction: Direction) -> tuple[Direction, ...]:
        """Directions a beam leaves this tile in when travelling `direction`."""
        match self:
            case Tile.EMPTY:
                return (direction,)
            case Tile.MIRROR_SLASH:
                return (_SLASH[direction],)
            case Tile.MIRROR_BACKSLASH:
                return (_BACKSLASH[direction],)
            case Tile.SPLIT_VERTICAL:
                if direction.is_vertical:
                    return (direction,)
                return (Direction.N, Direction.S)
            case Tile.SPLIT_HORIZONTAL:
                if not direction.is_vertical:
                    return (direction,)
                return (Direction.W, Direction.E)


# Reflection tables, keyed on the incoming direction. y grows downwards.
_SLASH = {
    Direction.N: Direction.E,
    Direction.E: Direction.N,
    Direction.S: Direction.W,
    Direction.W: Direction.S,
}

_BACKSLASH = {
    Direction.N: Direction.W,
    Direction.W: Direction.N,
    Direction.S: Direction.E,
    Direction.E: Direction.S,
}

# One bit per direction in the per-cell beam mask
_BITS = {Direction.N: 1, Direction.W: 2, Direction.S: 4, Direction.E: 8}


def parse_contraption(text: str) -> Grid[Tile]:
    return parse_symbol_grid(text, {tile.value: tile for tile in Tile})


def energize(tiles: Grid[Tile], entry: Coord, direction: Direction) -> Grid[int]:
    """
    Propagate a beam entering `entry` heading `direction`.

    Args:
        tiles: The contraption
        entry: First cell the beam occupies
        direction: Heading of the beam on entry

    Returns:
        Grid of direction bitmasks; a non-zero cell is energized
    """
    beams = tiles.map(lambda _: 0)
    pending: list[tuple[Coord, Direction]] = [(entry, direction)]

    while pending:
        coord, heading = pending.pop()
        mask = beams.get(coord)
        if mask is None:
            continue  # Left the grid
        bit = _BITS[heading]
        if mask & bit:
            continue  # Already propagated this way
        beams[coord] = mask | bit
        for out in tiles[coord].outputs(heading):
            pending.append((out.step(coord), out))

    return beams


def energized_count(tiles: Grid[Tile], entry: Coord, direction: Direction) -> int:
    return energize(tiles, entry, direction).count(bool)


def border_entries(tiles: Grid[Tile]) -> Iterator[tuple[Coord, Direction]]:
    """Every edge cell, entered perpendicular to its edge."""
    for x in range(tiles.width):
        yield (x, 0), Direction.S
    for y in range(tiles.height):
        yield (0, y), Direction.E
    for x in range(tiles.width):
        yield (x, tiles.height - 1), Direction.N
    for y in range(tiles.height):
        yield (tiles.width - 1, y), Direction.W


def max_energized(tiles: Grid[Tile]) -> int:
    """Largest energized count over all border entry points."""
    best = 0
    best_entry: tuple[Coord, Direction] | None = None
    for entry, direction in border_entries(tiles):
        count = energized_count(tiles, entry, direction)
        if count > best:
            best = count
            best_entry = (entry, direction)
    if best_entry is not None:
        logger.info(
            "Best entry %s heading %s energizes %d tiles",
            best_entry[0],
            best_entry[1].value,
            best,
        )
    return best
