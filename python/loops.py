"""
Pipe mazes: tracing the main loop and classifying cells as inside/outside.

Classification uses a single left-to-right scanline per row with the
even-odd rule. A vertical pipe is a crossing. A horizontal run of loop
cells is a crossing only when it is entered from one side (above/below)
and left from the other; runs shaped like a U (for example F--7 or L--J)
return to the side they came from and do not change parity.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import Collection

from grid import Grid
from grid_parser import parse_symbol_grid
from grid_types import Coord, Direction, ParseError

logger = logging.getLogger(__name__)

__all__ = [
    "Maze",
    "Pipe",
    "Region",
    "classify",
    "count_inside",
    "farthest_distance",
    "parse_maze",
    "trace_loop",
]

START = "S"
GROUND = "."


class Pipe(Enum):
    """Pipe shapes, named by their symbol."""

    VERTICAL = "|"
    HORIZONTAL = "-"
    NORTH_EAST = "L"
    NORTH_WEST = "J"
    SOUTH_WEST = "7"
    SOUTH_EAST = "F"

    def connections(self) -> frozenset[Direction]:
        return _CONNECTIONS[self]

    @property
    def connects_up(self) -> bool:
        return Direction.N in _CONNECTIONS[self]

    @property
    def connects_down(self) -> bool:
        return Direction.S in _CONNECTIONS[self]

    @property
    def connects_left(self) -> bool:
        return Direction.W in _CONNECTIONS[self]

    @property
    def connects_right(self) -> bool:
        return Direction.E in _CONNECTIONS[self]


_CONNECTIONS = {
    Pipe.VERTICAL: frozenset({Direction.N, Direction.S}),
    Pipe.HORIZONTAL: frozenset({Direction.W, Direction.E}),
    Pipe.NORTH_EAST: frozenset({Direction.N, Direction.E}),
    Pipe.NORTH_WEST: frozenset({Direction.N, Direction.W}),
    Pipe.SOUTH_WEST: frozenset({Direction.S, Direction.W}),
    Pipe.SOUTH_EAST: frozenset({Direction.S, Direction.E}),
}

# Preference order when several shapes fit the start cell
_START_CANDIDATES = (
    Pipe.VERTICAL,
    Pipe.NORTH_WEST,
    Pipe.NORTH_EAST,
    Pipe.SOUTH_WEST,
    Pipe.SOUTH_EAST,
    Pipe.HORIZONTAL,
)


class Region(Enum):
    """Classification of a maze cell."""

    LOOP = "loop"
    INSIDE = "inside"
    OUTSIDE = "outside"


@dataclass
class Maze:
    """Pipe grid (None for ground) with the start cell's shape filled in."""

    pipes: Grid[Pipe | None]
    start: Coord


def _connects_towards(symbol: str | None, direction: Direction) -> bool:
    """Whether a neighbour with `symbol` has an opening facing `direction`."""
    if symbol is None or symbol in (START, GROUND):
        return False
    return direction in Pipe(symbol).connections()


def _infer_start_shape(symbols: Grid[str], start: Coord) -> Pipe:
    open_sides = {
        direction
        for direction in Direction
        if _connects_towards(symbols.get(direction.step(start)), direction.reverse())
    }
    for pipe in _START_CANDIDATES:
        if pipe.connections() <= open_sides:
            return pipe
    raise ParseError(START, f"no pipe shape fits the start position {start}")


def parse_maze(text: str) -> Maze:
    """
    Parse a pipe maze, replacing the start marker by its inferred shape.

    Raises:
        UnrecognizedSymbol: for characters other than pipes, '.' and 'S'
        ParseError: if there is not exactly one start or no shape fits it
    """
    alphabet = {pipe.value: pipe.value for pipe in Pipe}
    alphabet[GROUND] = GROUND
    alphabet[START] = START
    symbols = parse_symbol_grid(text, alphabet)

    starts = [coord for coord, symbol in symbols.indexed() if symbol == START]
    if len(starts) != 1:
        raise ParseError(text, f"expected exactly one start, found {len(starts)}")
    start = starts[0]

    pipes: Grid[Pipe | None] = symbols.map(
        lambda symbol: Pipe(symbol) if symbol not in (START, GROUND) else None
    )
    pipes[start] = _infer_start_shape(symbols, start)
    return Maze(pipes, start)


def trace_loop(maze: Maze) -> dict[Coord, int]:
    """
    Flood along the pipes from the start.

    Returns:
        Distance along the loop from the start for every loop cell

    Raises:
        ParseError: if the start is ground or a pipe on the loop leads nowhere
    """
    distances = {maze.start: 0}
    queue = deque([maze.start])
    while queue:
        coord = queue.popleft()
        pipe = maze.pipes[coord]
        if pipe is None:
            raise ParseError(GROUND, f"start {coord} is not a pipe")
        for direction in pipe.connections():
            found = maze.pipes.neighbor(coord, direction)
            if found is None or found[1] is None or direction.reverse() not in found[1].connections():
                raise ParseError(pipe.value, f"loop is not closed at {coord} heading {direction.value}")
            target = found[0]
            if target not in distances:
                distances[target] = distances[coord] + 1
                queue.append(target)
    logger.debug("Loop has %d cells", len(distances))
    return distances


def farthest_distance(maze: Maze) -> int:
    """Steps from the start to the farthest point of the loop."""
    return max(trace_loop(maze).values())


def classify(pipes: Grid[Pipe | None], loop: Collection[Coord]) -> Grid[Region]:
    """
    Classify every cell as part of the loop, inside it, or outside it.

    Args:
        pipes: Pipe shapes; only cells in `loop` are consulted
        loop: Coordinates of the closed loop

    Returns:
        Grid of regions with the same shape as `pipes`

    Raises:
        ParseError: if a coordinate in `loop` holds ground
    """
    regions: list[list[Region]] = []
    for y, line in enumerate(pipes.lines):
        row: list[Region] = []
        inside = False
        in_wall = False
        from_below = False
        for x, pipe in enumerate(line):
            if (x, y) not in loop:
                row.append(Region.INSIDE if inside else Region.OUTSIDE)
                continue
            if pipe is None:
                raise ParseError(GROUND, f"loop cell {(x, y)} is not a pipe")
            if not in_wall and not pipe.connects_left:
                in_wall = pipe.connects_right
                if in_wall:
                    from_below = pipe.connects_down
                else:
                    inside = not inside  # Vertical crossing
            elif in_wall and not pipe.connects_right:
                in_wall = False
                if from_below != pipe.connects_down:
                    inside = not inside
            row.append(Region.LOOP)
        regions.append(row)
    return Grid(regions)


def count_inside(maze: Maze) -> int:
    """Number of cells enclosed by the main loop."""
    regions = classify(maze.pipes, trace_loop(maze).keys())
    return regions.count(lambda region: region is Region.INSIDE)
