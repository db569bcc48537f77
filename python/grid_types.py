"""
Shared type definitions for the gridpuzzle system.
"""

from __future__ import annotations

from enum import Enum

Coord = tuple[int, int]  # (x, y): x is the column, y is the row


class Direction(Enum):
    """Cardinal direction for traversal."""

    N = "N"  # Up (decreasing row)
    S = "S"  # Down (increasing row)
    E = "E"  # Right (increasing col)
    W = "W"  # Left (decreasing col)

    @property
    def delta(self) -> tuple[int, int]:
        """(dx, dy) offset of one step in this direction."""
        return _DELTAS[self]

    def step(self, coord: Coord, distance: int = 1) -> Coord:
        """
        Offset a coordinate by `distance` steps.

        The result may lie outside any grid (including negative values);
        bounds are checked by the grid, never by wraparound.
        """
        dx, dy = _DELTAS[self]
        return (coord[0] + dx * distance, coord[1] + dy * distance)

    def turn_left(self) -> Direction:
        return _LEFT[self]

    def turn_right(self) -> Direction:
        return _RIGHT[self]

    def reverse(self) -> Direction:
        return _REVERSE[self]

    def perpendicular(self) -> tuple[Direction, Direction]:
        """The two directions reachable by a single turn."""
        return (_RIGHT[self], _LEFT[self])

    @property
    def is_vertical(self) -> bool:
        return self in (Direction.N, Direction.S)


_DELTAS = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}

_LEFT = {
    Direction.N: Direction.W,
    Direction.W: Direction.S,
    Direction.S: Direction.E,
    Direction.E: Direction.N,
}

_RIGHT = {
    Direction.N: Direction.E,
    Direction.E: Direction.S,
    Direction.S: Direction.W,
    Direction.W: Direction.N,
}

_REVERSE = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}


# =============================================================================
# Errors
# =============================================================================


class PuzzleError(Exception):
    """Base class for every error raised on purpose by the solvers."""


class ParseError(PuzzleError, ValueError):
    """Malformed input text."""

    def __init__(self, text: str, reason: str) -> None:
        super().__init__(f"Failed to parse '{text}': {reason}")
        self.text = text
        self.reason = reason


class UnrecognizedSymbol(ParseError):
    """A grid cell symbol outside the expected alphabet."""

    def __init__(self, symbol: str, position: Coord, line: str = "") -> None:
        x, y = position
        super().__init__(
            line or symbol,
            f"unrecognized symbol {symbol!r} at column {x}, row {y}",
        )
        self.symbol = symbol
        self.position = position


class NoPathFound(PuzzleError):
    """The search frontier was exhausted before reaching the destination."""

    def __init__(self, start: Coord, destination: Coord) -> None:
        super().__init__(f"No path from {start} to {destination}")
        self.start = start
        self.destination = destination


class MalformedMapping(PuzzleError, ValueError):
    """Interval mapping with mismatched lengths or overlapping/unsorted ranges."""
