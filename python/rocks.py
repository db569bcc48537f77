"""
Tilting rock platform, the long-running simulation behind cycle detection.
"""

from __future__ import annotations

import logging
from enum import Enum

from cycle import CycleDetector
from grid import Grid
from grid_parser import parse_symbol_grid
from grid_types import Coord, Direction

logger = logging.getLogger(__name__)

SPIN_ORDER = (Direction.N, Direction.W, Direction.S, Direction.E)


class Rock(Enum):
    """Cell contents of the platform."""

    EMPTY = "."
    CUBE = "#"  # Never moves
    ROUND = "O"  # Rolls when the platform is tilted

    @property
    def trit(self) -> int:
        return _TRITS[self]


_TRITS = {Rock.EMPTY: 0, Rock.CUBE: 1, Rock.ROUND: 2}

Platform = Grid[Rock]


def parse_platform(text: str) -> Platform:
    return parse_symbol_grid(text, {rock.value: rock for rock in Rock})


def _scan_order(platform: Platform, direction: Direction) -> list[Coord]:
    """Coordinates ordered from the edge the rocks roll towards."""
    xs = range(platform.width)
    ys = range(platform.height)
    if direction == Direction.S:
        ys = range(platform.height - 1, -1, -1)
    elif direction == Direction.E:
        xs = range(platform.width - 1, -1, -1)
    if direction.is_vertical:
        return [(x, y) for y in ys for x in xs]
    return [(x, y) for x in xs for y in ys]


def tilt(platform: Platform, direction: Direction) -> Platform:
    """Roll every round rock as far as it goes in `direction`."""
    tilted = platform.copy()
    for coord in _scan_order(tilted, direction):
        if tilted[coord] is not Rock.ROUND:
            continue
        dest = coord
        while tilted.get(direction.step(dest)) is Rock.EMPTY:
            dest = direction.step(dest)
        if dest != coord:
            tilted[coord] = Rock.EMPTY
            tilted[dest] = Rock.ROUND
    return tilted


def spin_cycle(platform: Platform) -> Platform:
    """Tilt north, west, south, then east."""
    for direction in SPIN_ORDER:
        platform = tilt(platform, direction)
    return platform


def north_load(platform: Platform) -> int:
    return sum(
        platform.height - y
        for (_, y), rock in platform.indexed()
        if rock is Rock.ROUND
    )


def fingerprint(platform: Platform) -> tuple[int, ...]:
    """Each row packed into one integer, one base-3 digit per cell."""
    packed: list[int] = []
    for line in platform.lines:
        value = 0
        for rock in line:
            value = value * 3 + rock.trit
        packed.append(value)
    return tuple(packed)


def load_after_spins(platform: Platform, spins: int = 1_000_000_000) -> int:
    """North load after `spins` spin cycles, extrapolated through the cycle."""
    detector = CycleDetector(spin_cycle, fingerprint)
    final = detector.state_after(platform, spins)
    return north_load(final)
