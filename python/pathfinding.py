"""
Best-first search with straight-run constraints.

A mover must travel at least `min_run` and at most `max_run` cells in a
straight line before it turns, and it may never reverse. Straight runs are
expanded in one go from each popped node, so every edge of the search is
"run k cells, then turn" and the run-length rule never needs extra state.
"""

from __future__ import annotations

import heapq
import logging
from dataclasses import dataclass, field

from grid import Grid
from grid_parser import parse_digit_grid
from grid_types import Coord, Direction, NoPathFound

logger = logging.getLogger(__name__)

__all__ = [
    "CRUCIBLE",
    "ULTRA_CRUCIBLE",
    "RunLimits",
    "SearchNode",
    "find_path",
    "parse_heat_map",
]

# Virtual headings for the start node: their perpendiculars cover all four
# real directions.
_INITIAL_DIRECTIONS = (Direction.W, Direction.N)


@dataclass(frozen=True)
class RunLimits:
    """Rules governing straight-line movement."""

    min_run: int = 1
    max_run: int = 3

    def __post_init__(self) -> None:
        if not 1 <= self.min_run <= self.max_run:
            raise ValueError(
                f"Run limits must satisfy 1 <= min_run <= max_run, "
                f"got min_run={self.min_run}, max_run={self.max_run}"
            )


CRUCIBLE = RunLimits(1, 3)
ULTRA_CRUCIBLE = RunLimits(4, 10)


@dataclass(frozen=True, order=True)
class SearchNode:
    """Frontier entry; ordered by distance only."""

    distance: int
    coord: Coord = field(compare=False)
    direction: Direction = field(compare=False)


def parse_heat_map(text: str) -> Grid[int]:
    return parse_digit_grid(text)


def _push_runs(
    frontier: list[SearchNode],
    best: dict[tuple[Coord, Direction], int],
    costs: Grid[int],
    node: SearchNode,
    direction: Direction,
    limits: RunLimits,
) -> None:
    """Walk up to max_run cells in `direction`, pushing every improving stop."""
    coord = node.coord
    distance = node.distance
    for run in range(1, limits.max_run + 1):
        coord = direction.step(coord)
        cost = costs.get(coord)
        if cost is None:
            break
        distance += cost
        if run < limits.min_run:
            continue
        key = (coord, direction)
        if distance < best.get(key, distance + 1):
            best[key] = distance
            heapq.heappush(frontier, SearchNode(distance, coord, direction))


def find_path(
    costs: Grid[int],
    limits: RunLimits = CRUCIBLE,
    start: Coord = (0, 0),
    destination: Coord | None = None,
) -> int:
    """
    Minimum total cost from `start` to `destination` under the run limits.

    Entering a cell costs that cell's value; the start cell is free.

    Args:
        costs: Grid of per-cell entry costs
        limits: Minimum and maximum straight run before a turn
        start: Starting coordinate
        destination: Target coordinate, bottom-right cell by default

    Returns:
        The total cost of the cheapest valid route

    Raises:
        NoPathFound: if the frontier empties before reaching the destination
        ValueError: if start or destination lies outside the grid
    """
    if destination is None:
        destination = (costs.width - 1, costs.height - 1)
    for name, coord in (("start", start), ("destination", destination)):
        if not costs.in_bounds(coord):
            raise ValueError(f"{name} {coord} outside {costs.width}x{costs.height} grid")

    best: dict[tuple[Coord, Direction], int] = {}
    frontier = [SearchNode(0, start, direction) for direction in _INITIAL_DIRECTIONS]
    heapq.heapify(frontier)
    expanded = 0

    while frontier:
        node = heapq.heappop(frontier)
        if node.coord == destination:
            logger.info(
                "Reached %s with cost %d after expanding %d nodes",
                destination,
                node.distance,
                expanded,
            )
            return node.distance
        if node.distance > best.get((node.coord, node.direction), node.distance):
            continue  # Stale entry
        expanded += 1
        for turn in node.direction.perpendicular():
            _push_runs(frontier, best, costs, node, turn, limits)

    raise NoPathFound(start, destination)
