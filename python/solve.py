#!/usr/bin/env python3
"""
Command line entry point: parse a puzzle input and print both answers.

Usage:
    solve.py PUZZLE INPUT [PART] [--show] [-v]
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from rich.console import Console
from rich.markup import escape

import beams
import intervals
import loops
import pathfinding
import rocks
from ascii_render import render_beams, render_platform, render_regions, render_side_by_side
from grid import Grid
from grid_types import Direction, PuzzleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Puzzle:
    """Wiring from input text to the two answers."""

    name: str
    description: str
    parse: Callable[[str], Any]
    part1: Callable[[Any], int]
    part2: Callable[[Any], int]
    show: Callable[[Any], str] | None = None


def _show_beams(tiles: Grid[beams.Tile]) -> str:
    return render_beams(tiles, beams.energize(tiles, (0, 0), Direction.E))


def _show_pipes(maze: loops.Maze) -> str:
    regions = loops.classify(maze.pipes, loops.trace_loop(maze).keys())
    return render_regions(maze.pipes, regions)


def _show_rocks(platform: rocks.Platform) -> str:
    return render_side_by_side(
        [
            render_platform(platform),
            render_platform(rocks.tilt(platform, Direction.N)),
            render_platform(rocks.spin_cycle(platform)),
        ]
    )


PUZZLES: dict[str, Puzzle] = {
    puzzle.name: puzzle
    for puzzle in (
        Puzzle(
            "almanac",
            "Lowest location through chained range mappings",
            intervals.parse_almanac,
            intervals.lowest_location,
            intervals.lowest_location_for_ranges,
        ),
        Puzzle(
            "pipes",
            "Farthest loop distance and enclosed tile count",
            loops.parse_maze,
            loops.farthest_distance,
            loops.count_inside,
            _show_pipes,
        ),
        Puzzle(
            "rocks",
            "North load after one tilt and after a billion spin cycles",
            rocks.parse_platform,
            lambda platform: rocks.north_load(rocks.tilt(platform, Direction.N)),
            rocks.load_after_spins,
            _show_rocks,
        ),
        Puzzle(
            "beams",
            "Energized tiles from the top-left and from the best border entry",
            beams.parse_contraption,
            lambda tiles: beams.energized_count(tiles, (0, 0), Direction.E),
            beams.max_energized,
            _show_beams,
        ),
        Puzzle(
            "crucible",
            "Least heat loss with 1-3 and 4-10 straight runs",
            pathfinding.parse_heat_map,
            lambda costs: pathfinding.find_path(costs, pathfinding.CRUCIBLE),
            lambda costs: pathfinding.find_path(costs, pathfinding.ULTRA_CRUCIBLE),
        ),
    )
}


def solve(puzzle: Puzzle, text: str, parts: tuple[int, ...] = (1, 2)) -> dict[int, int]:
    """
    Parse `text` once and compute the requested parts.

    Raises:
        PuzzleError: on malformed input or an unsolvable instance
    """
    parsed = puzzle.parse(text)
    answers: dict[int, int] = {}
    for part in parts:
        solver = puzzle.part1 if part == 1 else puzzle.part2
        answers[part] = solver(parsed)
        logger.info("%s part %d: %d", puzzle.name, part, answers[part])
    return answers


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve a grid puzzle input.")
    parser.add_argument("puzzle", choices=sorted(PUZZLES), help="Puzzle to solve")
    parser.add_argument("input", type=Path, help="Path to the puzzle input")
    parser.add_argument(
        "part", nargs="?", type=int, choices=(1, 2), help="Only run this part (default: both)"
    )
    parser.add_argument("--show", action="store_true", help="Print a colored rendering")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable INFO logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )
    console = Console(highlight=False)
    err_console = Console(stderr=True, highlight=False)

    puzzle = PUZZLES[args.puzzle]
    try:
        text = args.input.read_text()
    except OSError as exc:
        err_console.print(f"[bold red]error:[/] cannot read {escape(str(args.input))}: {exc.strerror}")
        return 1

    parts = (args.part,) if args.part else (1, 2)
    try:
        answers = solve(puzzle, text, parts)
        if args.show and puzzle.show is not None:
            # Rendered text already carries ANSI colors
            print(puzzle.show(puzzle.parse(text)))
    except PuzzleError as exc:
        err_console.print(f"[bold red]error:[/] {escape(str(exc))}")
        return 1

    for part, answer in answers.items():
        console.print(f"part{part}: {answer}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
