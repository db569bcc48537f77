"""Tests for pipe maze tracing and inside/outside classification."""

import pytest

from grid import Grid
from grid_types import ParseError, UnrecognizedSymbol
from loops import (
    Maze,
    Pipe,
    Region,
    classify,
    count_inside,
    farthest_distance,
    parse_maze,
    trace_loop,
)

SIMPLE = """\
.....
.S-7.
.|.|.
.L-J.
.....
"""

COMPLEX = """\
..F7.
.FJ|.
SJ.L7
|F--J
LJ...
"""

ENCLOSED = """\
...........
.S-------7.
.|F-----7|.
.||.....||.
.||.....||.
.|L-7.F-J|.
.|..|.|..|.
.L--J.L--J.
...........
"""

SQUEEZED = """\
..........
.S------7.
.|F----7|.
.||....||.
.||....||.
.|L-7F-J|.
.|..||..|.
.L--JL--J.
..........
"""

RECTANGLE = """\
S---7
|...|
|...|
|...|
L---J
"""


class TestParseMaze:
    """Tests for reading mazes and inferring the start shape."""

    def test_start_shape(self) -> None:
        maze = parse_maze(SIMPLE)
        assert maze.start == (1, 1)
        assert maze.pipes[(1, 1)] is Pipe.SOUTH_EAST

    def test_ground_is_none(self) -> None:
        assert parse_maze(SIMPLE).pipes[(0, 0)] is None

    def test_ambiguous_start_uses_preference_order(self) -> None:
        """With openings on all four sides the vertical pipe wins."""
        maze = parse_maze(".|.\n-S-\n.|.")
        assert maze.pipes[(1, 1)] is Pipe.VERTICAL

    def test_start_between_horizontal_neighbours(self) -> None:
        maze = parse_maze("-S-")
        assert maze.pipes[(1, 0)] is Pipe.HORIZONTAL

    @pytest.mark.parametrize("text,count", [("...", 0), ("S.S", 2)])
    def test_requires_exactly_one_start(self, text: str, count: int) -> None:
        with pytest.raises(ParseError, match=f"expected exactly one start, found {count}"):
            parse_maze(text)

    def test_no_shape_fits_start(self) -> None:
        with pytest.raises(ParseError, match="no pipe shape fits"):
            parse_maze("...\n.S.\n...")

    def test_unknown_symbol(self) -> None:
        with pytest.raises(UnrecognizedSymbol, match="'x'"):
            parse_maze("S-x")

    def test_connections(self) -> None:
        assert Pipe.NORTH_EAST.connects_up and Pipe.NORTH_EAST.connects_right
        assert not Pipe.NORTH_EAST.connects_down
        assert Pipe.SOUTH_WEST.connects_left and Pipe.SOUTH_WEST.connects_down


class TestTraceLoop:
    """Tests for following the loop from the start."""

    def test_simple_distances(self) -> None:
        distances = trace_loop(parse_maze(SIMPLE))
        assert len(distances) == 8
        assert distances[(1, 1)] == 0
        assert distances[(3, 3)] == 4

    @pytest.mark.parametrize("text,expected", [(SIMPLE, 4), (COMPLEX, 8), (RECTANGLE, 8)])
    def test_farthest_distance(self, text: str, expected: int) -> None:
        assert farthest_distance(parse_maze(text)) == expected

    def test_loop_ignores_stray_pipes(self) -> None:
        """Pipes not connected to the start are not part of the loop."""
        maze = parse_maze("S7F\nLJ|")
        assert set(trace_loop(maze)) == {(0, 0), (1, 0), (0, 1), (1, 1)}

    def test_start_on_ground(self) -> None:
        maze = parse_maze(SIMPLE)
        with pytest.raises(ParseError, match=r"start \(0, 0\) is not a pipe"):
            trace_loop(Maze(maze.pipes, (0, 0)))

    def test_broken_loop(self) -> None:
        with pytest.raises(ParseError, match="loop is not closed"):
            trace_loop(parse_maze("S-7\n|.|\nL-."))


class TestClassify:
    """Tests for inside/outside classification."""

    @pytest.mark.parametrize(
        "text,expected",
        [(SIMPLE, 1), (ENCLOSED, 4), (SQUEEZED, 4), (RECTANGLE, 9)],
    )
    def test_count_inside(self, text: str, expected: int) -> None:
        assert count_inside(parse_maze(text)) == expected

    def test_u_shaped_walls_do_not_flip_parity(self) -> None:
        pipes = Grid.from_text(
            "F-7..\n|.L-7\n|...|\nL---J",
            lambda ch: None if ch == "." else Pipe(ch),
        )
        loop = {coord for coord, pipe in pipes.indexed() if pipe is not None}
        regions = classify(pipes, loop)
        assert regions[(3, 0)] is Region.OUTSIDE
        assert regions[(1, 1)] is Region.INSIDE
        assert regions[(1, 0)] is Region.LOOP
        assert regions.count(lambda region: region is Region.INSIDE) == 4

    def test_ground_in_loop_rejected(self) -> None:
        pipes: Grid[Pipe | None] = Grid([[None, Pipe.VERTICAL]])
        with pytest.raises(ParseError, match=r"loop cell \(0, 0\) is not a pipe"):
            classify(pipes, {(0, 0)})

    def test_cells_outside_loop_keep_their_side(self) -> None:
        """Pipes that are not on the loop are classified like ground."""
        maze = parse_maze(SIMPLE)
        regions = classify(maze.pipes, trace_loop(maze).keys())
        assert regions[(2, 2)] is Region.INSIDE
        assert regions[(0, 2)] is Region.OUTSIDE
        assert regions[(4, 2)] is Region.OUTSIDE
