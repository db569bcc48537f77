"""
Generic fixed-size 2D grid with non-throwing, coordinate-safe lookups.

Coordinates are (x, y) pairs. Neighbour queries compute a signed offset
first and bounds-check afterwards, so the cell "above row 0" is simply
absent rather than a wrapped-around index.
"""

from __future__ import annotations

from typing import Callable, Generic, Iterator, TypeVar

from grid_types import Coord, Direction, ParseError

T = TypeVar("T")
U = TypeVar("U")

__all__ = ["Grid"]


class Grid(Generic[T]):
    """A rectangular, row-major grid of cells."""

    def __init__(self, cells: list[list[T]]) -> None:
        width = len(cells[0]) if cells else 0
        for y, row in enumerate(cells):
            if len(row) != width:
                raise ParseError(
                    "".join(str(cell) for cell in row),
                    f"row {y} has {len(row)} cells, expected {width} (from row 0)",
                )
        self.lines = [list(row) for row in cells]
        self.width = width
        self.height = len(cells)

    @classmethod
    def from_text(cls, text: str, cell_fn: Callable[[str], T] | None = None) -> Grid[T]:
        """
        Build a grid with one row per non-empty line and one cell per character.

        Args:
            text: The input text
            cell_fn: Optional constructor applied to every character

        Returns:
            The parsed grid

        Raises:
            ParseError: if the lines do not all have the same length
        """
        lines = [line for line in text.splitlines() if line]
        if not lines:
            raise ParseError(text, "no grid rows")
        # Widths are checked on the raw characters
        chars: Grid[str] = Grid([list(line) for line in lines])
        if cell_fn is None:
            return chars  # type: ignore[return-value]
        return chars.map(cell_fn)

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def in_bounds(self, coord: Coord) -> bool:
        x, y = coord
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, coord: Coord) -> T | None:
        """Return the cell at `coord`, or None when it lies outside the grid."""
        if not self.in_bounds(coord):
            return None
        x, y = coord
        return self.lines[y][x]

    def __getitem__(self, coord: Coord) -> T:
        if not self.in_bounds(coord):
            raise IndexError(f"{coord} outside {self.width}x{self.height} grid")
        x, y = coord
        return self.lines[y][x]

    def __setitem__(self, coord: Coord, value: T) -> None:
        if not self.in_bounds(coord):
            raise IndexError(f"{coord} outside {self.width}x{self.height} grid")
        x, y = coord
        self.lines[y][x] = value

    def neighbor(self, coord: Coord, direction: Direction) -> tuple[Coord, T] | None:
        """Return (coord, cell) one step away in `direction`, if inside the grid."""
        target = direction.step(coord)
        if not self.in_bounds(target):
            return None
        return target, self.lines[target[1]][target[0]]

    def above(self, coord: Coord) -> tuple[Coord, T] | None:
        return self.neighbor(coord, Direction.N)

    def below(self, coord: Coord) -> tuple[Coord, T] | None:
        return self.neighbor(coord, Direction.S)

    def left_of(self, coord: Coord) -> tuple[Coord, T] | None:
        return self.neighbor(coord, Direction.W)

    def right_of(self, coord: Coord) -> tuple[Coord, T] | None:
        return self.neighbor(coord, Direction.E)

    def cardinal_neighbors(
        self, coord: Coord
    ) -> tuple[T | None, T | None, T | None, T | None]:
        """Cells in the (up, down, left, right) directions, None where absent."""
        return (
            self.get(Direction.N.step(coord)),
            self.get(Direction.S.step(coord)),
            self.get(Direction.W.step(coord)),
            self.get(Direction.E.step(coord)),
        )

    def adjacent_to(self, coord: Coord) -> Iterator[T]:
        """Cells in the 8-neighbourhood of `coord` that lie inside the grid."""
        x, y = coord
        for ny in range(max(y - 1, 0), min(y + 2, self.height)):
            for nx in range(max(x - 1, 0), min(x + 2, self.width)):
                if (nx, ny) != (x, y):
                    yield self.lines[ny][nx]

    # -------------------------------------------------------------------------
    # Iteration
    # -------------------------------------------------------------------------

    def __iter__(self) -> Iterator[T]:
        for line in self.lines:
            yield from line

    def indexed(self) -> Iterator[tuple[Coord, T]]:
        for y, line in enumerate(self.lines):
            for x, cell in enumerate(line):
                yield (x, y), cell

    def row(self, y: int) -> Iterator[T]:
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside {self.width}x{self.height} grid")
        return iter(self.lines[y])

    def rows(self) -> Iterator[Iterator[T]]:
        return (self.row(y) for y in range(self.height))

    def column(self, x: int) -> Iterator[T]:
        if not 0 <= x < self.width:
            raise IndexError(f"column {x} outside {self.width}x{self.height} grid")
        return (line[x] for line in self.lines)

    def columns(self) -> Iterator[Iterator[T]]:
        return (self.column(x) for x in range(self.width))

    def find(self, predicate: Callable[[T], bool]) -> Coord | None:
        """First coordinate (row-major) whose cell satisfies `predicate`."""
        for coord, cell in self.indexed():
            if predicate(cell):
                return coord
        return None

    def count(self, predicate: Callable[[T], bool]) -> int:
        return sum(1 for cell in self if predicate(cell))

    # -------------------------------------------------------------------------
    # Transformation
    # -------------------------------------------------------------------------

    def map(self, fn: Callable[[T], U]) -> Grid[U]:
        """New grid of the same shape with `fn` applied to every cell."""
        return Grid([[fn(cell) for cell in line] for line in self.lines])

    def copy(self) -> Grid[T]:
        """Shallow copy: new row lists, shared cell objects."""
        return Grid(self.lines)

    def frozen(self) -> tuple[tuple[T, ...], ...]:
        """Hashable snapshot of the cells."""
        return tuple(tuple(line) for line in self.lines)

    def insert_row(self, y: int, row: list[T]) -> None:
        if len(row) != self.width:
            raise ValueError(f"Row has {len(row)} cells, grid width is {self.width}")
        self.lines.insert(y, list(row))
        self.height += 1

    def insert_column(self, x: int, column: list[T]) -> None:
        if len(column) != self.height:
            raise ValueError(f"Column has {len(column)} cells, grid height is {self.height}")
        for line, cell in zip(self.lines, column):
            line.insert(x, cell)
        self.width += 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.lines == other.lines

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid({self.width}x{self.height})"
