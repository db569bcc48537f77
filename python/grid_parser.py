"""
Text parsing utilities for puzzle inputs.

Provides:
1. Grid parsing, optionally through a symbol table or as digits
2. Small helpers for sectioned inputs and whitespace-separated integers
"""

from __future__ import annotations

from typing import Callable, Mapping, TypeVar

from grid import Grid
from grid_types import ParseError, UnrecognizedSymbol

T = TypeVar("T")

__all__ = [
    "parse_grid",
    "parse_symbol_grid",
    "parse_digit_grid",
    "split_sections",
    "parse_ints",
]


def parse_grid(text: str, cell_fn: Callable[[str], T] | None = None) -> Grid[T]:
    """Parse one cell per character; see Grid.from_text."""
    return Grid.from_text(text, cell_fn)


def parse_symbol_grid(text: str, symbols: Mapping[str, T]) -> Grid[T]:
    """
    Parse a grid whose characters must all appear in `symbols`.

    Format:
    - One row per non-empty line
    - Every character is looked up in `symbols`

    Example:
        parse_symbol_grid("O.#\\n..O", {"O": 1, ".": 0, "#": 2})
        Creates a 3x2 grid [[1, 0, 2], [0, 0, 1]]

    Args:
        text: The input text
        symbols: Mapping from character to cell value

    Returns:
        The parsed grid

    Raises:
        UnrecognizedSymbol: for the first character missing from `symbols`
        ParseError: if the rows have inconsistent lengths
    """
    lines = [line for line in text.splitlines() if line]
    rows: list[list[T]] = []
    for y, line in enumerate(lines):
        row: list[T] = []
        for x, ch in enumerate(line):
            try:
                row.append(symbols[ch])
            except KeyError:
                raise UnrecognizedSymbol(ch, (x, y), line) from None
        rows.append(row)
    if not rows:
        raise ParseError(text, "no grid rows")
    return Grid(rows)


_DIGITS = {str(d): d for d in range(10)}


def parse_digit_grid(text: str) -> Grid[int]:
    """Parse a grid of single decimal digits into ints."""
    return parse_symbol_grid(text, _DIGITS)


def split_sections(text: str) -> list[str]:
    """Split text into blank-line separated blocks, dropping empty ones."""
    sections: list[str] = []
    current: list[str] = []
    for line in text.splitlines():
        if line.strip():
            current.append(line)
        elif current:
            sections.append("\n".join(current))
            current = []
    if current:
        sections.append("\n".join(current))
    return sections


def parse_ints(text: str) -> list[int]:
    """Parse whitespace-separated integers."""
    values: list[int] = []
    for token in text.split():
        try:
            values.append(int(token))
        except ValueError:
            raise ParseError(text, f"expected integer, got '{token}'") from None
    return values
