"""
Piecewise translation of integer ranges through chained mappings.

A Mapping is a sorted list of non-overlapping source ranges, each
translated onto a destination range of the same length. Values outside
every source range map to themselves. Applying a mapping to a batch of
ranges splits them at source boundaries and never changes their total
length.
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable, Sequence

from grid_parser import parse_ints, split_sections
from grid_types import MalformedMapping, ParseError

logger = logging.getLogger(__name__)

__all__ = [
    "Almanac",
    "MappedRange",
    "Mapping",
    "apply_pipeline",
    "lowest_location",
    "lowest_location_for_ranges",
    "normalize_ranges",
    "parse_almanac",
]


@dataclass(frozen=True)
class MappedRange:
    """Half-open source range translated onto a destination of equal length."""

    source: range
    dest: range

    def __post_init__(self) -> None:
        if self.source.step != 1 or self.dest.step != 1:
            raise MalformedMapping(f"Ranges must have step 1: {self}")
        if len(self.source) != len(self.dest):
            raise MalformedMapping(
                f"Source {self.source} and destination {self.dest} differ in length"
            )

    @property
    def offset(self) -> int:
        return self.dest.start - self.source.start

    def inverse(self) -> MappedRange:
        return MappedRange(self.dest, self.source)


@dataclass(frozen=True)
class Mapping:
    """One mapping stage: sorted, non-overlapping range translations."""

    name: str
    ranges: tuple[MappedRange, ...]
    _starts: tuple[int, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # Empty ranges translate nothing
        ranges = tuple(r for r in self.ranges if len(r.source))
        for previous, current in zip(ranges, ranges[1:]):
            if current.source.start < previous.source.stop:
                raise MalformedMapping(
                    f"Mapping '{self.name}': source {current.source} overlaps or "
                    f"precedes {previous.source}"
                )
        object.__setattr__(self, "ranges", ranges)
        object.__setattr__(self, "_starts", tuple(r.source.start for r in ranges))

    @classmethod
    def from_unsorted(cls, name: str, ranges: Iterable[MappedRange]) -> Mapping:
        return cls(name, tuple(sorted(ranges, key=lambda r: r.source.start)))

    def _find(self, value: int) -> int:
        """Index of the last range starting at or before `value`, or -1."""
        return bisect_right(self._starts, value) - 1

    def map(self, value: int) -> int:
        idx = self._find(value)
        if idx >= 0 and value in self.ranges[idx].source:
            return value + self.ranges[idx].offset
        return value

    def map_ranges(self, sources: Iterable[range]) -> list[range]:
        """
        Translate every source range, splitting at mapping boundaries.

        Covered pieces are shifted by their mapping's offset; uncovered pieces
        pass through unchanged. Empty input ranges produce nothing.
        """
        result: list[range] = []
        for source in sources:
            position = source.start
            while position < source.stop:
                idx = self._find(position)
                if idx >= 0 and position < self.ranges[idx].source.stop:
                    mapped = self.ranges[idx]
                    end = min(source.stop, mapped.source.stop)
                    result.append(range(position + mapped.offset, end + mapped.offset))
                elif idx + 1 < len(self.ranges):
                    end = min(source.stop, self.ranges[idx + 1].source.start)
                    result.append(range(position, end))
                else:
                    end = source.stop
                    result.append(range(position, end))
                position = end
        return result

    def inverse(self) -> Mapping:
        """
        Mapping from destinations back to sources.

        Raises:
            MalformedMapping: if destination ranges overlap
        """
        return Mapping.from_unsorted(f"{self.name} (inverse)", (r.inverse() for r in self.ranges))


def apply_pipeline(mappings: Sequence[Mapping], ranges: Iterable[range]) -> list[range]:
    """Feed each stage's output ranges into the next stage."""

    def stage(current: list[range], mapping: Mapping) -> list[range]:
        mapped = mapping.map_ranges(current)
        logger.debug("%s: %d ranges -> %d ranges", mapping.name, len(current), len(mapped))
        return mapped

    return reduce(stage, mappings, list(ranges))


def normalize_ranges(ranges: Iterable[range]) -> list[range]:
    """Sort ranges and merge overlapping or touching ones; drop empty ones."""
    merged: list[range] = []
    for r in sorted((r for r in ranges if len(r)), key=lambda r: r.start):
        if merged and r.start <= merged[-1].stop:
            last = merged[-1]
            merged[-1] = range(last.start, max(last.stop, r.stop))
        else:
            merged.append(r)
    return merged


# =============================================================================
# Almanac
# =============================================================================


@dataclass
class Almanac:
    """Seed numbers followed by the chain of mapping stages."""

    seeds: list[int]
    mappings: list[Mapping]

    def seed_ranges(self) -> list[range]:
        """Seeds read as (start, length) pairs."""
        if len(self.seeds) % 2:
            raise ParseError(" ".join(map(str, self.seeds)), "seed ranges need an even count")
        pairs = zip(self.seeds[::2], self.seeds[1::2])
        return [range(start, start + length) for start, length in pairs]


def _parse_mapped_range(line: str) -> MappedRange:
    values = parse_ints(line)
    if len(values) != 3:
        raise ParseError(line, "expected 3 values")
    dest, source, length = values
    return MappedRange(range(source, source + length), range(dest, dest + length))


def parse_almanac(text: str) -> Almanac:
    """
    Parse an almanac.

    Format:
        seeds: 79 14 55 13

        seed-to-soil map:
        50 98 2
        52 50 48

    Each mapping line is "destination source length". Lines are sorted by
    source start after parsing.
    """
    sections = split_sections(text)
    if not sections:
        raise ParseError(text, "empty almanac")
    header, _, seeds = sections[0].partition(":")
    if header.strip() != "seeds":
        raise ParseError(sections[0], "expected 'seeds:' line")

    mappings: list[Mapping] = []
    for section in sections[1:]:
        title, *lines = section.splitlines()
        name = title.removesuffix(":").removesuffix(" map").strip()
        mappings.append(Mapping.from_unsorted(name, map(_parse_mapped_range, lines)))
    return Almanac(parse_ints(seeds), mappings)


def lowest_location(almanac: Almanac) -> int:
    """Lowest value reached by any individual seed."""
    if not almanac.seeds:
        raise ParseError("seeds:", "no seeds")
    return min(
        reduce(lambda value, mapping: mapping.map(value), almanac.mappings, seed)
        for seed in almanac.seeds
    )


def lowest_location_for_ranges(almanac: Almanac) -> int:
    """Lowest value reached by any seed when seeds describe ranges."""
    locations = apply_pipeline(almanac.mappings, almanac.seed_ranges())
    if not locations:
        raise ParseError("seeds:", "no seeds")
    return min(r.start for r in locations)
