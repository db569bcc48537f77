"""Tests for range mappings and the almanac pipeline."""

import pytest

from grid_types import MalformedMapping, ParseError, PuzzleError
from intervals import (
    MappedRange,
    Mapping,
    apply_pipeline,
    lowest_location,
    lowest_location_for_ranges,
    normalize_ranges,
    parse_almanac,
)

ALMANAC = """\
seeds: 79 14 55 13

seed-to-soil map:
50 98 2
52 50 48

soil-to-fertilizer map:
0 15 37
37 52 2
39 0 15

fertilizer-to-water map:
49 53 8
0 11 42
42 0 7
57 7 4

water-to-light map:
88 18 7
18 25 70

light-to-temperature map:
45 77 23
81 45 19
68 64 13

temperature-to-humidity map:
0 69 1
1 0 69

humidity-to-location map:
60 56 37
56 93 4
"""


@pytest.fixture
def seed_to_soil() -> Mapping:
    return parse_almanac(ALMANAC).mappings[0]


class TestMappedRange:
    def test_offset(self) -> None:
        assert MappedRange(range(98, 100), range(50, 52)).offset == -48

    def test_lengths_must_match(self) -> None:
        with pytest.raises(MalformedMapping, match="differ in length"):
            MappedRange(range(0, 3), range(10, 14))

    def test_step_must_be_one(self) -> None:
        with pytest.raises(MalformedMapping, match="step 1"):
            MappedRange(range(0, 10, 2), range(0, 10, 2))


class TestMapping:
    """Tests for single-stage translation."""

    @pytest.mark.parametrize(
        "value,expected",
        [(79, 81), (14, 14), (55, 57), (13, 13), (98, 50), (99, 51), (100, 100)],
    )
    def test_map_values(self, seed_to_soil: Mapping, value: int, expected: int) -> None:
        assert seed_to_soil.map(value) == expected

    def test_ranges_are_sorted_by_source(self, seed_to_soil: Mapping) -> None:
        assert [r.source.start for r in seed_to_soil.ranges] == [50, 98]

    def test_map_ranges_splits_at_boundaries(self, seed_to_soil: Mapping) -> None:
        assert seed_to_soil.map_ranges([range(45, 105)]) == [
            range(45, 50),
            range(52, 100),
            range(50, 52),
            range(100, 105),
        ]

    def test_map_ranges_outside_all_sources(self, seed_to_soil: Mapping) -> None:
        assert seed_to_soil.map_ranges([range(0, 10), range(200, 201)]) == [
            range(0, 10),
            range(200, 201),
        ]

    def test_empty_input_ranges_vanish(self, seed_to_soil: Mapping) -> None:
        assert seed_to_soil.map_ranges([range(60, 60)]) == []

    def test_empty_mapping_is_identity(self) -> None:
        assert Mapping("nothing", ()).map_ranges([range(3, 7)]) == [range(3, 7)]
        assert Mapping("nothing", ()).map(5) == 5

    def test_overlapping_sources_rejected(self) -> None:
        with pytest.raises(MalformedMapping, match="overlaps"):
            Mapping(
                "bad",
                (
                    MappedRange(range(0, 10), range(100, 110)),
                    MappedRange(range(5, 15), range(200, 210)),
                ),
            )

    def test_empty_range_order_does_not_matter(self) -> None:
        """A zero-length range sharing a start with a real one is ignored either way."""
        empty = MappedRange(range(10, 10), range(0, 0))
        full = MappedRange(range(10, 20), range(30, 40))
        forward = Mapping.from_unsorted("m", [empty, full])
        backward = Mapping.from_unsorted("m", [full, empty])
        assert forward == backward == Mapping("m", (full,))
        assert forward.map(15) == 35
        assert Mapping("m", (full, empty)).ranges == (full,)

    def test_malformed_mapping_is_puzzle_error(self) -> None:
        with pytest.raises(PuzzleError):
            MappedRange(range(0, 1), range(0, 2))

    def test_inverse_round_trip(self, seed_to_soil: Mapping) -> None:
        """seed-to-soil permutes [50, 100), so its inverse undoes it."""
        inverse = seed_to_soil.inverse()
        for value in range(0, 120):
            assert inverse.map(seed_to_soil.map(value)) == value
        forward = seed_to_soil.map_ranges([range(45, 105)])
        assert normalize_ranges(inverse.map_ranges(forward)) == [range(45, 105)]


class TestPipeline:
    """Tests for chained stages."""

    def test_total_length_is_preserved(self) -> None:
        almanac = parse_almanac(ALMANAC)
        seeds = almanac.seed_ranges()
        locations = apply_pipeline(almanac.mappings, seeds)
        assert sum(map(len, locations)) == sum(map(len, seeds))

    def test_pipeline_agrees_with_single_values(self) -> None:
        almanac = parse_almanac(ALMANAC)
        for seed in range(79, 93):
            (mapped,) = apply_pipeline(almanac.mappings, [range(seed, seed + 1)])
            single = seed
            for mapping in almanac.mappings:
                single = mapping.map(single)
            assert mapped == range(single, single + 1)

    def test_normalize_ranges(self) -> None:
        ranges = [range(5, 10), range(0, 3), range(3, 4), range(8, 12), range(20, 20)]
        assert normalize_ranges(ranges) == [range(0, 4), range(5, 12)]


class TestAlmanac:
    """Tests for parsing and the two lowest-location answers."""

    def test_parse(self) -> None:
        almanac = parse_almanac(ALMANAC)
        assert almanac.seeds == [79, 14, 55, 13]
        assert [m.name for m in almanac.mappings][:2] == ["seed-to-soil", "soil-to-fertilizer"]
        assert len(almanac.mappings) == 7

    def test_lowest_location(self) -> None:
        assert lowest_location(parse_almanac(ALMANAC)) == 35

    def test_lowest_location_for_ranges(self) -> None:
        assert lowest_location_for_ranges(parse_almanac(ALMANAC)) == 46

    def test_seed_ranges(self) -> None:
        assert parse_almanac(ALMANAC).seed_ranges() == [range(79, 93), range(55, 68)]

    def test_odd_seed_count(self) -> None:
        with pytest.raises(ParseError, match="even count"):
            parse_almanac("seeds: 1 2 3").seed_ranges()

    def test_missing_seeds_header(self) -> None:
        with pytest.raises(ParseError, match="expected 'seeds:' line"):
            parse_almanac("plants: 1 2\n\na map:\n1 2 3")

    def test_bad_mapping_line(self) -> None:
        with pytest.raises(ParseError, match="expected 3 values"):
            parse_almanac("seeds: 1 2\n\na map:\n1 2")
