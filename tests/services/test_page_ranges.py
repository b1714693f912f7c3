"""Test suite for page range normalization."""

import random

import pytest

from snackpdf_core.exceptions import InvalidRequestException
from snackpdf_core.models import PageRange
from snackpdf_core.services.page_ranges import (
    describe_range,
    is_contiguous,
    merge_ranges,
    normalize_pages,
    parse_page_list,
    parse_page_ranges,
)


def r(start: int, end: int) -> PageRange:
    return PageRange(start=start, end=end)


def covered_pages(ranges) -> set[int]:
    return {page for page_range in ranges for page in page_range.pages()}


class TestPageRange:
    def test_aliases_from_and_to(self):
        page_range = PageRange.model_validate({'from': 2, 'to': 5})

        assert page_range.start == 2
        assert page_range.end == 5
        assert page_range.model_dump(by_alias=True) == {'from': 2, 'to': 5}

    def test_reversed_bounds_rejected(self):
        with pytest.raises(ValueError):
            PageRange(start=5, end=2)

    def test_page_zero_rejected(self):
        with pytest.raises(ValueError):
            PageRange(start=0, end=2)

    def test_str(self):
        assert str(r(3, 3)) == '3'
        assert str(r(1, 4)) == '1-4'


class TestMergeRanges:
    def test_adjacent_ranges_merge(self):
        assert merge_ranges([r(1, 3), r(4, 6)]) == [r(1, 6)]

    def test_gap_of_one_page_prevents_merge(self):
        assert merge_ranges([r(1, 3), r(5, 6)]) == [r(1, 3), r(5, 6)]

    def test_output_is_sorted(self):
        assert merge_ranges([r(5, 6), r(1, 3)]) == [r(1, 3), r(5, 6)]

    def test_contained_range_merges_into_outer(self):
        assert merge_ranges([r(1, 10), r(3, 4)]) == [r(1, 10)]

    def test_single_range_unchanged(self):
        assert merge_ranges([r(2, 7)]) == [r(2, 7)]

    def test_equal_starts_merge(self):
        assert merge_ranges([r(3, 4), r(3, 9), r(3, 3)]) == [r(3, 9)]

    def test_overlapping_chain(self):
        assert merge_ranges([r(8, 12), r(1, 4), r(3, 8), r(20, 20)]) == [
            r(1, 12),
            r(20, 20),
        ]

    def test_input_not_mutated(self):
        ranges = [r(4, 6), r(1, 3)]

        merge_ranges(ranges)

        assert ranges == [r(4, 6), r(1, 3)]

    def test_empty_input_rejected(self):
        with pytest.raises(InvalidRequestException):
            merge_ranges([])

    def test_invariants_hold_for_random_inputs(self):
        rng = random.Random(1234)

        for _ in range(500):
            ranges = []
            for _ in range(rng.randint(1, 8)):
                start = rng.randint(1, 40)
                ranges.append(r(start, start + rng.randint(0, 6)))

            merged = merge_ranges(ranges)

            assert covered_pages(merged) == covered_pages(ranges)
            for previous, current in zip(merged, merged[1:]):
                assert current.start > previous.end + 1


class TestPageLists:
    def test_normalize_sorts_and_deduplicates(self):
        assert normalize_pages([5, 1, 3, 1]) == [1, 3, 5]

    def test_normalize_rejects_empty(self):
        with pytest.raises(InvalidRequestException):
            normalize_pages([])

    def test_normalize_rejects_page_zero(self):
        with pytest.raises(InvalidRequestException) as excinfo:
            normalize_pages([0, 2])

        assert excinfo.value.details == {'page': 0}

    @pytest.mark.parametrize(
        'pages,expected',
        [
            ([4], True),
            ([2, 3, 4], True),
            ([1, 3], False),
            ([1, 2, 4, 5], False),
        ],
    )
    def test_is_contiguous(self, pages, expected):
        assert is_contiguous(pages) is expected


class TestParsing:
    def test_parse_single_page(self):
        assert parse_page_ranges('5') == [r(5, 5)]

    def test_parse_combination(self):
        assert parse_page_ranges('1-3, 7,9-10') == [r(1, 3), r(7, 7), r(9, 10)]

    @pytest.mark.parametrize('value', ['a-b', '3-', '-2', '1-2-3', ''])
    def test_parse_invalid(self, value):
        with pytest.raises(InvalidRequestException):
            parse_page_ranges(value)

    def test_parse_reversed_bounds(self):
        with pytest.raises(InvalidRequestException) as excinfo:
            parse_page_ranges('7-3')

        assert '[7-3]' in str(excinfo.value)

    def test_parse_page_list(self):
        assert parse_page_list('9,2-4,3') == [2, 3, 4, 9]

    def test_describe_range(self):
        assert describe_range(r(4, 4)) == 'page_4'
        assert describe_range(r(1, 3)) == 'pages_1-3'
