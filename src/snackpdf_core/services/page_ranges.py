"""Page range normalization and parsing."""

import re
from typing import Iterable, List

from pydantic import ValidationError

from snackpdf_core.exceptions import InvalidRequestException
from snackpdf_core.models import PageRange

RANGE_PATTERN = re.compile(r'^(\d+)(?:-(\d+))?$')


def merge_ranges(ranges: Iterable[PageRange]) -> List[PageRange]:
    """
    Merge overlapping and adjacent page ranges.

    The result is sorted by start page and no two consecutive ranges touch,
    i.e. ``next.start > previous.end + 1``. The pages covered by the result
    are exactly the pages covered by the input.

    Args:
        ranges: The requested page ranges, in any order

    Returns:
        A new list of disjoint, non-adjacent ranges

    Raises:
        InvalidRequestException: If no range is given
    """
    ordered = sorted(ranges, key=lambda page_range: page_range.start)

    if not ordered:
        raise InvalidRequestException('At least one page range is required')

    merged = [ordered[0]]

    for current in ordered[1:]:
        last = merged[-1]
        if current.start <= last.end + 1:
            merged[-1] = PageRange(start=last.start, end=max(last.end, current.end))
        else:
            merged.append(current)

    return merged


def normalize_pages(pages: Iterable[int]) -> List[int]:
    """
    Sort and de-duplicate an explicit page list.

    Raises:
        InvalidRequestException: If the list is empty or holds a page below 1
    """
    normalized = sorted(set(pages))

    if not normalized:
        raise InvalidRequestException('At least one page is required')

    if normalized[0] < 1:
        raise InvalidRequestException(
            'Page numbers start from 1', details={'page': normalized[0]}
        )

    return normalized


def is_contiguous(pages: List[int]) -> bool:
    """Check if an ascending page list forms a single unbroken interval."""
    return all(page == previous + 1 for previous, page in zip(pages, pages[1:]))


def parse_page_ranges(value: str) -> List[PageRange]:
    """
    Parse a human friendly page range string.

    Supports formats:
    - 5 - a single page
    - 1-3 - pages 1 to 3 (inclusive)
    - 1-3,7,9-10 - a comma separated combination

    Raises:
        InvalidRequestException: If a part cannot be parsed or its bounds are reversed
    """
    ranges = []

    for part in value.replace(' ', '').split(','):
        if not part:
            continue

        match = RANGE_PATTERN.match(part)
        if not match:
            raise InvalidRequestException(f'Invalid page range [{part}]')

        start = int(match.group(1))
        end = int(match.group(2)) if match.group(2) else start

        try:
            ranges.append(PageRange(start=start, end=end))
        except ValidationError as ex:
            raise InvalidRequestException(
                f'Invalid page range [{part}]',
                details={'errors': [error['msg'] for error in ex.errors()]},
            ) from ex

    if not ranges:
        raise InvalidRequestException('At least one page range is required')

    return ranges


def parse_page_list(value: str) -> List[int]:
    """Parse a page list such as ``1,4,9`` or ``2-4,8`` into page numbers."""
    pages = []
    for page_range in parse_page_ranges(value):
        pages.extend(page_range.pages())
    return normalize_pages(pages)


def describe_range(page_range: PageRange) -> str:
    """File name suffix for a range, e.g. `page_4` or `pages_1-3`."""
    if page_range.start == page_range.end:
        return f'page_{page_range.start}'
    return f'pages_{page_range.start}-{page_range.end}'
