"""Page count discovery that never fails."""

import math
from logging import Logger
from pathlib import Path
from typing import Optional

from snackpdf_core.logging import create_null_logger
from snackpdf_core.services.ghostscript import Ghostscript

DEFAULT_BYTES_PER_PAGE = 51200


def estimate_page_count(path: Path, bytes_per_page: int = DEFAULT_BYTES_PER_PAGE) -> int:
    """Rough page count from the file size, at least 1."""
    try:
        size = Path(path).stat().st_size
    except OSError:
        return 1
    return max(1, math.ceil(size / bytes_per_page))


async def count_pages(
    path: Path, ghostscript: Ghostscript, logger: Logger = None
) -> Optional[int]:
    """
    Page count reported by Ghostscript, None when it cannot tell.

    Tries the interpreter page count query first, then counts the pages
    rendered by the bbox device. Errors of any tier are logged and the next
    tier is tried.
    """
    if logger is None:
        logger = create_null_logger(name='snackpdf.page_count')

    tiers = (
        ('pdfpagecount', ghostscript.query_page_count),
        ('bbox device', ghostscript.count_bounding_boxes),
    )
    for label, method in tiers:
        try:
            pages = await method(path)
        except Exception as ex:
            logger.warning(f'Page count via {label} failed: {ex}')
            continue

        if pages is not None and pages > 0:
            logger.debug(f'Page count via {label}: {pages}')
            return pages

        logger.info(f'Page count via {label} gave no usable answer')

    return None


async def discover_page_count(
    path: Path,
    ghostscript: Optional[Ghostscript],
    bytes_per_page: int = DEFAULT_BYTES_PER_PAGE,
    logger: Logger = None,
) -> int:
    """
    Best-effort page count of a PDF.

    Uses `count_pages` and falls back to an estimate from the file size.

    Args:
        path: The PDF to inspect
        ghostscript: The Ghostscript wrapper, None when Ghostscript is unavailable
        bytes_per_page: Size of a page assumed by the estimate

    Returns:
        A page count, always >= 1
    """
    if logger is None:
        logger = create_null_logger(name='snackpdf.page_count')

    if ghostscript is not None:
        pages = await count_pages(path, ghostscript, logger=logger)
        if pages is not None:
            return pages

    pages = estimate_page_count(path, bytes_per_page)
    logger.info(f'Estimated page count based on file size: {pages}')
    return pages
