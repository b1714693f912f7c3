"""PDF page extraction services."""

from snackpdf_core.services.page_ranges import (
    merge_ranges,
    normalize_pages,
    is_contiguous,
    parse_page_ranges,
    parse_page_list,
    describe_range,
)
from snackpdf_core.services.ghostscript import (
    Ghostscript,
    run_command,
    detect_ghostscript_command,
)
from snackpdf_core.services.page_count import (
    count_pages,
    discover_page_count,
    estimate_page_count,
)
from snackpdf_core.services.archive import write_archive
from snackpdf_core.services.cleanup import remove_paths, cleanup_later
from snackpdf_core.services.extraction_service import (
    ExtractionService,
    plan_selections,
    verify_output,
)

__all__ = [
    'merge_ranges',
    'normalize_pages',
    'is_contiguous',
    'parse_page_ranges',
    'parse_page_list',
    'describe_range',
    'Ghostscript',
    'run_command',
    'detect_ghostscript_command',
    'count_pages',
    'discover_page_count',
    'estimate_page_count',
    'write_archive',
    'remove_paths',
    'cleanup_later',
    'ExtractionService',
    'plan_selections',
    'verify_output',
]
