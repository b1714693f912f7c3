"""Test suite for page count discovery."""

import asyncio
from unittest.mock import AsyncMock

from snackpdf_core.exceptions import ProcessTimeoutException
from snackpdf_core.services import Ghostscript
from snackpdf_core.services.page_count import (
    count_pages,
    discover_page_count,
    estimate_page_count,
)


def test_primary_query_is_used(sample_pdf, ghostscript, fake_runner):
    assert asyncio.run(discover_page_count(sample_pdf, ghostscript)) == 10
    assert len(fake_runner.calls) == 1


def test_alternate_mode_after_unusable_answer(sample_pdf, ghostscript, fake_runner):
    fake_runner.page_count_stdout = '0\n'

    assert asyncio.run(discover_page_count(sample_pdf, ghostscript)) == 10
    assert '-sDEVICE=bbox' in fake_runner.calls[1]


def test_alternate_mode_after_failed_query(sample_pdf, ghostscript, fake_runner):
    fake_runner.page_count_returncode = 1

    assert asyncio.run(discover_page_count(sample_pdf, ghostscript)) == 10


def test_size_estimate_when_both_modes_fail(tmp_path, ghostscript, fake_runner):
    path = tmp_path / 'big.pdf'
    path.write_bytes(b'x' * (51200 * 3 + 1))
    fake_runner.page_count_returncode = 1
    fake_runner.bbox_returncode = 1

    assert asyncio.run(discover_page_count(path, ghostscript)) == 4


def test_ghostscript_unavailable(tmp_path, ghostscript, fake_runner):
    path = tmp_path / 'small.pdf'
    path.write_bytes(b'%PDF-1.4')
    fake_runner.unavailable = True

    assert asyncio.run(discover_page_count(path, ghostscript)) == 1


def test_no_ghostscript_at_all(tmp_path):
    path = tmp_path / 'doc.pdf'
    path.write_bytes(b'x' * 120000)

    assert asyncio.run(discover_page_count(path, None, bytes_per_page=10000)) == 12


def test_timeouts_are_absorbed(tmp_path):
    path = tmp_path / 'doc.pdf'
    path.write_bytes(b'x' * 10)
    ghostscript = Ghostscript('gs')
    ghostscript.query_page_count = AsyncMock(
        side_effect=ProcessTimeoutException(['gs'], 1)
    )
    ghostscript.count_bounding_boxes = AsyncMock(side_effect=RuntimeError('boom'))

    assert asyncio.run(discover_page_count(path, ghostscript)) == 1


def test_missing_file_still_returns_one(tmp_path, ghostscript, fake_runner):
    fake_runner.unavailable = True

    assert asyncio.run(discover_page_count(tmp_path / 'gone.pdf', ghostscript)) == 1


def test_estimate_page_count():
    assert estimate_page_count('/definitely/not/here.pdf') == 1


def test_count_pages_without_estimate(tmp_path, ghostscript, fake_runner):
    path = tmp_path / 'big.pdf'
    path.write_bytes(b'x' * 512000)
    fake_runner.page_count_returncode = 1
    fake_runner.bbox_returncode = 1

    assert asyncio.run(count_pages(path, ghostscript)) is None


def test_count_pages_uses_bbox_when_query_fails(sample_pdf, ghostscript, fake_runner):
    fake_runner.page_count_returncode = 1

    assert asyncio.run(count_pages(sample_pdf, ghostscript)) == 10
