import logging

import pytest

from snackpdf_core.logging import (
    configure_logging,
    create_isolated_logger,
    create_null_logger,
)
from snackpdf_core.models import SnackPdfConfig


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def test_null_logger_has_no_output_handlers():
    logger = create_null_logger('snackpdf.test.null')

    assert logger.propagate is False
    assert [type(h) for h in logger.handlers] == [logging.NullHandler]


def test_isolated_logger_writes_to_file(tmp_path):
    log_file = tmp_path / 'isolated.log'
    logger = create_isolated_logger(
        'snackpdf.test.isolated',
        level=logging.INFO,
        add_console_handler=False,
        file_path=str(log_file),
    )

    logger.info('Extracted pages 1-3')
    for handler in logger.handlers:
        handler.flush()

    assert 'snackpdf.test.isolated - INFO - Extracted pages 1-3' in log_file.read_text()


def test_isolated_logger_does_not_duplicate_handlers():
    create_isolated_logger('snackpdf.test.repeat')
    logger = create_isolated_logger('snackpdf.test.repeat')

    assert len(logger.handlers) == 1


def test_configure_logging_shares_handlers_with_uvicorn(tmp_path):
    config = SnackPdfConfig(
        logging_level=logging.DEBUG, logging_file=str(tmp_path / 'service.log')
    )

    logger = configure_logging(config)

    assert logger.name == 'snackpdf'
    assert logger.level == logging.DEBUG
    uvicorn_logger = logging.getLogger('uvicorn.access')
    assert uvicorn_logger.propagate is False
    assert uvicorn_logger.handlers == logging.getLogger().handlers
    assert any(isinstance(h, logging.FileHandler) for h in uvicorn_logger.handlers)

    for handler in uvicorn_logger.handlers:
        handler.close()
