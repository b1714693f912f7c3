import logging
import sys
from typing import Optional

from snackpdf_core.models.config import SnackPdfConfig

LOG_FORMAT = '[%(asctime)s] %(name)s - %(levelname)s - %(message)s'

UVICORN_LOGGERS = ('uvicorn', 'uvicorn.error', 'uvicorn.access')


def _build_handlers(
    level: int, log_format: str, file_path: Optional[str] = None
) -> list[logging.Handler]:
    formatter = logging.Formatter(log_format)

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if file_path:
        handlers.append(logging.FileHandler(file_path))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)

    return handlers


def create_isolated_logger(
    name: str,
    level: int = logging.ERROR,
    log_format: str = None,
    propagate: bool = False,
    add_console_handler: bool = True,
    file_path: str = None,
) -> logging.Logger:
    """
    Create a logger that does not interfere with other loggers.

    Args:
        name: Logger name (should be unique to your application)
        level: Logging level (default: logging.ERROR)
        log_format: Custom log format string
        propagate: Whether to propagate to parent loggers (default: False)
        add_console_handler: Add a stdout handler (default: True)
        file_path: Also write to this file when given

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = propagate
    logger.setLevel(level)

    # Clear any existing handlers to avoid duplicates
    logger.handlers.clear()

    if not add_console_handler and not file_path:
        logger.addHandler(logging.NullHandler())
        return logger

    handlers = _build_handlers(level, log_format or LOG_FORMAT, file_path)
    if not add_console_handler:
        handlers = handlers[1:]

    for handler in handlers:
        logger.addHandler(handler)

    return logger


def create_null_logger(name: str, level: int = logging.ERROR) -> logging.Logger:
    """
    Create a logger that do not store or output any log messages.

    Args:
        name: Logger name (should be unique to your application)
        level: Logging level (default: logging.ERROR)

    Returns:
        Configured logger instance
    """

    return create_isolated_logger(name=name, level=level, add_console_handler=False)


def configure_logging(config: SnackPdfConfig = None) -> logging.Logger:
    """
    Configure the root logger and the uvicorn loggers for the web service.

    Every logger writes through the same handlers: stdout and, when
    `logging_file` is configured, a log file. The uvicorn loggers stop
    propagating so each line is written once.

    Returns:
        The `snackpdf` application logger
    """
    if config is None:
        config = SnackPdfConfig()

    level = config.logging_level or logging.INFO
    handlers = _build_handlers(level, LOG_FORMAT, config.logging_file)

    logging.basicConfig(level=level, handlers=handlers, format=LOG_FORMAT, force=True)

    for uvicorn_logger_name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(uvicorn_logger_name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = False
        uvicorn_logger.setLevel(level)
        for handler in handlers:
            uvicorn_logger.addHandler(handler)

    logger = logging.getLogger('snackpdf')
    logger.setLevel(level)
    return logger
