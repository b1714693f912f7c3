"""Best-effort deletion of temporary files."""

import asyncio
import shutil
from logging import Logger
from pathlib import Path
from typing import Iterable, List

from snackpdf_core.logging import create_null_logger


def remove_paths(paths: Iterable[Path], logger: Logger = None) -> List[Path]:
    """
    Delete files and directories if they exist.

    Failures are logged and never raised.

    Returns:
        The paths that were removed
    """
    if logger is None:
        logger = create_null_logger(name='snackpdf.cleanup')

    removed = []

    for path in paths:
        path = Path(path)
        try:
            if path.is_dir():
                shutil.rmtree(path)
            elif path.exists():
                path.unlink()
            else:
                continue
        except OSError as ex:
            logger.error(f'Cleanup error for [{path}]: {ex}')
            continue

        logger.debug(f'Removed {path}')
        removed.append(path)

    return removed


async def cleanup_later(
    paths: Iterable[Path], delay: float, logger: Logger = None
) -> List[Path]:
    """Wait `delay` seconds then remove `paths`; slow clients get a grace period."""
    paths = list(paths)
    if delay > 0:
        await asyncio.sleep(delay)
    return await asyncio.to_thread(remove_paths, paths, logger)
