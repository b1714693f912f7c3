"""Ghostscript invocations.

Every call goes through ``run_command`` which takes an argument list and
never a shell string, so file names cannot inject shell syntax.
"""

import asyncio
import subprocess
from logging import Logger
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Sequence

from snackpdf_core.exceptions import (
    GhostscriptNotFoundException,
    ProcessTimeoutException,
)
from snackpdf_core.logging import create_null_logger
from snackpdf_core.models import CommandResult, SnackPdfConfig

Runner = Callable[[List[str], Optional[float]], Awaitable[CommandResult]]

PDFWRITE_OPTIONS = ['-sDEVICE=pdfwrite', '-dNOPAUSE', '-dBATCH', '-dSAFER', '-q']


async def run_command(
    argv: List[str], timeout: Optional[float] = None
) -> CommandResult:
    """
    Run an external process and wait for it to exit.

    Args:
        argv: The executable followed by its arguments
        timeout: Seconds to wait before killing the process, None to wait forever

    Returns:
        The exit status and decoded output of the process

    Raises:
        GhostscriptNotFoundException: If the executable does not exist
        ProcessTimeoutException: If the process was killed after `timeout` seconds
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as ex:
        raise GhostscriptNotFoundException([argv[0]]) from ex

    try:
        stdout, stderr = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except asyncio.TimeoutError as ex:
        process.kill()
        await process.wait()
        raise ProcessTimeoutException(argv, timeout) from ex

    return CommandResult(
        argv=argv,
        returncode=process.returncode,
        stdout=stdout.decode(errors='replace'),
        stderr=stderr.decode(errors='replace'),
    )


def detect_ghostscript_command(
    candidates: Sequence[str], logger: Logger = None
) -> Optional[str]:
    """
    Find the first candidate executable that answers `--version`.

    Meant to run once at start-up; the result is passed to `Ghostscript`.

    Returns:
        The command name, or None if no candidate works
    """
    if logger is None:
        logger = create_null_logger(name='snackpdf.ghostscript')

    for candidate in candidates:
        try:
            completed = subprocess.run(
                [candidate, '--version'],
                capture_output=True,
                text=True,
                timeout=10,
            )
        except (OSError, subprocess.SubprocessError):
            continue

        if completed.returncode == 0:
            logger.info(
                f'Using Ghostscript command: {candidate} ({completed.stdout.strip()})'
            )
            return candidate

    logger.error(
        'Ghostscript not found. Please install Ghostscript from '
        'https://ghostscript.com/releases/gsdnld.html and add it to your system PATH.'
    )
    return None


def escape_postscript_string(value: str) -> str:
    """Escape a value to be embedded in a PostScript `( )` string literal."""
    return value.replace('\\', '\\\\').replace('(', '\\(').replace(')', '\\)')


def escape_output_path(path: Path) -> str:
    """Ghostscript treats `%d` in -sOutputFile as a page number template."""
    return str(path).replace('%', '%%')


class Ghostscript:
    """
    Thin asynchronous wrapper around the Ghostscript command line.

    Attributes
    ----------
    command : str
        The executable to invoke (e.g. `gs` or `gswin64c`)
    timeout : float, optional
        Seconds a single invocation may take, None to wait forever
    """

    def __init__(
        self,
        command: str,
        timeout: Optional[float] = None,
        logger: Logger = None,
        runner: Runner = run_command,
    ):
        self.command = command
        self.timeout = timeout
        self._runner = runner

        if logger is None:
            logger = create_null_logger(name='snackpdf.ghostscript')

        self._logger = logger

    @classmethod
    def from_config(
        cls, config: SnackPdfConfig, logger: Logger = None
    ) -> Optional['Ghostscript']:
        """Resolve the executable once and build an instance, None if Ghostscript is not installed."""
        command = config.ghostscript_command or detect_ghostscript_command(
            config.ghostscript_candidates, logger=logger
        )
        if command is None:
            return None
        return cls(command=command, timeout=config.process_timeout, logger=logger)

    async def run(self, arguments: List[str]) -> CommandResult:
        argv = [self.command, *arguments]
        self._logger.debug(f'Running {" ".join(argv)}')

        result = await self._runner(argv, self.timeout)

        if not result.ok:
            self._logger.warning(
                f'{self.command} exited with status {result.returncode}: {result.stderr.strip()}'
            )
        return result

    async def extract_range(
        self, source: Path, first: int, last: int, destination: Path
    ) -> CommandResult:
        """Write pages `first` to `last` (1-indexed, inclusive) of `source` to `destination`."""
        return await self.run(
            [
                *PDFWRITE_OPTIONS,
                f'-dFirstPage={first}',
                f'-dLastPage={last}',
                f'-sOutputFile={escape_output_path(destination)}',
                str(Path(source).absolute()),
            ]
        )

    async def concatenate(
        self, sources: Sequence[Path], destination: Path
    ) -> CommandResult:
        """Write all pages of `sources`, in list order, to `destination`."""
        return await self.run(
            [
                *PDFWRITE_OPTIONS,
                f'-sOutputFile={escape_output_path(destination)}',
                *(str(Path(source).absolute()) for source in sources),
            ]
        )

    async def query_page_count(self, path: Path) -> Optional[int]:
        """
        Ask the PDF interpreter for the page count.

        Returns:
            The page count, or None when the answer is missing or not positive
        """
        absolute = str(Path(path).absolute())
        result = await self.run(
            [
                '-q',
                '-dNODISPLAY',
                '-dNOPAUSE',
                '-dBATCH',
                '-dSAFER',
                f'--permit-file-read={absolute}',
                '-c',
                f'({escape_postscript_string(absolute)}) (r) file runpdfbegin pdfpagecount = quit',
            ]
        )
        if not result.ok:
            return None

        lines = [line.strip() for line in result.stdout.splitlines() if line.strip()]
        if not lines:
            return None

        try:
            pages = int(lines[-1])
        except ValueError:
            return None

        return pages if pages > 0 else None

    async def count_bounding_boxes(self, path: Path) -> Optional[int]:
        """
        Count pages by rendering the document with the `bbox` device.

        The device prints one `%%BoundingBox` line per page.
        """
        result = await self.run(
            [
                '-q',
                '-dNOPAUSE',
                '-dBATCH',
                '-dSAFER',
                '-sDEVICE=bbox',
                str(Path(path).absolute()),
            ]
        )
        if not result.ok:
            return None

        output = f'{result.stdout}\n{result.stderr}'
        pages = sum(
            1 for line in output.splitlines() if line.startswith('%%BoundingBox:')
        )
        return pages if pages > 0 else None
