"""Page extraction orchestration."""

import asyncio
import secrets
import time
from logging import Logger
from pathlib import Path
from typing import Awaitable, List, Union

from snackpdf_core.exceptions import (
    ExtractionException,
    GhostscriptNotFoundException,
    InvalidRequestException,
    ProcessTimeoutException,
    SourceNotFoundException,
)
from snackpdf_core.logging import create_null_logger
from snackpdf_core.models import (
    CommandResult,
    ExtractedArtifact,
    ExtractionRequest,
    ExtractionResult,
    PageRange,
    PageSelection,
    SnackPdfConfig,
    StepOutcome,
)
from snackpdf_core.services.archive import write_archive
from snackpdf_core.services.cleanup import remove_paths
from snackpdf_core.services.ghostscript import Ghostscript
from snackpdf_core.services.page_count import count_pages
from snackpdf_core.services.page_ranges import (
    describe_range,
    is_contiguous,
    merge_ranges,
    normalize_pages,
)

Selection = Union[PageRange, PageSelection]


def verify_output(result: CommandResult, destination: Path) -> StepOutcome:
    """
    Check the post-condition of a Ghostscript call.

    A step succeeded when the process exited with status 0 and the
    expected file exists and is not empty.
    """
    if not result.ok:
        return StepOutcome(
            success=False,
            path=destination,
            reason=f'Ghostscript exited with status {result.returncode}',
        )

    if not destination.is_file() or destination.stat().st_size == 0:
        return StepOutcome(
            success=False,
            path=destination,
            reason=f'Output file was not created: {destination.name}',
        )

    return StepOutcome(success=True, path=destination)


def plan_selections(request: ExtractionRequest) -> List[Selection]:
    """
    Turn the request into the list of selections to extract.

    Ranges are merged; an explicit page list becomes one selection, a
    `PageRange` when it has no gaps.

    Raises:
        InvalidRequestException: If the request holds no usable selection
    """
    if request.ranges is not None and request.pages is not None:
        raise InvalidRequestException('Specify either ranges or pages, not both')

    if request.ranges is not None:
        return merge_ranges(request.ranges)

    if request.pages is not None:
        pages = normalize_pages(request.pages)
        if is_contiguous(pages):
            return [PageRange(start=pages[0], end=pages[-1])]
        return [PageSelection(pages=pages)]

    raise InvalidRequestException('No page ranges or pages specified')


def last_requested_page(selections: List[Selection]) -> int:
    return max(
        selection.end if isinstance(selection, PageRange) else selection.pages[-1]
        for selection in selections
    )


def output_stem(filename: str) -> str:
    stem = Path(Path(filename).name).stem
    return stem or 'document'


class ExtractionService:
    """
    Extract page selections from a PDF and package the result.

    One selection yields a PDF; more than one yields a ZIP holding one PDF
    per selection in processing order. All files are created inside a
    workspace directory unique to the request, which the caller removes once
    the result has been delivered.

    Example:
        service = ExtractionService(Ghostscript('gs'), Path('/tmp/outputs'))
        result = await service.extract(
            ExtractionRequest(
                source_path=Path('/tmp/uploads/report.pdf'),
                original_filename='report.pdf',
                ranges=[PageRange(start=1, end=3), PageRange(start=8, end=9)],
            )
        )
    """

    def __init__(
        self,
        ghostscript: Ghostscript,
        output_dir: Path,
        parallel: bool = False,
        logger: Logger = None,
    ):
        self._ghostscript = ghostscript
        self.output_dir = Path(output_dir)
        self.parallel = parallel

        if logger is None:
            logger = create_null_logger(name='snackpdf.extraction')

        self._logger = logger

    @classmethod
    def from_config(
        cls, config: SnackPdfConfig, ghostscript: Ghostscript, logger: Logger = None
    ) -> 'ExtractionService':
        return cls(
            ghostscript=ghostscript,
            output_dir=config.output_dir,
            parallel=config.parallel_extraction,
            logger=logger,
        )

    async def extract(self, request: ExtractionRequest) -> ExtractionResult:
        """
        Run the extraction described by `request`.

        Raises:
            InvalidRequestException: If the request holds no usable selection or
                asks for a page past the end of the document
            SourceNotFoundException: If the uploaded file does not exist
            ExtractionException: If any Ghostscript step fails
        """
        selections = plan_selections(request)

        if not request.source_path.is_file():
            raise SourceNotFoundException(request.source_path)

        await self._check_page_bounds(request.source_path, selections)

        workspace = self._create_workspace()
        stem = output_stem(request.original_filename)

        self._logger.info(
            f'Extracting {", ".join(str(s) for s in selections)} from {request.source_path}'
        )

        try:
            artifacts = await self._extract_all(
                request.source_path, selections, workspace, stem
            )
            artifact = await self._bundle(artifacts, workspace, stem)
        except BaseException:
            remove_paths([workspace], logger=self._logger)
            raise

        self._logger.info(f'Extraction successful. Output file: {artifact.path}')

        return ExtractionResult(artifact=artifact, members=artifacts, workspace=workspace)

    async def _check_page_bounds(self, source: Path, selections: List[Selection]) -> None:
        """Reject selections past the last page, Ghostscript silently clamps them."""
        total = await count_pages(source, self._ghostscript, logger=self._logger)
        if total is None:
            self._logger.warning(
                f'Page count of {source} unknown, page bounds not checked'
            )
            return

        last = last_requested_page(selections)
        if last > total:
            raise InvalidRequestException(
                f'Page {last} is out of range, the document has {total} pages',
                details={'pages': total},
            )

    def _create_workspace(self) -> Path:
        workspace = self.output_dir / f'{int(time.time() * 1000)}-{secrets.token_hex(4)}'
        workspace.mkdir(parents=True)
        return workspace

    async def _extract_all(
        self, source: Path, selections: List[Selection], workspace: Path, stem: str
    ) -> List[ExtractedArtifact]:
        if not self.parallel:
            return [
                await self._extract_selection(source, selection, index, workspace, stem)
                for index, selection in enumerate(selections)
            ]

        results = await asyncio.gather(
            *(
                self._extract_selection(source, selection, index, workspace, stem)
                for index, selection in enumerate(selections)
            ),
            return_exceptions=True,
        )
        for outcome in results:
            if isinstance(outcome, BaseException):
                raise outcome
        return list(results)

    async def _extract_selection(
        self,
        source: Path,
        selection: Selection,
        index: int,
        workspace: Path,
        stem: str,
    ) -> ExtractedArtifact:
        if isinstance(selection, PageRange):
            display_name = f'{stem}_{describe_range(selection)}.pdf'
            destination = workspace / display_name
            await self._run_step(
                self._ghostscript.extract_range(
                    source, selection.start, selection.end, destination
                ),
                destination,
                str(selection),
            )
        else:
            display_name = f'{stem}_extracted.pdf'
            destination = workspace / display_name
            await self._extract_pages(
                source, selection, workspace / f'pages-{index}', destination
            )

        return ExtractedArtifact(
            path=destination, display_name=display_name, selection=str(selection)
        )

    async def _extract_pages(
        self, source: Path, selection: PageSelection, scratch: Path, destination: Path
    ) -> None:
        """Extract every page on its own, then concatenate them in list order."""
        scratch.mkdir()

        try:
            page_files = []
            for position, page in enumerate(selection.pages):
                page_file = scratch / f'page-{position:04d}.pdf'
                await self._run_step(
                    self._ghostscript.extract_range(source, page, page, page_file),
                    page_file,
                    str(page),
                )
                page_files.append(page_file)

            await self._run_step(
                self._ghostscript.concatenate(page_files, destination),
                destination,
                str(selection),
            )
        finally:
            remove_paths([scratch], logger=self._logger)

    async def _run_step(
        self, step: Awaitable[CommandResult], destination: Path, selection: str
    ) -> None:
        try:
            result = await step
        except (GhostscriptNotFoundException, ProcessTimeoutException, OSError) as ex:
            raise ExtractionException(str(ex), selection=selection) from ex

        outcome = verify_output(result, destination)
        if not outcome.success:
            self._logger.error(f'{outcome.reason} (pages {selection})')
            raise ExtractionException(
                outcome.reason,
                selection=selection,
                details={'stderr': result.stderr.strip()} if result.stderr.strip() else None,
            )

    async def _bundle(
        self, artifacts: List[ExtractedArtifact], workspace: Path, stem: str
    ) -> ExtractedArtifact:
        if len(artifacts) == 1:
            return artifacts[0]

        archive = await asyncio.to_thread(
            write_archive, artifacts, workspace / f'{stem}_extracted.zip'
        )
        await asyncio.to_thread(
            remove_paths, [artifact.path for artifact in artifacts], self._logger
        )

        return ExtractedArtifact(
            path=archive,
            display_name=archive.name,
            media_type='application/zip',
            selection=', '.join(artifact.selection for artifact in artifacts),
        )
