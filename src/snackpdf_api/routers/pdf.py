import logging
import secrets
import time
from pathlib import Path
from typing import Optional

import magic
from fastapi import APIRouter, BackgroundTasks, Depends, File, HTTPException, UploadFile
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import FileResponse

from snackpdf_api.dependencies import (
    get_config,
    get_extraction_service,
    get_ghostscript,
)
from snackpdf_api.models import ExtractPagesRequest, PdfInfoResponse
from snackpdf_core.exceptions import (
    ExtractionException,
    InvalidRequestException,
    SourceNotFoundException,
)
from snackpdf_core.models import ExtractionRequest, SnackPdfConfig
from snackpdf_core.services import (
    ExtractionService,
    Ghostscript,
    cleanup_later,
    discover_page_count,
    remove_paths,
)

router = APIRouter(prefix='/api')
logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024


async def save_upload(file: UploadFile, destination: Path, max_bytes: int) -> int:
    """Stream an upload to disk, enforcing the size limit while writing."""
    total = 0
    out = await run_in_threadpool(destination.open, 'wb')
    try:
        while chunk := await file.read(UPLOAD_CHUNK_SIZE):
            total += len(chunk)
            if total > max_bytes:
                break
            await run_in_threadpool(out.write, chunk)
    finally:
        await run_in_threadpool(out.close)
        await file.close()

    if total > max_bytes:
        await run_in_threadpool(remove_paths, [destination], logger)
        raise HTTPException(
            status_code=413,
            detail=f'File too large. Max allowed is {max_bytes // (1024 * 1024)}MB.',
        )

    return total


def resolve_managed_path(temp_path: str, *roots: Path) -> Path:
    """Resolve a client supplied path, accepting only files inside `roots`."""
    path = Path(temp_path).resolve()
    for root in roots:
        root = root.resolve()
        if path != root and path.is_relative_to(root):
            return path

    logger.warning(f'Rejected path outside managed directories: {temp_path}')
    raise HTTPException(status_code=400, detail='Invalid file reference.')


@router.post('/pdf/info', response_model=PdfInfoResponse)
async def pdf_info(
    pdf: Optional[UploadFile] = File(None),
    config: SnackPdfConfig = Depends(get_config),
    ghostscript: Optional[Ghostscript] = Depends(get_ghostscript),
) -> PdfInfoResponse:
    if pdf is None or not pdf.filename:
        raise HTTPException(status_code=400, detail='No PDF file provided')

    if pdf.content_type != 'application/pdf':
        logger.warning(f'Unsupported content type: {pdf.content_type}')
        raise HTTPException(status_code=400, detail='Only PDF files are allowed')

    config.upload_dir.mkdir(parents=True, exist_ok=True)
    destination = (
        config.upload_dir
        / f'pdf-{int(time.time() * 1000)}-{secrets.token_hex(4)}.pdf'
    )

    size = await save_upload(pdf, destination, config.max_upload_size)

    # Check the stored file, the declared content type is client controlled
    mime = await run_in_threadpool(magic.from_file, str(destination), mime=True)
    if mime != 'application/pdf':
        logger.warning(f'Unsupported mime type: {mime}')
        await run_in_threadpool(remove_paths, [destination], logger)
        raise HTTPException(status_code=400, detail='Only PDF files are allowed')

    logger.info(f'Processing PDF: {destination} Size: {size} bytes')

    pages = await discover_page_count(
        destination,
        ghostscript,
        bytes_per_page=config.bytes_per_page_estimate,
        logger=logger,
    )
    logger.info(f'Final page count: {pages}')

    return PdfInfoResponse(
        filename=pdf.filename, size=size, pages=pages, temp_path=str(destination)
    )


@router.post('/pdf/extract')
async def extract_pages(
    payload: ExtractPagesRequest,
    background_tasks: BackgroundTasks,
    config: SnackPdfConfig = Depends(get_config),
    service: ExtractionService = Depends(get_extraction_service),
) -> FileResponse:
    source = resolve_managed_path(payload.temp_path, config.upload_dir)

    request = ExtractionRequest(
        source_path=source,
        original_filename=payload.filename,
        ranges=payload.ranges,
        pages=payload.pages,
    )

    try:
        result = await service.extract(request)
    except InvalidRequestException as ex:
        logger.warning(f'Invalid extraction request: {ex}')
        raise HTTPException(status_code=400, detail=ex.message)
    except SourceNotFoundException as ex:
        logger.error(f'Temp file not found: {ex.path}')
        raise HTTPException(status_code=400, detail=ex.message)
    except ExtractionException as ex:
        logger.exception('Ghostscript extraction error.', exc_info=True)
        raise HTTPException(
            status_code=500, detail=f'Failed to extract pages: {ex.message}'
        )

    background_tasks.add_task(
        cleanup_later,
        [source, *result.cleanup_paths()],
        config.cleanup_delay,
        logger,
    )

    return FileResponse(
        result.artifact.path,
        media_type=result.artifact.media_type,
        filename=result.artifact.display_name,
        background=background_tasks,
    )


@router.delete('/cleanup/{temp_path:path}')
def cleanup(temp_path: str, config: SnackPdfConfig = Depends(get_config)) -> dict:
    path = resolve_managed_path(temp_path, config.upload_dir, config.output_dir)
    remove_paths([path], logger=logger)
    return {'success': True}
