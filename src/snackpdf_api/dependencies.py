from typing import Optional

from fastapi import HTTPException, Request

from snackpdf_core.models import SnackPdfConfig
from snackpdf_core.services import ExtractionService, Ghostscript


def get_config(request: Request) -> SnackPdfConfig:
    return request.app.state.config


def get_ghostscript(request: Request) -> Optional[Ghostscript]:
    return request.app.state.ghostscript


def get_extraction_service(request: Request) -> ExtractionService:
    service = request.app.state.extraction_service
    if service is None:
        raise HTTPException(
            status_code=503, detail='Ghostscript is not available on the server.'
        )
    return service
