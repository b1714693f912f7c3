from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from snackpdf_api.routers import pdf
from snackpdf_core.logging import configure_logging
from snackpdf_core.models import SnackPdfConfig
from snackpdf_core.services import ExtractionService, Ghostscript

# Room for the multipart boundaries and part headers around the file
MULTIPART_OVERHEAD = 64 * 1024

SECURITY_HEADERS = {
    'Content-Security-Policy': "default-src 'self'; object-src 'none'; frame-src 'none'",
    'X-Content-Type-Options': 'nosniff',
    'X-Frame-Options': 'SAMEORIGIN',
    'Referrer-Policy': 'no-referrer',
    'Cross-Origin-Opener-Policy': 'same-origin',
    'X-DNS-Prefetch-Control': 'off',
}


def create_app(
    config: SnackPdfConfig = None, ghostscript: Optional[Ghostscript] = None
) -> FastAPI:
    """
    Build the SnackPDF web application.

    Args:
        config: The configuration, read from the environment when omitted
        ghostscript: A ready Ghostscript wrapper. When omitted the executable
            is detected once during start-up.
    """
    if config is None:
        config = SnackPdfConfig()

    logger = configure_logging(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        for directory in (config.upload_dir, config.output_dir):
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f'Using directory: {directory}')

        resolved = ghostscript or Ghostscript.from_config(config, logger=logger)

        app.state.config = config
        app.state.ghostscript = resolved
        app.state.extraction_service = (
            ExtractionService.from_config(config, resolved, logger=logger)
            if resolved is not None
            else None
        )

        logger.info('SnackPDF initialized.')
        yield

    app = FastAPI(title='SnackPDF', lifespan=lifespan)
    app.add_middleware(GZipMiddleware)
    app.add_middleware(CORSMiddleware, allow_origins=['*'], allow_methods=['*'])
    app.include_router(pdf.router)

    @app.middleware('http')
    async def limit_request_size(request: Request, call_next):
        content_length = request.headers.get('content-length')
        if (
            content_length is not None
            and content_length.isdigit()
            and int(content_length) > config.max_upload_size + MULTIPART_OVERHEAD
        ):
            logger.warning(f'Rejected request body of {content_length} bytes')
            return JSONResponse(
                status_code=413,
                content={
                    'detail': f'File too large. Max allowed is '
                    f'{config.max_upload_size // (1024 * 1024)}MB.'
                },
            )
        return await call_next(request)

    @app.middleware('http')
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for header, value in SECURITY_HEADERS.items():
            response.headers.setdefault(header, value)
        return response

    @app.get('/api/health')
    async def health(request: Request):
        ghostscript = request.app.state.ghostscript
        return {
            'status': 'healthy',
            'timestamp': datetime.now(timezone.utc).isoformat(),
            'ghostscript': ghostscript.command if ghostscript else None,
        }

    return app


app = create_app()
