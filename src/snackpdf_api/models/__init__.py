from snackpdf_api.models.extract_pages_request import (
    ExtractPagesRequest as ExtractPagesRequest,
)
from snackpdf_api.models.pdf_info_response import PdfInfoResponse as PdfInfoResponse
