from snackpdf_core.exceptions.invalid_request_exception import (
    InvalidRequestException as InvalidRequestException,
)
from snackpdf_core.exceptions.source_not_found_exception import (
    SourceNotFoundException as SourceNotFoundException,
)
from snackpdf_core.exceptions.extraction_exception import (
    ExtractionException as ExtractionException,
)
from snackpdf_core.exceptions.ghostscript_not_found_exception import (
    GhostscriptNotFoundException as GhostscriptNotFoundException,
)
from snackpdf_core.exceptions.process_timeout_exception import (
    ProcessTimeoutException as ProcessTimeoutException,
)
