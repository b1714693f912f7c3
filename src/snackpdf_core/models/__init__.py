# Use an explicit re-export https://github.com/astral-sh/ruff/issues/5697#issuecomment-1631647211

from snackpdf_core.models.models import (
    PageRange as PageRange,
    PageSelection as PageSelection,
    ExtractionRequest as ExtractionRequest,
    ExtractedArtifact as ExtractedArtifact,
    ExtractionResult as ExtractionResult,
    CommandResult as CommandResult,
    StepOutcome as StepOutcome,
)

from snackpdf_core.models.config import (
    BaseConfig as BaseConfig,
    SnackPdfConfig as SnackPdfConfig,
)
