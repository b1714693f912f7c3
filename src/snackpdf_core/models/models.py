from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class PageRange(BaseModel):
    """An inclusive, 1-indexed interval of pages.

    Serialized as ``{"from": 1, "to": 3}``.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    start: int = Field(alias='from', ge=1)
    end: int = Field(alias='to', ge=1)

    @model_validator(mode='after')
    def _check_bounds(self):
        if self.start > self.end:
            raise ValueError(
                f'Invalid page range: start page {self.start} > end page {self.end}'
            )
        return self

    def pages(self) -> List[int]:
        return list(range(self.start, self.end + 1))

    def __str__(self) -> str:
        if self.start == self.end:
            return str(self.start)
        return f'{self.start}-{self.end}'


class PageSelection(BaseModel):
    """An ascending list of page numbers that may contain gaps."""

    model_config = ConfigDict(frozen=True)

    pages: List[int]

    def __str__(self) -> str:
        return ','.join(str(page) for page in self.pages)


class ExtractionRequest(BaseModel):
    """What to extract from a previously uploaded PDF.

    Exactly one of ``ranges`` or ``pages`` must be given. Ranges are merged
    before extraction and produce one artifact each; an explicit page list
    always produces a single artifact.
    """

    source_path: Path
    original_filename: str
    ranges: Optional[List[PageRange]] = None
    pages: Optional[List[int]] = None


class ExtractedArtifact(BaseModel):
    """A file produced while serving a request, with the name shown to the user."""

    path: Path
    display_name: str
    media_type: str = 'application/pdf'
    selection: Optional[str] = None
    """Human readable pages covered by the artifact, e.g. `1-3` or `2,5,9`."""


class ExtractionResult(BaseModel):
    artifact: ExtractedArtifact
    """The artifact to deliver: a PDF for one selection, a ZIP otherwise."""

    members: List[ExtractedArtifact] = []
    """The per-range artifacts, in processing order. Only the display name survives bundling."""

    workspace: Path
    """The request directory holding every artifact created for this request."""

    @property
    def is_archive(self) -> bool:
        return self.artifact.media_type == 'application/zip'

    def cleanup_paths(self) -> List[Path]:
        return [self.workspace]


class CommandResult(BaseModel):
    """Outcome of an external process invocation."""

    argv: List[str]
    returncode: int
    stdout: str = ''
    stderr: str = ''

    @property
    def ok(self) -> bool:
        return self.returncode == 0


class StepOutcome(BaseModel):
    """Post-condition of a single extraction step."""

    success: bool
    path: Path
    reason: Optional[str] = None
