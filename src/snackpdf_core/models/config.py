import logging
import tempfile
from pathlib import Path
from typing import List, Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base class for configuration values."""

    pass


class SnackPdfConfig(BaseConfig):
    """Configuration values for SnackPDF. All env variables must start with snackpdf_"""

    upload_dir: Path = Path(tempfile.gettempdir()) / 'snackpdf-uploads'
    """Where uploaded PDFs are stored until extracted or cleaned up."""

    output_dir: Path = Path(tempfile.gettempdir()) / 'snackpdf-outputs'
    """Where per-request workspaces holding extracted files are created."""

    ghostscript_command: Optional[str] = None
    """The Ghostscript executable. When not set the first working entry of `ghostscript_candidates` is used."""

    ghostscript_candidates: List[str] = ['gs', 'gswin64c', 'gswin32c']
    """Executables probed at start-up, in order."""

    process_timeout: Optional[float] = Field(default=300.0, gt=0)
    """Seconds an external process may run before it is killed. Set to None to wait forever. Default 300."""

    cleanup_delay: float = Field(default=5.0, ge=0)
    """Seconds to wait after a download completes before deleting its files. Default 5."""

    max_upload_size: int = 100 * 1024 * 1024
    """Largest accepted upload, in bytes. Default 100 MB."""

    bytes_per_page_estimate: int = Field(default=51200, gt=0)
    """Bytes per page assumed when Ghostscript cannot count pages. Default 50 KB."""

    parallel_extraction: bool = False
    """Extract the ranges of one request concurrently. Default False."""

    logging_level: Optional[int] = logging.INFO
    """The logging level. Default "logging.INFO"."""

    logging_file: Optional[str] = None
    """The log file path. Specify to save logs to file. Default "None"."""

    theme: Optional[Literal['light', 'dark']] = None
    """The console theme to use. Default None (auto-detect)."""

    model_config = SettingsConfigDict(
        env_prefix='snackpdf_',
        env_file='.env',
        extra='ignore',
    )
