import pytest

from fakes import FakeGhostscriptRunner, create_pdf
from snackpdf_core.models import SnackPdfConfig
from snackpdf_core.services import Ghostscript


@pytest.fixture
def sample_pdf(tmp_path):
    """A 10 page PDF whose pages read `Page 1` to `Page 10`."""
    uploads = tmp_path / 'uploads'
    uploads.mkdir(exist_ok=True)
    return create_pdf(uploads / 'report.pdf', 10)


@pytest.fixture
def fake_runner():
    return FakeGhostscriptRunner()


@pytest.fixture
def ghostscript(fake_runner):
    return Ghostscript('gs', runner=fake_runner)


@pytest.fixture
def config(tmp_path):
    return SnackPdfConfig(
        upload_dir=tmp_path / 'uploads',
        output_dir=tmp_path / 'outputs',
        cleanup_delay=0,
    )
