"""ZIP bundling of extracted files."""

import zipfile
from pathlib import Path
from typing import Iterable

from snackpdf_core.models import ExtractedArtifact


def _unique_name(name: str, used: set[str]) -> str:
    if name not in used:
        return name

    path = Path(name)
    counter = 2
    while f'{path.stem}_{counter}{path.suffix}' in used:
        counter += 1
    return f'{path.stem}_{counter}{path.suffix}'


def write_archive(artifacts: Iterable[ExtractedArtifact], destination: Path) -> Path:
    """
    Compress artifacts into a single ZIP file.

    Each file is stored under its display name, in the given order. A
    repeated display name gets a numeric suffix instead of overwriting the
    earlier member.

    Args:
        artifacts: The files to bundle
        destination: Path of the ZIP file to create

    Returns:
        The destination path
    """
    destination.parent.mkdir(parents=True, exist_ok=True)
    used: set[str] = set()

    with zipfile.ZipFile(destination, 'w', compression=zipfile.ZIP_DEFLATED) as archive:
        for artifact in artifacts:
            arcname = _unique_name(artifact.display_name, used)
            used.add(arcname)
            archive.write(artifact.path, arcname=arcname)

    return destination
