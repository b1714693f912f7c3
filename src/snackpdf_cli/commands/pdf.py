"""PDF page extraction commands."""

import asyncio
import shutil
from pathlib import Path
from typing import Annotated, List, Optional

import typer

from snackpdf_cli.console.console import Console
from snackpdf_core.exceptions import (
    ExtractionException,
    InvalidRequestException,
    SourceNotFoundException,
)
from snackpdf_core.models import ExtractionRequest, PageRange, SnackPdfConfig
from snackpdf_core.services import (
    ExtractionService,
    Ghostscript,
    discover_page_count,
    parse_page_list,
    parse_page_ranges,
    remove_paths,
)

app = typer.Typer()

console = Console()


def build_ghostscript(config: SnackPdfConfig) -> Optional[Ghostscript]:
    return Ghostscript.from_config(config)


def validate_pdf_file(input_file: str) -> Path:
    input_path = Path(input_file)
    if not input_path.is_file():
        console.error(f'Input file not found: {input_file}', panel=True)
        raise typer.Exit(1)

    if input_path.suffix.lower() != '.pdf':
        console.error(f'Input file must be a PDF: {input_file}', panel=True)
        raise typer.Exit(1)

    return input_path


def format_file_size(size_bytes: int) -> str:
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB']:
        if size < 1024.0:
            return f'{size:.1f} {unit}'
        size /= 1024.0
    return f'{size:.1f} TB'


def resolve_output_path(output: Optional[str], input_path: Path, display_name: str) -> Path:
    """
    Decide where the extracted file is written.

    Without an output the file lands next to the input. An existing directory
    receives the file under its generated name; any other value is used as the
    file path, with the extension of the produced file.
    """
    if output is None:
        return input_path.parent / display_name

    output_path = Path(output)
    if output_path.is_dir():
        return output_path / display_name

    suffix = Path(display_name).suffix
    if output_path.suffix.lower() != suffix:
        output_path = output_path.with_suffix(suffix)
    return output_path


@app.command(name='pdf:info', help='Show the size and page count of a PDF file')
def info(
    input_file: Annotated[str, typer.Argument(help='PDF file to inspect')],
):
    console.action('PDF information')

    input_path = validate_pdf_file(input_file)
    config = SnackPdfConfig()

    ghostscript = build_ghostscript(config)
    if ghostscript is None:
        console.warning('Ghostscript not found, the page count is an estimate.')

    pages = asyncio.run(
        discover_page_count(
            input_path, ghostscript, bytes_per_page=config.bytes_per_page_estimate
        )
    )

    console.print(f'[faint]⎿ [/faint] File: {input_path.name}')
    console.print(f'[faint]⎿ [/faint] Size: {format_file_size(input_path.stat().st_size)}')
    console.print(f'[faint]⎿ [/faint] Pages: {pages}')


@app.command(name='pdf:extract', help='Extract page ranges from a PDF file')
def extract(
    input_file: Annotated[str, typer.Argument(help='PDF file to extract pages from')],
    ranges: Annotated[
        Optional[List[str]],
        typer.Option(
            '--range',
            '-r',
            help='Page range to extract, e.g. 1-3 or 1-3,7. Repeat to extract several ranges.',
        ),
    ] = None,
    pages: Annotated[
        Optional[str],
        typer.Option(
            '--pages',
            '-p',
            help='Pages to extract into a single PDF, e.g. 1,4,9.',
        ),
    ] = None,
    output: Annotated[
        Optional[str],
        typer.Option(
            '--output',
            '-o',
            help='Output file or directory. If not specified, the result is saved next to the input file.',
        ),
    ] = None,
):
    """
    Extract page ranges from a PDF file.

    Overlapping and adjacent ranges are merged. A single resulting range is
    saved as a PDF; several ranges are bundled in a ZIP archive with one PDF
    per range.

    Examples:

        # Extract pages 2 to 5
        snackpdf pdf:extract report.pdf -r 2-5

        # Extract two ranges into a ZIP archive
        snackpdf pdf:extract report.pdf -r 1-3 -r 8-9 -o ./out

        # Extract scattered pages into one PDF
        snackpdf pdf:extract report.pdf --pages 1,4,9
    """
    console.action('Extract pages')

    input_path = validate_pdf_file(input_file)

    try:
        page_ranges: Optional[List[PageRange]] = None
        if ranges:
            page_ranges = [r for value in ranges for r in parse_page_ranges(value)]
        page_list = parse_page_list(pages) if pages else None
    except InvalidRequestException as ex:
        console.error(str(ex), panel=True)
        raise typer.Exit(1)

    config = SnackPdfConfig()
    ghostscript = build_ghostscript(config)
    if ghostscript is None:
        console.error(
            'Ghostscript not found. Install it from https://ghostscript.com/releases/gsdnld.html',
            panel=True,
        )
        raise typer.Exit(1)

    service = ExtractionService.from_config(config, ghostscript)
    request = ExtractionRequest(
        source_path=input_path,
        original_filename=input_path.name,
        ranges=page_ranges,
        pages=page_list,
    )

    try:
        with console.spinner('Extracting pages...'):
            result = asyncio.run(service.extract(request))
    except (InvalidRequestException, SourceNotFoundException) as ex:
        console.error(str(ex), panel=True)
        raise typer.Exit(1)
    except ExtractionException as ex:
        console.error(f'Failed to extract pages: {ex}', panel=True)
        raise typer.Exit(1)

    try:
        for member in result.members:
            console.print(
                f'[faint]⎿ [/faint] {member.display_name} (pages {member.selection})'
            )

        output_path = resolve_output_path(
            output, input_path, result.artifact.display_name
        )
        output_path.parent.mkdir(parents=True, exist_ok=True)
        shutil.move(str(result.artifact.path), str(output_path))
    finally:
        remove_paths(result.cleanup_paths())

    console.newline()
    console.success(f'Saved {output_path}')
