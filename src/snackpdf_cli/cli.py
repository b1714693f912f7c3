"""Command line interface for SnackPDF."""

from importlib.metadata import version as metadata_version
from typing import Annotated, Optional

import typer

from snackpdf_cli.console.console import Console
from snackpdf_cli.commands.pdf import app as pdf_command
from snackpdf_cli.commands.serve import app as serve_command


app = typer.Typer(
    name='snackpdf',
    help='Extract pages from PDF files with Ghostscript.',
    no_args_is_help=True,
    add_completion=False,
    pretty_exceptions_enable=False,
)

console = Console()


def version_callback(value: bool):
    if value:
        try:
            snackpdf_version = metadata_version('snackpdf')
        except Exception:
            snackpdf_version = 'Development version'

        console.info(f'SnackPDF version: {snackpdf_version}')
        raise typer.Exit()


@app.callback()
def callback(
    version: Annotated[
        Optional[bool],
        typer.Option(
            '--version',
            callback=version_callback,
            is_eager=True,
            help='Show SnackPDF version',
        ),
    ] = None,
):
    """Define the common command options"""


app.add_typer(pdf_command)
app.add_typer(serve_command)


def main():
    """Entry point for the CLI."""
    app()
