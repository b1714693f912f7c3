"""Run the SnackPDF web service."""

from typing import Annotated

import typer
import uvicorn

from snackpdf_cli.console.console import Console

app = typer.Typer()

console = Console()


@app.command(name='serve', help='Start the SnackPDF web service')
def serve(
    host: Annotated[
        str, typer.Option('--host', help='Interface to bind to.')
    ] = '127.0.0.1',
    port: Annotated[
        int, typer.Option('--port', envvar='PORT', help='Port to listen on.')
    ] = 3000,
    reload: Annotated[
        bool, typer.Option('--reload', help='Restart on code changes.')
    ] = False,
):
    console.action(f'SnackPDF server running on http://{host}:{port}')

    uvicorn.run(
        'snackpdf_api.main:app',
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )
