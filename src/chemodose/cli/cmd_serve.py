"""Serve command - run the FastAPI backend with uvicorn."""

import typer

from chemodose.cli._app import app
from chemodose.cli._common import init_command
from chemodose.cli._console import console


@app.command("serve", help="Start the HTTP API server.")
def serve_cmd(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Port"),
    reload: bool = typer.Option(False, "--reload", help="Auto-reload on code changes"),
):
    init_command(ctx)
    import uvicorn

    from chemodose.startup import get_data_dir

    console.print(f"Serving on http://{host}:{port} (data: {get_data_dir()})")
    uvicorn.run(
        "chemodose.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="debug" if ctx.obj["verbose"] else "info",
    )
