"""Root Typer application with global options."""

from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    no_args_is_help=True,
    rich_markup_mode="rich",
    pretty_exceptions_enable=False,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug-level logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Warnings and errors only"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON to stdout"),
    data_dir: Optional[Path] = typer.Option(
        None,
        "--data-dir",
        help="Directory holding drugs.json and chemodose.yaml (default: $CHEMODOSE_DATA_DIR or ./output)",
    ),
):
    """Formula-driven chemotherapy dosage calculator."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["json"] = json_output
    ctx.obj["data_dir"] = data_dir
