"""Backup commands - export the catalogue to JSON and import it back."""

from pathlib import Path
from typing import Optional

import typer

from chemodose.cli._app import app
from chemodose.cli._common import get_store, init_command
from chemodose.cli._console import output_result, print_err, print_ok, stdout_console
from chemodose.runtime.backup import BackupLoadError, export_drugs, load_backup, write_backup


@app.command("export", help="Export all drugs as a JSON backup.")
def export_cmd(
    ctx: typer.Context,
    output: Optional[Path] = typer.Option(
        None, "-o", "--output", help="Output file (default: print to stdout)"
    ),
):
    init_command(ctx)
    drugs = get_store().list_drugs()

    if output is None:
        stdout_console.print(export_drugs(drugs), markup=False, emoji=False, highlight=False, soft_wrap=True)
        return

    path = write_backup(drugs, output)
    print_ok(f"Exported {len(drugs)} drugs to {path}")


@app.command("import", help="Import drugs from a JSON backup, skipping existing IDs.")
def import_cmd(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Backup file"),
):
    init_command(ctx)
    try:
        drugs = load_backup(file)
    except BackupLoadError as e:
        print_err(str(e))
        raise SystemExit(1)

    summary = get_store(seed=False).import_drugs(drugs)
    if ctx.obj["json"]:
        output_result(summary.to_dict(), ctx=ctx)
        return

    print_ok(f"Imported {len(summary.created)} drugs")
    if summary.skipped:
        print_err(f"Skipped {len(summary.skipped)} existing: {', '.join(summary.skipped)}")
