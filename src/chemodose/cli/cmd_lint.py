"""Lint command - static checks on stored formulas."""

from typing import Optional

import typer

from chemodose.cli._app import app
from chemodose.cli._common import get_store, init_command, load_settings_or_exit, require_drug
from chemodose.cli._console import console, output_result, output_table, print_ok
from chemodose.validation import lint_drug, lint_drugs


@app.command("lint", help="Check formulas for syntax errors and unknown variables.")
def lint_cmd(
    ctx: typer.Context,
    drug_id: Optional[str] = typer.Argument(None, help="Drug ID (default: all drugs)"),
):
    """Exits 1 when any critical issue is found."""
    init_command(ctx)
    settings = load_settings_or_exit()
    store = get_store()

    if drug_id:
        report = lint_drug(require_drug(store, drug_id), settings.required_input)
    else:
        report = lint_drugs(store.list_drugs(), settings.required_input)

    if ctx.obj["json"]:
        output_result(report.to_dict(), ctx=ctx)
    elif report.issues:
        output_table(
            [
                {
                    "drug": i.drug_id,
                    "severity": i.severity.value,
                    "type": i.type.value,
                    "formula": i.label or "",
                    "message": i.message,
                }
                for i in report.issues
            ],
            ctx=ctx,
            title="Formula issues",
        )
        console.print(
            f"{report.critical_count} critical, {report.warning_count} warnings "
            f"in {report.formulas_checked} formulas"
        )
    else:
        print_ok(f"{report.drugs_checked} drugs, {report.formulas_checked} formulas: no issues")

    if not report.ok:
        raise SystemExit(1)
