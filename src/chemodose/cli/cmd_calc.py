"""Calculation commands: run a drug's formulas, or one ad-hoc formula."""

from typing import List

import typer

from chemodose.cli._app import app
from chemodose.cli._common import get_runner, get_store, init_command, require_drug
from chemodose.cli._console import print_err, print_warn, render_preview, render_results
from chemodose.runtime import build_bindings, parse_assignments
from chemodose.schemas import DrugFormula


def _parse_sets(pairs: List[str]) -> dict:
    try:
        return parse_assignments(pairs)
    except ValueError as e:
        print_err(str(e))
        raise SystemExit(1)


@app.command("calc", help="Calculate all of a drug's formulas.")
def calc_cmd(
    ctx: typer.Context,
    drug_id: str = typer.Argument(..., help="Drug ID"),
    sets: List[str] = typer.Option(
        [], "--set", "-s", help="Input value as field=value (repeatable)"
    ),
):
    """Field defaults apply unless overridden with --set."""
    init_command(ctx)
    drug = require_drug(get_store(), drug_id)
    runner = get_runner()

    bindings = build_bindings(drug, _parse_sets(sets))
    results = runner.calculate(drug, bindings)
    if not results and drug.formulas:
        print_warn(f"Enter '{runner.required_input}' to calculate {drug.name}")
        raise SystemExit(1)

    render_results(results, ctx=ctx, title=f"{drug.name.strip()} ({drug.id})")


@app.command("eval", help="Evaluate a single formula.")
def eval_cmd(
    ctx: typer.Context,
    formula: str = typer.Argument(..., help="Formula text, e.g. 'weight*2'"),
    sets: List[str] = typer.Option(
        [], "--set", "-s", help="Variable value as name=value (repeatable)"
    ),
    unit: str = typer.Option("", "--unit", "-u", help="Unit shown with the value"),
):
    """Exits 1 and prints the diagnostic when the formula fails."""
    init_command(ctx)
    bindings = _parse_sets(sets)

    runner = get_runner()
    runner.log_errors = False
    result, error = runner.preview(DrugFormula(label="eval", formula=formula, unit=unit), bindings)

    render_preview(formula, result, error, ctx=ctx)
    if error:
        raise SystemExit(1)
