"""Drug catalogue commands: list, show, delete, duplicate, reorder."""

from typing import List, Optional

import typer

from chemodose.cli._app import app
from chemodose.cli._common import get_store, init_command, require_drug
from chemodose.cli._console import console, output_result, output_table, print_err, print_ok, print_warn
from chemodose.schemas import ReorderItem
from chemodose.storage import DrugNotFoundError, DrugStoreError


@app.command("list", help="List drugs in catalogue order.")
def list_cmd(
    ctx: typer.Context,
    query: Optional[str] = typer.Option(
        None, "--query", "-Q", help="Case-insensitive filter on name or category"
    ),
):
    init_command(ctx)
    try:
        drugs = get_store().list_drugs(query=query)
    except DrugStoreError as e:
        print_err(str(e))
        raise SystemExit(1)

    rows = [
        {
            "id": d.id,
            "name": d.name,
            "category": d.category,
            "type": d.type.value,
            "formulas": len(d.formulas),
            "sort_order": d.sort_order,
        }
        for d in drugs
    ]
    output_table(rows, ctx=ctx, title="Drugs")


@app.command("show", help="Show a drug's fields and formulas.")
def show_cmd(
    ctx: typer.Context,
    drug_id: str = typer.Argument(..., help="Drug ID"),
):
    init_command(ctx)
    drug = require_drug(get_store(), drug_id)

    if ctx.obj["json"]:
        output_result(drug.model_dump(mode="json"), ctx=ctx)
        return

    console.print(f"[bold]{drug.name}[/bold] ({drug.id}) [dim]{drug.type.value}[/dim]")
    if drug.category:
        console.print(f"  {drug.category}")
    if drug.description:
        console.print(f"  [dim]{drug.description}[/dim]")

    output_table(
        [
            {"id": f.id, "label": f.label, "unit": f.unit, "default": f.defaultValue}
            for f in drug.fields
        ],
        ctx=ctx,
        title="Fields",
    )
    output_table(
        [
            {"#": i + 1, "label": f.label, "formula": f.formula, "unit": f.unit}
            for i, f in enumerate(drug.formulas)
        ],
        ctx=ctx,
        title="Formulas",
    )


@app.command("delete", help="Delete a drug.")
def delete_cmd(
    ctx: typer.Context,
    drug_id: str = typer.Argument(..., help="Drug ID"),
):
    init_command(ctx)
    if not get_store().delete_drug(drug_id):
        print_err(f"Drug not found: {drug_id}")
        raise SystemExit(1)
    print_ok(f"Deleted {drug_id}")


@app.command("duplicate", help="Copy a drug under a new generated ID.")
def duplicate_cmd(
    ctx: typer.Context,
    drug_id: str = typer.Argument(..., help="Drug ID to copy"),
):
    init_command(ctx)
    try:
        copy = get_store().duplicate_drug(drug_id)
    except DrugNotFoundError:
        print_err(f"Drug not found: {drug_id}")
        raise SystemExit(1)

    if ctx.obj["json"]:
        output_result({"id": copy.id, "name": copy.name}, ctx=ctx)
    else:
        print_ok(f"Created {copy.id} ({copy.name})")


@app.command("reorder", help="Set catalogue order: first ID listed comes first.")
def reorder_cmd(
    ctx: typer.Context,
    drug_ids: List[str] = typer.Argument(..., help="Drug IDs in the desired order"),
):
    init_command(ctx)
    items = [ReorderItem(id=drug_id, sort_order=i) for i, drug_id in enumerate(drug_ids)]
    updated = get_store().reorder(items)
    if updated < len(items):
        print_warn(f"{len(items) - updated} unknown ID(s) ignored")
    print_ok(f"Reordered {updated} drugs")
