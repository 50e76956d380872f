"""Rich consoles and renderers for calculator output.

Status lines and logs go to stderr. Data (tables in human mode, JSON with
``--json``) goes to stdout so it can be piped.
"""

from typing import Any, Iterable, List, Optional, Sequence

import typer
from rich.console import Console
from rich.json import JSON
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from chemodose.runtime.result_formatter import summarize
from chemodose.schemas.drug import CalculationResult

console = Console(stderr=True)
stdout_console = Console()

_MARKS = {
    "ok": "[green]✓[/green]",
    "err": "[red]✗[/red]",
    "warn": "[yellow]![/yellow]",
}


def _status(kind: str, msg: str) -> None:
    console.print(f"{_MARKS[kind]} {msg}")


def print_ok(msg: str) -> None:
    _status("ok", msg)


def print_err(msg: str) -> None:
    _status("err", msg)


def print_warn(msg: str) -> None:
    _status("warn", msg)


def _wants_json(ctx: typer.Context) -> bool:
    return bool(ctx.obj and ctx.obj.get("json"))


def emit_json(data: Any) -> None:
    """Write a JSON document to stdout."""
    stdout_console.print_json(data=data)


def output_result(data: dict, *, ctx: typer.Context, title: str = "") -> None:
    """A single document: JSON on stdout, or a highlighted panel on stderr."""
    if _wants_json(ctx):
        emit_json(data)
        return
    body = JSON.from_data(data, indent=2, default=str)
    console.print(Panel(body, title=title, border_style="blue") if title else body)


def _cell(value: Any) -> str:
    return "" if value is None else str(value)


def output_table(
    rows: Sequence[dict],
    *,
    ctx: typer.Context,
    title: str = "",
    columns: Optional[List[str]] = None,
) -> None:
    """Rows of plain values: JSON array, or a Rich table."""
    if _wants_json(ctx):
        emit_json(list(rows))
        return
    if not rows:
        console.print(f"[dim]No {title.lower() or 'rows'}[/dim]")
        return

    cols = columns or list(rows[0])
    table = Table(title=title)
    for col in cols:
        table.add_column(col)
    for row in rows:
        table.add_row(*(_cell(row.get(col)) for col in cols))
    stdout_console.print(table)


def _value_text(result: CalculationResult) -> Text:
    if result.is_error:
        return Text(result.value, style="bold red")
    return Text(result.value, style="bold")


def render_results(
    results: Iterable[CalculationResult],
    *,
    ctx: typer.Context,
    title: str = "",
) -> None:
    """Calculation rows in formula order.

    Values are right-aligned so decimals line up. "Error" rows are shown in
    red with their unit and no description.
    """
    results = list(results)
    if _wants_json(ctx):
        emit_json([r.model_dump() for r in results])
        return

    table = Table(title=title)
    table.add_column("Calculation")
    table.add_column("Value", justify="right")
    table.add_column("Unit")
    table.add_column("Note", style="dim")
    for result in results:
        table.add_row(result.label, _value_text(result), result.unit, _cell(result.description))
    stdout_console.print(table)

    counts = summarize(results)
    if counts["errors"]:
        print_warn(
            f"{counts['errors']} of {counts['total']} formulas failed (run with -v for details)"
        )


def render_preview(
    formula: str,
    result: CalculationResult,
    error: Optional[str],
    *,
    ctx: typer.Context,
) -> None:
    """One evaluated formula, with the diagnostic when it failed."""
    if _wants_json(ctx):
        emit_json({"formula": formula, "value": result.value, "unit": result.unit, "error": error})
        return
    line = Text.assemble(_value_text(result), (f" {result.unit}" if result.unit else ""))
    stdout_console.print(line)
    if error:
        print_err(error)
