"""CLI package - Typer-based command-line interface.

Usage:
    chemodose --help
    python -m chemodose calc 006 -s weight=30
"""

from chemodose.cli._app import app

# Register command modules (side-effect imports)
import chemodose.cli.cmd_drugs  # noqa: F401
import chemodose.cli.cmd_calc  # noqa: F401
import chemodose.cli.cmd_lint  # noqa: F401
import chemodose.cli.cmd_backup  # noqa: F401
import chemodose.cli.cmd_serve  # noqa: F401


def main() -> None:
    app()


__all__ = ["app", "main"]
