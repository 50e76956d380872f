"""Shared CLI utilities: logging, initialization, store access."""

import logging

import typer
from rich.logging import RichHandler

from chemodose.cli._console import console, print_err
from chemodose.config import get_settings, reset_settings_cache
from chemodose.config.settings import CalculatorSettings
from chemodose.runtime import FormulaBatchRunner
from chemodose.schemas.drug import Drug
from chemodose.startup import ensure_initialized, get_data_dir, set_data_dir
from chemodose.storage import FileDrugStore


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    # Suppress noisy third-party loggers
    for name in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def init_command(ctx: typer.Context) -> None:
    """Common start of every command: environment, data dir, logging."""
    ensure_initialized()
    if ctx.obj.get("data_dir"):
        set_data_dir(ctx.obj["data_dir"])
        reset_settings_cache()
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])


def load_settings_or_exit() -> CalculatorSettings:
    """Load settings, exiting with a message on invalid configuration."""
    try:
        return get_settings()
    except ValueError as e:
        print_err(str(e))
        raise SystemExit(1)


def get_store(*, seed: bool = True) -> FileDrugStore:
    """Open the drug store in the current data directory.

    Args:
        seed: Seed the bundled catalogue when the store is empty and
            settings allow it.
    """
    store = FileDrugStore(get_data_dir())
    if seed and load_settings_or_exit().seed_on_empty:
        store.seed_if_empty()
    return store


def get_runner() -> FormulaBatchRunner:
    return FormulaBatchRunner.from_settings(load_settings_or_exit())


def require_drug(store: FileDrugStore, drug_id: str) -> Drug:
    """Fetch a drug or exit with an error."""
    drug = store.get_drug(drug_id)
    if drug is None:
        print_err(f"Drug not found: {drug_id}")
        raise SystemExit(1)
    return drug
