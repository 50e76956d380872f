"""FastAPI dependencies for the Chemodose API.

This module provides:
- Path helpers for the data directory
- Drug store access (seeded on first use when configured)
- Formula runner construction from settings
"""

import logging
from pathlib import Path

from chemodose.config import get_settings, reset_settings_cache
from chemodose.config.settings import CalculatorSettings
from chemodose.runtime import FormulaBatchRunner
from chemodose.startup import (
    ensure_initialized,
    get_data_dir as _startup_get_data_dir,
    get_project_root as _startup_get_project_root,
    set_data_dir as _startup_set_data_dir,
)
from chemodose.storage import FileDrugStore

logger = logging.getLogger(__name__)

_seed_checked: bool = False


# =============================================================================
# PATH HELPERS
# =============================================================================


def get_project_root() -> Path:
    """Get the project root directory."""
    return _startup_get_project_root()


def get_data_dir() -> Path:
    """Get the data directory (drugs.json, chemodose.yaml)."""
    return _startup_get_data_dir()


def set_data_dir(path: Path) -> None:
    """Point the API at another data directory and drop cached state."""
    global _seed_checked
    _startup_set_data_dir(path)
    reset_settings_cache()
    _seed_checked = False


# =============================================================================
# SETTINGS / STORE / RUNNER
# =============================================================================


def get_calculator_settings() -> CalculatorSettings:
    """Get cached calculator settings."""
    ensure_initialized()
    return get_settings()


def get_drug_store() -> FileDrugStore:
    """Get the drug store (fresh per request so external edits are seen).

    The bundled catalogue is seeded once per data directory when the store
    is empty and ``seed_on_empty`` is enabled.
    """
    global _seed_checked
    store = FileDrugStore(get_data_dir())
    if not _seed_checked:
        if get_calculator_settings().seed_on_empty:
            store.seed_if_empty()
        _seed_checked = True
    return store


def get_formula_runner() -> FormulaBatchRunner:
    """Get a runner configured from settings."""
    return FormulaBatchRunner.from_settings(get_calculator_settings())
