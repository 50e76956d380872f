"""Centralized initialization for all chemodose entry points.

This module provides a single point of initialization for:
- Environment variables (.env loading)
- Data directory resolution (drug store, settings file)

All entry points (API, CLI) should use ensure_initialized()
to guarantee consistent startup behavior.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DATA_DIR_ENV = "CHEMODOSE_DATA_DIR"


@dataclass
class AppState:
    """Resolved paths after initialization."""

    project_root: Path
    data_dir: Path
    env_loaded: bool = False


# Module-level state
_initialized: bool = False
_state: Optional[AppState] = None


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Find project root by looking for pyproject.toml or a .env file.

    Args:
        start_path: Starting path for search. Defaults to the current
            working directory.

    Returns:
        Project root directory.
    """
    if start_path is None:
        start_path = Path.cwd()

    for parent in [start_path] + list(start_path.parents):
        if (parent / "pyproject.toml").exists() or (parent / ".env").exists():
            return parent
    return start_path


def _load_env(project_root: Path) -> bool:
    """Load .env file from project root.

    Returns:
        True if .env was loaded, False otherwise.
    """
    env_path = project_root / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        logger.debug(f"Loaded .env from {env_path}")
        return True
    return False


def _resolve_data_dir(project_root: Path) -> Path:
    """Resolve the data directory from the environment or project default."""
    configured = os.getenv(DATA_DIR_ENV)
    if configured:
        data_dir = Path(configured)
        if not data_dir.is_absolute():
            data_dir = project_root / data_dir
    else:
        data_dir = project_root / "output"

    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir


def ensure_initialized() -> AppState:
    """Ensure the application is initialized (idempotent).

    Loads .env and resolves the data directory on first call.
    Subsequent calls return cached state.
    """
    global _initialized, _state

    if _initialized and _state is not None:
        return _state

    project_root = _find_project_root()
    env_loaded = _load_env(project_root)
    _state = AppState(
        project_root=project_root,
        data_dir=_resolve_data_dir(project_root),
        env_loaded=env_loaded,
    )
    _initialized = True
    logger.debug(f"Data directory: {_state.data_dir}")

    return _state


def get_project_root() -> Path:
    """Get the project root directory. Initializes if needed."""
    return ensure_initialized().project_root


def get_data_dir() -> Path:
    """Get the data directory holding drugs.json and chemodose.yaml.

    Initializes if needed.
    """
    return ensure_initialized().data_dir


def set_data_dir(data_dir: Path) -> None:
    """Point the application at another data directory."""
    state = ensure_initialized()
    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)
    state.data_dir = data_dir


def reset_state() -> None:
    """Reset initialization state (for testing)."""
    global _initialized, _state
    _initialized = False
    _state = None
