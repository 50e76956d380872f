"""Calculator settings schema and loader.

Settings are loaded from ``{data_dir}/chemodose.yaml`` (or an explicit path)
and cached for the session. A missing file means defaults; a present but
invalid file is an error, so a typo never silently changes dose formatting.
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, field_validator

from chemodose.schemas.drug import FIELD_ID_PATTERN
from chemodose.startup import get_data_dir

logger = logging.getLogger(__name__)

SETTINGS_FILENAME = "chemodose.yaml"


class CalculatorSettings(BaseModel):
    """Runtime settings for the calculator.

    Attributes:
        required_input: Field id that must hold a non-zero value before any
            calculation is shown.
        decimal_places: Fixed-point precision of displayed values.
        seed_on_empty: Load the bundled drug catalogue into an empty store.
        log_formula_errors: Log parse/evaluation diagnostics of failing
            formulas for the admin who authored them.
    """

    required_input: str = Field(
        default="weight",
        description="Field id gating calculations",
        min_length=1,
    )
    decimal_places: int = Field(
        default=2,
        description="Digits after the decimal point in displayed values",
        ge=0,
        le=6,
    )
    seed_on_empty: bool = Field(
        default=True,
        description="Seed the bundled catalogue when the store is empty",
    )
    log_formula_errors: bool = Field(
        default=True,
        description="Log diagnostics for formulas that fail",
    )

    @field_validator("required_input")
    @classmethod
    def validate_required_input(cls, v: str) -> str:
        """Validate that required_input looks like a field id."""
        if not FIELD_ID_PATTERN.match(v):
            raise ValueError(f"required_input '{v}' is not a valid field id")
        return v


def load_settings(config_path: Optional[Path] = None) -> CalculatorSettings:
    """Load calculator settings from YAML file.

    Args:
        config_path: Optional explicit path to the settings file.
            If not provided, uses {data_dir}/chemodose.yaml.

    Returns:
        CalculatorSettings (defaults if the file does not exist or is empty).

    Raises:
        ValueError: If file exists but contains invalid configuration.
    """
    if config_path is None:
        config_path = get_data_dir() / SETTINGS_FILENAME

    if not config_path.exists():
        logger.debug(f"No settings file at {config_path}, using defaults")
        return CalculatorSettings()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in settings file {config_path}: {e}")

    if data is None:
        logger.warning(f"Empty settings file at {config_path}, using defaults")
        return CalculatorSettings()

    try:
        settings = CalculatorSettings.model_validate(data)
    except Exception as e:
        raise ValueError(f"Failed to load settings from {config_path}: {e}")

    logger.debug(f"Loaded settings from {config_path}")
    return settings


# Cached settings (loaded once per session)
_cached_settings: Optional[CalculatorSettings] = None


def get_settings(force_reload: bool = False) -> CalculatorSettings:
    """Get the current calculator settings (cached).

    Args:
        force_reload: If True, reload from disk even if cached.
    """
    global _cached_settings

    if _cached_settings is None or force_reload:
        _cached_settings = load_settings()
    return _cached_settings


def reset_settings_cache() -> None:
    """Clear cached settings (used when the data directory changes)."""
    global _cached_settings
    _cached_settings = None
