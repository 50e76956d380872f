"""Calculator settings management."""

from chemodose.config.settings import (
    CalculatorSettings,
    get_settings,
    load_settings,
    reset_settings_cache,
)

__all__ = [
    "CalculatorSettings",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
]
