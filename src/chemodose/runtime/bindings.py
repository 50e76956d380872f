"""
Bindings builder - turns user input into formula variable bindings.

Responsibility: Project raw, UI-shaped values (strings typed into inputs,
``key=value`` CLI arguments, field defaults) into a flat mapping of
field id to float that the evaluator consumes.

Every helper returns a new mapping; callers own their bindings and nothing
here keeps state between calls.
"""

import math
from typing import Dict, Iterable, Mapping, Optional, Union

from chemodose.schemas.drug import Drug

VariableBindings = Dict[str, float]


def initial_bindings(drug: Drug) -> VariableBindings:
    """
    Bindings pre-filled when a drug is selected.

    Only fields with a ``defaultValue`` get an entry; the rest stay unbound
    until the user types a value.
    """
    return {
        field.id: float(field.defaultValue)
        for field in drug.fields
        if field.defaultValue is not None
    }


def coerce_input(raw: Union[str, float, int, None]) -> float:
    """
    Convert a raw input value to a float.

    Blank, non-numeric and non-finite input becomes 0.0, matching how an
    empty input box reads as zero.
    """
    if raw is None or isinstance(raw, bool):
        return 0.0
    try:
        if isinstance(raw, (int, float)):
            value = float(raw)
        else:
            value = float(str(raw).strip())
    except (ValueError, OverflowError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def apply_input(
    bindings: Mapping[str, float],
    field_id: str,
    raw: Union[str, float, int, None],
) -> VariableBindings:
    """Return a copy of ``bindings`` with ``field_id`` set from raw input."""
    updated = dict(bindings)
    updated[field_id] = coerce_input(raw)
    return updated


def parse_assignments(pairs: Iterable[str]) -> VariableBindings:
    """
    Parse ``name=value`` strings into bindings.

    Args:
        pairs: e.g. ``["weight=30", "dose_m2=50"]``

    Raises:
        ValueError: If a pair has no ``=``, an empty name, or a value that
            is not a number.
    """
    bindings: VariableBindings = {}
    for pair in pairs:
        name, sep, value = pair.partition("=")
        name = name.strip()
        if not sep or not name:
            raise ValueError(f"Expected name=value, got '{pair}'")
        try:
            bindings[name] = float(value.strip())
        except ValueError:
            raise ValueError(f"Value for '{name}' is not a number: '{value.strip()}'")
    return bindings


def build_bindings(drug: Drug, inputs: Optional[Mapping[str, float]] = None) -> VariableBindings:
    """Field defaults overlaid with explicit inputs."""
    bindings = initial_bindings(drug)
    if inputs:
        for field_id, value in inputs.items():
            bindings[field_id] = coerce_input(value)
    return bindings
