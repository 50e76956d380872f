"""
Result Formatter - presentation of formula outcomes.

Responsibility: Translate a raw evaluation outcome into the row shown to the
clinician. The engine decides what the number is; the formatter decides how
to show it.

- Numbers become fixed-point strings ("1.06", "265.00")
- Failures become the "Error" placeholder; label and unit stay visible so
  the clinician knows which calculation is missing
"""

from decimal import ROUND_HALF_UP, Decimal, localcontext
from numbers import Real
from typing import Any, Dict, List

from chemodose.schemas.drug import ERROR_VALUE, CalculationResult, DrugFormula

DEFAULT_DECIMAL_PLACES = 2


def format_value(value: Any, decimal_places: int = DEFAULT_DECIMAL_PLACES) -> str:
    """
    Format an evaluation result for display.

    Real numbers are rendered fixed-point with ``decimal_places`` digits.
    Exact ties round away from zero (0.125 -> "0.13", -0.125 -> "-0.13")
    and negative zero prints as "0.00". Anything else, including non-finite
    values, is converted with ``str()`` unchanged.
    """
    if isinstance(value, Real) and not isinstance(value, bool):
        # Decimal(float) is the exact binary value, so 1.005 stays below the tie
        exact = Decimal(value) if isinstance(value, int) else Decimal(float(value))
        if not exact.is_finite():
            return str(value)
        if exact.is_zero():
            exact = abs(exact)
        quantum = Decimal(1).scaleb(-decimal_places)
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, exact.adjusted() + decimal_places + 2)
            return format(exact.quantize(quantum, rounding=ROUND_HALF_UP), "f")
    return str(value)


def success_result(
    formula: DrugFormula,
    value: Any,
    decimal_places: int = DEFAULT_DECIMAL_PLACES,
) -> CalculationResult:
    return CalculationResult(
        label=formula.label,
        value=format_value(value, decimal_places),
        unit=formula.unit,
        description=formula.description,
    )


def error_result(formula: DrugFormula) -> CalculationResult:
    """
    Placeholder row for a formula that failed to parse or evaluate.

    The unit is static formula metadata, so it is kept on every failure path.
    The description is dropped because it refers to a value that does not
    exist.
    """
    return CalculationResult(
        label=formula.label,
        value=ERROR_VALUE,
        unit=formula.unit,
        description=None,
    )


def summarize(results: List[CalculationResult]) -> Dict[str, int]:
    """Count successful and failed rows."""
    errors = sum(1 for r in results if r.is_error)
    return {
        "total": len(results),
        "ok": len(results) - errors,
        "errors": errors,
    }
