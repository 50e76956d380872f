"""Pydantic schemas for drug definitions and calculation results."""

from chemodose.schemas.drug import (
    ERROR_VALUE,
    CalculationResult,
    Drug,
    DrugField,
    DrugFormula,
    DrugType,
    ReorderItem,
)

__all__ = [
    "ERROR_VALUE",
    "CalculationResult",
    "Drug",
    "DrugField",
    "DrugFormula",
    "DrugType",
    "ReorderItem",
]
