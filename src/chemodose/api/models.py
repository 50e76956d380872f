"""Pydantic models for the API layer."""

from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from chemodose.schemas.drug import CalculationResult, ReorderItem


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ReorderRequest(BaseModel):
    """New sort positions, typically the whole list after a move."""

    orders: List[ReorderItem]


class CalculateRequest(BaseModel):
    """Inputs typed by the user, keyed by field id.

    Fields left out fall back to their default value.
    """

    inputs: Dict[str, float] = Field(default_factory=dict)


class CalculateResponse(BaseModel):
    """Ordered results for one drug.

    ``ready`` is False (and ``results`` empty) until the required input,
    normally weight, has a non-zero value.
    """

    drug_id: str
    ready: bool
    results: List[CalculationResult] = []


class EvaluateRequest(BaseModel):
    """Single formula preview for the drug editor."""

    formula: str
    inputs: Dict[str, float] = Field(default_factory=dict)
    label: str = "Preview"
    unit: str = ""


class EvaluateResponse(BaseModel):
    result: CalculationResult
    error: Optional[str] = None  # Parse/eval diagnostic for the formula author


class ImportResponse(BaseModel):
    created: List[str]
    skipped: List[str]
