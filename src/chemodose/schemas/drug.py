"""Pydantic schemas for drug definitions and calculation results.

JSON keys keep the camelCase names used by backup files (``defaultValue``,
``imageUrl``) so existing backups load unchanged.

Formula text is deliberately NOT validated here: an unparseable formula is
stored as-is and reported as an "Error" row at calculation time.
"""

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from chemodose.engine import RESERVED_NAMES

FIELD_ID_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Placeholder shown instead of a number when a formula fails.
ERROR_VALUE = "Error"


class DrugType(str, Enum):
    """Route of administration."""

    IV = "IV"
    IM = "IM"
    SQ = "SQ"
    ORAL = "ORAL"


class DrugField(BaseModel):
    """
    Numeric input the user fills in for a drug.

    The ``id`` doubles as the variable name formulas refer to, so it must be
    a plain identifier and cannot shadow a built-in function.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., description="Variable name used in formulas")
    label: str = Field(..., description="Display label")
    unit: str = Field(default="", description="Display unit, e.g. kg")
    defaultValue: Optional[float] = Field(
        default=None, description="Value pre-filled when the drug is selected"
    )
    placeholder: Optional[str] = Field(default=None, description="Input placeholder text")

    @field_validator("id")
    @classmethod
    def validate_id(cls, v: str) -> str:
        """Validate that the field id is usable as a formula variable."""
        if not FIELD_ID_PATTERN.match(v):
            raise ValueError(
                f"Field id '{v}' must start with a letter or underscore and "
                "contain only letters, digits and underscores"
            )
        if v in RESERVED_NAMES:
            raise ValueError(f"Field id '{v}' is reserved for a built-in function")
        return v


class DrugFormula(BaseModel):
    """Labeled arithmetic expression evaluated against a drug's fields."""

    model_config = ConfigDict(extra="ignore")

    label: str = Field(..., description="Display name (not required to be unique)")
    formula: str = Field(..., description="Expression source text")
    unit: str = Field(default="", description="Unit of the computed value")
    description: Optional[str] = Field(default=None, description="Note shown with the result")


class Drug(BaseModel):
    """A drug with its inputs and ordered calculations."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Unique drug identifier")
    name: str = Field(..., description="Short display name")
    category: str = Field(default="", description="Generic name and concentration")
    description: str = Field(default="")
    imageUrl: Optional[str] = Field(default=None)
    type: DrugType = Field(default=DrugType.IV)
    fields: List[DrugField] = Field(default_factory=list)
    formulas: List[DrugFormula] = Field(
        default_factory=list,
        description="Calculations in clinical presentation order",
    )
    sort_order: int = Field(default=0)

    @field_validator("description", "category", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator("sort_order", mode="before")
    @classmethod
    def default_sort_order(cls, v):
        return 0 if v is None else v

    @model_validator(mode="after")
    def validate_unique_field_ids(self):
        """Field ids are variable names and must not collide."""
        seen = set()
        for field in self.fields:
            if field.id in seen:
                raise ValueError(f"Duplicate field id '{field.id}' in drug '{self.id}'")
            seen.add(field.id)
        return self

    def field_ids(self) -> List[str]:
        return [f.id for f in self.fields]


class CalculationResult(BaseModel):
    """One displayed row: output of a single formula evaluation."""

    label: str
    value: str
    unit: str = ""
    description: Optional[str] = None

    @property
    def is_error(self) -> bool:
        return self.value == ERROR_VALUE


class ReorderItem(BaseModel):
    """New position of one drug in the catalogue."""

    id: str
    sort_order: int
