"""
Chemodose - formula-driven clinical dosage calculator.

Drugs define numeric input fields (weight, dose per m2, ...) and an ordered
list of labeled arithmetic formulas. The engine parses formulas with a
closed grammar, evaluates them against patient inputs and reports each
result independently, so one broken formula never hides the others.
"""

__version__ = "0.1.0"

from chemodose.runtime import FormulaBatchRunner, run_batch
from chemodose.schemas import CalculationResult, Drug, DrugField, DrugFormula, DrugType

__all__ = [
    "CalculationResult",
    "Drug",
    "DrugField",
    "DrugFormula",
    "DrugType",
    "FormulaBatchRunner",
    "run_batch",
]
