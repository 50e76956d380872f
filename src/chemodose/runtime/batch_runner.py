"""
Formula Batch Runner - evaluates a drug's formula list in one pass.

Responsibility: Orchestrate parsing, evaluation and formatting of every
formula of a drug against one bindings snapshot.

High-level callers (API routers, CLI) depend on the IFormulaRunner
abstraction, not on the parser or evaluator directly.

Resilience guarantee: one formula's failure never prevents evaluation of
the others. Parse and evaluation errors are caught here, logged for the
admin, and turned into "Error" rows. Results come back in formula order.
"""

import logging
import math
import time
from abc import ABC, abstractmethod
from collections.abc import Mapping
from numbers import Real
from typing import List, Optional, Sequence, Tuple

from chemodose.engine import FormulaError, evaluate
from chemodose.runtime.compiled import CompiledDrug, compile_formula
from chemodose.runtime.result_formatter import (
    DEFAULT_DECIMAL_PLACES,
    error_result,
    success_result,
    summarize,
)
from chemodose.schemas.drug import CalculationResult, Drug, DrugFormula

logger = logging.getLogger(__name__)

DEFAULT_REQUIRED_INPUT = "weight"


def has_required_inputs(
    bindings: Mapping,
    required_input: str = DEFAULT_REQUIRED_INPUT,
) -> bool:
    """
    Check whether calculations should be shown at all.

    Returns True only when ``required_input`` is bound to a finite, non-zero
    number. There is no point showing doses before the patient's weight is
    entered.
    """
    if not isinstance(bindings, Mapping):
        return False
    value = bindings.get(required_input)
    if value is None or isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value) and value != 0
    except OverflowError:
        return False


class IFormulaRunner(ABC):
    """
    Abstract interface for formula batch evaluation.

    Stateless: accepts (formulas + bindings) and returns ordered results.
    """

    @abstractmethod
    def run_batch(
        self,
        formulas: Sequence[DrugFormula],
        bindings: Mapping,
    ) -> List[CalculationResult]:
        """
        Evaluate each formula against the same bindings.

        Args:
            formulas: Formulas in presentation order
            bindings: Mapping of field id to number

        Returns:
            One CalculationResult per formula, in the same order
        """
        pass


class FormulaBatchRunner(IFormulaRunner):
    """
    Concrete runner built on the closed-grammar parser and tree evaluator.

    Parsed trees are shared through the compiled-formula cache, so repeated
    runs with new bindings only re-walk trees.
    """

    def __init__(
        self,
        required_input: str = DEFAULT_REQUIRED_INPUT,
        decimal_places: int = DEFAULT_DECIMAL_PLACES,
        log_errors: bool = True,
    ):
        self.required_input = required_input
        self.decimal_places = decimal_places
        self.log_errors = log_errors

    @classmethod
    def from_settings(cls, settings) -> "FormulaBatchRunner":
        """Build a runner from CalculatorSettings."""
        return cls(
            required_input=settings.required_input,
            decimal_places=settings.decimal_places,
            log_errors=settings.log_formula_errors,
        )

    def has_required_inputs(self, bindings: Mapping) -> bool:
        return has_required_inputs(bindings, self.required_input)

    def _run_one(
        self,
        formula: DrugFormula,
        bindings: Mapping,
        compiled: Optional[CompiledDrug] = None,
        index: int = 0,
    ) -> Tuple[CalculationResult, Optional[FormulaError]]:
        try:
            if compiled is not None:
                tree = compiled.tree_for(index)
            else:
                tree = compile_formula(formula.formula)
            value = evaluate(tree, bindings)
            return success_result(formula, value, self.decimal_places), None
        except FormulaError as e:
            # Log error but continue processing other formulas
            if self.log_errors:
                logger.warning(
                    f"Formula '{formula.label}' ({formula.formula!r}) failed: {e}"
                )
            return error_result(formula), e

    def run_batch(
        self,
        formulas: Sequence[DrugFormula],
        bindings: Mapping,
        compiled: Optional[CompiledDrug] = None,
    ) -> List[CalculationResult]:
        """
        Evaluate formulas in order with per-formula error isolation.

        Args:
            formulas: Formulas in presentation order
            bindings: Mapping of field id to number
            compiled: Optional pre-parsed trees for these formulas

        Returns:
            One result per formula; failures are "Error" rows

        Raises:
            TypeError: If bindings is not a mapping. This is fatal for the
                whole batch; no partial results are returned.
        """
        _require_mapping(bindings)

        start_time = time.perf_counter()
        results = [
            self._run_one(formula, bindings, compiled=compiled, index=index)[0]
            for index, formula in enumerate(formulas)
        ]

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Evaluated {len(results)} formulas in {elapsed_ms:.2f}ms: {summarize(results)}"
        )
        return results

    def preview(
        self, formula: DrugFormula, bindings: Mapping
    ) -> Tuple[CalculationResult, Optional[str]]:
        """
        Evaluate one formula for its author.

        Returns the same row ``run_batch`` would produce, plus the parse or
        evaluation diagnostic when it failed (None on success). Not gated on
        the required input.
        """
        _require_mapping(bindings)
        result, error = self._run_one(formula, bindings)
        return result, (str(error) if error is not None else None)

    def calculate(self, drug: Drug, bindings: Mapping) -> List[CalculationResult]:
        """
        Run a drug's formulas, gated on the required input.

        Returns an empty list when the required input is missing or zero.
        """
        _require_mapping(bindings)
        if not self.has_required_inputs(bindings):
            logger.debug(
                f"Skipping '{drug.id}': required input '{self.required_input}' not set"
            )
            return []
        return self.run_batch(drug.formulas, bindings, compiled=CompiledDrug.from_drug(drug))


def _require_mapping(bindings) -> None:
    if not isinstance(bindings, Mapping):
        raise TypeError(
            f"bindings must be a mapping of field id to number, got {type(bindings).__name__}"
        )


def run_batch(formulas: Sequence[DrugFormula], bindings: Mapping) -> List[CalculationResult]:
    """Evaluate formulas with a default-configured runner."""
    return FormulaBatchRunner().run_batch(formulas, bindings)
