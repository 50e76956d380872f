"""Calculation router - dose results, formula preview and lint reports."""

from fastapi import APIRouter, HTTPException

from chemodose.api.dependencies import (
    get_calculator_settings,
    get_drug_store,
    get_formula_runner,
)
from chemodose.api.models import (
    CalculateRequest,
    CalculateResponse,
    EvaluateRequest,
    EvaluateResponse,
)
from chemodose.runtime.bindings import build_bindings
from chemodose.schemas.drug import DrugFormula
from chemodose.validation import lint_drug

router = APIRouter(tags=["calculate"])


@router.post("/api/drugs/{drug_id}/calculate", response_model=CalculateResponse)
def calculate(drug_id: str, request: CalculateRequest):
    """
    Compute every formula of a drug for the given inputs.

    Inputs are overlaid on the fields' default values. Results keep the
    drug's formula order; failing formulas come back as "Error" rows.
    """
    drug = get_drug_store().get_drug(drug_id)
    if drug is None:
        raise HTTPException(status_code=404, detail=f"Drug not found: {drug_id}")

    runner = get_formula_runner()
    bindings = build_bindings(drug, request.inputs)
    results = runner.calculate(drug, bindings)
    return CalculateResponse(
        drug_id=drug.id,
        ready=runner.has_required_inputs(bindings),
        results=results,
    )


@router.get("/api/drugs/{drug_id}/lint")
def lint(drug_id: str):
    """Report syntax errors and unknown variables in a drug's formulas."""
    drug = get_drug_store().get_drug(drug_id)
    if drug is None:
        raise HTTPException(status_code=404, detail=f"Drug not found: {drug_id}")
    return lint_drug(drug, get_calculator_settings().required_input).to_dict()


@router.post("/api/formulas/evaluate", response_model=EvaluateResponse)
def evaluate_formula(request: EvaluateRequest):
    """
    Preview a single formula while editing a drug.

    Unlike the calculation endpoint, the diagnostic is returned so the
    author can fix the formula.
    """
    formula = DrugFormula(label=request.label, formula=request.formula, unit=request.unit)
    result, error = get_formula_runner().preview(formula, request.inputs)
    return EvaluateResponse(result=result, error=error)
