"""
Formula Linter - authoring guardrail for drug definitions.

Validates a drug's formulas against:
- Syntax rules (the closed expression grammar)
- Field vocabulary (every identifier must be one of the drug's field ids)
- Calculator gating (the drug must expose the required input field)

The linter is advisory. Drugs with issues are still stored; at calculation
time their broken formulas show as "Error" rows. The report is what lets
the admin who authored a formula see the underlying diagnostic.
"""

import logging
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from chemodose.engine import ParseError, free_variables
from chemodose.runtime.batch_runner import DEFAULT_REQUIRED_INPUT
from chemodose.runtime.compiled import compile_formula
from chemodose.schemas.drug import Drug

logger = logging.getLogger(__name__)


class IssueType(str, Enum):
    """Types of lint issues."""
    SYNTAX_ERROR = "SYNTAX_ERROR"
    UNKNOWN_VARIABLE = "UNKNOWN_VARIABLE"
    EMPTY_FORMULA = "EMPTY_FORMULA"
    MISSING_REQUIRED_INPUT = "MISSING_REQUIRED_INPUT"


class Severity(str, Enum):
    """Issue severity levels."""
    CRITICAL = "CRITICAL"
    WARNING = "WARNING"


@dataclass
class LintIssue:
    """Structured lint finding."""
    drug_id: str
    type: IssueType
    severity: Severity
    message: str
    formula_index: Optional[int] = None
    label: Optional[str] = None
    position: Optional[int] = None  # Character offset in the formula text
    variable: Optional[str] = None


@dataclass
class LintReport:
    """Lint findings with summary counts."""
    issues: List[LintIssue] = field(default_factory=list)
    drugs_checked: int = 0
    formulas_checked: int = 0

    @property
    def critical_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.CRITICAL)

    @property
    def warning_count(self) -> int:
        return sum(1 for i in self.issues if i.severity == Severity.WARNING)

    @property
    def ok(self) -> bool:
        return self.critical_count == 0

    def summary(self) -> Dict[str, int]:
        return {
            "drugs_checked": self.drugs_checked,
            "formulas_checked": self.formulas_checked,
            "critical": self.critical_count,
            "warnings": self.warning_count,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "summary": self.summary(),
            "issues": [
                {**asdict(i), "type": i.type.value, "severity": i.severity.value}
                for i in self.issues
            ],
        }


def lint_drug(drug: Drug, required_input: str = DEFAULT_REQUIRED_INPUT) -> LintReport:
    """
    Check every formula of a drug.

    Args:
        drug: Drug definition to check
        required_input: Field id that gates calculations

    Returns:
        LintReport for this drug
    """
    report = LintReport(drugs_checked=1, formulas_checked=len(drug.formulas))
    field_ids = set(drug.field_ids())

    if required_input not in field_ids:
        report.issues.append(LintIssue(
            drug_id=drug.id,
            type=IssueType.MISSING_REQUIRED_INPUT,
            severity=Severity.WARNING,
            message=f"Drug has no '{required_input}' field; its calculations will never be shown",
            variable=required_input,
        ))

    for index, formula in enumerate(drug.formulas):
        if not formula.formula.strip():
            report.issues.append(LintIssue(
                drug_id=drug.id,
                type=IssueType.EMPTY_FORMULA,
                severity=Severity.WARNING,
                message="Formula is empty",
                formula_index=index,
                label=formula.label,
            ))
            continue

        try:
            tree = compile_formula(formula.formula)
        except ParseError as e:
            report.issues.append(LintIssue(
                drug_id=drug.id,
                type=IssueType.SYNTAX_ERROR,
                severity=Severity.CRITICAL,
                message=e.message,
                formula_index=index,
                label=formula.label,
                position=e.position,
            ))
            continue

        for name in sorted(free_variables(tree) - field_ids):
            report.issues.append(LintIssue(
                drug_id=drug.id,
                type=IssueType.UNKNOWN_VARIABLE,
                severity=Severity.CRITICAL,
                message=f"'{name}' is not a field of this drug",
                formula_index=index,
                label=formula.label,
                variable=name,
            ))

    if report.issues:
        logger.debug(f"Lint '{drug.id}': {report.summary()}")
    return report


def lint_drugs(drugs: Sequence[Drug], required_input: str = DEFAULT_REQUIRED_INPUT) -> LintReport:
    """Lint a whole catalogue into one report."""
    combined = LintReport()
    for drug in drugs:
        single = lint_drug(drug, required_input)
        combined.issues.extend(single.issues)
        combined.drugs_checked += single.drugs_checked
        combined.formulas_checked += single.formulas_checked
    return combined
