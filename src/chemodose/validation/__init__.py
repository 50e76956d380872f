"""Authoring-time checks for drug definitions."""

from chemodose.validation.formula_linter import (
    IssueType,
    LintIssue,
    LintReport,
    Severity,
    lint_drug,
    lint_drugs,
)

__all__ = [
    "IssueType",
    "LintIssue",
    "LintReport",
    "Severity",
    "lint_drug",
    "lint_drugs",
]
