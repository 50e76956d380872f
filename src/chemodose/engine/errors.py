"""Error taxonomy for formula parsing and evaluation.

Parse and evaluation failures are raised as typed exceptions by the engine
and caught in exactly one place: the formula batch runner, which turns them
into placeholder result rows.
"""

from enum import Enum


class EvalErrorKind(str, Enum):
    """Stable codes for evaluation failures."""

    UNBOUND_VARIABLE = "UNBOUND_VARIABLE"  # Identifier missing from bindings
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"  # Right operand of "/" is zero
    INVALID_OPERAND = "INVALID_OPERAND"  # Non-finite or non-numeric value


class FormulaError(Exception):
    """Base class for all formula failures."""


class ParseError(FormulaError):
    """Raised when formula text does not match the expression grammar.

    Attributes:
        message: Human-readable diagnostic.
        position: Zero-based character offset in the source where the
            problem was detected.
    """

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"{message} (at position {position})")


class EvalError(FormulaError):
    """Raised when a parsed formula cannot produce a finite number."""

    def __init__(self, kind: EvalErrorKind, message: str):
        self.kind = kind
        self.message = message
        super().__init__(f"{kind.value}: {message}")
