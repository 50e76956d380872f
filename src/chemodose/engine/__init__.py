"""
Expression engine for dosage formulas.

Formula text goes through three stages:
1. lexer - text to tokens
2. parser - tokens to an immutable syntax tree
3. evaluator - tree plus bindings to a finite float

Parser and evaluator raise typed errors (ParseError, EvalError); the batch
runner in chemodose.runtime is the single place that recovers from them.
"""

from chemodose.engine.ast_nodes import SyntaxTree, free_variables
from chemodose.engine.errors import EvalError, EvalErrorKind, FormulaError, ParseError
from chemodose.engine.evaluator import evaluate
from chemodose.engine.parser import FUNCTIONS, RESERVED_NAMES, parse

__all__ = [
    "EvalError",
    "EvalErrorKind",
    "FUNCTIONS",
    "FormulaError",
    "ParseError",
    "RESERVED_NAMES",
    "SyntaxTree",
    "evaluate",
    "free_variables",
    "parse",
]
