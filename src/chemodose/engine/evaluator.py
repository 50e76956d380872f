"""Tree-walking evaluator for parsed dosage formulas.

All arithmetic is double precision. Every intermediate result is checked:
division by zero and non-finite values raise EvalError instead of leaking
``inf``/``nan`` into the displayed dose.
"""

import math
from numbers import Real
from typing import Callable, Dict, Mapping

from chemodose.engine.ast_nodes import BinaryOp, Call, Expr, Number, UnaryOp, Variable
from chemodose.engine.errors import EvalError, EvalErrorKind

_BUILTINS: Dict[str, Callable[[float], float]] = {
    "ceil": lambda x: float(math.ceil(x)),
}


def _finite(value: float, what: str) -> float:
    if not math.isfinite(value):
        raise EvalError(EvalErrorKind.INVALID_OPERAND, f"{what} is not finite ({value})")
    return value


def _lookup(node: Variable, bindings: Mapping[str, float]) -> float:
    try:
        raw = bindings[node.name]
    except KeyError:
        raise EvalError(
            EvalErrorKind.UNBOUND_VARIABLE, f"No value supplied for '{node.name}'"
        ) from None

    # bool is a Real subclass but a checkbox value is never a dose input
    if isinstance(raw, bool) or not isinstance(raw, Real):
        raise EvalError(
            EvalErrorKind.INVALID_OPERAND,
            f"Value for '{node.name}' is not a number: {raw!r}",
        )
    try:
        value = float(raw)
    except OverflowError:
        raise EvalError(
            EvalErrorKind.INVALID_OPERAND,
            f"Value for '{node.name}' is too large",
        ) from None
    return _finite(value, f"Value for '{node.name}'")


def _binary(node: BinaryOp, bindings: Mapping[str, float]) -> float:
    left = evaluate(node.left, bindings)
    right = evaluate(node.right, bindings)

    if node.op == "+":
        result = left + right
    elif node.op == "-":
        result = left - right
    elif node.op == "*":
        result = left * right
    elif node.op == "/":
        if right == 0:
            raise EvalError(EvalErrorKind.DIVISION_BY_ZERO, "Division by zero")
        result = left / right
    else:
        raise EvalError(EvalErrorKind.INVALID_OPERAND, f"Unknown operator '{node.op}'")

    return _finite(result, f"Result of '{node.op}'")


def evaluate(tree: Expr, bindings: Mapping[str, float]) -> float:
    """Evaluate a syntax tree against variable bindings.

    Args:
        tree: Tree returned by ``chemodose.engine.parser.parse``.
        bindings: Mapping of field id to numeric value.

    Returns:
        Finite float result.

    Raises:
        EvalError: UNBOUND_VARIABLE, DIVISION_BY_ZERO or INVALID_OPERAND.
    """
    if isinstance(tree, Number):
        return _finite(tree.value, "Literal")

    if isinstance(tree, Variable):
        return _lookup(tree, bindings)

    if isinstance(tree, UnaryOp):
        value = evaluate(tree.operand, bindings)
        return -value if tree.op == "-" else value

    if isinstance(tree, BinaryOp):
        return _binary(tree, bindings)

    if isinstance(tree, Call):
        func = _BUILTINS.get(tree.func)
        if func is None:
            raise EvalError(EvalErrorKind.INVALID_OPERAND, f"Unknown function '{tree.func}'")
        return _finite(func(evaluate(tree.arg, bindings)), f"{tree.func}()")

    raise EvalError(EvalErrorKind.INVALID_OPERAND, f"Unsupported node {type(tree).__name__}")
