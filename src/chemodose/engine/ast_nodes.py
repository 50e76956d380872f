"""Syntax tree nodes for dosage formulas.

Trees are immutable so a parsed formula can be cached and shared between
concurrent evaluations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, Union


@dataclass(frozen=True)
class Number:
    value: float


@dataclass(frozen=True)
class Variable:
    name: str
    position: int = field(default=0, compare=False)  # source offset, for diagnostics only


@dataclass(frozen=True)
class UnaryOp:
    op: str  # "-" or "+"
    operand: Expr


@dataclass(frozen=True)
class BinaryOp:
    op: str  # "+", "-", "*", "/"
    left: Expr
    right: Expr


@dataclass(frozen=True)
class Call:
    func: str
    arg: Expr


Expr = Union[Number, Variable, UnaryOp, BinaryOp, Call]

# Public alias used by callers that only pass trees around.
SyntaxTree = Expr


def free_variables(node: Expr) -> FrozenSet[str]:
    """Return the identifiers a tree reads from its bindings."""
    if isinstance(node, Variable):
        return frozenset({node.name})
    if isinstance(node, UnaryOp):
        return free_variables(node.operand)
    if isinstance(node, BinaryOp):
        return free_variables(node.left) | free_variables(node.right)
    if isinstance(node, Call):
        return free_variables(node.arg)
    return frozenset()
