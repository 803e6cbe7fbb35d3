"""Core AST node definitions shared across the MFlow compiler.

Every node records the ``line`` and ``column`` of the token that introduced
it.  Children are plain attributes; the tree holds no parent links.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class Node:
    """Base class for all AST nodes."""

    pass


@dataclass
class Expression(Node):
    """Base class for all expression types."""

    pass


@dataclass
class Statement(Node):
    """Base class for all statement types."""

    pass


@dataclass
class Identifier(Expression):
    name: str
    line: int = 0
    column: int = 0


@dataclass
class NumberLiteral(Expression):
    value: float
    line: int = 0
    column: int = 0


@dataclass
class StringLiteral(Expression):
    value: str
    line: int = 0
    column: int = 0


@dataclass
class ColorLiteral(Expression):
    """Color literal such as ``#F5A623``; the text is kept verbatim."""

    value: str
    line: int = 0
    column: int = 0


@dataclass
class BooleanLiteral(Expression):
    value: bool
    line: int = 0
    column: int = 0


@dataclass
class NullLiteral(Expression):
    line: int = 0
    column: int = 0


@dataclass
class ArrayLiteral(Expression):
    elements: List[Expression] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class ObjectProperty:
    """One ``key: value`` entry of an object literal."""

    key: str
    value: Expression


@dataclass
class ObjectLiteral(Expression):
    properties: List[ObjectProperty] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class BinaryExpression(Expression):
    """Arithmetic or comparison: ``left operator right``."""

    operator: str
    left: Expression
    right: Expression
    line: int = 0
    column: int = 0


@dataclass
class UnaryExpression(Expression):
    operator: str
    operand: Expression
    line: int = 0
    column: int = 0


@dataclass
class AssignmentExpression(Expression):
    """``target = value`` where target is an identifier, member or index."""

    target: Expression
    value: Expression
    line: int = 0
    column: int = 0


@dataclass
class CallExpression(Expression):
    callee: Expression
    arguments: List[Expression] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class MemberExpression(Expression):
    """Property access: ``object.property``."""

    object: Expression
    property: str
    line: int = 0
    column: int = 0


@dataclass
class IndexExpression(Expression):
    object: Expression
    index: Expression
    line: int = 0
    column: int = 0


@dataclass
class Point:
    """An ``(x, y)`` pair used by shape positions and vertices."""

    x: Expression
    y: Expression


EXPRESSION_TYPES = (
    Identifier,
    NumberLiteral,
    StringLiteral,
    ColorLiteral,
    BooleanLiteral,
    NullLiteral,
    ArrayLiteral,
    ObjectLiteral,
    BinaryExpression,
    UnaryExpression,
    AssignmentExpression,
    CallExpression,
    MemberExpression,
    IndexExpression,
)


def is_assignable(expr: Optional[Expression]) -> bool:
    """Return True when *expr* may appear on the left of ``=``."""
    return isinstance(expr, (Identifier, MemberExpression, IndexExpression))


__all__ = [
    "Node",
    "Expression",
    "Statement",
    "Identifier",
    "NumberLiteral",
    "StringLiteral",
    "ColorLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "ArrayLiteral",
    "ObjectProperty",
    "ObjectLiteral",
    "BinaryExpression",
    "UnaryExpression",
    "AssignmentExpression",
    "CallExpression",
    "MemberExpression",
    "IndexExpression",
    "Point",
    "EXPRESSION_TYPES",
    "is_assignable",
]
