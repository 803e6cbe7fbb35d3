"""Statement AST nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .animations import AnimationCommand
from .base import Expression, Identifier, Statement


@dataclass
class LetStatement(Statement):
    """``let name = value``"""

    identifier: Identifier
    value: Expression
    line: int = 0
    column: int = 0


@dataclass
class FunctionDeclaration(Statement):
    """``fn name(a, b) { ... }``"""

    name: Identifier
    parameters: List[Identifier] = field(default_factory=list)
    body: List[Statement] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class ReturnStatement(Statement):
    value: Optional[Expression] = None
    line: int = 0
    column: int = 0


@dataclass
class IfStatement(Statement):
    """``if cond { ... } else { ... }``

    ``else if`` is stored as an else branch holding a single ``IfStatement``.
    """

    condition: Expression
    then_branch: List[Statement] = field(default_factory=list)
    else_branch: Optional[List[Statement]] = None
    line: int = 0
    column: int = 0


@dataclass
class RepeatStatement(Statement):
    """``repeat n { ... }``: run the body ``n`` times."""

    times: Expression
    body: List[Statement] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class WhileStatement(Statement):
    condition: Expression
    body: List[Statement] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class ExpressionStatement(Statement):
    expression: Expression
    line: int = 0
    column: int = 0


ForInit = Union[LetStatement, ExpressionStatement]


@dataclass
class ForStatement(Statement):
    """``for (init; condition; update) { ... }``"""

    init: Optional[ForInit]
    condition: Expression
    update: Optional[Expression] = None
    body: List[Statement] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class AnimateBlock(Statement):
    animations: List[AnimationCommand] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class SceneBlock(Statement):
    name: str
    body: List[Statement] = field(default_factory=list)
    line: int = 0
    column: int = 0


@dataclass
class ImportStatement(Statement):
    """``import "module"`` or ``import a, b from "module"``"""

    module: str
    names: List[Identifier] = field(default_factory=list)
    line: int = 0
    column: int = 0


STATEMENT_TYPES = (
    LetStatement,
    FunctionDeclaration,
    ReturnStatement,
    IfStatement,
    RepeatStatement,
    WhileStatement,
    ForStatement,
    AnimateBlock,
    SceneBlock,
    ImportStatement,
    ExpressionStatement,
)


__all__ = [
    "LetStatement",
    "FunctionDeclaration",
    "ReturnStatement",
    "IfStatement",
    "RepeatStatement",
    "WhileStatement",
    "ForStatement",
    "ForInit",
    "AnimateBlock",
    "SceneBlock",
    "ImportStatement",
    "ExpressionStatement",
    "STATEMENT_TYPES",
]
