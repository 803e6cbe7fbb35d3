"""Scope-based semantic analysis for MFlow programs.

The analyzer walks the whole tree once, collecting a ``SemanticError`` for
every undefined identifier, every duplicate declaration within a single
scope, and every attempt to declare a name that the runtime, JavaScript or
the generator reserves.  It never stops early and never modifies the tree.

Scopes: a builtin scope holding the runtime helpers sits beneath the
global scope.  Function bodies (with their parameters), scene bodies and
every other braced block open a nested scope, matching the block scoping
of the generated JavaScript.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from mflow.ast import (
    ALL_NODE_TYPES,
    AnimateBlock,
    Arc,
    ArrayLiteral,
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    Bounce,
    CallExpression,
    Circle,
    ColorLiteral,
    Ellipse,
    ExpressionStatement,
    Fade,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    ImportStatement,
    IndexExpression,
    LetStatement,
    Line,
    MemberExpression,
    Move,
    Node,
    NodeVisitor,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    Orbit,
    Point,
    Polygon,
    Program,
    Pulse,
    Rect,
    RepeatStatement,
    ReturnStatement,
    Rotate,
    Scale,
    SceneBlock,
    Spring,
    StringLiteral,
    Text,
    Triangle,
    UnaryExpression,
    Wave,
    WhileStatement,
    Wobble,
)
from mflow.lang.parser.errors import SemanticError

from .builtins import JS_RESERVED_WORDS, RESERVED_RUNTIME_NAMES, builtin_symbols, is_generated_name
from .scope import ScopeStack, Symbol, SymbolKind

logger = logging.getLogger(__name__)


class SemanticAnalyzer(NodeVisitor):
    """Collects scope diagnostics for a parsed program."""

    handles = ALL_NODE_TYPES

    def __init__(self) -> None:
        self.scopes = ScopeStack(builtin_symbols())
        self.errors: List[SemanticError] = []

    # ------------------------------------------------------------------
    # Public entry point
    # ------------------------------------------------------------------
    def analyze(self, program: Program) -> List[SemanticError]:
        self.scopes = ScopeStack(builtin_symbols())
        self.errors = []
        self.visit(program)
        logger.debug("Semantic analysis finished with %d diagnostic(s)", len(self.errors))
        return list(self.errors)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def report(self, message: str, line: int, column: int) -> None:
        self.errors.append(SemanticError(message=message, line=line, column=column))

    def declare(self, name: str, kind: SymbolKind, line: int, column: int) -> None:
        if name in RESERVED_RUNTIME_NAMES:
            self.report(f"'{name}' is reserved by the MFlow runtime", line, column)
            return
        if name in JS_RESERVED_WORDS:
            self.report(f"'{name}' is a reserved word in JavaScript", line, column)
            return
        if is_generated_name(name):
            self.report(f"'{name}' is reserved for generated code", line, column)
            return
        if not self.scopes.declare(Symbol(name=name, kind=kind, line=line, column=column)):
            self.report(f"Variable '{name}' is already declared in this scope", line, column)

    def resolve(self, name: str, line: int, column: int) -> Optional[Symbol]:
        symbol = self.scopes.lookup(name)
        if symbol is None:
            self.report(f"Undefined variable '{name}'", line, column)
        return symbol

    def visit_all(self, nodes: Iterable[Node]) -> None:
        for node in nodes:
            self.visit(node)

    def visit_optional(self, node: Optional[Node]) -> None:
        if node is not None:
            self.visit(node)

    def visit_block(self, body: Iterable[Node]) -> None:
        with self.scopes.scope():
            self.visit_all(body)

    def visit_point(self, point: Point) -> None:
        self.visit(point.x)
        self.visit(point.y)

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------
    def visit_Program(self, node: Program) -> None:
        self.visit_all(node.body)

    def visit_LetStatement(self, node: LetStatement) -> None:
        # The initializer cannot see the name being declared.
        self.visit(node.value)
        ident = node.identifier
        self.declare(ident.name, SymbolKind.VARIABLE, ident.line, ident.column)

    def visit_FunctionDeclaration(self, node: FunctionDeclaration) -> None:
        self.declare(node.name.name, SymbolKind.FUNCTION, node.name.line, node.name.column)
        with self.scopes.scope():
            for param in node.parameters:
                self.declare(param.name, SymbolKind.PARAMETER, param.line, param.column)
            self.visit_all(node.body)

    def visit_ReturnStatement(self, node: ReturnStatement) -> None:
        self.visit_optional(node.value)

    def visit_IfStatement(self, node: IfStatement) -> None:
        self.visit(node.condition)
        self.visit_block(node.then_branch)
        if node.else_branch is not None:
            self.visit_block(node.else_branch)

    def visit_RepeatStatement(self, node: RepeatStatement) -> None:
        self.visit(node.times)
        self.visit_block(node.body)

    def visit_WhileStatement(self, node: WhileStatement) -> None:
        self.visit(node.condition)
        self.visit_block(node.body)

    def visit_ForStatement(self, node: ForStatement) -> None:
        with self.scopes.scope():
            self.visit_optional(node.init)
            self.visit(node.condition)
            self.visit_optional(node.update)
            self.visit_block(node.body)

    def visit_AnimateBlock(self, node: AnimateBlock) -> None:
        self.visit_all(node.animations)

    def visit_SceneBlock(self, node: SceneBlock) -> None:
        self.visit_block(node.body)

    def visit_ImportStatement(self, node: ImportStatement) -> None:
        for name in node.names:
            self.declare(name.name, SymbolKind.IMPORT, name.line, name.column)

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> None:
        self.visit(node.expression)

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------
    def visit_Identifier(self, node: Identifier) -> None:
        self.resolve(node.name, node.line, node.column)

    def visit_NumberLiteral(self, node: NumberLiteral) -> None:
        pass

    def visit_StringLiteral(self, node: StringLiteral) -> None:
        pass

    def visit_ColorLiteral(self, node: ColorLiteral) -> None:
        pass

    def visit_BooleanLiteral(self, node: BooleanLiteral) -> None:
        pass

    def visit_NullLiteral(self, node: NullLiteral) -> None:
        pass

    def visit_ArrayLiteral(self, node: ArrayLiteral) -> None:
        self.visit_all(node.elements)

    def visit_ObjectLiteral(self, node: ObjectLiteral) -> None:
        self.visit_all(prop.value for prop in node.properties)

    def visit_BinaryExpression(self, node: BinaryExpression) -> None:
        self.visit(node.left)
        self.visit(node.right)

    def visit_UnaryExpression(self, node: UnaryExpression) -> None:
        self.visit(node.operand)

    def visit_AssignmentExpression(self, node: AssignmentExpression) -> None:
        self.visit(node.target)
        self.visit(node.value)

    def visit_CallExpression(self, node: CallExpression) -> None:
        self.visit(node.callee)
        self.visit_all(node.arguments)

    def visit_MemberExpression(self, node: MemberExpression) -> None:
        self.visit(node.object)

    def visit_IndexExpression(self, node: IndexExpression) -> None:
        self.visit(node.object)
        self.visit(node.index)

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------
    def visit_Circle(self, node: Circle) -> None:
        self.visit_point(node.position)
        self.visit_all((node.size, node.color))

    def visit_Rect(self, node: Rect) -> None:
        self.visit_point(node.position)
        self.visit_all((node.width, node.height, node.color))

    def visit_Line(self, node: Line) -> None:
        self.visit_point(node.start)
        self.visit_point(node.end)
        self.visit(node.color)

    def visit_Triangle(self, node: Triangle) -> None:
        for point in node.points:
            self.visit_point(point)
        self.visit(node.color)

    def visit_Polygon(self, node: Polygon) -> None:
        self.visit_point(node.position)
        self.visit_all((node.sides, node.radius, node.color))
        self.visit_optional(node.rotation)

    def visit_Ellipse(self, node: Ellipse) -> None:
        self.visit_point(node.position)
        self.visit_all((node.radius_x, node.radius_y, node.color))
        self.visit_optional(node.rotation)

    def visit_Arc(self, node: Arc) -> None:
        self.visit_point(node.position)
        self.visit_all((node.radius, node.start_angle, node.end_angle, node.color))

    def visit_Text(self, node: Text) -> None:
        self.visit_point(node.position)
        self.visit_all((node.content, node.color))
        self.visit_optional(node.font)
        self.visit_optional(node.size)

    # ------------------------------------------------------------------
    # Animation commands: arguments are only checked as expressions
    # ------------------------------------------------------------------
    def visit_Move(self, node: Move) -> None:
        self.visit(node.amount)

    def visit_Rotate(self, node: Rotate) -> None:
        self.visit(node.angle)

    def visit_Scale(self, node: Scale) -> None:
        self.visit(node.factor)

    def visit_Fade(self, node: Fade) -> None:
        self.visit(node.amount)

    def visit_Bounce(self, node: Bounce) -> None:
        self.visit_optional(node.damping)

    def visit_Wave(self, node: Wave) -> None:
        self.visit_all((node.amplitude, node.frequency))

    def visit_Orbit(self, node: Orbit) -> None:
        self.visit_all((node.center_x, node.center_y, node.radius, node.speed))

    def visit_Pulse(self, node: Pulse) -> None:
        self.visit_all((node.min_scale, node.max_scale))
        self.visit_optional(node.speed)

    def visit_Wobble(self, node: Wobble) -> None:
        self.visit(node.amount)
        self.visit_optional(node.speed)

    def visit_Spring(self, node: Spring) -> None:
        self.visit_all((node.target_x, node.target_y))
        self.visit_optional(node.stiffness)
        self.visit_optional(node.damping)


def analyze(program: Program) -> List[SemanticError]:
    """Run semantic analysis and return every diagnostic found."""
    return SemanticAnalyzer().analyze(program)


__all__ = ["SemanticAnalyzer", "analyze"]
