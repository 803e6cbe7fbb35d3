"""Core AST-based formatting for MFlow source."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

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
    Expression,
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
    Statement,
    StringLiteral,
    Text,
    Triangle,
    UnaryExpression,
    Wave,
    WhileStatement,
    Wobble,
)
from mflow.codegen.literals import format_number, format_string
from mflow.lang.parser import parse_program

_BARE_KEY = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

# Binding strength of each expression form; operands weaker than their
# context are parenthesised.
ASSIGNMENT = 1
COMPARISON = 2
ADDITIVE = 3
MULTIPLICATIVE = 4
UNARY = 5
POSTFIX = 6
PRIMARY = 7

BINARY_PRECEDENCE = {
    "==": COMPARISON,
    "!=": COMPARISON,
    "<": COMPARISON,
    ">": COMPARISON,
    "<=": COMPARISON,
    ">=": COMPARISON,
    "+": ADDITIVE,
    "-": ADDITIVE,
    "*": MULTIPLICATIVE,
    "/": MULTIPLICATIVE,
    "%": MULTIPLICATIVE,
}

_PRIMARY_TYPES = (
    Identifier,
    NumberLiteral,
    StringLiteral,
    ColorLiteral,
    BooleanLiteral,
    NullLiteral,
    ArrayLiteral,
    ObjectLiteral,
)

_BLOCK_STATEMENTS = (
    FunctionDeclaration,
    IfStatement,
    RepeatStatement,
    WhileStatement,
    ForStatement,
    AnimateBlock,
    SceneBlock,
)


def precedence(node: Expression) -> int:
    if isinstance(node, _PRIMARY_TYPES):
        return PRIMARY
    if isinstance(node, (CallExpression, MemberExpression, IndexExpression)):
        return POSTFIX
    if isinstance(node, UnaryExpression):
        return UNARY
    if isinstance(node, BinaryExpression):
        return BINARY_PRECEDENCE.get(node.operator, COMPARISON)
    # Assignments and shapes extend as far right as they can.
    return ASSIGNMENT


@dataclass
class FormattingOptions:
    """Configuration options for source formatting."""

    indent_size: int = 2
    insert_final_newline: bool = True
    blank_line_around_blocks: bool = True


@dataclass
class FormattedResult:
    """Result of a formatting operation."""

    formatted_text: str
    is_changed: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def success(self) -> bool:
        """Check if formatting was successful."""
        return len(self.errors) == 0


class SourceFormatter(NodeVisitor):
    """
    Re-prints a parsed MFlow program in canonical layout.

    One statement per line, ``indent_size`` spaces per block level, single
    spaces around binary operators and minimal parentheses.  Comments are
    not part of the tree and are therefore dropped.
    """

    handles = ALL_NODE_TYPES

    def __init__(self, options: Optional[FormattingOptions] = None):
        self.options = options or FormattingOptions()
        self._indent_str = " " * self.options.indent_size
        self._lines: List[str] = []
        self._level = 0

    def format_source(self, source_text: str, file_path: str = "untitled.mflow") -> FormattedResult:
        """
        Format a complete MFlow document.

        On parse errors the original text is returned unchanged together
        with the error messages.
        """
        program, parse_errors = parse_program(source_text, path=file_path)
        if parse_errors:
            return FormattedResult(
                formatted_text=source_text,
                is_changed=False,
                errors=[str(error) for error in parse_errors],
            )

        formatted = self.format_program(program)

        # Never hand back text that no longer parses.
        _, reparse_errors = parse_program(formatted, path=file_path)
        if reparse_errors:
            return FormattedResult(
                formatted_text=source_text,
                is_changed=False,
                warnings=["Formatted output would not parse; source left unchanged"],
            )
        return FormattedResult(
            formatted_text=formatted,
            is_changed=formatted != source_text,
        )

    def format_program(self, program: Program) -> str:
        self._lines = []
        self._level = 0
        self.visit(program)
        text = "\n".join(line.rstrip() for line in self._lines)
        if self.options.insert_final_newline and text:
            text += "\n"
        return text

    # ------------------------------------------------------------------
    # Output helpers
    # ------------------------------------------------------------------
    def emit(self, text: str) -> None:
        self._lines.append(self._indent_str * self._level + text)

    def emit_body(self, body: Sequence[Statement]) -> None:
        self._level += 1
        self.emit_statements(body)
        self._level -= 1

    def emit_statements(self, body: Sequence[Statement]) -> None:
        previous = None
        for statement in body:
            if previous is not None and self._needs_blank_line(previous, statement):
                self._lines.append("")
            self.visit(statement)
            previous = statement

    def _needs_blank_line(self, previous: Statement, current: Statement) -> bool:
        if not self.options.blank_line_around_blocks or self._level > 0:
            return False
        return isinstance(previous, _BLOCK_STATEMENTS) or isinstance(current, _BLOCK_STATEMENTS)

    def fmt(self, node: Expression, min_precedence: int = ASSIGNMENT) -> str:
        text = self.visit(node)
        if precedence(node) < min_precedence:
            return f"({text})"
        return text

    def arg(self, node: Expression) -> str:
        """Animation arguments are primaries with an optional leading minus."""
        if isinstance(node, UnaryExpression) and node.operator == "-":
            return "-" + self.fmt(node.operand, PRIMARY)
        return self.fmt(node, PRIMARY)

    def point(self, point: Point) -> str:
        return f"({self.fmt(point.x)}, {self.fmt(point.y)})"

    # ------------------------------------------------------------------
    # Program and statements
    # ------------------------------------------------------------------
    def visit_Program(self, node: Program) -> None:
        self.emit_statements(node.body)

    def render_let(self, node: LetStatement) -> str:
        return f"let {node.identifier.name} = {self.fmt(node.value)}"

    def visit_LetStatement(self, node: LetStatement) -> None:
        self.emit(self.render_let(node))

    def visit_FunctionDeclaration(self, node: FunctionDeclaration) -> None:
        params = ", ".join(param.name for param in node.parameters)
        self.emit(f"fn {node.name.name}({params}) {{")
        self.emit_body(node.body)
        self.emit("}")

    def visit_ReturnStatement(self, node: ReturnStatement) -> None:
        self.emit("return" if node.value is None else f"return {self.fmt(node.value)}")

    def visit_IfStatement(self, node: IfStatement) -> None:
        self.emit(f"if {self.fmt(node.condition)} {{")
        current = node
        while True:
            self.emit_body(current.then_branch)
            branch = current.else_branch
            if branch is None:
                break
            if len(branch) == 1 and isinstance(branch[0], IfStatement):
                current = branch[0]
                self.emit(f"}} else if {self.fmt(current.condition)} {{")
                continue
            self.emit("} else {")
            self.emit_body(branch)
            break
        self.emit("}")

    def visit_RepeatStatement(self, node: RepeatStatement) -> None:
        self.emit(f"repeat {self.fmt(node.times)} {{")
        self.emit_body(node.body)
        self.emit("}")

    def visit_WhileStatement(self, node: WhileStatement) -> None:
        self.emit(f"while {self.fmt(node.condition)} {{")
        self.emit_body(node.body)
        self.emit("}")

    def visit_ForStatement(self, node: ForStatement) -> None:
        if isinstance(node.init, LetStatement):
            init = self.render_let(node.init)
        elif isinstance(node.init, ExpressionStatement):
            init = self.fmt(node.init.expression)
        else:
            init = ""
        update = f" {self.fmt(node.update)}" if node.update is not None else ""
        self.emit(f"for ({init}; {self.fmt(node.condition)};{update}) {{")
        self.emit_body(node.body)
        self.emit("}")

    def visit_AnimateBlock(self, node: AnimateBlock) -> None:
        self.emit("animate {")
        self._level += 1
        for command in node.animations:
            self.emit(self.visit(command))
        self._level -= 1
        self.emit("}")

    def visit_SceneBlock(self, node: SceneBlock) -> None:
        self.emit(f"scene {node.name} {{")
        self.emit_body(node.body)
        self.emit("}")

    def visit_ImportStatement(self, node: ImportStatement) -> None:
        module = format_string(node.module)
        if node.names:
            names = ", ".join(name.name for name in node.names)
            self.emit(f"import {names} from {module}")
        else:
            self.emit(f"import {module}")

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> None:
        self.emit(self.fmt(node.expression))

    # ------------------------------------------------------------------
    # Expressions
    # ------------------------------------------------------------------
    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_NumberLiteral(self, node: NumberLiteral) -> str:
        return format_number(node.value)

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        return format_string(node.value)

    def visit_ColorLiteral(self, node: ColorLiteral) -> str:
        return node.value

    def visit_BooleanLiteral(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def visit_NullLiteral(self, node: NullLiteral) -> str:
        return "null"

    def visit_ArrayLiteral(self, node: ArrayLiteral) -> str:
        return "[" + ", ".join(self.fmt(element) for element in node.elements) + "]"

    def visit_ObjectLiteral(self, node: ObjectLiteral) -> str:
        if not node.properties:
            return "{}"
        entries = []
        for prop in node.properties:
            key = prop.key if _BARE_KEY.match(prop.key) else format_string(prop.key)
            entries.append(f"{key}: {self.fmt(prop.value)}")
        return "{ " + ", ".join(entries) + " }"

    def visit_BinaryExpression(self, node: BinaryExpression) -> str:
        level = precedence(node)
        left = self.fmt(node.left, level)
        right = self.fmt(node.right, level + 1)
        return f"{left} {node.operator} {right}"

    def visit_UnaryExpression(self, node: UnaryExpression) -> str:
        return node.operator + self.fmt(node.operand, UNARY)

    def visit_AssignmentExpression(self, node: AssignmentExpression) -> str:
        return f"{self.fmt(node.target, POSTFIX)} = {self.fmt(node.value)}"

    def visit_CallExpression(self, node: CallExpression) -> str:
        args = ", ".join(self.fmt(arg) for arg in node.arguments)
        return f"{self.fmt(node.callee, POSTFIX)}({args})"

    def visit_MemberExpression(self, node: MemberExpression) -> str:
        target = self.fmt(node.object, POSTFIX)
        if isinstance(node.object, NumberLiteral):
            target = f"({target})"
        return f"{target}.{node.property}"

    def visit_IndexExpression(self, node: IndexExpression) -> str:
        return f"{self.fmt(node.object, POSTFIX)}[{self.fmt(node.index)}]"

    # ------------------------------------------------------------------
    # Shapes
    # ------------------------------------------------------------------
    def visit_Circle(self, node: Circle) -> str:
        return (
            f"circle at {self.point(node.position)} size {self.fmt(node.size)} "
            f"color {self.fmt(node.color)}"
        )

    def visit_Rect(self, node: Rect) -> str:
        return (
            f"rect at {self.point(node.position)} width {self.fmt(node.width)} "
            f"height {self.fmt(node.height)} color {self.fmt(node.color)}"
        )

    def visit_Line(self, node: Line) -> str:
        return f"line {self.point(node.start)} {self.point(node.end)} color {self.fmt(node.color)}"

    def visit_Triangle(self, node: Triangle) -> str:
        points = " ".join(self.point(point) for point in node.points)
        return f"triangle {points} color {self.fmt(node.color)}"

    def visit_Polygon(self, node: Polygon) -> str:
        text = (
            f"polygon at {self.point(node.position)} sides {self.fmt(node.sides)} "
            f"radius {self.fmt(node.radius)} color {self.fmt(node.color)}"
        )
        if node.rotation is not None:
            text += f" rotate {self.fmt(node.rotation)}"
        return text

    def visit_Ellipse(self, node: Ellipse) -> str:
        text = (
            f"ellipse at {self.point(node.position)} {self.fmt(node.radius_x)} "
            f"{self.fmt(node.radius_y)} color {self.fmt(node.color)}"
        )
        if node.rotation is not None:
            text += f" rotate {self.fmt(node.rotation)}"
        return text

    def visit_Arc(self, node: Arc) -> str:
        return (
            f"arc at {self.point(node.position)} radius {self.fmt(node.radius)} "
            f"startAngle {self.fmt(node.start_angle)} endAngle {self.fmt(node.end_angle)} "
            f"color {self.fmt(node.color)}"
        )

    def visit_Text(self, node: Text) -> str:
        text = (
            f"text at {self.point(node.position)} {self.fmt(node.content, PRIMARY)} "
            f"color {self.fmt(node.color)}"
        )
        if node.font is not None:
            text += f" font {self.fmt(node.font)}"
        if node.size is not None:
            text += f" size {self.fmt(node.size)}"
        return text

    # ------------------------------------------------------------------
    # Animation commands
    # ------------------------------------------------------------------
    def visit_Move(self, node: Move) -> str:
        return f"move {self.arg(node.amount)} {node.direction}"

    def visit_Rotate(self, node: Rotate) -> str:
        return f"rotate {self.arg(node.angle)}"

    def visit_Scale(self, node: Scale) -> str:
        return f"scale {self.arg(node.factor)}"

    def visit_Fade(self, node: Fade) -> str:
        return f"fade {self.arg(node.amount)}"

    def visit_Bounce(self, node: Bounce) -> str:
        return "bounce" if node.damping is None else f"bounce {self.arg(node.damping)}"

    def visit_Wave(self, node: Wave) -> str:
        return f"wave {self.arg(node.amplitude)} {self.arg(node.frequency)}"

    def visit_Orbit(self, node: Orbit) -> str:
        args = (node.center_x, node.center_y, node.radius, node.speed)
        return "orbit " + " ".join(self.arg(value) for value in args)

    def visit_Pulse(self, node: Pulse) -> str:
        text = f"pulse {self.arg(node.min_scale)} {self.arg(node.max_scale)}"
        if node.speed is not None:
            text += f" {self.arg(node.speed)}"
        return text

    def visit_Wobble(self, node: Wobble) -> str:
        text = f"wobble {self.arg(node.amount)}"
        if node.speed is not None:
            text += f" {self.arg(node.speed)}"
        return text

    def visit_Spring(self, node: Spring) -> str:
        text = f"spring {self.arg(node.target_x)} {self.arg(node.target_y)}"
        for optional in (node.stiffness, node.damping):
            if optional is None:
                break
            text += f" {self.arg(optional)}"
        return text


def format_source(source_text: str, options: Optional[FormattingOptions] = None) -> FormattedResult:
    """Format *source_text* with a fresh :class:`SourceFormatter`."""
    return SourceFormatter(options).format_source(source_text)


__all__ = [
    "FormattedResult",
    "FormattingOptions",
    "SourceFormatter",
    "format_source",
    "precedence",
]
