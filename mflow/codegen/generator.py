"""JavaScript generation from the MFlow AST.

Expressions render to strings; statements are written line by line to an
:class:`~mflow.codegen.emitter.Emitter`.  The output is the runtime
prelude followed by the translated program inside an immediately invoked
``main`` function.

Example:
    >>> from mflow.lang.parser import parse_program
    >>> program, _ = parse_program("let r = 60")
    >>> "let r = 60;" in generate(program)
    True
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence, Set

from mflow.ast import (
    ALL_NODE_TYPES,
    AnimateBlock,
    ArrayLiteral,
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ColorLiteral,
    Expression,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    ImportStatement,
    IndexExpression,
    LetStatement,
    MemberExpression,
    NodeVisitor,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    Program,
    RepeatStatement,
    ReturnStatement,
    SceneBlock,
    Statement,
    StringLiteral,
    UnaryExpression,
    WhileStatement,
)

from .animations import AnimationGenerationMixin
from .emitter import EmittedLine, Emitter
from .literals import format_color, format_number, format_string
from .prelude import DEFAULT_CANVAS_ID, render_prelude
from .shapes import ShapeGenerationMixin

logger = logging.getLogger(__name__)


class JavaScriptGenerator(ShapeGenerationMixin, AnimationGenerationMixin, NodeVisitor):
    """Translate a parsed program into a self-contained browser script."""

    handles = ALL_NODE_TYPES

    def __init__(self, *, canvas_id: str = DEFAULT_CANVAS_ID, fps: Optional[float] = None) -> None:
        self.canvas_id = canvas_id
        self.fps = fps
        self.emitter = Emitter()
        self._function_names: Set[str] = set()

    # ==================================================================
    # Entry points
    # ==================================================================
    def generate(self, program: Program) -> str:
        self.emitter = Emitter()
        self._function_names = set()
        self.visit(program)
        logger.debug("Generated %d line(s) for %d statement(s)", len(self.emitter.lines), len(program.body))
        return self.emitter.render()

    @property
    def lines(self) -> List[EmittedLine]:
        """Emitted lines of the last ``generate`` call, with source lines."""
        return self.emitter.lines

    def expr(self, node: Expression) -> str:
        return self.visit(node)

    def function_name(self, base: str) -> str:
        """*base*, or *base* with the first free ``_N`` suffix, marked as used."""
        name, count = base, 1
        while name in self._function_names:
            count += 1
            name = f"{base}_{count}"
        self._function_names.add(name)
        return name

    # ==================================================================
    # Program and statements
    # ==================================================================
    def visit_Program(self, node: Program) -> None:
        self.emitter.raw(render_prelude(self.canvas_id, self.fps))
        self.emitter.line()
        with self.emitter.block("(function main() {", "})();"):
            self.emit_statements(node.body)

    def emit_statements(self, body: Sequence[Statement]) -> None:
        for statement in body:
            with self.emitter.mapped(statement.line):
                self.visit(statement)

    def visit_LetStatement(self, node: LetStatement) -> None:
        self.emitter.line(self.render_let(node) + ";")

    def render_let(self, node: LetStatement) -> str:
        return f"let {node.identifier.name} = {self.expr(node.value)}"

    def visit_FunctionDeclaration(self, node: FunctionDeclaration) -> None:
        params = ", ".join(param.name for param in node.parameters)
        with self.emitter.block(f"function {node.name.name}({params}) {{"):
            self.emit_statements(node.body)

    def visit_ReturnStatement(self, node: ReturnStatement) -> None:
        if node.value is None:
            self.emitter.line("return;")
        else:
            self.emitter.line(f"return {self.expr(node.value)};")

    def visit_IfStatement(self, node: IfStatement) -> None:
        self.emitter.line(f"if ({self.expr(node.condition)}) {{")
        current = node
        while True:
            with self.emitter.indented():
                self.emit_statements(current.then_branch)
            branch = current.else_branch
            if branch is None:
                break
            if len(branch) == 1 and isinstance(branch[0], IfStatement):
                current = branch[0]
                self.emitter.line(f"}} else if ({self.expr(current.condition)}) {{")
                continue
            self.emitter.line("} else {")
            with self.emitter.indented():
                self.emit_statements(branch)
            break
        self.emitter.line("}")

    def visit_RepeatStatement(self, node: RepeatStatement) -> None:
        header = f"for (let __i = 0; __i < {self.expr(node.times)}; __i++) {{"
        with self.emitter.block(header):
            self.emit_statements(node.body)

    def visit_WhileStatement(self, node: WhileStatement) -> None:
        with self.emitter.block(f"while ({self.expr(node.condition)}) {{"):
            self.emit_statements(node.body)

    def visit_ForStatement(self, node: ForStatement) -> None:
        # The init clause is rendered without its statement terminator.
        if isinstance(node.init, LetStatement):
            init = self.render_let(node.init)
        elif isinstance(node.init, ExpressionStatement):
            init = self.statement_expr(node.init.expression)
        else:
            init = ""
        condition = self.expr(node.condition)
        update = self.statement_expr(node.update) if node.update is not None else ""
        with self.emitter.block(f"for ({init}; {condition}; {update}) {{"):
            self.emit_statements(node.body)

    def visit_AnimateBlock(self, node: AnimateBlock) -> None:
        name = self.function_name("animate")
        self.emitter.line("// Animation loop")
        with self.emitter.block(f"function {name}() {{"):
            self.emitter.line("clear();")
            for command in node.animations:
                with self.emitter.mapped(command.line):
                    self.visit(command)
            self.emitter.line(f"requestAnimationFrame({name});")
        self.emitter.line(f"{name}();")

    def visit_SceneBlock(self, node: SceneBlock) -> None:
        name = self.function_name(f"scene_{node.name}")
        self.emitter.line(f"// Scene: {node.name}")
        with self.emitter.block(f"function {name}() {{"):
            self.emit_statements(node.body)
        self.emitter.line(f"{name}();")

    def visit_ImportStatement(self, node: ImportStatement) -> None:
        # Imports only declare names; the module is expected to be loaded by the host page.
        self.emitter.line(f"// import {format_string(node.module)}")

    def visit_ExpressionStatement(self, node: ExpressionStatement) -> None:
        text = self.statement_expr(node.expression)
        if text.startswith("{"):
            text = f"({text})"
        self.emitter.line(text + ";")

    def statement_expr(self, node: Expression) -> str:
        """Render an expression in statement position, where assignment needs no parentheses."""
        if isinstance(node, AssignmentExpression):
            return self.render_assignment(node)
        return self.expr(node)

    # ==================================================================
    # Expressions
    # ==================================================================
    def visit_Identifier(self, node: Identifier) -> str:
        return node.name

    def visit_NumberLiteral(self, node: NumberLiteral) -> str:
        return format_number(node.value)

    def visit_StringLiteral(self, node: StringLiteral) -> str:
        return format_string(node.value)

    def visit_ColorLiteral(self, node: ColorLiteral) -> str:
        return format_color(node.value)

    def visit_BooleanLiteral(self, node: BooleanLiteral) -> str:
        return "true" if node.value else "false"

    def visit_NullLiteral(self, node: NullLiteral) -> str:
        return "null"

    def visit_ArrayLiteral(self, node: ArrayLiteral) -> str:
        return "[" + ", ".join(self.expr(element) for element in node.elements) + "]"

    def visit_ObjectLiteral(self, node: ObjectLiteral) -> str:
        if not node.properties:
            return "{}"
        entries = ", ".join(
            f"{format_string(prop.key)}: {self.expr(prop.value)}" for prop in node.properties
        )
        return "{ " + entries + " }"

    def visit_BinaryExpression(self, node: BinaryExpression) -> str:
        return f"({self.expr(node.left)} {node.operator} {self.expr(node.right)})"

    def visit_UnaryExpression(self, node: UnaryExpression) -> str:
        operand = self.expr(node.operand)
        if operand.startswith(node.operator):
            return f"{node.operator}({operand})"
        return node.operator + operand

    def visit_AssignmentExpression(self, node: AssignmentExpression) -> str:
        return f"({self.render_assignment(node)})"

    def render_assignment(self, node: AssignmentExpression) -> str:
        return f"{self.expr(node.target)} = {self.expr(node.value)}"

    def visit_CallExpression(self, node: CallExpression) -> str:
        args = ", ".join(self.expr(arg) for arg in node.arguments)
        return f"{self.expr(node.callee)}({args})"

    def visit_MemberExpression(self, node: MemberExpression) -> str:
        target = self.expr(node.object)
        if isinstance(node.object, NumberLiteral):
            target = f"({target})"
        return f"{target}.{node.property}"

    def visit_IndexExpression(self, node: IndexExpression) -> str:
        return f"{self.expr(node.object)}[{self.expr(node.index)}]"


def generate(program: Program, *, canvas_id: str = DEFAULT_CANVAS_ID, fps: Optional[float] = None) -> str:
    """Generate the complete script for *program*."""
    return JavaScriptGenerator(canvas_id=canvas_id, fps=fps).generate(program)


__all__ = ["JavaScriptGenerator", "generate"]
