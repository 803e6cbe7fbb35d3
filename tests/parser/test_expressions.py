"""Tests for expression parsing and precedence."""

from __future__ import annotations

import pytest

from mflow.ast import (
    ArrayLiteral,
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ColorLiteral,
    Identifier,
    IndexExpression,
    MemberExpression,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    StringLiteral,
    UnaryExpression,
)
from mflow.lang.parser import parse_program


def expr(source: str):
    program, errors = parse_program(source)
    assert errors == []
    assert len(program.body) == 1
    return program.body[0].expression


def test_multiplication_binds_tighter_than_addition() -> None:
    node = expr("1 + 2 * 3")
    assert isinstance(node, BinaryExpression)
    assert node.operator == "+"
    assert isinstance(node.right, BinaryExpression)
    assert node.right.operator == "*"


def test_binary_operators_are_left_associative() -> None:
    node = expr("10 - 4 - 3")
    assert node.operator == "-"
    assert isinstance(node.left, BinaryExpression)
    assert node.left.left.value == 10
    assert node.right.value == 3


def test_comparisons_do_not_chain() -> None:
    """``a < b < c`` is ``(a < b) < c``."""
    node = expr("1 < 2 < 3")
    assert node.operator == "<"
    assert isinstance(node.left, BinaryExpression)
    assert node.left.operator == "<"
    assert node.right.value == 3


def test_comparison_is_weaker_than_addition() -> None:
    node = expr("1 + 1 == 2")
    assert node.operator == "=="
    assert node.left.operator == "+"


def test_parentheses_override_precedence() -> None:
    node = expr("(1 + 2) * 3")
    assert node.operator == "*"
    assert node.left.operator == "+"


def test_unary_minus() -> None:
    node = expr("-x * 2")
    assert node.operator == "*"
    assert isinstance(node.left, UnaryExpression)
    assert isinstance(node.left.operand, Identifier)


def test_assignment_is_right_associative() -> None:
    node = expr("a = b = 3")
    assert isinstance(node, AssignmentExpression)
    assert isinstance(node.value, AssignmentExpression)


def test_postfix_chain() -> None:
    node = expr("shapes[0].size(2)")
    assert isinstance(node, CallExpression)
    member = node.callee
    assert isinstance(member, MemberExpression)
    assert member.property == "size"
    assert isinstance(member.object, IndexExpression)


def test_member_name_may_be_keyword() -> None:
    node = expr("layout.circle")
    assert isinstance(node, MemberExpression)
    assert node.property == "circle"


@pytest.mark.parametrize(
    "source,node_type",
    [
        ("42", NumberLiteral),
        ('"hi"', StringLiteral),
        ("#FF00FF", ColorLiteral),
        ("true", BooleanLiteral),
        ("null", NullLiteral),
        ("[1, 2, 3]", ArrayLiteral),
        ("{ x: 1 }", ObjectLiteral),
    ],
)
def test_primary_literals(source: str, node_type: type) -> None:
    assert isinstance(expr(source), node_type)


def test_object_literal_keys() -> None:
    node = expr('{ x: 1, "full name": "a", color: #fff, }')
    assert [p.key for p in node.properties] == ["x", "full name", "color"]


def test_array_trailing_comma() -> None:
    node = expr("[1, 2,]")
    assert len(node.elements) == 2


def test_newline_ends_expression() -> None:
    program, errors = parse_program("let a = 1\n-2")
    assert errors == []
    assert len(program.body) == 2
    assert isinstance(program.body[1].expression, UnaryExpression)


def test_call_on_next_line_is_new_statement() -> None:
    program, errors = parse_program("let f = 1\n(2)")
    assert errors == []
    assert len(program.body) == 2


def test_invalid_assignment_target() -> None:
    _, errors = parse_program("1 = 2")
    assert len(errors) == 1
    assert "Invalid assignment target" in str(errors[0])
