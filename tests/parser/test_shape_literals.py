"""Tests for shape literal and animation command grammars."""

from __future__ import annotations

import pytest

from mflow.ast import (
    Arc,
    Bounce,
    Circle,
    Ellipse,
    Identifier,
    Line,
    Move,
    Orbit,
    Polygon,
    Pulse,
    Rect,
    Spring,
    StringLiteral,
    Text,
    Triangle,
    UnaryExpression,
    Wave,
    Wobble,
)
from mflow.lang.parser import parse_program


def shape(source: str):
    program, errors = parse_program(source)
    assert errors == []
    return program.body[0].expression


def commands(body: str):
    program, errors = parse_program("animate {\n" + body + "\n}")
    assert errors == []
    return program.body[0].animations


class TestShapes:
    """The eight shape grammars."""

    def test_circle(self):
        node = shape("circle at (150, 200) size 60 color #F5A623")
        assert isinstance(node, Circle)
        assert node.position.x.value == 150
        assert node.position.y.value == 200
        assert node.size.value == 60
        assert node.color.value == "#F5A623"

    def test_rect(self):
        node = shape("rect at (0, 0) width 10 height 20 color #000")
        assert isinstance(node, Rect)
        assert (node.width.value, node.height.value) == (10, 20)

    def test_line(self):
        node = shape("line (0, 0) (10, 10) color #fff")
        assert isinstance(node, Line)
        assert node.end.x.value == 10

    def test_triangle(self):
        node = shape("triangle (0, 0) (10, 0) (5, 8) color #0f0")
        assert isinstance(node, Triangle)
        assert len(node.points) == 3

    def test_polygon_with_rotation(self):
        node = shape("polygon at (50, 50) sides 6 radius 20 color #00f rotate 30")
        assert isinstance(node, Polygon)
        assert node.rotation.value == 30

    def test_polygon_rotation_is_optional(self):
        assert shape("polygon at (50, 50) sides 6 radius 20 color #00f").rotation is None

    def test_ellipse(self):
        node = shape("ellipse at (10, 10) 30 15 color #abc")
        assert isinstance(node, Ellipse)
        assert (node.radius_x.value, node.radius_y.value) == (30, 15)

    def test_arc_is_clockwise(self):
        node = shape("arc at (0, 0) radius 5 startAngle 0 endAngle 90 color #123")
        assert isinstance(node, Arc)
        assert node.counterclockwise is False

    def test_text_with_string_and_options(self):
        node = shape('text at (10, 20) "Hello" color #fff font "serif" size 24')
        assert isinstance(node, Text)
        assert isinstance(node.content, StringLiteral)
        assert node.font.value == "serif"
        assert node.size.value == 24

    def test_text_with_identifier_content(self):
        program, errors = parse_program('let label = "x"\ntext at (0, 0) label color #fff')
        assert errors == []
        assert isinstance(program.body[1].expression.content, Identifier)

    def test_fields_take_full_expressions(self):
        node = shape("circle at (1 + 2, 3 * 4) size 5 - 1 color #fff")
        assert node.position.x.operator == "+"
        assert node.size.operator == "-"

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("circle (1, 2) size 3 color #fff", 'Expected "at" after circle'),
            ("circle at (1, 2) color #fff size 3", 'Expected "size" keyword'),
            ("rect at (1, 2) width 3 color #fff", 'Expected "height" keyword'),
            ("circle at (1 2) size 3 color #fff", "Expected , in position"),
        ],
    )
    def test_missing_field_names_expected_word(self, source, expected):
        _, errors = parse_program(source)
        assert errors
        assert expected in errors[0].message

    def test_misspelled_field_gets_suggestion(self):
        _, errors = parse_program("circle at (1, 2) size 3 colour #fff")
        assert "did you mean 'color'" in errors[0].message


class TestAnimationCommands:
    """Animation command arguments."""

    def test_move_defaults_to_right(self):
        (move,) = commands("move 3")
        assert isinstance(move, Move)
        assert move.direction == "right"

    @pytest.mark.parametrize("direction", ["up", "down", "left", "right"])
    def test_move_directions(self, direction):
        (move,) = commands(f"move 3 {direction}")
        assert move.direction == direction

    def test_negative_argument(self):
        (move,) = commands("move -3 up")
        assert isinstance(move.amount, UnaryExpression)

    def test_bounce_without_damping(self):
        (bounce,) = commands("bounce")
        assert isinstance(bounce, Bounce)
        assert bounce.damping is None

    def test_bounce_damping_on_same_line_only(self):
        bounce, rotate = commands("bounce\nrotate 2")
        assert bounce.damping is None
        assert rotate.angle.value == 2

    def test_wave(self):
        (wave,) = commands("wave 10 2")
        assert isinstance(wave, Wave)
        assert (wave.amplitude.value, wave.frequency.value) == (10, 2)

    def test_orbit(self):
        (orbit,) = commands("orbit 400 300 100 2")
        assert isinstance(orbit, Orbit)
        assert orbit.speed.value == 2

    def test_pulse_optional_speed(self):
        slow, fast = commands("pulse 0.8 1.2\npulse 0.5 1 3")
        assert isinstance(slow, Pulse)
        assert slow.speed is None
        assert fast.speed.value == 3

    def test_wobble(self):
        (wobble,) = commands("wobble 10 4")
        assert isinstance(wobble, Wobble)
        assert wobble.speed.value == 4

    def test_spring_optional_arguments(self):
        plain, stiff, damped = commands("spring 1 2\nspring 1 2 0.3\nspring 1 2 0.3 0.9")
        assert isinstance(plain, Spring)
        assert plain.stiffness is None and plain.damping is None
        assert stiff.stiffness.value == 0.3 and stiff.damping is None
        assert damped.damping.value == 0.9

    def test_unknown_command_suggests_keyword(self):
        program, errors = parse_program("animate {\n  rotat 2\n  move 1\n}")
        assert len(errors) == 1
        assert "Unknown animation command 'rotat'" in errors[0].message
        assert "did you mean 'rotate'" in errors[0].message
        assert len(program.body[0].animations) == 1
