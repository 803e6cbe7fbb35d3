"""Tests for animation command translation."""

import pytest

from mflow.codegen import generate
from mflow.lang.parser import parse_program


def frame_lines(commands):
    """Stripped lines of the first generated animate function."""
    program, errors = parse_program("animate {\n" + commands + "\n}")
    assert errors == []
    output = generate(program)
    body = output.split("function animate() {\n", 1)[1]
    lines = []
    for line in body.splitlines():
        stripped = line.strip()
        if stripped == "requestAnimationFrame(animate);":
            break
        lines.append(stripped)
    assert lines[0] == "clear();"
    return lines[1:]


@pytest.mark.parametrize(
    "direction,expected",
    [
        ("right", "animationState.x += 3;"),
        ("left", "animationState.x -= 3;"),
        ("down", "animationState.y += 3;"),
        ("up", "animationState.y -= 3;"),
    ],
)
def test_move_directions(direction, expected):
    assert frame_lines(f"move 3 {direction}") == [expected]


def test_move_without_direction_goes_right():
    assert frame_lines("move 2") == ["animationState.x += 2;"]


def test_delta_commands():
    assert frame_lines("rotate 2\nscale 1.01\nfade 0.01") == [
        "animationState.rotation += 2;",
        "animationState.scale *= 1.01;",
        "animationState.opacity -= 0.01;",
    ]


def test_negative_argument():
    assert frame_lines("move -3 up") == ["animationState.y -= -3;"]


def test_bounce():
    assert frame_lines("bounce") == ["animationState.y = Math.abs(Math.sin(mflow.time * 2)) * 100;"]
    assert frame_lines("bounce 0.5") == [
        "animationState.y = Math.abs(Math.sin(mflow.time * 2)) * 100 * 0.5;"
    ]


def test_wave():
    assert frame_lines("wave 10 2") == ["animationState.x = Math.sin(mflow.time * 2) * 10;"]


def test_orbit_uses_block_scoped_temporary():
    assert frame_lines("orbit 400 300 100 2") == [
        "{",
        "const __orbitAngle = mflow.time * 2;",
        "animationState.x = 400 + Math.cos(__orbitAngle) * 100;",
        "animationState.y = 300 + Math.sin(__orbitAngle) * 100;",
        "}",
    ]


def test_pulse_default_speed():
    assert frame_lines("pulse 0.8 1.2") == [
        "{",
        "const __pulse = (Math.sin(mflow.time * 1) + 1) / 2;",
        "animationState.scale = 0.8 + (1.2 - 0.8) * __pulse;",
        "}",
    ]


def test_wobble_default_and_explicit_speed():
    assert frame_lines("wobble 10") == ["animationState.rotation = Math.sin(mflow.time * 5) * 10;"]
    assert frame_lines("wobble 10 3") == ["animationState.rotation = Math.sin(mflow.time * 3) * 10;"]


def test_spring_defaults():
    assert frame_lines("spring 100 50") == [
        "{",
        "const __stiffness = 0.1;",
        "const __dx = 100 - animationState.x;",
        "const __dy = 50 - animationState.y;",
        "animationState.x += __dx * __stiffness;",
        "animationState.y += __dy * __stiffness;",
        "}",
    ]


def test_spring_damping_scales_step():
    lines = frame_lines("spring 100 50 0.2 0.9")
    assert "const __stiffness = 0.2;" in lines
    assert "animationState.x += __dx * __stiffness * 0.9;" in lines


def test_repeated_commands_do_not_redeclare_temporaries():
    lines = frame_lines("orbit 0 0 10 1\norbit 5 5 10 1")
    assert lines.count("{") == 2


def test_multiple_animate_blocks_get_distinct_names():
    program, _ = parse_program("animate { rotate 1 }\nanimate { rotate 2 }")
    output = generate(program)
    assert "function animate() {" in output
    assert "function animate_2() {" in output
    assert "requestAnimationFrame(animate_2);" in output
    assert output.count("animate_2();") == 1


def test_animate_function_is_started():
    program, _ = parse_program("animate { rotate 1 }")
    output = generate(program)
    assert "  // Animation loop\n  function animate() {\n    clear();\n" in output
    assert "\n  animate();\n" in output
