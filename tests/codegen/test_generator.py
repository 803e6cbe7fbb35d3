"""Tests for JavaScript generation of statements, expressions and shapes."""

import pytest

from mflow.ast import ALL_NODE_TYPES, NodeVisitor
from mflow.codegen import JavaScriptGenerator, generate
from mflow.lang.parser import parse_program


def js(source, **kwargs):
    program, errors = parse_program(source)
    assert errors == []
    return generate(program, **kwargs)


def body_lines(source):
    """Stripped lines of the translated program (prelude excluded)."""
    output = js(source)
    body = output.split("(function main() {\n", 1)[1]
    return [line.strip() for line in body.splitlines()]


class TestProgramLayout:
    """Overall shape of the generated script."""

    def test_prelude_then_main(self):
        output = js("let a = 1")
        assert output.startswith("// MFlow compiled output\n")
        assert "\n\n(function main() {\n  let a = 1;\n})();\n" in output
        assert output.endswith("})();\n")

    def test_empty_program_still_has_runtime(self):
        output = js("")
        assert "const mflow = {" in output
        assert output.endswith("(function main() {\n})();\n")

    def test_generation_is_deterministic(self, sample_program):
        program, _ = parse_program(sample_program)
        generator = JavaScriptGenerator()
        assert generator.generate(program) == generator.generate(program)
        assert generate(program) == generate(program)

    def test_canvas_id(self):
        output = js("let a = 1", canvas_id="stage")
        assert 'document.getElementById("stage");' in output
        assert 'console.error("Canvas not found: stage");' in output


class TestStatements:
    """Statement translation."""

    def test_function_declaration(self):
        assert body_lines("fn add(a, b) {\n  return a + b\n}")[:3] == [
            "function add(a, b) {",
            "return (a + b);",
            "}",
        ]

    def test_bare_return(self):
        assert "return;" in body_lines("fn f() {\n  return\n}")

    def test_if_else_if_chain(self):
        lines = body_lines("let x = 1\nif x < 1 { x = 2 } else if x > 3 { x = 4 } else { x = 5 }")
        assert lines[1:8] == [
            "if ((x < 1)) {",
            "x = 2;",
            "} else if ((x > 3)) {",
            "x = 4;",
            "} else {",
            "x = 5;",
            "}",
        ]

    def test_repeat_emits_exactly_one_loop_header(self):
        output = js("repeat 5 {\n  circle at (1, 2) size 3 color #fff\n}")
        assert output.count("for (let __i = 0; __i < 5; __i++) {") == 1

    def test_while(self):
        assert "while ((n > 0)) {" in body_lines("let n = 3\nwhile n > 0 { n = n - 1 }")

    def test_for_header_has_no_stray_terminators(self):
        lines = body_lines("for (let i = 0; i < 3; i = i + 1) { i }")
        assert lines[0] == "for (let i = 0; (i < 3); i = (i + 1)) {"

    def test_for_with_expression_init_and_no_update(self):
        lines = body_lines("let i = 5\nfor (i = 0; i < 3;) { i = i + 1 }")
        assert lines[1] == "for (i = 0; (i < 3); ) {"

    def test_scene_functions(self):
        lines = body_lines("scene intro { let a = 1 }\nscene intro { let b = 2 }")
        assert "// Scene: intro" in lines
        assert "function scene_intro() {" in lines
        assert "scene_intro();" in lines
        assert "function scene_intro_2() {" in lines
        assert "scene_intro_2();" in lines

    def test_scene_suffix_never_reuses_a_name(self):
        lines = body_lines("scene foo { let a = 1 }\nscene foo { let b = 2 }\nscene foo_2 { let c = 3 }")
        declared = [line for line in lines if line.startswith("function scene_")]
        assert declared == [
            "function scene_foo() {",
            "function scene_foo_2() {",
            "function scene_foo_2_2() {",
        ]
        assert len(set(declared)) == 3

    def test_import_becomes_comment(self):
        assert '// import "shapes"' in body_lines('import star from "shapes"')


class TestExpressions:
    """Expression rendering."""

    @pytest.mark.parametrize(
        "source,expected",
        [
            ("let a = 1 + 2 * 3", "let a = (1 + (2 * 3));"),
            ("let a = (1 + 2) * 3", "let a = ((1 + 2) * 3);"),
            ("let a = -2", "let a = -2;"),
            ("let a = 1\nlet b = - -a", "let b = -(-a);"),
            ('let a = "say \\"hi\\""', 'let a = "say \\"hi\\"";'),
            ("let a = #F5A623", 'let a = "#F5A623";'),
            ("let a = [1, true, null]", "let a = [1, true, null];"),
            ("let a = 0.5", "let a = 0.5;"),
            ("let a = 1e21", "let a = 1e+21;"),
            ("let a = { x: 1, y: 2 }", 'let a = { "x": 1, "y": 2 };'),
            ("let a = {}", "let a = {};"),
            ("let a = (1).x", "let a = (1).x;"),
        ],
    )
    def test_expression_forms(self, source, expected):
        assert expected in body_lines(source)

    def test_assignment_statement_has_no_parens(self):
        lines = body_lines("let a = 1\nlet b = 2\na = b = 3")
        assert lines[2] == "a = (b = 3);"

    def test_object_statement_is_wrapped(self):
        assert body_lines("{ x: 1 }")[0] == '({ "x": 1 });'

    def test_calls_members_and_indexes(self):
        lines = body_lines("let list = [1]\nconsole.log(list[0], length(list))")
        assert lines[1] == "console.log(list[0], length(list));"


class TestShapes:
    """Shapes become self-contained save/draw/restore blocks."""

    def test_circle_arguments_in_field_order(self):
        output = js("circle at (150, 200) size 60 color #F5A623")
        assert "(function (x, y, size, color) {" in output
        assert '})(150, 200, 60, "#F5A623");' in output
        assert "ctx.arc(0, 0, size, 0, Math.PI * 2);" in output

    def test_shape_block_saves_and_restores(self):
        lines = body_lines("rect at (10, 20) width 30 height 40 color #000")
        assert lines[:6] == [
            "(function (x, y, width, height, color) {",
            "ctx.save();",
            "ctx.fillStyle = color;",
            "applyTransform(x, y);",
            "ctx.fillRect(-width / 2, -height / 2, width, height);",
            "ctx.restore();",
        ]
        assert lines[6] == '})(10, 20, 30, 40, "#000");'

    def test_shape_block_is_indented_under_main(self):
        output = js("circle at (1, 2) size 3 color #fff")
        assert "\n  (function (x, y, size, color) {\n    ctx.save();\n" in output

    def test_line_and_triangle(self):
        output = js("line (0, 0) (10, 10) color #fff\ntriangle (0, 0) (10, 0) (5, 8) color #0f0")
        assert '})(0, 0, 10, 10, "#fff");' in output
        assert '})(0, 0, 10, 0, 5, 8, "#0f0");' in output

    def test_polygon_rotation_defaults_to_zero(self):
        output = js("polygon at (50, 50) sides 6 radius 20 color #00f")
        assert '})(50, 50, 6, 20, "#00f", 0);' in output

    def test_polygon_rotation(self):
        output = js("polygon at (50, 50) sides 6 radius 20 color #00f rotate 30")
        assert '})(50, 50, 6, 20, "#00f", 30);' in output

    def test_ellipse(self):
        output = js("ellipse at (10, 10) 30 15 color #abc rotate 45")
        assert "ctx.ellipse(x, y, radiusX, radiusY, 0, 0, Math.PI * 2);" in output
        assert '})(10, 10, 30, 15, "#abc");' in output

    def test_arc_is_drawn_clockwise(self):
        output = js("arc at (0, 0) radius 5 startAngle 0 endAngle 90 color #123")
        assert "ctx.arc(x, y, radius, startAngle * Math.PI / 180, endAngle * Math.PI / 180, false);" in output

    def test_text_with_font_and_size(self):
        output = js('text at (10, 20) "Hi" color #fff font "serif" size 24')
        assert "(function (x, y, text, color, fontSize) {" in output
        assert 'ctx.font = "serif";' in output
        assert 'ctx.font = (fontSize || 16) + "px sans-serif";' in output
        assert "ctx.fillText(String(text), x, y);" in output
        assert '})(10, 20, "Hi", "#fff", 24);' in output

    def test_shape_fields_evaluated_in_caller_scope(self):
        output = js("let size = 4\ncircle at (size, size) size size * 2 color #fff")
        assert '})(size, size, (size * 2), "#fff");' in output

    def test_shape_as_expression(self):
        output = js("let c = circle at (1, 2) size 3 color #fff")
        assert "let c = (function (x, y, size, color) {" in output


class TestVisitorExhaustiveness:
    """Consumers must handle every node class."""

    def test_missing_handler_fails_at_class_creation(self):
        with pytest.raises(TypeError, match="has no handler for"):
            class Incomplete(NodeVisitor):
                handles = ALL_NODE_TYPES

                def visit_Program(self, node):
                    return None

    def test_generator_handles_every_node(self):
        for node_type in ALL_NODE_TYPES:
            assert callable(getattr(JavaScriptGenerator, f"visit_{node_type.__name__}"))
