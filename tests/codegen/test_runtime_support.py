"""Tests for the prelude, literal rendering, emitter, minifier, source maps and host page."""

import json

import pytest

from mflow.codegen import (
    Emitter,
    PageOptions,
    format_number,
    format_string,
    minify,
    render_page,
    render_prelude,
)
from mflow.codegen.prelude import DEFAULT_TICK, frame_tick
from mflow.codegen.sourcemap import encode_vlq
from mflow.compiler import compile_source
from mflow.config import CompilerOptions
from mflow.semantic import BUILTIN_NAMES


class TestFormatNumber:
    """Numbers print the way JavaScript prints them."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (150.0, "150"),
            (0.5, "0.5"),
            (-2.5, "-2.5"),
            (0.0, "0"),
            (0.1 + 0.2, "0.30000000000000004"),
            (1e21, "1e+21"),
            (1.2345678901234568e20, "123456789012345680000"),
            (1e-6, "0.000001"),
            (1e-7, "1e-7"),
            (2.5e-8, "2.5e-8"),
            (float("inf"), "Infinity"),
        ],
    )
    def test_values(self, value, expected):
        assert format_number(value) == expected


def test_format_string_escapes():
    assert format_string('a"b\\c\n') == '"a\\"b\\\\c\\n"'


class TestPrelude:
    """The runtime library ahead of every program."""

    def test_defines_every_builtin(self):
        prelude = render_prelude()
        for name in BUILTIN_NAMES - {"console"}:
            assert f"{name} =" in prelude or f"{name}," in prelude, name

    def test_runtime_state_is_global(self):
        prelude = render_prelude()
        assert "const mflow = {" in prelude
        assert "window.mflow = mflow;" in prelude
        assert "let animationState = {" in prelude

    def test_default_tick(self):
        assert frame_tick(None) == DEFAULT_TICK
        assert "mflow.time += 0.016;" in render_prelude()

    def test_fps_sets_tick(self):
        assert "mflow.time += 0.03333333333333333;" in render_prelude(fps=30)

    def test_canvas_id_is_quoted(self):
        assert 'document.getElementById("a\\"b");' in render_prelude('a"b')


class TestEmitter:
    """Indentation is scoped."""

    def test_block_and_indent(self):
        emitter = Emitter()
        with emitter.block("if (x) {"):
            emitter.line("y();")
            with emitter.indented():
                emitter.write("z")
                emitter.line("();")
        assert emitter.render() == "if (x) {\n  y();\n    z();\n}\n"

    def test_level_restored_after_exception(self):
        emitter = Emitter()
        with pytest.raises(ValueError):
            with emitter.block("{"):
                raise ValueError("stop")
        assert emitter.level == 0

    def test_mapped_lines_record_source_line(self):
        emitter = Emitter()
        emitter.line("a;")
        with emitter.mapped(7):
            emitter.line("b;")
        assert [line.source_line for line in emitter.lines] == [None, 7]

    def test_raw_text_is_unindented(self):
        emitter = Emitter()
        with emitter.indented():
            emitter.raw("x\ny\n")
        assert emitter.render() == "x\ny\n"


class TestMinify:
    """--minify output."""

    def test_minified_compile_has_no_comments_or_indentation(self, sample_program):
        result = compile_source(sample_program, CompilerOptions(minify=True))
        assert result.success
        lines = result.output.splitlines()
        assert lines
        for line in lines:
            assert line == line.strip()
            assert line
            assert not line.startswith("//")

    def test_minify_text(self):
        assert minify("// c\n  a();\n\n  b();\n") == "a();\nb();\n"

    def test_minified_output_is_shorter(self, sample_program):
        full = compile_source(sample_program).output
        small = compile_source(sample_program, CompilerOptions(minify=True)).output
        assert len(small) < len(full)


class TestSourceMap:
    """Line-level source maps."""

    @pytest.mark.parametrize("value,expected", [(0, "A"), (1, "C"), (-1, "D"), (2, "E"), (16, "gB")])
    def test_vlq(self, value, expected):
        assert encode_vlq(value) == expected

    def test_statements_map_to_their_lines(self):
        source = "let a = 1\nlet b = 2"
        result = compile_source(source, CompilerOptions(sourcemap=True, source_name="demo.mflow"))
        document = json.loads(result.source_map)
        assert document["version"] == 3
        assert document["sources"] == ["demo.mflow"]
        assert document["sourcesContent"] == [source]
        groups = document["mappings"].split(";")
        assert len(groups) == len(result.output.splitlines())
        assert [g for g in groups if g] == ["EAAA", "EACA"]

    def test_no_map_unless_requested(self):
        assert compile_source("let a = 1").source_map is None


class TestHostPage:
    """HTML page written by ``mflow run``."""

    def test_page_loads_script_on_canvas(self):
        page = render_page("bundle.js", PageOptions(canvas_id="stage", width=640, height=480))
        assert '<canvas id="stage" width="640" height="480"></canvas>' in page
        assert '<script src="bundle.js"></script>' in page

    def test_page_escapes_values(self):
        page = render_page("bundle.js", PageOptions(title="<Demo>"))
        assert "<title>&lt;Demo&gt;</title>" in page
