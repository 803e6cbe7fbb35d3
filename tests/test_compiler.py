"""Tests for the public compile entry point."""

import logging

import pytest

from mflow import CompileResult, MFlowCompiler, check_source, compile_source
from mflow.config import CompilerOptions


def test_successful_compile(sample_program):
    result = compile_source(sample_program)
    assert isinstance(result, CompileResult)
    assert result.success
    assert result.diagnostics == []
    assert result.output.startswith("// MFlow compiled output")


def test_readme_example():
    result = compile_source("circle at (150, 200) size 60 color #F5A623")
    assert result.success
    assert '})(150, 200, 60, "#F5A623");' in result.output


def test_parse_error_means_no_output():
    result = compile_source("let = 1")
    assert not result.success
    assert result.output is None
    assert result.diagnostics == ["Parse error at line 1, column 5: Expected variable name"]


def test_semantic_error_means_no_output():
    result = compile_source("circle at (x, 0) size 1 color #fff")
    assert not result.success
    assert result.output is None
    assert result.diagnostics == ["Semantic error at line 1, column 12: Undefined variable 'x'"]


def test_parse_and_semantic_diagnostics_are_combined():
    result = compile_source("let a = 1\nlet = 2\nlet c = missing")
    assert result.diagnostics == [
        "Parse error at line 2, column 5: Expected variable name",
        "Semantic error at line 3, column 9: Undefined variable 'missing'",
    ]


def test_one_malformed_statement_among_valid_ones():
    """The parser keeps the valid statements; the compile still fails."""
    result = compile_source("let a = 1\nlet b = )\nlet c = 3")
    assert not result.success
    assert len(result.errors) == 1
    assert result.errors[0].line == 2


def test_names_of_generated_functions_cannot_be_declared():
    result = compile_source("let animate_2 = 1\nanimate { rotate 1 }\nanimate { rotate 2 }")
    assert not result.success
    assert result.output is None
    assert result.diagnostics == [
        "Semantic error at line 1, column 5: 'animate_2' is reserved for generated code",
    ]


def test_reserved_javascript_word_fails_the_compile():
    result = compile_source("let new = 1")
    assert not result.success
    assert result.diagnostics == ["Semantic error at line 1, column 5: 'new' is a reserved word in JavaScript"]


@pytest.mark.parametrize(
    "source",
    [
        "",
        "\n\n",
        "}}}",
        "circle at",
        '"unterminated',
        "fn (",
        "animate {",
        "let x = 1 +",
        "@@@ ### $$$",
        "for (;;) {}",
        "\x00\x01",
    ],
)
def test_never_raises(source):
    result = compile_source(source)
    assert isinstance(result.success, bool)
    if not result.success:
        assert result.diagnostics


def test_deep_nesting_is_reported():
    source = "let a = " + "(" * 5000 + "1" + ")" * 5000
    result = compile_source(source)
    assert not result.success
    assert "nested too deeply" in result.diagnostics[0]


def test_to_dict():
    payload = compile_source("let = 1").to_dict()
    assert payload == {
        "success": False,
        "output": None,
        "diagnostics": ["Parse error at line 1, column 5: Expected variable name"],
    }


def test_check_source_returns_diagnostics():
    diagnostics = check_source("let a = b")
    assert [d.to_dict()["code"] for d in diagnostics] == ["SEMANTIC_ERROR"]


def test_compiler_binds_options():
    compiler = MFlowCompiler(CompilerOptions(canvas_id="stage"))
    assert 'getElementById("stage")' in compiler.compile("let a = 1").output
    assert compiler.check("let a = 1") == []


def test_parse_errors_are_logged(caplog):
    with caplog.at_level(logging.ERROR, logger="mflow"):
        compile_source("let = 1")
    assert "Expected variable name" in caplog.text
