"""
Tests for the ``mflow`` command line.

Commands run in-process through ``main(argv)`` inside a temporary
working directory.
"""

import json
import os

import pytest

from mflow.cli import build_parser, main
from mflow.cli.commands.watch import watch_file
from mflow.cli.errors import (
    CLICompileError,
    CLIConfigError,
    CLIValidationError,
    format_cli_error,
    handle_cli_exception,
)
from mflow.config import CompilerOptions
from mflow.errors import MFlowConfigError

GOOD = "circle at (150, 200) size 60 color #F5A623\n"
BAD = "let a = 1\nlet = 2\nlet c = missing\n"


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MFLOW_DEBUG", raising=False)
    monkeypatch.delenv("MFLOW_RERAISE", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")
    return tmp_path


def run_cli(argv):
    """Run ``main`` and return the exit status (0 when it returns normally)."""
    try:
        main(argv)
    except SystemExit as exc:
        return exc.code
    return 0


class TestCompileCommand:
    """mflow compile"""

    def test_writes_script_next_to_source(self, workdir, write_source, capsys):
        write_source(GOOD)
        assert run_cli(["compile", "main.mflow"]) == 0
        script = (workdir / "main.js").read_text(encoding="utf-8")
        assert '})(150, 200, 60, "#F5A623");' in script
        assert "Compiled main.mflow" in capsys.readouterr().out

    def test_output_flag_and_sourcemap(self, workdir, write_source):
        write_source(GOOD)
        assert run_cli(["compile", "main.mflow", "-o", "dist/app.js", "--sourcemap"]) == 0
        script = (workdir / "dist" / "app.js").read_text(encoding="utf-8")
        assert script.endswith("//# sourceMappingURL=app.js.map\n")
        document = json.loads((workdir / "dist" / "app.js.map").read_text(encoding="utf-8"))
        assert document["sources"] == ["main.mflow"]

    def test_minify_and_canvas_flags(self, workdir, write_source):
        write_source(GOOD)
        assert run_cli(["compile", "main.mflow", "--minify", "--canvas", "stage", "--fps", "30"]) == 0
        script = (workdir / "main.js").read_text(encoding="utf-8")
        assert 'const canvas = document.getElementById("stage");' in script
        assert "mflow.time += 0.03333333333333333;" in script
        assert "\n  " not in script

    def test_diagnostics_exit_one_and_write_nothing(self, workdir, write_source, capsys):
        write_source(BAD)
        assert run_cli(["compile", "main.mflow"]) == 1
        assert not (workdir / "main.js").exists()
        err = capsys.readouterr().err
        assert "Parse error at line 2, column 5: Expected variable name" in err
        assert "Semantic error at line 3, column 9: Undefined variable 'missing'" in err
        assert "CLI_COMPILE_ERROR" in err

    def test_missing_file(self, workdir, capsys):
        assert run_cli(["compile", "nope.mflow"]) == 1
        assert "CLI_FILE_NOT_FOUND" in capsys.readouterr().err

    def test_invalid_fps(self, workdir, write_source, capsys):
        write_source(GOOD)
        assert run_cli(["compile", "main.mflow", "--fps", "0"]) == 1
        assert "--fps must be positive" in capsys.readouterr().err

    def test_uses_project_config(self, workdir, write_source):
        write_source(GOOD, "src/main.mflow")
        (workdir / "mflow.config.json").write_text(
            json.dumps({"output": "build/out.js", "canvas": {"id": "cfg"}}), encoding="utf-8"
        )
        assert run_cli(["compile"]) == 0
        script = (workdir / "build" / "out.js").read_text(encoding="utf-8")
        assert 'getElementById("cfg")' in script

    def test_malformed_config(self, workdir, write_source, capsys):
        write_source(GOOD)
        (workdir / "mflow.config.json").write_text("{", encoding="utf-8")
        assert run_cli(["compile", "main.mflow"]) == 1
        assert "CLI_CONFIG_ERROR" in capsys.readouterr().err


class TestCheckCommand:
    """mflow check"""

    def test_clean(self, workdir, write_source, capsys):
        write_source(GOOD)
        assert run_cli(["check", "main.mflow"]) == 0
        assert "No problems found" in capsys.readouterr().out

    def test_problems(self, workdir, write_source, capsys):
        write_source(BAD)
        assert run_cli(["check", "main.mflow"]) == 1
        err = capsys.readouterr().err
        assert "Undefined variable 'missing'" in err
        assert "2 problem(s) found" in err


class TestFormatCommand:
    """mflow format"""

    def test_prints_formatted_text(self, workdir, write_source, capsys):
        write_source("let  a=1\n")
        assert run_cli(["format", "main.mflow"]) == 0
        assert capsys.readouterr().out == "let a = 1\n"

    def test_check_flag(self, workdir, write_source):
        write_source("let  a=1\n")
        assert run_cli(["format", "main.mflow", "--check"]) == 1
        write_source("let a = 1\n")
        assert run_cli(["format", "main.mflow", "--check"]) == 0

    def test_write_flag(self, workdir, write_source):
        path = write_source("repeat 2 {\nlet a = 1\n}\n")
        assert run_cli(["format", "main.mflow", "--write", "--indent", "4"]) == 0
        assert path.read_text(encoding="utf-8") == "repeat 2 {\n    let a = 1\n}\n"

    def test_parse_error(self, workdir, write_source, capsys):
        write_source("let = 1\n")
        assert run_cli(["format", "main.mflow"]) == 1
        assert "fix the parse errors first" in capsys.readouterr().err

    def test_check_and_write_conflict(self, workdir, write_source, capsys):
        write_source(GOOD)
        assert run_cli(["format", "main.mflow", "--check", "--write"]) == 1
        assert "CLI_VALIDATION_ERROR" in capsys.readouterr().err


class TestRunCommand:
    """mflow run"""

    def test_writes_host_page_without_opening(self, workdir, write_source, monkeypatch):
        opened = []
        monkeypatch.setattr("webbrowser.open", opened.append)
        write_source(GOOD)
        assert run_cli(["run", "main.mflow", "--no-open"]) == 0
        page = (workdir / "index.html").read_text(encoding="utf-8")
        assert '<script src="main.js"></script>' in page
        assert (workdir / "main.js").exists()
        assert opened == []

    def test_opens_browser(self, workdir, write_source, monkeypatch):
        opened = []
        monkeypatch.setattr("webbrowser.open", opened.append)
        write_source(GOOD)
        assert run_cli(["run", "main.mflow"]) == 0
        assert opened == [(workdir / "index.html").resolve().as_uri()]


class TestInitCommand:
    """mflow init"""

    @pytest.mark.parametrize("template", ["basic", "scenes"])
    def test_generated_project_compiles(self, workdir, template, capsys):
        assert run_cli(["init", "demo", "--template", template, "--canvas", "stage"]) == 0
        project = workdir / "demo"
        assert (project / "src" / "main.mflow").exists()
        config = json.loads((project / "mflow.config.json").read_text(encoding="utf-8"))
        assert config["canvas"]["id"] == "stage"
        assert "Created MFlow project" in capsys.readouterr().out

        assert run_cli(["compile", str(project / "src" / "main.mflow"), "-o", str(project / "dist" / "bundle.js")]) == 0
        assert (project / "dist" / "bundle.js").exists()

    def test_refuses_to_overwrite(self, workdir, capsys):
        assert run_cli(["init", "demo"]) == 0
        assert run_cli(["init", "demo"]) == 1
        assert "Refusing to overwrite" in capsys.readouterr().err

    def test_unknown_template(self, workdir, capsys):
        assert run_cli(["init", "demo", "--template", "nope"]) == 1
        assert "Template not found: nope" in capsys.readouterr().err


class TestWatch:
    """Polling recompilation."""

    def test_rebuilds_on_change(self, workdir, write_source):
        source = write_source(GOOD)
        output = workdir / "main.js"
        sleeps = []

        def fake_sleep(seconds):
            sleeps.append(seconds)
            if len(sleeps) == 1:
                source.write_text("let a = 1\n", encoding="utf-8")
                stat = source.stat()
                os.utime(source, (stat.st_atime, stat.st_mtime + 10))

        builds = watch_file(source, output, CompilerOptions(), interval=0.25, iterations=3, sleep=fake_sleep)
        assert builds == 2
        assert sleeps == [0.25, 0.25]
        assert "let a = 1;" in output.read_text(encoding="utf-8")

    def test_failed_build_keeps_watching(self, workdir, write_source, capsys):
        source = write_source(BAD)
        builds = watch_file(source, workdir / "main.js", CompilerOptions(), iterations=2, sleep=lambda _: None)
        assert builds == 1
        assert "Build failed" in capsys.readouterr().err


class TestParserAndErrors:
    """Argument parsing and error formatting."""

    def test_no_command_prints_help(self, workdir, capsys):
        assert run_cli([]) == 1
        assert "usage: mflow" in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.startswith("mflow ")

    def test_format_cli_error_with_hint(self):
        text = format_cli_error(CLIValidationError("Invalid fps", hint="Use a positive number"))
        assert text == "Error [CLI_VALIDATION_ERROR]: Invalid fps\nHint: Use a positive number"

    def test_format_mflow_error(self):
        error = MFlowConfigError("Malformed configuration", path="mflow.config.json", line=2, column=3)
        assert format_cli_error(error) == (
            "Error: Malformed configuration (mflow.config.json:2:3; CONFIG_ERROR)"
        )

    def test_verbose_context(self):
        error = CLIConfigError("bad", context={"key": "canvas"})
        assert "key: canvas" in format_cli_error(error, verbose=True)

    def test_reraise_env(self, monkeypatch):
        monkeypatch.setenv("MFLOW_RERAISE", "1")
        with pytest.raises(CLICompileError):
            handle_cli_exception(CLICompileError("boom"))
