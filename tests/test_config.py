"""Tests for project configuration loading."""

import json
from pathlib import Path

import pytest

from mflow.config import (
    CONFIG_FILENAME,
    CanvasConfig,
    CompilerOptions,
    default_config_dict,
    load_project_config,
    locate_config_file,
)
from mflow.errors import MFlowConfigError


def write_config(root: Path, data) -> Path:
    path = root / CONFIG_FILENAME
    path.write_text(data if isinstance(data, str) else json.dumps(data), encoding="utf-8")
    return path


def test_defaults_without_config_file(tmp_path):
    config = load_project_config(tmp_path)
    assert config.path is None
    assert config.entry == Path("src/main.mflow")
    assert config.output == Path("dist/bundle.js")
    assert config.canvas == CanvasConfig()
    assert config.fps is None


def test_values_are_read(tmp_path):
    path = write_config(
        tmp_path,
        {
            "entry": "app.mflow",
            "output": "out/app.js",
            "canvas": {"id": "stage", "width": 320, "height": 240},
            "minify": True,
            "fps": 30,
        },
    )
    config = load_project_config(tmp_path)
    assert config.path == path.resolve()
    assert config.entry == Path("app.mflow")
    assert config.canvas.id == "stage"
    assert (config.canvas.width, config.canvas.height) == (320, 240)
    assert config.canvas.background == CanvasConfig.background
    assert config.minify is True
    assert config.sourcemap is False
    assert config.fps == 30.0


def test_compiler_options_merge_overrides(tmp_path):
    write_config(tmp_path, {"canvas": {"id": "stage"}, "sourcemap": True})
    config = load_project_config(tmp_path)
    options = config.compiler_options(canvas_id=None, minify=True)
    assert isinstance(options, CompilerOptions)
    assert options.canvas_id == "stage"
    assert options.minify is True
    assert options.sourcemap is True
    assert options.source_name == "main.mflow"


def test_malformed_json_reports_position(tmp_path):
    write_config(tmp_path, '{\n  "entry": ,\n}')
    with pytest.raises(MFlowConfigError) as exc_info:
        load_project_config(tmp_path)
    error = exc_info.value
    assert error.line == 2
    assert "Malformed configuration" in error.message
    assert CONFIG_FILENAME in error.format()


@pytest.mark.parametrize(
    "data,message",
    [
        ([1, 2], "must be a JSON object"),
        ({"canvas": "big"}, "'canvas' must be an object"),
        ({"canvas": {"width": "wide"}}, "Invalid canvas size"),
        ({"fps": 0}, "fps must be positive"),
        ({"fps": "fast"}, "Invalid fps"),
    ],
)
def test_invalid_values(tmp_path, data, message):
    write_config(tmp_path, data)
    with pytest.raises(MFlowConfigError, match=message):
        load_project_config(tmp_path)


def test_explicit_config_path(tmp_path):
    other = tmp_path / "custom.json"
    other.write_text(json.dumps({"entry": "x.mflow"}), encoding="utf-8")
    assert locate_config_file(tmp_path, other) == other
    assert load_project_config(tmp_path, other).entry == Path("x.mflow")
    assert locate_config_file(tmp_path, tmp_path / "missing.json") is None


def test_default_config_round_trips(tmp_path):
    write_config(tmp_path, default_config_dict(CanvasConfig(id="stage")))
    config = load_project_config(tmp_path)
    assert config.canvas.id == "stage"
    assert config.entry == Path("src/main.mflow")
