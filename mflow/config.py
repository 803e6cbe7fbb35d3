"""Compiler options and ``mflow.config.json`` project configuration."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from mflow.codegen.prelude import DEFAULT_CANVAS_ID
from mflow.errors import MFlowConfigError

CONFIG_FILENAME = "mflow.config.json"


@dataclass
class CompilerOptions:
    """Knobs for a single compilation."""

    canvas_id: str = DEFAULT_CANVAS_ID
    fps: Optional[float] = None
    minify: bool = False
    sourcemap: bool = False
    source_name: str = "input.mflow"


@dataclass
class CanvasConfig:
    """The canvas element the compiled script draws on."""

    id: str = DEFAULT_CANVAS_ID
    width: int = 800
    height: int = 600
    background: str = "#0D0B0A"


@dataclass
class ProjectConfig:
    """Resolved project configuration."""

    root: Path
    entry: Path = Path("src/main.mflow")
    output: Path = Path("dist/bundle.js")
    canvas: CanvasConfig = field(default_factory=CanvasConfig)
    minify: bool = False
    sourcemap: bool = False
    fps: Optional[float] = None
    path: Optional[Path] = None
    raw: Dict[str, Any] = field(default_factory=dict)

    def compiler_options(self, **overrides: Any) -> CompilerOptions:
        """Options for compiling the entry file; ``None`` overrides are ignored."""
        options = CompilerOptions(
            canvas_id=self.canvas.id,
            fps=self.fps,
            minify=self.minify,
            sourcemap=self.sourcemap,
            source_name=self.entry.name,
        )
        for key, value in overrides.items():
            if value is not None:
                setattr(options, key, value)
        return options


def _read_json_config(path: Path) -> Dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise MFlowConfigError(f"Cannot read configuration: {exc}", path=str(path)) from exc
    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise MFlowConfigError(
            f"Malformed configuration: {exc.msg}",
            path=str(path),
            line=exc.lineno,
            column=exc.colno,
        ) from exc
    if not isinstance(data, dict):
        raise MFlowConfigError("Configuration must be a JSON object", path=str(path))
    return data


def _parse_canvas(data: Dict[str, Any], path: Path) -> CanvasConfig:
    section = data.get("canvas") or {}
    if not isinstance(section, dict):
        raise MFlowConfigError("'canvas' must be an object", path=str(path))
    try:
        return CanvasConfig(
            id=str(section.get("id") or CanvasConfig.id),
            width=int(section.get("width") or CanvasConfig.width),
            height=int(section.get("height") or CanvasConfig.height),
            background=str(section.get("background") or CanvasConfig.background),
        )
    except (TypeError, ValueError) as exc:
        raise MFlowConfigError(f"Invalid canvas size: {exc}", path=str(path)) from exc


def _parse_fps(value: Any, path: Path) -> Optional[float]:
    if value is None:
        return None
    try:
        fps = float(value)
    except (TypeError, ValueError) as exc:
        raise MFlowConfigError(f"Invalid fps: {value!r}", path=str(path)) from exc
    if fps <= 0:
        raise MFlowConfigError(f"fps must be positive, got {value!r}", path=str(path))
    return fps


def locate_config_file(root: Path, explicit: Optional[Path] = None) -> Optional[Path]:
    if explicit is not None:
        return explicit if explicit.exists() else None
    path = root / CONFIG_FILENAME
    return path if path.exists() else None


def load_project_config(root: Path, explicit: Optional[Path] = None) -> ProjectConfig:
    """Load the project configuration under *root*, or defaults when there is none."""
    root = root.resolve()
    config_path = locate_config_file(root, explicit)
    if config_path is None:
        return ProjectConfig(root=root)

    data = _read_json_config(config_path)
    return ProjectConfig(
        root=root,
        entry=Path(data.get("entry") or ProjectConfig.entry),
        output=Path(data.get("output") or ProjectConfig.output),
        canvas=_parse_canvas(data, config_path),
        minify=bool(data.get("minify", False)),
        sourcemap=bool(data.get("sourcemap", False)),
        fps=_parse_fps(data.get("fps"), config_path),
        path=config_path,
        raw=data,
    )


def default_config_dict(canvas: Optional[CanvasConfig] = None) -> Dict[str, Any]:
    """The JSON document ``mflow init`` writes."""
    canvas = canvas or CanvasConfig()
    return {
        "entry": "src/main.mflow",
        "output": "dist/bundle.js",
        "canvas": {
            "id": canvas.id,
            "width": canvas.width,
            "height": canvas.height,
            "background": canvas.background,
        },
        "minify": False,
        "sourcemap": False,
    }


__all__ = [
    "CONFIG_FILENAME",
    "CanvasConfig",
    "CompilerOptions",
    "ProjectConfig",
    "default_config_dict",
    "load_project_config",
    "locate_config_file",
]
