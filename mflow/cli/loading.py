"""
Source and configuration loading shared by the CLI commands.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from mflow.codegen import source_map_comment
from mflow.compiler import CompileResult, compile_source
from mflow.config import CompilerOptions, ProjectConfig, load_project_config
from mflow.errors import MFlowConfigError

from .errors import CLIConfigError, CLIFileNotFoundError, CLIValidationError
from .output import print_diagnostics


def resolve_source(path: Optional[str], config: ProjectConfig) -> Path:
    """
    The source file named on the command line, or the project entry.

    Raises:
        CLIFileNotFoundError: If the file does not exist
    """
    if path:
        source = Path(path)
    else:
        source = config.root / config.entry
    source = source.resolve()
    if not source.is_file():
        raise CLIFileNotFoundError(
            f"Source file not found: {source}",
            hint="Check the file path and try again",
        )
    return source


def read_source(source: Path) -> str:
    try:
        return source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CLIFileNotFoundError(f"Cannot read {source}: {exc}") from exc


def load_config(args: argparse.Namespace) -> ProjectConfig:
    """Project configuration for the working directory, or ``--config``."""
    explicit = getattr(args, "config", None)
    try:
        return load_project_config(Path.cwd(), Path(explicit) if explicit else None)
    except MFlowConfigError as exc:
        raise CLIConfigError(exc.format(), hint="Fix or delete mflow.config.json") from exc


def compiler_options(args: argparse.Namespace, config: ProjectConfig, source: Path) -> CompilerOptions:
    """Merge CLI flags over configuration values."""
    fps = getattr(args, "fps", None)
    if fps is not None and fps <= 0:
        raise CLIValidationError(f"--fps must be positive, got {fps}")
    return config.compiler_options(
        canvas_id=getattr(args, "canvas", None),
        fps=fps,
        minify=True if getattr(args, "minify", False) else None,
        sourcemap=True if getattr(args, "sourcemap", False) else None,
        source_name=source.name,
    )


def output_path_for(args: argparse.Namespace, config: ProjectConfig, source: Path) -> Path:
    explicit = getattr(args, "output", None)
    if explicit:
        return Path(explicit).resolve()
    if config.path is not None:
        return (config.root / config.output).resolve()
    return source.with_suffix(".js")


def compile_to_file(source: Path, output: Path, options: CompilerOptions) -> CompileResult:
    """
    Compile *source* and write the script (and its map) next to *output*.

    Diagnostics are printed; nothing is written when there are any.
    """
    result = compile_source(read_source(source), options)
    if not result.success:
        print_diagnostics(result.errors, str(source))
        return result

    output.parent.mkdir(parents=True, exist_ok=True)
    script = result.output or ""
    if result.source_map is not None:
        map_path = output.with_name(output.name + ".map")
        map_path.write_text(result.source_map, encoding="utf-8")
        script += source_map_comment(map_path.name)
    output.write_text(script, encoding="utf-8")
    return result


__all__ = [
    "compile_to_file",
    "compiler_options",
    "load_config",
    "output_path_for",
    "read_source",
    "resolve_source",
]
