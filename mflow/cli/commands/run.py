"""
Run command implementation.

Compiles the program, writes an ``index.html`` host page beside the
script and opens it in the default browser.
"""

from __future__ import annotations

import argparse
import webbrowser
from pathlib import Path

from mflow.codegen import PageOptions, render_page
from mflow.config import ProjectConfig

from ..errors import CLICompileError, handle_cli_exception
from ..loading import compile_to_file, compiler_options, load_config, output_path_for, resolve_source
from ..output import print_info, print_success


def write_host_page(output: Path, config: ProjectConfig, canvas_id: str, title: str) -> Path:
    page = output.with_name("index.html")
    options = PageOptions(
        title=title,
        canvas_id=canvas_id,
        width=config.canvas.width,
        height=config.canvas.height,
        background=config.canvas.background,
    )
    page.write_text(render_page(output.name, options), encoding="utf-8")
    return page


def cmd_run(args: argparse.Namespace) -> None:
    """Handle the 'run' subcommand."""
    try:
        config = load_config(args)
        source = resolve_source(getattr(args, "file", None), config)
        output = output_path_for(args, config, source)
        options = compiler_options(args, config, source)

        result = compile_to_file(source, output, options)
        if not result.success:
            raise CLICompileError(f"Compilation failed with {len(result.errors)} problem(s)")

        page = write_host_page(output, config, options.canvas_id, source.stem)
        print_success(f"Wrote {page}")
        if getattr(args, "no_open", False):
            print_info(f"Open {page.as_uri()} in a browser")
        else:
            webbrowser.open(page.as_uri())
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_run", "write_host_page"]
