"""
Compile command implementation.

``mflow compile <file>`` writes the generated script (and, with
``--sourcemap``, its source map) and exits 1 when the program has any
diagnostic.
"""

from __future__ import annotations

import argparse

from ..errors import CLICompileError, handle_cli_exception
from ..loading import compile_to_file, compiler_options, load_config, output_path_for, resolve_source
from ..output import print_success


def cmd_compile(args: argparse.Namespace) -> None:
    """
    Handle the 'compile' subcommand.

    Args:
        args: Parsed command-line arguments containing:
            - file: Path to the .mflow source (defaults to the project entry)
            - output: Output script path (optional)
            - minify / sourcemap: Output flags
            - canvas / fps: Runtime overrides

    Examples:
        >>> cmd_compile(argparse.Namespace(file='main.mflow', output=None))  # doctest: +SKIP
        ✓ Compiled main.mflow -> main.js
    """
    try:
        config = load_config(args)
        source = resolve_source(getattr(args, "file", None), config)
        output = output_path_for(args, config, source)
        options = compiler_options(args, config, source)

        result = compile_to_file(source, output, options)
        if not result.success:
            raise CLICompileError(f"Compilation failed with {len(result.errors)} problem(s)")

        print_success(f"Compiled {source.name} -> {output}")
        if result.source_map is not None:
            print_success(f"Source map written to {output.name}.map")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_compile"]
