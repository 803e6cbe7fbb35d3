"""
Format command implementation.

Without flags the formatted text is printed; ``--write`` rewrites the
file in place and ``--check`` exits 1 when the file is not formatted.
"""

from __future__ import annotations

import argparse
import sys

from mflow.formatting import FormattingOptions, SourceFormatter

from ..errors import CLICompileError, CLIValidationError, handle_cli_exception
from ..loading import load_config, read_source, resolve_source
from ..output import print_error, print_success, print_warning


def cmd_format(args: argparse.Namespace) -> None:
    """Handle the 'format' subcommand."""
    try:
        if getattr(args, "check", False) and getattr(args, "write", False):
            raise CLIValidationError("--check and --write cannot be used together")

        config = load_config(args)
        source = resolve_source(getattr(args, "file", None), config)
        text = read_source(source)
        options = FormattingOptions(indent_size=getattr(args, "indent", 2) or 2)
        result = SourceFormatter(options).format_source(text, str(source))

        if not result.success():
            for message in result.errors:
                print_error(message)
            raise CLICompileError(f"Cannot format {source.name}: fix the parse errors first")
        for message in result.warnings:
            print_warning(message)

        if getattr(args, "check", False):
            if result.is_changed:
                raise CLICompileError(f"{source.name} is not formatted")
            print_success(f"{source.name} is formatted")
        elif getattr(args, "write", False):
            if result.is_changed:
                source.write_text(result.formatted_text, encoding="utf-8")
                print_success(f"Formatted {source.name}")
            else:
                print_success(f"{source.name} already formatted")
        else:
            sys.stdout.write(result.formatted_text)
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_format"]
