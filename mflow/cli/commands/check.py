"""
Check command implementation: lex, parse and analyse without generating.
"""

from __future__ import annotations

import argparse

from mflow.compiler import check_source

from ..errors import CLICompileError, handle_cli_exception
from ..loading import load_config, read_source, resolve_source
from ..output import print_diagnostic_table, print_success


def cmd_check(args: argparse.Namespace) -> None:
    """Handle the 'check' subcommand."""
    try:
        config = load_config(args)
        source = resolve_source(getattr(args, "file", None), config)
        diagnostics = check_source(read_source(source), path=source.name)
        if diagnostics:
            print_diagnostic_table(diagnostics, source.name)
            raise CLICompileError(f"{len(diagnostics)} problem(s) found in {source.name}")
        print_success(f"No problems found in {source.name}")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_check"]
