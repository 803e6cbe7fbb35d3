"""
Console output for CLI commands.

Status lines go through a ``rich`` console: successes and information to
stdout, warnings and errors to stderr.  Colour is disabled by
``--no-color`` or the ``NO_COLOR`` environment variable.
"""

from __future__ import annotations

import os
from typing import Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from mflow.lang.parser import Diagnostic

_no_color = False
_stdout: Optional[Console] = None
_stderr: Optional[Console] = None


def configure_output(*, no_color: bool = False) -> None:
    """Select colour mode for every console created afterwards."""
    global _no_color, _stdout, _stderr
    _no_color = no_color or bool(os.environ.get("NO_COLOR"))
    _stdout = None
    _stderr = None


def get_console(stderr: bool = False) -> Console:
    global _stdout, _stderr
    if stderr:
        if _stderr is None:
            _stderr = Console(stderr=True, no_color=_no_color, highlight=False, soft_wrap=True)
        return _stderr
    if _stdout is None:
        _stdout = Console(no_color=_no_color, highlight=False, soft_wrap=True)
    return _stdout


def _status(prefix: str, style: str, message: str, *, stderr: bool = False) -> None:
    line = Text(prefix, style=style)
    line.append(message)
    get_console(stderr).print(line)


def print_success(message: str) -> None:
    """
    Print success message with checkmark prefix.

    Examples:
        >>> print_success("Compiled main.mflow")  # doctest: +SKIP
        ✓ Compiled main.mflow
    """
    _status("✓ ", "bold green", message)


def print_error(message: str) -> None:
    _status("✗ ", "bold red", message, stderr=True)


def print_warning(message: str) -> None:
    _status("⚠ ", "bold yellow", message, stderr=True)


def print_info(message: str) -> None:
    _status("ℹ ", "bold blue", message)


def print_diagnostics(diagnostics: Sequence[Diagnostic], path: str = "") -> None:
    """Print one ``path: <kind> at line L, column C: <message>`` line per diagnostic."""
    console = get_console(stderr=True)
    for diagnostic in diagnostics:
        line = Text()
        if path:
            line.append(f"{path}: ", style="bold")
        line.append(str(diagnostic), style="red")
        console.print(line)


def print_diagnostic_table(diagnostics: Sequence[Diagnostic], path: str = "") -> None:
    """Tabular diagnostic listing used by ``mflow check``."""
    table = Table(title=f"Problems in {path}" if path else "Problems")
    table.add_column("Line", justify="right", style="cyan")
    table.add_column("Column", justify="right", style="cyan")
    table.add_column("Kind", style="magenta")
    table.add_column("Message", style="white")
    for diagnostic in diagnostics:
        table.add_row(
            str(diagnostic.line),
            str(diagnostic.column),
            diagnostic.kind,
            Text(diagnostic.message),
        )
    get_console(stderr=True).print(table)


__all__ = [
    "configure_output",
    "get_console",
    "print_success",
    "print_error",
    "print_warning",
    "print_info",
    "print_diagnostics",
    "print_diagnostic_table",
]
