"""
Error handling for the MFlow CLI.

Commands raise ``CLIError`` subclasses; ``handle_cli_exception`` is the
single place that turns any exception into a message on stderr and exit
status 1.
"""

from __future__ import annotations

import os
import sys
import traceback
from typing import Any, Dict, List, Optional

from mflow.errors import MFlowError

from .output import print_error

TRACEBACK_LIMIT = 4000

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class CLIError(Exception):
    """
    Base exception for CLI commands.

    Attributes:
        message: What went wrong, for humans
        code: Stable identifier shown in brackets
        hint: How to fix it, if known
        context: Extra details printed in verbose mode
    """

    default_code = "CLI_ERROR"

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        hint: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.hint = hint
        self.context = dict(context or {})


class CLIConfigError(CLIError):
    """``mflow.config.json`` is unreadable or invalid."""

    default_code = "CLI_CONFIG_ERROR"


class CLIValidationError(CLIError):
    """Invalid command arguments or options."""

    default_code = "CLI_VALIDATION_ERROR"


class CLIFileNotFoundError(CLIError):
    """Source file or project directory not found."""

    default_code = "CLI_FILE_NOT_FOUND"


class CLICompileError(CLIError):
    """
    The program has diagnostics.

    The diagnostics themselves have already been printed; this only
    carries the summary line and the exit status.
    """

    default_code = "CLI_COMPILE_ERROR"


def _describe(exc: BaseException, verbose: bool) -> List[str]:
    if isinstance(exc, CLIError):
        lines = [f"Error [{exc.code}]: {exc.message}"]
        if exc.hint:
            lines.append(f"Hint: {exc.hint}")
        if verbose and exc.context:
            lines.append("\nContext:")
            lines.extend(f"  {key}: {value}" for key, value in exc.context.items())
        return lines
    if isinstance(exc, MFlowError):
        return [f"Error: {exc.format()}"]
    return [f"Error: {type(exc).__name__}: {exc}"]


def format_cli_error(
    exc: BaseException,
    *,
    verbose: bool = False,
    include_traceback: bool = False,
) -> str:
    """
    Text printed for *exc*.

    Examples:
        >>> print(format_cli_error(CLIValidationError("Invalid fps", hint="Use a positive number")))
        Error [CLI_VALIDATION_ERROR]: Invalid fps
        Hint: Use a positive number
    """
    lines = _describe(exc, verbose)
    if include_traceback:
        lines += ["\nTraceback:", traceback_excerpt()]
    return "\n".join(lines)


def traceback_excerpt(limit: int = TRACEBACK_LIMIT) -> str:
    """The exception being handled, cut to *limit* characters."""
    trace = traceback.format_exc().strip()
    return trace if len(trace) <= limit else trace[: limit - 3] + "..."


def env_flag(*names: str) -> bool:
    """True when any of the environment variables is set to a truthy value."""
    return any(os.environ.get(name, "").strip().lower() in _TRUTHY for name in names)


def cli_verbose_enabled(verbose_flag: bool = False) -> bool:
    """Verbose output is on with ``-v`` or ``MFLOW_VERBOSE``/``MFLOW_DEBUG``."""
    return verbose_flag or env_flag("MFLOW_VERBOSE", "MFLOW_DEBUG")


def cli_reraise_enabled() -> bool:
    """Re-raise instead of exiting when ``MFLOW_RERAISE`` or ``MFLOW_DEBUG`` is set."""
    return env_flag("MFLOW_RERAISE", "MFLOW_DEBUG")


def handle_cli_exception(
    exc: BaseException,
    *,
    verbose: bool = False,
    exit_code: int = 1,
) -> None:
    """
    Print *exc* to stderr and exit with *exit_code*.

    Note:
        Never returns; either exits or re-raises *exc*.
    """
    if cli_reraise_enabled():
        raise exc

    verbose = cli_verbose_enabled(verbose)
    print_error(
        format_cli_error(
            exc,
            verbose=verbose,
            include_traceback=verbose and not isinstance(exc, CLIError),
        )
    )
    sys.exit(exit_code)


__all__ = [
    "CLIError",
    "CLIConfigError",
    "CLIValidationError",
    "CLIFileNotFoundError",
    "CLICompileError",
    "format_cli_error",
    "traceback_excerpt",
    "cli_verbose_enabled",
    "cli_reraise_enabled",
    "handle_cli_exception",
]
