"""
CLI command modules.

Each module implements one ``mflow`` subcommand as ``cmd_<name>(args)``.
"""

from .check import cmd_check
from .compile import cmd_compile
from .format import cmd_format
from .init import cmd_init
from .run import cmd_run
from .watch import cmd_watch

__all__ = [
    "cmd_check",
    "cmd_compile",
    "cmd_format",
    "cmd_init",
    "cmd_run",
    "cmd_watch",
]
