"""
Watch command implementation.

Polls the source file's modification time and recompiles whenever it
changes.  Compile failures are reported and watching continues.
"""

from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import Callable, Optional

from mflow.config import CompilerOptions

from ..errors import handle_cli_exception
from ..loading import compile_to_file, compiler_options, load_config, output_path_for, resolve_source
from ..output import print_error, print_info, print_success

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 0.5


def _mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


def watch_file(
    source: Path,
    output: Path,
    options: CompilerOptions,
    *,
    interval: float = DEFAULT_INTERVAL,
    iterations: Optional[int] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """
    Recompile *source* every time it changes.

    Args:
        iterations: Stop after this many polls (``None`` runs until interrupted)

    Returns:
        Number of compilations performed
    """
    builds = 0
    last_seen: Optional[float] = None
    polls = 0
    while iterations is None or polls < iterations:
        polls += 1
        current = _mtime(source)
        if current is None:
            print_error(f"{source} disappeared; waiting for it to come back")
        elif current != last_seen:
            last_seen = current
            builds += 1
            logger.debug("Change detected in %s", source)
            result = compile_to_file(source, output, options)
            if result.success:
                print_success(f"Rebuilt {output.name}")
            else:
                print_error(f"Build failed with {len(result.errors)} problem(s)")
        if iterations is None or polls < iterations:
            sleep(interval)
    return builds


def cmd_watch(args: argparse.Namespace) -> None:
    """Handle the 'watch' subcommand."""
    try:
        config = load_config(args)
        source = resolve_source(getattr(args, "file", None), config)
        output = output_path_for(args, config, source)
        options = compiler_options(args, config, source)
        print_info(f"Watching {source} (Ctrl+C to stop)")
        try:
            watch_file(source, output, options, interval=getattr(args, "interval", DEFAULT_INTERVAL))
        except KeyboardInterrupt:
            print_info("Stopped watching")
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_watch", "watch_file"]
