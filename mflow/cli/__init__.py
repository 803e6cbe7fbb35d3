"""
MFlow CLI entry point.

Every subcommand is a thin wrapper over the pure functions in
:mod:`mflow.compiler` and :mod:`mflow.formatting`.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from mflow import __version__

from .commands import cmd_check, cmd_compile, cmd_format, cmd_init, cmd_run, cmd_watch
from .output import configure_output

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _configure_logging(args: argparse.Namespace) -> None:
    """Attach a stderr handler to the ``mflow`` logger."""
    level_map = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warn': logging.WARNING,
        'warning': logging.WARNING,
        'error': logging.ERROR,
    }
    env_level = os.getenv('MFLOW_LOG_LEVEL')
    if env_level:
        numeric_level = level_map.get(env_level.lower(), logging.WARNING)
    elif getattr(args, 'verbose', False):
        numeric_level = logging.DEBUG
    else:
        numeric_level = logging.WARNING

    package_logger = logging.getLogger('mflow')
    package_logger.setLevel(numeric_level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        package_logger.addHandler(handler)
        # Handled here only
        package_logger.propagate = False


def _add_compile_flags(parser: argparse.ArgumentParser) -> None:
    parser.add_argument('file', nargs='?', help='MFlow source file (defaults to the project entry)')
    parser.add_argument('-o', '--output', help='Output script path')
    parser.add_argument('-m', '--minify', action='store_true', help='Strip comments and whitespace')
    parser.add_argument('-s', '--sourcemap', action='store_true', help='Write a source map')
    parser.add_argument('--canvas', help='Canvas element id (default: mflow-canvas)')
    parser.add_argument('--fps', type=float, help='Frames per second used for the time tick')


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mflow",
        description="MFlow compiler – shapes and animations to canvas JavaScript",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-v', '--verbose', action='store_true', help='Debug logging and full error details')
    common.add_argument('--no-color', action='store_true', help='Disable coloured output (or set NO_COLOR)')
    common.add_argument('--config', help='Path to mflow.config.json')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    compile_parser = subparsers.add_parser('compile', parents=[common], help='Compile to JavaScript')
    _add_compile_flags(compile_parser)
    compile_parser.set_defaults(func=cmd_compile)

    watch_parser = subparsers.add_parser('watch', parents=[common], help='Recompile on every change')
    _add_compile_flags(watch_parser)
    watch_parser.add_argument('--interval', type=float, default=0.5, help='Polling interval in seconds')
    watch_parser.set_defaults(func=cmd_watch)

    run_parser = subparsers.add_parser('run', parents=[common], help='Compile and open in a browser')
    _add_compile_flags(run_parser)
    run_parser.add_argument('--no-open', action='store_true', help='Write the page without opening it')
    run_parser.set_defaults(func=cmd_run)

    check_parser = subparsers.add_parser('check', parents=[common], help='Report problems without compiling')
    check_parser.add_argument('file', nargs='?', help='MFlow source file')
    check_parser.set_defaults(func=cmd_check)

    format_parser = subparsers.add_parser('format', parents=[common], help='Format MFlow source')
    format_parser.add_argument('file', nargs='?', help='MFlow source file')
    format_parser.add_argument('--check', action='store_true', help='Exit 1 if the file is not formatted')
    format_parser.add_argument('--write', action='store_true', help='Rewrite the file in place')
    format_parser.add_argument('--indent', type=int, default=2, help='Spaces per indentation level')
    format_parser.set_defaults(func=cmd_format)

    init_parser = subparsers.add_parser('init', parents=[common], help='Scaffold a new project')
    init_parser.add_argument('directory', nargs='?', default='.', help='Project directory')
    init_parser.add_argument('--template', default=None, help='Project template (basic, scenes)')
    init_parser.add_argument('--name', default=None, help='Project name')
    init_parser.add_argument('--canvas', default=None, help='Canvas element id')
    init_parser.set_defaults(func=cmd_init)

    return parser


def main(argv: Optional[list] = None) -> None:
    """
    Main CLI entrypoint.

    Args:
        argv: Command-line arguments (None uses sys.argv[1:])

    Examples:
        >>> main(['compile', 'main.mflow', '-o', 'dist/bundle.js'])  # doctest: +SKIP
        ✓ Compiled main.mflow -> dist/bundle.js
    """
    if argv is None:
        argv = sys.argv[1:]

    parser = build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, 'func'):
        parser.print_help()
        sys.exit(1)

    configure_output(no_color=getattr(args, 'no_color', False))
    _configure_logging(args)
    args.func(args)


__all__ = ["build_parser", "main"]
