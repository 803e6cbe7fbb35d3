"""
Init command implementation: scaffold a new MFlow project.
"""

from __future__ import annotations

import argparse
from pathlib import Path

from mflow.project_templates import DEFAULT_TEMPLATE, generate_project, get_registry

from ..errors import handle_cli_exception
from ..output import print_info, print_success


def cmd_init(args: argparse.Namespace) -> None:
    """
    Handle the 'init' subcommand.

    Examples:
        >>> cmd_init(argparse.Namespace(directory='demo', template='basic'))  # doctest: +SKIP
        ✓ Created MFlow project in demo
    """
    try:
        target = Path(getattr(args, "directory", None) or ".").resolve()
        template_id = getattr(args, "template", None) or DEFAULT_TEMPLATE
        written = generate_project(
            template_id,
            target,
            project_name=getattr(args, "name", None) or target.name,
            canvas_id=getattr(args, "canvas", None),
        )
        for path in written:
            print_info(f"created {path.relative_to(target).as_posix()}")
        print_success(f"Created MFlow project in {target}")
        instructions = get_registry().get(template_id).get_post_generation_instructions({})
        if instructions:
            print_info(instructions)
    except Exception as exc:
        handle_cli_exception(exc, verbose=getattr(args, "verbose", False))


__all__ = ["cmd_init"]
