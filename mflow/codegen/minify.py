"""Whitespace and comment stripping for ``--minify`` builds.

Statements keep their own lines so the output never relies on automatic
semicolon insertion across joined lines.
"""

from __future__ import annotations

from typing import List, Sequence

from .emitter import EmittedLine


def is_comment(text: str) -> bool:
    return text.lstrip().startswith("//")


def minify_lines(lines: Sequence[EmittedLine]) -> List[EmittedLine]:
    """Drop blank and comment lines and all indentation, keeping source lines."""
    kept = []
    for entry in lines:
        text = entry.text.strip()
        if not text or is_comment(text):
            continue
        kept.append(EmittedLine(0, text, entry.source_line))
    return kept


def minify(script: str) -> str:
    """Minify already rendered script text."""
    kept = [line.strip() for line in script.splitlines()]
    return "\n".join(line for line in kept if line and not is_comment(line)) + "\n"


__all__ = ["is_comment", "minify", "minify_lines"]
