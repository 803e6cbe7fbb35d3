"""Structured text emitter used by the JavaScript generator.

Indentation is owned by the emitter and changed only through the
``indented()`` and ``block()`` context managers, so nested generation can
never leave the level out of sync.  Every emitted line remembers the
source line that was current when it was written; the source map is built
from that.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence


@dataclass(frozen=True)
class EmittedLine:
    level: int
    text: str
    source_line: Optional[int] = None


class Emitter:
    """Accumulates indented output lines."""

    def __init__(self, indent_unit: str = "  ") -> None:
        self.indent_unit = indent_unit
        self.level = 0
        self.source_line: Optional[int] = None
        self._lines: List[EmittedLine] = []
        self._pending: List[str] = []

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------
    def write(self, fragment: str) -> None:
        """Append to the current, not yet terminated line."""
        self._pending.append(fragment)

    def line(self, text: str = "") -> None:
        """Terminate the current line with ``text`` appended.

        A multi-line ``text`` keeps its own relative indentation below the
        current level.
        """
        self._pending.append(text)
        content = "".join(self._pending)
        self._pending = []
        for piece in content.split("\n"):
            self._lines.append(EmittedLine(self.level, piece, self.source_line))

    def raw(self, text: str) -> None:
        """Emit pre-formatted text at column zero, without source mapping."""
        for piece in text.rstrip("\n").split("\n"):
            self._lines.append(EmittedLine(0, piece, None))

    # ------------------------------------------------------------------
    # Scope guards
    # ------------------------------------------------------------------
    @contextmanager
    def indented(self) -> Iterator[None]:
        self.level += 1
        try:
            yield
        finally:
            self.level -= 1

    @contextmanager
    def block(self, header: str, footer: str = "}") -> Iterator[None]:
        self.line(header)
        with self.indented():
            yield
        self.line(footer)

    @contextmanager
    def mapped(self, source_line: Optional[int]) -> Iterator[None]:
        """Attribute lines emitted inside the block to ``source_line``."""
        previous = self.source_line
        if source_line:
            self.source_line = source_line
        try:
            yield
        finally:
            self.source_line = previous

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------
    @property
    def lines(self) -> List[EmittedLine]:
        return list(self._lines)

    def render(self) -> str:
        return render_lines(self._lines, self.indent_unit)


def render_lines(lines: Sequence[EmittedLine], indent_unit: str = "  ") -> str:
    """Join emitted lines into output text ending with a newline."""
    rendered = []
    for entry in lines:
        if entry.text:
            rendered.append(indent_unit * entry.level + entry.text)
        else:
            rendered.append("")
    return "\n".join(rendered) + "\n"


__all__ = ["EmittedLine", "Emitter", "render_lines"]
