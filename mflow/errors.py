"""Errors raised by MFlow tooling outside of compile diagnostics.

Problems in a program are never raised; they are returned as
:class:`mflow.lang.parser.Diagnostic` values.  The exceptions here cover
the surroundings: project configuration and scaffolding.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ErrorLocation:
    """A file position; any part may be unknown."""

    path: Optional[str] = None
    line: Optional[int] = None
    column: Optional[int] = None

    def describe(self) -> str:
        """``path:line:column``, trimmed to the known parts, or ``""``."""
        if not self.path:
            return ""
        parts = [self.path]
        if self.line is not None:
            parts.append(str(self.line))
            if self.column is not None:
                parts.append(str(self.column))
        return ":".join(parts)


class MFlowError(Exception):
    """Base class for MFlow tooling errors.

    ``code`` and ``hint`` default to class attributes so subclasses can
    fix them once.
    """

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        line: Optional[int] = None,
        column: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.location = ErrorLocation(path, line, column)
        self.code = code or self.code
        self.hint = hint or self.hint

    @property
    def path(self) -> Optional[str]:
        return self.location.path

    @property
    def line(self) -> Optional[int]:
        return self.location.line

    @property
    def column(self) -> Optional[int]:
        return self.location.column

    def format(self) -> str:
        """
        One-line rendering with location, code and hint.

        Examples:
            >>> MFlowConfigError("Bad fps", path="mflow.config.json").format()
            'Bad fps (mflow.config.json; CONFIG_ERROR)'
        """
        meta = [part for part in (self.location.describe(), self.code) if part]
        text = f"{self.message} ({'; '.join(meta)})" if meta else self.message
        if self.hint:
            text += f" Hint: {self.hint}"
        return text


class MFlowConfigError(MFlowError):
    """``mflow.config.json`` cannot be read or is malformed."""

    code = "CONFIG_ERROR"


class MFlowTemplateError(MFlowError):
    """Project scaffolding cannot be generated."""

    code = "TEMPLATE_ERROR"


__all__ = [
    "ErrorLocation",
    "MFlowError",
    "MFlowConfigError",
    "MFlowTemplateError",
]
