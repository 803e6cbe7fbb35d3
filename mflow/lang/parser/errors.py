"""Compiler diagnostics for MFlow.

Every problem the compiler finds in a program is a ``Diagnostic``: a
message plus the line and column it refers to.  ``ParseError`` is raised
inside the parser and caught by the statement loops, which record it and
resynchronize; ``SemanticError`` is only ever collected.

Both render as ``"<kind> at line L, column C: <message>"``.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional


@dataclass
class Diagnostic(Exception):
    """Base class for positioned compiler diagnostics."""

    message: str
    line: int = 0
    column: int = 0
    kind: str = "Error"
    code: str = "MFLOW_ERROR"

    def __str__(self) -> str:
        return f"{self.kind} at line {self.line}, column {self.column}: {self.message}"

    def to_dict(self) -> dict:
        """Plain-data form used by editor integrations."""
        return {
            "kind": self.kind,
            "code": self.code,
            "message": self.message,
            "line": self.line,
            "column": self.column,
        }


@dataclass
class ParseError(Diagnostic):
    """Syntax error: unexpected token or missing required keyword."""

    kind: str = "Parse error"
    code: str = "PARSE_ERROR"


@dataclass
class SemanticError(Diagnostic):
    """Undefined identifier or duplicate declaration."""

    kind: str = "Semantic error"
    code: str = "SEMANTIC_ERROR"


def create_parse_error(
    message: str,
    *,
    line: int,
    column: int,
    suggestion: Optional[str] = None,
) -> ParseError:
    """Create a parse error, appending a "did you mean" hint when given."""
    if suggestion:
        message = f"{message} (did you mean '{suggestion}'?)"
    return ParseError(message=message, line=line, column=column)


__all__ = [
    "Diagnostic",
    "ParseError",
    "SemanticError",
    "create_parse_error",
]
