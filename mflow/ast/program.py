"""Program level AST node."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from .base import Node, Statement


@dataclass
class Program(Node):
    """Root of a parsed MFlow source file."""

    body: List[Statement] = field(default_factory=list)
    path: str = ""
    line: int = 1
    column: int = 1


__all__ = ["Program"]
