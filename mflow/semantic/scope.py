"""Lexical scope stack used by the semantic analyzer."""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional


class SymbolKind(Enum):
    """What kind of declaration introduced a name."""

    VARIABLE = "variable"
    FUNCTION = "function"
    PARAMETER = "parameter"
    IMPORT = "import"
    BUILTIN = "builtin"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Symbol:
    name: str
    kind: SymbolKind
    line: int = 0
    column: int = 0


class ScopeStack:
    """
    Stack of name -> ``Symbol`` maps, innermost last.

    The bottom map holds runtime builtins; the one above it is the
    program's global scope.  Use ``with stack.scope():`` to enter a nested
    scope; the scope is popped on every exit path.
    """

    def __init__(self, builtins: Optional[Mapping[str, Symbol]] = None) -> None:
        self._stack: List[Dict[str, Symbol]] = [dict(builtins or {}), {}]

    @property
    def depth(self) -> int:
        """Number of user scopes currently open (1 at global level)."""
        return len(self._stack) - 1

    @property
    def globals(self) -> Dict[str, Symbol]:
        return self._stack[1]

    def push(self) -> None:
        self._stack.append({})

    def pop(self) -> None:
        if len(self._stack) <= 2:
            raise RuntimeError("Cannot pop the global scope")
        self._stack.pop()

    @contextmanager
    def scope(self) -> Iterator[Dict[str, Symbol]]:
        self.push()
        try:
            yield self._stack[-1]
        finally:
            self.pop()

    def declare(self, symbol: Symbol) -> bool:
        """Add *symbol* to the innermost scope; False when the name is taken there."""
        current = self._stack[-1]
        if symbol.name in current:
            return False
        current[symbol.name] = symbol
        return True

    def lookup(self, name: str) -> Optional[Symbol]:
        for scope in reversed(self._stack):
            if name in scope:
                return scope[name]
        return None

    def visible_names(self) -> List[str]:
        """All names visible from the innermost scope, innermost first."""
        seen: Dict[str, None] = {}
        for scope in reversed(self._stack):
            for name in scope:
                seen.setdefault(name, None)
        return list(seen)


__all__ = ["SymbolKind", "Symbol", "ScopeStack"]
