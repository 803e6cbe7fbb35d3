"""Semantic analysis for MFlow programs."""

from .analyzer import SemanticAnalyzer, analyze
from .builtins import BUILTIN_NAMES, JS_RESERVED_WORDS, RESERVED_RUNTIME_NAMES
from .scope import ScopeStack, Symbol, SymbolKind

__all__ = [
    "SemanticAnalyzer",
    "analyze",
    "BUILTIN_NAMES",
    "RESERVED_RUNTIME_NAMES",
    "JS_RESERVED_WORDS",
    "ScopeStack",
    "Symbol",
    "SymbolKind",
]
