"""MFlow parser package.

Public API:
    tokenize(source) -> List[Token]
    parse_program(source, path) -> (Program, List[ParseError])
    MFlowParser - the parser class (``errors`` holds recovered diagnostics)

Diagnostic types:
    Diagnostic, ParseError, SemanticError
"""

from .grammar.lexer import Lexer, Token, TokenType, tokenize
from .parse import MFlowParser, parse_program
from .errors import Diagnostic, ParseError, SemanticError

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "MFlowParser",
    "parse_program",
    "Diagnostic",
    "ParseError",
    "SemanticError",
]
