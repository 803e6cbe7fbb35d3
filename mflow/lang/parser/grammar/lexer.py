"""Lexical analyzer (tokenizer) for MFlow.

Scanning is driven by one compiled pattern of named alternatives; the
name of the group that matched decides the token kind.  The lexer never
raises: characters no alternative accepts and unterminated strings become
``UNKNOWN`` tokens so the parser can report them with a precise position.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List


class TokenType(Enum):
    """Token kinds.

    Keyword kinds carry their spelling and operator kinds their symbol, so
    the lookup tables below are derived from the enum itself.  The other
    kinds carry a short description.
    """

    NUMBER = "number literal"
    STRING = "string literal"
    COLOR = "color literal"
    IDENTIFIER = "identifier name"

    LET = "let"
    FN = "fn"
    RETURN = "return"
    IF = "if"
    ELSE = "else"
    REPEAT = "repeat"
    WHILE = "while"
    FOR = "for"
    ANIMATE = "animate"
    SCENE = "scene"
    IMPORT = "import"
    FROM = "from"
    TRUE = "true"
    FALSE = "false"
    NULL = "null"

    CIRCLE = "circle"
    RECT = "rect"
    LINE = "line"
    TRIANGLE = "triangle"
    POLYGON = "polygon"
    ELLIPSE = "ellipse"
    ARC = "arc"
    TEXT = "text"

    MOVE = "move"
    ROTATE = "rotate"
    SCALE = "scale"
    FADE = "fade"
    BOUNCE = "bounce"
    WAVE = "wave"
    ORBIT = "orbit"
    PULSE = "pulse"
    WOBBLE = "wobble"
    SPRING = "spring"

    PLUS = "+"
    MINUS = "-"
    STAR = "*"
    SLASH = "/"
    PERCENT = "%"
    EQ = "=="
    NE = "!="
    LT = "<"
    GT = ">"
    LE = "<="
    GE = ">="
    ASSIGN = "="
    LBRACE = "{"
    RBRACE = "}"
    LBRACKET = "["
    RBRACKET = "]"
    LPAREN = "("
    RPAREN = ")"
    COLON = ":"
    SEMICOLON = ";"
    COMMA = ","
    DOT = "."

    NEWLINE = "end of line"
    UNKNOWN = "unknown character"
    EOF = "end of input"


@dataclass(frozen=True)
class Token:
    """One token and the position of its first character (1-based)."""

    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"<{self.type.name} {self.value!r} at {self.line}:{self.column}>"


KEYWORDS: Dict[str, TokenType] = {
    kind.value: kind for kind in TokenType if kind.value.isidentifier()
}

OPERATORS: Dict[str, TokenType] = {
    kind.value: kind
    for kind in TokenType
    if len(kind.value) <= 2 and not kind.value.isidentifier()
}

_ESCAPES = {'n': '\n', 't': '\t', 'r': '\r', '"': '"', '\\': '\\'}

_TOKEN_RE = re.compile(
    r"""
      (?P<space>[ \t\r]+)
    | (?P<newline>\n)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?(?:\*/|\Z))
    | (?P<string>"(?:[^"\\\n]|\\[^\n])*")
    | (?P<open_string>"(?:[^"\\\n]|\\[^\n])*\\?)
    | (?P<number>[0-9]+(?:\.[0-9]+)?(?:[eE][+-]?[0-9]+)?)
    | (?P<color>\#[^\W_]+)
    | (?P<word>[^\W\d]\w*)
    | (?P<operator>==|!=|<=|>=|[-+*/%<>={}\[\]():;,.])
    """,
    re.VERBOSE | re.DOTALL,
)

_ESCAPE_RE = re.compile(r"\\(.)")


def unescape(body: str) -> str:
    """Decode backslash escapes in the body of a string literal."""
    return _ESCAPE_RE.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


class Lexer:
    """Tokenizer for MFlow source code."""

    def __init__(self, source: str):
        self.source = source
        self.pos = 0
        self.line = 1
        self.line_start = 0
        self.tokens: List[Token] = []

    def emit(self, kind: TokenType, value: str, at: int) -> None:
        self.tokens.append(Token(kind, value, self.line, at - self.line_start + 1))

    def break_line(self, newline_at: int) -> None:
        """Emit a NEWLINE token for the ``\\n`` at *newline_at* and move to the next line."""
        self.emit(TokenType.NEWLINE, '\n', newline_at)
        self.line += 1
        self.line_start = newline_at + 1

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source, ending with an EOF token."""
        source = self.source
        while self.pos < len(source):
            match = _TOKEN_RE.match(source, self.pos)
            if match is None:
                self.emit(TokenType.UNKNOWN, source[self.pos], self.pos)
                self.pos += 1
                continue

            group, text, start = match.lastgroup, match.group(), self.pos
            self.pos = match.end()

            if group == 'newline':
                self.break_line(start)
            elif group == 'block_comment':
                # Line breaks inside block comments still end statements
                offset = text.find('\n')
                while offset != -1:
                    self.break_line(start + offset)
                    offset = text.find('\n', offset + 1)
            elif group == 'string':
                self.emit(TokenType.STRING, unescape(text[1:-1]), start)
            elif group == 'open_string':
                self.emit(TokenType.UNKNOWN, text, start)
            elif group == 'number':
                self.emit(TokenType.NUMBER, text, start)
            elif group == 'color':
                self.emit(TokenType.COLOR, text, start)
            elif group == 'word':
                self.emit(KEYWORDS.get(text, TokenType.IDENTIFIER), text, start)
            elif group == 'operator':
                self.emit(OPERATORS[text], text, start)

        self.emit(TokenType.EOF, '', self.pos)
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Tokenize MFlow source code."""
    return Lexer(source).tokenize()


__all__ = ["Token", "TokenType", "Lexer", "KEYWORDS", "OPERATORS", "tokenize", "unescape"]
