"""Recursive descent parser for MFlow.

Statements, expressions, shape literals and animation commands are each
parsed by their own mixin; this module holds token management, the
statement grammar and error recovery.

Recovery is best-effort: when a statement fails to parse, the diagnostic
is logged and recorded on ``MFlowParser.errors`` and the parser skips
ahead to the next line, the next statement keyword, or (inside a block)
the closing brace.  The rest of the program is still parsed.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Optional, Tuple
import logging

from mflow.ast import (
    AnimateBlock,
    ExpressionStatement,
    ForStatement,
    FunctionDeclaration,
    Identifier,
    IfStatement,
    ImportStatement,
    LetStatement,
    Program,
    RepeatStatement,
    ReturnStatement,
    SceneBlock,
    Statement,
    WhileStatement,
)
from mflow.lang.keywords import is_reserved

from .grammar.lexer import Token, TokenType, tokenize
from .errors import ParseError, create_parse_error
from .expressions import ExpressionParsingMixin
from .shapes import ShapeParsingMixin
from .animations import AnimationParsingMixin

logger = logging.getLogger(__name__)


# Tokens the recovery routine treats as the start of a fresh statement.
STATEMENT_START_TOKENS = frozenset({
    TokenType.LET,
    TokenType.FN,
    TokenType.RETURN,
    TokenType.IF,
    TokenType.REPEAT,
    TokenType.WHILE,
    TokenType.FOR,
    TokenType.ANIMATE,
    TokenType.SCENE,
    TokenType.IMPORT,
})


class MFlowParser(ExpressionParsingMixin, ShapeParsingMixin, AnimationParsingMixin):
    """
    Recursive descent parser with single-token lookahead.

    Newline tokens are kept in the token list but skipped by ``current``
    and ``advance``; ``at_line_break`` tells whether one separates the
    last consumed token from the next, which is how optional clauses and
    operator continuations are limited to the current line.

    Grammar:
        Program   = { Statement [ ";" ] } ;
        Statement = LetStmt | FnDecl | ReturnStmt | IfStmt | RepeatStmt
                  | WhileStmt | ForStmt | AnimateBlock | SceneBlock
                  | ImportStmt | Expression ;
    """

    def __init__(self, source: str = "", *, path: str = "", tokens: Optional[List[Token]] = None):
        """Initialize parser with source code (or an existing token list)."""
        self.source = source
        self.path = path
        self.tokens = tokens if tokens is not None else tokenize(source)
        if not self.tokens or self.tokens[-1].type != TokenType.EOF:
            last = self.tokens[-1] if self.tokens else None
            self.tokens = list(self.tokens) + [Token(
                TokenType.EOF, "", last.line if last else 1, last.column if last else 1,
            )]
        self.pos = 0
        self.errors: List[ParseError] = []

    @classmethod
    def from_tokens(cls, tokens: List[Token], *, path: str = "") -> "MFlowParser":
        """Build a parser over tokens produced elsewhere."""
        return cls(path=path, tokens=tokens)

    # ====================================================================
    # Token Management
    # ====================================================================

    def _significant_index(self, start: Optional[int] = None) -> int:
        index = self.pos if start is None else start
        while self.tokens[index].type == TokenType.NEWLINE:
            index += 1
        return index

    def current(self) -> Token:
        """Get the next significant (non-newline) token."""
        return self.tokens[self._significant_index()]

    def advance(self) -> Token:
        """Consume and return the current token (EOF is never consumed)."""
        index = self._significant_index()
        token = self.tokens[index]
        self.pos = index if token.type == TokenType.EOF else index + 1
        return token

    def at_line_break(self) -> bool:
        """True when a newline separates the last consumed token from the next."""
        return self.tokens[self.pos].type == TokenType.NEWLINE

    def match(self, *types: TokenType) -> bool:
        """Check if current token matches any of the given types."""
        return self.current().type in types

    def check(self, token_type: TokenType) -> bool:
        """Check if current token matches the given type (alias for match)."""
        return self.match(token_type)

    def check_word(self, word: str) -> bool:
        """Check for a contextual word such as ``at`` or ``size``."""
        token = self.current()
        return token.type == TokenType.IDENTIFIER and token.value == word

    def consume_if(self, *types: TokenType) -> Optional[Token]:
        """Consume token if it matches any of the given types."""
        if self.match(*types):
            return self.advance()
        return None

    def expect(self, token_type: TokenType, message: str) -> Token:
        """Consume a token of ``token_type`` or raise ``ParseError``."""
        if self.check(token_type):
            return self.advance()
        raise self.error(message)

    def expect_word(self, word: str, message: str) -> Token:
        """Consume the contextual word ``word`` or raise ``ParseError``."""
        if self.check_word(word):
            return self.advance()
        raise self.error(message)

    def expect_name(self, message: str) -> Token:
        """Consume an identifier, naming reserved words in the error."""
        token = self.current()
        if token.type == TokenType.IDENTIFIER:
            return self.advance()
        if is_reserved(token.value):
            raise self.error(f"{message}, found reserved word '{token.value}'")
        raise self.error(message)

    def is_at_end(self) -> bool:
        return self.check(TokenType.EOF)

    def error(self, message: str, suggestion: Optional[str] = None) -> ParseError:
        """Create a parse error at the current token.

        Unknown tokens from the lexer always report the lexical problem
        rather than ``message``.
        """
        token = self.current()
        if token.type == TokenType.UNKNOWN:
            return create_parse_error(
                describe_unknown(token), line=token.line, column=token.column,
            )
        return create_parse_error(
            message, line=token.line, column=token.column, suggestion=suggestion,
        )

    # ====================================================================
    # Error Recovery
    # ====================================================================

    def record_error(self, error: ParseError) -> None:
        """Log a recovered diagnostic and keep it for the caller."""
        logger.error(str(error))
        self.errors.append(error)

    def synchronize(self, start: int, *, in_block: bool = False) -> None:
        """
        Skip to a safe restart point after a failed statement.

        Always makes progress past the statement start, then stops after a
        newline, before a statement keyword, or before ``}`` inside a block.
        """
        if self.pos <= start:
            self.pos = start
            self.advance()

        while True:
            token = self.tokens[self.pos]
            if token.type == TokenType.EOF:
                return
            if token.type == TokenType.NEWLINE:
                self.pos += 1
                return
            if token.type in STATEMENT_START_TOKENS:
                return
            if in_block and token.type == TokenType.RBRACE:
                return
            self.pos += 1

    # ====================================================================
    # High-Level Parsing
    # ====================================================================

    def parse(self) -> Program:
        """
        Parse the whole program.

        Never raises for malformed input; see ``errors`` afterwards.
        """
        body = self.parse_statement_list(in_block=False)
        logger.debug(
            "Parsed %d top-level statement(s) with %d error(s)", len(body), len(self.errors)
        )
        return Program(body=body, path=self.path, line=1, column=1)

    def parse_statement_list(self, *, in_block: bool) -> List[Statement]:
        """Parse statements until EOF (or ``}`` inside a block), recovering from errors."""
        statements: List[Statement] = []
        while True:
            while self.consume_if(TokenType.SEMICOLON):
                pass
            if self.is_at_end() or (in_block and self.check(TokenType.RBRACE)):
                return statements

            start = self.pos
            try:
                statements.append(self.parse_statement())
            except ParseError as exc:
                self.record_error(exc)
                self.synchronize(start, in_block=in_block)

    def parse_block(self, open_message: str, close_message: str) -> List[Statement]:
        """
        Parse a braced statement body.

        Grammar:
            Block = "{" , { Statement } , "}" ;
        """
        self.expect(TokenType.LBRACE, open_message)
        body = self.parse_statement_list(in_block=True)
        self.expect(TokenType.RBRACE, close_message)
        return body

    def parse_statement(self) -> Statement:
        """Parse one statement, dispatching on its leading keyword."""
        dispatch: Dict[TokenType, Callable[[], Statement]] = {
            TokenType.LET: self.parse_let_statement,
            TokenType.FN: self.parse_function_declaration,
            TokenType.RETURN: self.parse_return_statement,
            TokenType.IF: self.parse_if_statement,
            TokenType.REPEAT: self.parse_repeat_statement,
            TokenType.WHILE: self.parse_while_statement,
            TokenType.FOR: self.parse_for_statement,
            TokenType.ANIMATE: self.parse_animate_block,
            TokenType.SCENE: self.parse_scene_block,
            TokenType.IMPORT: self.parse_import_statement,
        }
        parser_func = dispatch.get(self.current().type)
        if parser_func is not None:
            return parser_func()
        return self.parse_expression_statement()

    # ====================================================================
    # Statements
    # ====================================================================

    def parse_let_statement(self) -> LetStatement:
        """
        Grammar:
            LetStmt = "let" , IDENTIFIER , "=" , Expression ;
        """
        token = self.advance()
        name = self.expect_name("Expected variable name")
        self.expect(TokenType.ASSIGN, "Expected = after variable name")
        value = self.parse_expression()
        return LetStatement(
            identifier=Identifier(name.value, line=name.line, column=name.column),
            value=value,
            line=token.line,
            column=token.column,
        )

    def parse_function_declaration(self) -> FunctionDeclaration:
        """
        Grammar:
            FnDecl = "fn" , IDENTIFIER , "(" , [ IDENTIFIER , { "," , IDENTIFIER } ] , ")" , Block ;
        """
        token = self.advance()
        name = self.expect_name("Expected function name")
        self.expect(TokenType.LPAREN, "Expected ( after function name")

        parameters: List[Identifier] = []
        if not self.check(TokenType.RPAREN):
            while True:
                param = self.expect_name("Expected parameter name")
                parameters.append(Identifier(param.value, line=param.line, column=param.column))
                if not self.consume_if(TokenType.COMMA):
                    break

        self.expect(TokenType.RPAREN, "Expected ) after parameters")
        body = self.parse_block("Expected { before function body", "Expected } after function body")
        return FunctionDeclaration(
            name=Identifier(name.value, line=name.line, column=name.column),
            parameters=parameters,
            body=body,
            line=token.line,
            column=token.column,
        )

    def parse_return_statement(self) -> ReturnStatement:
        """
        Grammar:
            ReturnStmt = "return" , [ Expression ] ;   (value on the same line)
        """
        token = self.advance()
        value = None
        if not self.at_line_break() and not self.match(
            TokenType.RBRACE, TokenType.SEMICOLON, TokenType.EOF
        ):
            value = self.parse_expression()
        return ReturnStatement(value=value, line=token.line, column=token.column)

    def parse_if_statement(self) -> IfStatement:
        """
        Grammar:
            IfStmt = "if" , Expression , Block , [ "else" , ( IfStmt | Block ) ] ;
        """
        token = self.advance()
        condition = self.parse_expression()
        then_branch = self.parse_block("Expected { after if condition", "Expected } after if body")

        else_branch: Optional[List[Statement]] = None
        if self.consume_if(TokenType.ELSE):
            if self.check(TokenType.IF):
                else_branch = [self.parse_if_statement()]
            else:
                else_branch = self.parse_block("Expected { after else", "Expected } after else body")

        return IfStatement(
            condition=condition,
            then_branch=then_branch,
            else_branch=else_branch,
            line=token.line,
            column=token.column,
        )

    def parse_repeat_statement(self) -> RepeatStatement:
        """
        Grammar:
            RepeatStmt = "repeat" , Expression , Block ;
        """
        token = self.advance()
        times = self.parse_expression()
        body = self.parse_block("Expected { after repeat count", "Expected } after repeat body")
        return RepeatStatement(times=times, body=body, line=token.line, column=token.column)

    def parse_while_statement(self) -> WhileStatement:
        """
        Grammar:
            WhileStmt = "while" , Expression , Block ;
        """
        token = self.advance()
        condition = self.parse_expression()
        body = self.parse_block("Expected { after while condition", "Expected } after while body")
        return WhileStatement(condition=condition, body=body, line=token.line, column=token.column)

    def parse_for_statement(self) -> ForStatement:
        """
        Grammar:
            ForStmt = "for" , "(" , [ LetStmt | Expression ] , ";" , Expression , ";" ,
                      [ Expression ] , ")" , Block ;
        """
        token = self.advance()
        self.expect(TokenType.LPAREN, "Expected ( after for")

        init = None
        if self.check(TokenType.LET):
            init = self.parse_let_statement()
        elif not self.check(TokenType.SEMICOLON):
            init = self.parse_expression_statement()
        self.expect(TokenType.SEMICOLON, "Expected ; after for initializer")

        condition = self.parse_expression()
        self.expect(TokenType.SEMICOLON, "Expected ; after for condition")

        update = None
        if not self.check(TokenType.RPAREN):
            update = self.parse_expression()
        self.expect(TokenType.RPAREN, "Expected ) after for clauses")

        body = self.parse_block("Expected { after for", "Expected } after for body")
        return ForStatement(
            init=init,
            condition=condition,
            update=update,
            body=body,
            line=token.line,
            column=token.column,
        )

    def parse_animate_block(self) -> AnimateBlock:
        """
        Grammar:
            AnimateBlock = "animate" , "{" , { AnimationCommand } , "}" ;
        """
        token = self.advance()
        self.expect(TokenType.LBRACE, "Expected { after animate")

        animations = []
        while True:
            while self.consume_if(TokenType.SEMICOLON):
                pass
            if self.is_at_end() or self.check(TokenType.RBRACE):
                break
            start = self.pos
            try:
                animations.append(self.parse_animation_command())
            except ParseError as exc:
                self.record_error(exc)
                self.synchronize(start, in_block=True)

        self.expect(TokenType.RBRACE, "Expected } after animate block")
        return AnimateBlock(animations=animations, line=token.line, column=token.column)

    def parse_scene_block(self) -> SceneBlock:
        """
        Grammar:
            SceneBlock = "scene" , IDENTIFIER , Block ;
        """
        token = self.advance()
        name = self.expect_name("Expected scene name")
        body = self.parse_block("Expected { after scene name", "Expected } after scene body")
        return SceneBlock(name=name.value, body=body, line=token.line, column=token.column)

    def parse_import_statement(self) -> ImportStatement:
        """
        Grammar:
            ImportStmt = "import" , STRING
                       | "import" , IDENTIFIER , { "," , IDENTIFIER } , "from" , STRING ;
        """
        token = self.advance()
        if self.check(TokenType.STRING):
            module = self.advance()
            return ImportStatement(module=module.value, line=token.line, column=token.column)

        names: List[Identifier] = []
        while True:
            name = self.expect_name("Expected imported name or module string")
            names.append(Identifier(name.value, line=name.line, column=name.column))
            if not self.consume_if(TokenType.COMMA):
                break

        self.expect(TokenType.FROM, "Expected 'from' after imported names")
        module = self.expect(TokenType.STRING, "Expected module path string after 'from'")
        return ImportStatement(
            module=module.value, names=names, line=token.line, column=token.column,
        )

    def parse_expression_statement(self) -> ExpressionStatement:
        expr = self.parse_expression()
        return ExpressionStatement(expression=expr, line=expr.line, column=expr.column)


def describe_unknown(token: Token) -> str:
    """Message for an ``UNKNOWN`` token produced by the lexer."""
    if token.value.startswith('"'):
        return "Unterminated string literal"
    return f"Unexpected character '{token.value}'"


def parse_program(source: str, path: str = "") -> Tuple[Program, List[ParseError]]:
    """Parse MFlow source, returning the program and any recovered parse errors."""
    parser = MFlowParser(source, path=path)
    program = parser.parse()
    return program, parser.errors


__all__ = [
    "MFlowParser",
    "STATEMENT_START_TOKENS",
    "describe_unknown",
    "parse_program",
]
