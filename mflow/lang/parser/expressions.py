"""Expression parsing methods for MFlowParser.

Precedence, lowest to highest::

    assignment   target = value            (right associative)
    comparison   < <= > >= == !=           (left associative, no chaining semantics)
    additive     + -
    multiplicative * / %
    unary        -expr
    postfix      call(...)  index[...]  member.name
    shape        circle ... | rect ... | ...
    primary      literals, identifiers, ( expr ), [ ... ], { ... }

Operators and postfix continuations must start on the same line as the
token before them; a newline always ends the expression.
"""

from typing import List

from mflow.ast import (
    ArrayLiteral,
    AssignmentExpression,
    BinaryExpression,
    BooleanLiteral,
    CallExpression,
    ColorLiteral,
    Expression,
    Identifier,
    IndexExpression,
    MemberExpression,
    NullLiteral,
    NumberLiteral,
    ObjectLiteral,
    ObjectProperty,
    StringLiteral,
    UnaryExpression,
    is_assignable,
)
from .grammar.lexer import KEYWORDS, TokenType
from .errors import ParseError

_COMPARISON_OPERATORS = (
    TokenType.LT, TokenType.LE, TokenType.GT, TokenType.GE, TokenType.EQ, TokenType.NE,
)
_ADDITIVE_OPERATORS = (TokenType.PLUS, TokenType.MINUS)
_MULTIPLICATIVE_OPERATORS = (TokenType.STAR, TokenType.SLASH, TokenType.PERCENT)

_PROPERTY_NAME_TOKENS = frozenset({TokenType.IDENTIFIER}) | frozenset(KEYWORDS.values())


class ExpressionParsingMixin:
    """Mixin with expression and literal parsing methods."""

    def parse_expression(self) -> Expression:
        """
        Grammar:
            Expression = Assignment ;
        """
        return self.parse_assignment()

    def parse_assignment(self) -> Expression:
        """
        Grammar:
            Assignment = Comparison , [ "=" , Assignment ] ;
        """
        expr = self.parse_comparison()
        if self.check(TokenType.ASSIGN) and not self.at_line_break():
            operator = self.advance()
            if not is_assignable(expr):
                raise ParseError(
                    "Invalid assignment target", line=operator.line, column=operator.column,
                )
            value = self.parse_assignment()
            return AssignmentExpression(
                target=expr, value=value, line=expr.line, column=expr.column,
            )
        return expr

    def _parse_binary_level(self, operators, operand) -> Expression:
        expr = operand()
        while self.match(*operators) and not self.at_line_break():
            operator = self.advance()
            right = operand()
            expr = BinaryExpression(
                operator=operator.value,
                left=expr,
                right=right,
                line=operator.line,
                column=operator.column,
            )
        return expr

    def parse_comparison(self) -> Expression:
        """
        Grammar:
            Comparison = Additive , { ( "<" | "<=" | ">" | ">=" | "==" | "!=" ) , Additive } ;
        """
        return self._parse_binary_level(_COMPARISON_OPERATORS, self.parse_additive)

    def parse_additive(self) -> Expression:
        """
        Grammar:
            Additive = Multiplicative , { ( "+" | "-" ) , Multiplicative } ;
        """
        return self._parse_binary_level(_ADDITIVE_OPERATORS, self.parse_multiplicative)

    def parse_multiplicative(self) -> Expression:
        """
        Grammar:
            Multiplicative = Unary , { ( "*" | "/" | "%" ) , Unary } ;
        """
        return self._parse_binary_level(_MULTIPLICATIVE_OPERATORS, self.parse_unary)

    def parse_unary(self) -> Expression:
        """
        Grammar:
            Unary = "-" , Unary | Postfix ;
        """
        if self.check(TokenType.MINUS):
            operator = self.advance()
            operand = self.parse_unary()
            return UnaryExpression(
                operator="-", operand=operand, line=operator.line, column=operator.column,
            )
        return self.parse_postfix()

    def parse_postfix(self) -> Expression:
        """
        Grammar:
            Postfix = ShapeOrPrimary , { "(" , [ Arguments ] , ")" | "[" , Expression , "]" | "." , WORD } ;
        """
        expr = self.parse_shape_or_primary()

        while not self.at_line_break():
            if self.consume_if(TokenType.LPAREN):
                arguments = self._parse_comma_list(TokenType.RPAREN)
                self.expect(TokenType.RPAREN, "Expected ) after arguments")
                expr = CallExpression(
                    callee=expr, arguments=arguments, line=expr.line, column=expr.column,
                )
            elif self.consume_if(TokenType.LBRACKET):
                index = self.parse_expression()
                self.expect(TokenType.RBRACKET, "Expected ] after index")
                expr = IndexExpression(
                    object=expr, index=index, line=expr.line, column=expr.column,
                )
            elif self.consume_if(TokenType.DOT):
                if not self.match(*_PROPERTY_NAME_TOKENS):
                    raise self.error("Expected property name after .")
                name = self.advance()
                expr = MemberExpression(
                    object=expr, property=name.value, line=expr.line, column=expr.column,
                )
            else:
                break

        return expr

    def parse_shape_or_primary(self) -> Expression:
        shape_parser = self.shape_parser_for(self.current().type)
        if shape_parser is not None:
            return shape_parser()
        return self.parse_primary()

    def parse_primary(self) -> Expression:
        """
        Grammar:
            Primary = NUMBER | STRING | COLOR | "true" | "false" | "null" | IDENTIFIER
                    | "(" , Expression , ")" | ArrayLiteral | ObjectLiteral ;
        """
        token = self.current()

        if token.type == TokenType.NUMBER:
            self.advance()
            return NumberLiteral(float(token.value), line=token.line, column=token.column)

        if token.type == TokenType.STRING:
            self.advance()
            return StringLiteral(token.value, line=token.line, column=token.column)

        if token.type == TokenType.COLOR:
            self.advance()
            return ColorLiteral(token.value, line=token.line, column=token.column)

        if token.type in (TokenType.TRUE, TokenType.FALSE):
            self.advance()
            return BooleanLiteral(
                token.type == TokenType.TRUE, line=token.line, column=token.column,
            )

        if token.type == TokenType.NULL:
            self.advance()
            return NullLiteral(line=token.line, column=token.column)

        if token.type == TokenType.IDENTIFIER:
            self.advance()
            return Identifier(token.value, line=token.line, column=token.column)

        if token.type == TokenType.LPAREN:
            self.advance()
            expr = self.parse_expression()
            self.expect(TokenType.RPAREN, "Expected ) after expression")
            return expr

        if token.type == TokenType.LBRACKET:
            return self.parse_array_literal()

        if token.type == TokenType.LBRACE:
            return self.parse_object_literal()

        if token.type == TokenType.EOF:
            raise self.error("Unexpected end of input")

        raise self.error(f"Unexpected token: {token.value}")

    def parse_array_literal(self) -> ArrayLiteral:
        """
        Grammar:
            ArrayLiteral = "[" , [ Expression , { "," , Expression } , [ "," ] ] , "]" ;
        """
        token = self.advance()
        elements = self._parse_comma_list(TokenType.RBRACKET)
        self.expect(TokenType.RBRACKET, "Expected ] after array elements")
        return ArrayLiteral(elements=elements, line=token.line, column=token.column)

    def parse_object_literal(self) -> ObjectLiteral:
        """
        Grammar:
            ObjectLiteral = "{" , [ Property , { "," , Property } , [ "," ] ] , "}" ;
            Property      = ( WORD | STRING ) , ":" , Expression ;
        """
        token = self.advance()
        properties: List[ObjectProperty] = []

        while not self.check(TokenType.RBRACE):
            if not self.match(TokenType.STRING, *_PROPERTY_NAME_TOKENS):
                raise self.error("Expected property name")
            key = self.advance()
            self.expect(TokenType.COLON, "Expected : after property name")
            properties.append(ObjectProperty(key=key.value, value=self.parse_expression()))
            if not self.consume_if(TokenType.COMMA):
                break

        self.expect(TokenType.RBRACE, "Expected } after object properties")
        return ObjectLiteral(properties=properties, line=token.line, column=token.column)

    def _parse_comma_list(self, closing: TokenType) -> List[Expression]:
        """Parse ``expr, expr, ...`` up to (not including) ``closing``."""
        items: List[Expression] = []
        while not self.check(closing):
            items.append(self.parse_expression())
            if not self.consume_if(TokenType.COMMA):
                break
        return items


__all__ = ["ExpressionParsingMixin"]
