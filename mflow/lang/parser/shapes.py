"""Shape literal parsing methods for MFlowParser.

Each shape has a fixed field order introduced by contextual words
(``at``, ``size``, ``color``, ...).  A missing or misplaced word is a
parse error naming the word that was expected.
"""

from typing import Callable, Optional

from mflow.ast import (
    Arc,
    Circle,
    Ellipse,
    Expression,
    Line,
    Point,
    Polygon,
    Rect,
    Text,
    Triangle,
)
from mflow.lang.keywords import suggest_keyword
from .grammar.lexer import TokenType


class ShapeParsingMixin:
    """Mixin with the eight shape grammars."""

    def shape_parser_for(self, token_type: TokenType) -> Optional[Callable[[], Expression]]:
        return {
            TokenType.CIRCLE: self.parse_circle,
            TokenType.RECT: self.parse_rect,
            TokenType.LINE: self.parse_line,
            TokenType.TRIANGLE: self.parse_triangle,
            TokenType.POLYGON: self.parse_polygon,
            TokenType.ELLIPSE: self.parse_ellipse,
            TokenType.ARC: self.parse_arc,
            TokenType.TEXT: self.parse_text,
        }.get(token_type)

    # ====================================================================
    # Field helpers
    # ====================================================================

    def _point(self, what: str, *, separator: str = "in position") -> Point:
        self.expect(TokenType.LPAREN, f"Expected ( for {what}")
        x = self.parse_expression()
        self.expect(TokenType.COMMA, f"Expected , {separator}")
        y = self.parse_expression()
        self.expect(TokenType.RPAREN, f"Expected ) after {what}")
        return Point(x=x, y=y)

    def _position(self, shape: str) -> Point:
        self.expect_word("at", f'Expected "at" after {shape}')
        return self._point("position")

    def _field(self, word: str) -> Expression:
        """Parse ``word expr`` for a required keyword-introduced field."""
        if not self.check_word(word):
            token = self.current()
            suggestion = None
            if token.type == TokenType.IDENTIFIER:
                suggestion = suggest_keyword(token.value, "shape")
                if suggestion != word:
                    suggestion = None
            raise self.error(f'Expected "{word}" keyword', suggestion=suggestion)
        self.advance()
        return self.parse_expression()

    def _optional_clause(self, token_type: Optional[TokenType] = None, word: Optional[str] = None) -> bool:
        """Consume an optional trailing clause introducer on the current line."""
        if self.at_line_break():
            return False
        if token_type is not None and self.check(token_type):
            self.advance()
            return True
        if word is not None and self.check_word(word):
            self.advance()
            return True
        return False

    # ====================================================================
    # Shapes
    # ====================================================================

    def parse_circle(self) -> Circle:
        """
        Grammar:
            Circle = "circle" , "at" , Point , "size" , Expression , "color" , Expression ;
        """
        token = self.advance()
        position = self._position("circle")
        size = self._field("size")
        color = self._field("color")
        return Circle(
            position=position, size=size, color=color, line=token.line, column=token.column,
        )

    def parse_rect(self) -> Rect:
        """
        Grammar:
            Rect = "rect" , "at" , Point , "width" , Expression , "height" , Expression ,
                   "color" , Expression ;
        """
        token = self.advance()
        position = self._position("rect")
        width = self._field("width")
        height = self._field("height")
        color = self._field("color")
        return Rect(
            position=position,
            width=width,
            height=height,
            color=color,
            line=token.line,
            column=token.column,
        )

    def parse_line(self) -> Line:
        """
        Grammar:
            Line = "line" , Point , Point , "color" , Expression ;
        """
        token = self.advance()
        start = self._point("start position")
        end = self._point("end position")
        color = self._field("color")
        return Line(start=start, end=end, color=color, line=token.line, column=token.column)

    def parse_triangle(self) -> Triangle:
        """
        Grammar:
            Triangle = "triangle" , Point , Point , Point , "color" , Expression ;
        """
        token = self.advance()
        points = [self._point("point", separator="in point") for _ in range(3)]
        color = self._field("color")
        return Triangle(points=points, color=color, line=token.line, column=token.column)

    def parse_polygon(self) -> Polygon:
        """
        Grammar:
            Polygon = "polygon" , "at" , Point , "sides" , Expression , "radius" , Expression ,
                      "color" , Expression , [ "rotate" , Expression ] ;
        """
        token = self.advance()
        position = self._position("polygon")
        sides = self._field("sides")
        radius = self._field("radius")
        color = self._field("color")
        rotation = self.parse_expression() if self._optional_clause(TokenType.ROTATE) else None
        return Polygon(
            position=position,
            sides=sides,
            radius=radius,
            color=color,
            rotation=rotation,
            line=token.line,
            column=token.column,
        )

    def parse_ellipse(self) -> Ellipse:
        """
        Grammar:
            Ellipse = "ellipse" , "at" , Point , Expression , Expression , "color" , Expression ,
                      [ "rotate" , Expression ] ;
        """
        token = self.advance()
        position = self._position("ellipse")
        radius_x = self.parse_expression()
        radius_y = self.parse_expression()
        color = self._field("color")
        rotation = self.parse_expression() if self._optional_clause(TokenType.ROTATE) else None
        return Ellipse(
            position=position,
            radius_x=radius_x,
            radius_y=radius_y,
            color=color,
            rotation=rotation,
            line=token.line,
            column=token.column,
        )

    def parse_arc(self) -> Arc:
        """
        Grammar:
            Arc = "arc" , "at" , Point , "radius" , Expression , "startAngle" , Expression ,
                  "endAngle" , Expression , "color" , Expression ;
        """
        token = self.advance()
        position = self._position("arc")
        radius = self._field("radius")
        start_angle = self._field("startAngle")
        end_angle = self._field("endAngle")
        color = self._field("color")
        return Arc(
            position=position,
            radius=radius,
            start_angle=start_angle,
            end_angle=end_angle,
            color=color,
            line=token.line,
            column=token.column,
        )

    def parse_text(self) -> Text:
        """
        Grammar:
            Text = "text" , "at" , Point , ( STRING | IDENTIFIER ) , "color" , Expression ,
                   [ "font" , Expression ] , [ "size" , Expression ] ;
        """
        token = self.advance()
        position = self._position("text")
        if not self.match(TokenType.STRING, TokenType.IDENTIFIER):
            raise self.error("Expected text content")
        content = self.parse_primary()
        color = self._field("color")

        font = None
        if self._optional_clause(word="font"):
            font = self.parse_expression()

        size = None
        if self._optional_clause(word="size"):
            size = self.parse_expression()

        return Text(
            position=position,
            content=content,
            color=color,
            font=font,
            size=size,
            line=token.line,
            column=token.column,
        )


__all__ = ["ShapeParsingMixin"]
