"""Animation command parsing methods for MFlowParser.

Arguments are primary expressions (optionally negated).  Optional
trailing arguments are taken only when the next token can start an
expression and sits on the same line as the command.
"""

from mflow.ast import (
    AnimationCommand,
    Bounce,
    Expression,
    Fade,
    Move,
    Orbit,
    Pulse,
    Rotate,
    Scale,
    Spring,
    UnaryExpression,
    Wave,
    Wobble,
)
from mflow.lang.keywords import DIRECTION_WORDS, suggest_keyword
from .grammar.lexer import TokenType

_ARGUMENT_START_TOKENS = frozenset({
    TokenType.NUMBER,
    TokenType.STRING,
    TokenType.COLOR,
    TokenType.IDENTIFIER,
    TokenType.TRUE,
    TokenType.FALSE,
    TokenType.NULL,
    TokenType.LPAREN,
    TokenType.LBRACKET,
    TokenType.MINUS,
})


class AnimationParsingMixin:
    """Mixin with the ten animation command grammars."""

    def parse_animation_command(self) -> AnimationCommand:
        """
        Grammar:
            AnimationCommand = Move | Rotate | Scale | Fade | Bounce
                             | Wave | Orbit | Pulse | Wobble | Spring ;
        """
        token = self.current()
        dispatch = {
            TokenType.MOVE: self.parse_move,
            TokenType.ROTATE: self.parse_rotate,
            TokenType.SCALE: self.parse_scale,
            TokenType.FADE: self.parse_fade,
            TokenType.BOUNCE: self.parse_bounce,
            TokenType.WAVE: self.parse_wave,
            TokenType.ORBIT: self.parse_orbit,
            TokenType.PULSE: self.parse_pulse,
            TokenType.WOBBLE: self.parse_wobble,
            TokenType.SPRING: self.parse_spring,
        }
        parser_func = dispatch.get(token.type)
        if parser_func is not None:
            return parser_func()

        suggestion = suggest_keyword(token.value, "animate") if token.value else None
        raise self.error(f"Unknown animation command '{token.value}'", suggestion=suggestion)

    def parse_animation_argument(self) -> Expression:
        """
        Grammar:
            Argument = [ "-" ] , Primary ;
        """
        if self.check(TokenType.MINUS):
            operator = self.advance()
            operand = self.parse_primary()
            return UnaryExpression(
                operator="-", operand=operand, line=operator.line, column=operator.column,
            )
        return self.parse_primary()

    def _has_optional_argument(self) -> bool:
        return not self.at_line_break() and self.match(*_ARGUMENT_START_TOKENS)

    def _optional_argument(self):
        if self._has_optional_argument():
            return self.parse_animation_argument()
        return None

    def parse_move(self) -> Move:
        """
        Grammar:
            Move = "move" , Argument , [ "up" | "down" | "left" | "right" ] ;
        """
        token = self.advance()
        amount = self.parse_animation_argument()
        direction = "right"
        current = self.current()
        if (
            not self.at_line_break()
            and current.type == TokenType.IDENTIFIER
            and current.value in DIRECTION_WORDS
        ):
            direction = self.advance().value
        return Move(amount=amount, direction=direction, line=token.line, column=token.column)

    def parse_rotate(self) -> Rotate:
        token = self.advance()
        return Rotate(angle=self.parse_animation_argument(), line=token.line, column=token.column)

    def parse_scale(self) -> Scale:
        token = self.advance()
        return Scale(factor=self.parse_animation_argument(), line=token.line, column=token.column)

    def parse_fade(self) -> Fade:
        token = self.advance()
        return Fade(amount=self.parse_animation_argument(), line=token.line, column=token.column)

    def parse_bounce(self) -> Bounce:
        """
        Grammar:
            Bounce = "bounce" , [ Argument ] ;
        """
        token = self.advance()
        return Bounce(damping=self._optional_argument(), line=token.line, column=token.column)

    def parse_wave(self) -> Wave:
        """
        Grammar:
            Wave = "wave" , Argument (amplitude) , Argument (frequency) ;
        """
        token = self.advance()
        amplitude = self.parse_animation_argument()
        frequency = self.parse_animation_argument()
        return Wave(
            amplitude=amplitude, frequency=frequency, line=token.line, column=token.column,
        )

    def parse_orbit(self) -> Orbit:
        """
        Grammar:
            Orbit = "orbit" , Argument (cx) , Argument (cy) , Argument (radius) , Argument (speed) ;
        """
        token = self.advance()
        center_x = self.parse_animation_argument()
        center_y = self.parse_animation_argument()
        radius = self.parse_animation_argument()
        speed = self.parse_animation_argument()
        return Orbit(
            center_x=center_x,
            center_y=center_y,
            radius=radius,
            speed=speed,
            line=token.line,
            column=token.column,
        )

    def parse_pulse(self) -> Pulse:
        """
        Grammar:
            Pulse = "pulse" , Argument (min) , Argument (max) , [ Argument (speed) ] ;
        """
        token = self.advance()
        min_scale = self.parse_animation_argument()
        max_scale = self.parse_animation_argument()
        speed = self._optional_argument()
        return Pulse(
            min_scale=min_scale,
            max_scale=max_scale,
            speed=speed,
            line=token.line,
            column=token.column,
        )

    def parse_wobble(self) -> Wobble:
        """
        Grammar:
            Wobble = "wobble" , Argument (amount) , [ Argument (speed) ] ;
        """
        token = self.advance()
        amount = self.parse_animation_argument()
        speed = self._optional_argument()
        return Wobble(amount=amount, speed=speed, line=token.line, column=token.column)

    def parse_spring(self) -> Spring:
        """
        Grammar:
            Spring = "spring" , Argument (tx) , Argument (ty) , [ Argument (stiffness) ] ,
                     [ Argument (damping) ] ;
        """
        token = self.advance()
        target_x = self.parse_animation_argument()
        target_y = self.parse_animation_argument()
        stiffness = self._optional_argument()
        damping = self._optional_argument() if stiffness is not None else None
        return Spring(
            target_x=target_x,
            target_y=target_y,
            stiffness=stiffness,
            damping=damping,
            line=token.line,
            column=token.column,
        )


__all__ = ["AnimationParsingMixin"]
