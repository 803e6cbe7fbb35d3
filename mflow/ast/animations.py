"""Animation command AST nodes (the statements allowed inside ``animate { }``)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .base import Expression, Node


@dataclass
class AnimationCommand(Node):
    """Base class for the ten animation commands."""

    pass


@dataclass
class Move(AnimationCommand):
    """``move amount [up|down|left|right]``; direction defaults to right."""

    amount: Expression
    direction: str = "right"
    line: int = 0
    column: int = 0


@dataclass
class Rotate(AnimationCommand):
    angle: Expression
    line: int = 0
    column: int = 0


@dataclass
class Scale(AnimationCommand):
    factor: Expression
    line: int = 0
    column: int = 0


@dataclass
class Fade(AnimationCommand):
    amount: Expression
    line: int = 0
    column: int = 0


@dataclass
class Bounce(AnimationCommand):
    damping: Optional[Expression] = None
    line: int = 0
    column: int = 0


@dataclass
class Wave(AnimationCommand):
    amplitude: Expression
    frequency: Expression
    line: int = 0
    column: int = 0


@dataclass
class Orbit(AnimationCommand):
    center_x: Expression
    center_y: Expression
    radius: Expression
    speed: Expression
    line: int = 0
    column: int = 0


@dataclass
class Pulse(AnimationCommand):
    min_scale: Expression
    max_scale: Expression
    speed: Optional[Expression] = None
    line: int = 0
    column: int = 0


@dataclass
class Wobble(AnimationCommand):
    amount: Expression
    speed: Optional[Expression] = None
    line: int = 0
    column: int = 0


@dataclass
class Spring(AnimationCommand):
    """Moves the shared offset a fraction of the way to a target every frame."""

    target_x: Expression
    target_y: Expression
    stiffness: Optional[Expression] = None
    damping: Optional[Expression] = None
    line: int = 0
    column: int = 0


ANIMATION_TYPES = (
    Move,
    Rotate,
    Scale,
    Fade,
    Bounce,
    Wave,
    Orbit,
    Pulse,
    Wobble,
    Spring,
)


__all__ = [
    "AnimationCommand",
    "Move",
    "Rotate",
    "Scale",
    "Fade",
    "Bounce",
    "Wave",
    "Orbit",
    "Pulse",
    "Wobble",
    "Spring",
    "ANIMATION_TYPES",
]
