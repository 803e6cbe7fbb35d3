"""Animation command emission.

Commands run once per frame inside the generated ``animate`` function and
all write the single shared ``animationState`` record.  ``move``,
``rotate``, ``scale`` and ``fade`` are deltas; the time driven commands
assign absolute values computed from ``mflow.time``; ``spring`` steps
toward its target.
"""

from __future__ import annotations

from typing import Optional

from mflow.ast import (
    Bounce,
    Expression,
    Fade,
    Move,
    Orbit,
    Pulse,
    Rotate,
    Scale,
    Spring,
    Wave,
    Wobble,
)

# direction -> (animationState field, compound operator)
MOVE_TARGETS = {
    "right": ("x", "+="),
    "left": ("x", "-="),
    "down": ("y", "+="),
    "up": ("y", "-="),
}


class AnimationGenerationMixin:
    """Mixin emitting one frame's worth of animation statements."""

    def optional_expr(self, node: Optional[Expression], default: str) -> str:
        return self.expr(node) if node is not None else default

    def visit_Move(self, node: Move) -> None:
        field, operator = MOVE_TARGETS[node.direction]
        self.emitter.line(f"animationState.{field} {operator} {self.expr(node.amount)};")

    def visit_Rotate(self, node: Rotate) -> None:
        self.emitter.line(f"animationState.rotation += {self.expr(node.angle)};")

    def visit_Scale(self, node: Scale) -> None:
        self.emitter.line(f"animationState.scale *= {self.expr(node.factor)};")

    def visit_Fade(self, node: Fade) -> None:
        self.emitter.line(f"animationState.opacity -= {self.expr(node.amount)};")

    def visit_Bounce(self, node: Bounce) -> None:
        height = "100"
        if node.damping is not None:
            height = f"100 * {self.expr(node.damping)}"
        self.emitter.line(f"animationState.y = Math.abs(Math.sin(mflow.time * 2)) * {height};")

    def visit_Wave(self, node: Wave) -> None:
        amplitude = self.expr(node.amplitude)
        frequency = self.expr(node.frequency)
        self.emitter.line(f"animationState.x = Math.sin(mflow.time * {frequency}) * {amplitude};")

    def visit_Orbit(self, node: Orbit) -> None:
        with self.emitter.block("{"):
            self.emitter.line(f"const __orbitAngle = mflow.time * {self.expr(node.speed)};")
            radius = self.expr(node.radius)
            self.emitter.line(
                f"animationState.x = {self.expr(node.center_x)} + Math.cos(__orbitAngle) * {radius};"
            )
            self.emitter.line(
                f"animationState.y = {self.expr(node.center_y)} + Math.sin(__orbitAngle) * {radius};"
            )

    def visit_Pulse(self, node: Pulse) -> None:
        speed = self.optional_expr(node.speed, "1")
        low = self.expr(node.min_scale)
        high = self.expr(node.max_scale)
        with self.emitter.block("{"):
            self.emitter.line(f"const __pulse = (Math.sin(mflow.time * {speed}) + 1) / 2;")
            self.emitter.line(f"animationState.scale = {low} + ({high} - {low}) * __pulse;")

    def visit_Wobble(self, node: Wobble) -> None:
        speed = self.optional_expr(node.speed, "5")
        self.emitter.line(
            f"animationState.rotation = Math.sin(mflow.time * {speed}) * {self.expr(node.amount)};"
        )

    def visit_Spring(self, node: Spring) -> None:
        step = "__stiffness"
        if node.damping is not None:
            step = f"__stiffness * {self.expr(node.damping)}"
        with self.emitter.block("{"):
            stiffness = self.optional_expr(node.stiffness, "0.1")
            self.emitter.line(f"const __stiffness = {stiffness};")
            self.emitter.line(f"const __dx = {self.expr(node.target_x)} - animationState.x;")
            self.emitter.line(f"const __dy = {self.expr(node.target_y)} - animationState.y;")
            self.emitter.line(f"animationState.x += __dx * {step};")
            self.emitter.line(f"animationState.y += __dy * {step};")


__all__ = ["AnimationGenerationMixin", "MOVE_TARGETS"]
