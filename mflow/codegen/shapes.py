"""Shape emission for the JavaScript generator.

Every shape becomes an immediately invoked function whose parameters are
the shape's fields::

    (function (x, y, size, color) {
      ctx.save();
      ...
      ctx.restore();
    })(150, 200, 60, "#F5A623")

The field expressions are evaluated as call arguments, in the caller's
scope and in declaration order, so program variables named ``size`` or
``color`` never collide with the parameter names.
"""

from __future__ import annotations

from typing import List, Sequence

from mflow.ast import (
    Arc,
    Circle,
    Ellipse,
    Line,
    Point,
    Polygon,
    Rect,
    StringLiteral,
    Text,
    Triangle,
)

from .literals import format_string


def invoke_block(params: Sequence[str], args: Sequence[str], body: Sequence[str]) -> str:
    """Render the save/draw/restore IIFE for one shape."""
    lines = [f"(function ({', '.join(params)}) {{", "  ctx.save();"]
    lines.extend(f"  {line}" if line else "" for line in body)
    lines.append("  ctx.restore();")
    lines.append(f"}})({', '.join(args)})")
    return "\n".join(lines)


class ShapeGenerationMixin:
    """Mixin translating shape literals into drawing code."""

    def point_args(self, point: Point) -> List[str]:
        return [self.expr(point.x), self.expr(point.y)]

    # ------------------------------------------------------------------
    # Transformed shapes: drawn around the origin after applyTransform
    # ------------------------------------------------------------------
    def visit_Circle(self, node: Circle) -> str:
        return invoke_block(
            ("x", "y", "size", "color"),
            self.point_args(node.position) + [self.expr(node.size), self.expr(node.color)],
            (
                "ctx.fillStyle = color;",
                "applyTransform(x, y);",
                "ctx.beginPath();",
                "ctx.arc(0, 0, size, 0, Math.PI * 2);",
                "ctx.fill();",
            ),
        )

    def visit_Rect(self, node: Rect) -> str:
        return invoke_block(
            ("x", "y", "width", "height", "color"),
            self.point_args(node.position)
            + [self.expr(node.width), self.expr(node.height), self.expr(node.color)],
            (
                "ctx.fillStyle = color;",
                "applyTransform(x, y);",
                "ctx.fillRect(-width / 2, -height / 2, width, height);",
            ),
        )

    # ------------------------------------------------------------------
    # Absolute shapes: drawn in canvas coordinates
    # ------------------------------------------------------------------
    def visit_Line(self, node: Line) -> str:
        return invoke_block(
            ("x1", "y1", "x2", "y2", "color"),
            self.point_args(node.start) + self.point_args(node.end) + [self.expr(node.color)],
            (
                "ctx.strokeStyle = color;",
                "ctx.beginPath();",
                "ctx.moveTo(x1, y1);",
                "ctx.lineTo(x2, y2);",
                "ctx.stroke();",
            ),
        )

    def visit_Triangle(self, node: Triangle) -> str:
        args: List[str] = []
        for point in node.points:
            args.extend(self.point_args(point))
        args.append(self.expr(node.color))
        return invoke_block(
            ("x1", "y1", "x2", "y2", "x3", "y3", "color"),
            args,
            (
                "ctx.fillStyle = color;",
                "ctx.beginPath();",
                "ctx.moveTo(x1, y1);",
                "ctx.lineTo(x2, y2);",
                "ctx.lineTo(x3, y3);",
                "ctx.closePath();",
                "ctx.fill();",
            ),
        )

    def visit_Polygon(self, node: Polygon) -> str:
        rotation = self.expr(node.rotation) if node.rotation is not None else "0"
        return invoke_block(
            ("x", "y", "sides", "radius", "color", "rotation"),
            self.point_args(node.position)
            + [self.expr(node.sides), self.expr(node.radius), self.expr(node.color), rotation],
            (
                "ctx.fillStyle = color;",
                "ctx.beginPath();",
                "for (let i = 0; i < sides; i++) {",
                "  const angle = (i * Math.PI * 2 / sides) + (rotation || 0);",
                "  const px = x + Math.cos(angle) * radius;",
                "  const py = y + Math.sin(angle) * radius;",
                "  if (i === 0) {",
                "    ctx.moveTo(px, py);",
                "  } else {",
                "    ctx.lineTo(px, py);",
                "  }",
                "}",
                "ctx.closePath();",
                "ctx.fill();",
            ),
        )

    def visit_Ellipse(self, node: Ellipse) -> str:
        # The rotation clause is accepted by the grammar but not drawn.
        return invoke_block(
            ("x", "y", "radiusX", "radiusY", "color"),
            self.point_args(node.position)
            + [self.expr(node.radius_x), self.expr(node.radius_y), self.expr(node.color)],
            (
                "ctx.fillStyle = color;",
                "ctx.beginPath();",
                "ctx.ellipse(x, y, radiusX, radiusY, 0, 0, Math.PI * 2);",
                "ctx.fill();",
            ),
        )

    def visit_Arc(self, node: Arc) -> str:
        direction = "true" if node.counterclockwise else "false"
        return invoke_block(
            ("x", "y", "radius", "startAngle", "endAngle", "color"),
            self.point_args(node.position)
            + [
                self.expr(node.radius),
                self.expr(node.start_angle),
                self.expr(node.end_angle),
                self.expr(node.color),
            ],
            (
                "ctx.strokeStyle = color;",
                "ctx.beginPath();",
                "ctx.arc(x, y, radius, startAngle * Math.PI / 180, "
                f"endAngle * Math.PI / 180, {direction});",
                "ctx.stroke();",
            ),
        )

    def visit_Text(self, node: Text) -> str:
        params = ["x", "y", "text", "color"]
        args = self.point_args(node.position) + [self.expr(node.content), self.expr(node.color)]
        body = ["ctx.fillStyle = color;"]
        # Only a literal font name is honoured; computed fonts are ignored.
        if isinstance(node.font, StringLiteral):
            body.append(f"ctx.font = {format_string(node.font.value)};")
        if node.size is not None:
            params.append("fontSize")
            args.append(self.expr(node.size))
            body.append('ctx.font = (fontSize || 16) + "px sans-serif";')
        body.append("ctx.fillText(String(text), x, y);")
        return invoke_block(params, args, body)


__all__ = ["ShapeGenerationMixin", "invoke_block"]
