"""Shape literal AST nodes.

Shapes are expressions: evaluating one draws it on the canvas and yields
nothing.  Each field holds a fully parsed expression subtree.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .base import Expression, Point


@dataclass
class Shape(Expression):
    """Base class for the eight shape literals."""

    pass


@dataclass
class Circle(Shape):
    """``circle at (x, y) size s color c``"""

    position: Point
    size: Expression
    color: Expression
    line: int = 0
    column: int = 0


@dataclass
class Rect(Shape):
    """``rect at (x, y) width w height h color c``"""

    position: Point
    width: Expression
    height: Expression
    color: Expression
    line: int = 0
    column: int = 0


@dataclass
class Line(Shape):
    """``line (x1, y1) (x2, y2) color c``"""

    start: Point
    end: Point
    color: Expression
    line: int = 0
    column: int = 0


@dataclass
class Triangle(Shape):
    """``triangle (x1, y1) (x2, y2) (x3, y3) color c``"""

    points: List[Point]
    color: Expression
    line: int = 0
    column: int = 0


@dataclass
class Polygon(Shape):
    """``polygon at (x, y) sides n radius r color c [rotate a]``"""

    position: Point
    sides: Expression
    radius: Expression
    color: Expression
    rotation: Optional[Expression] = None
    line: int = 0
    column: int = 0


@dataclass
class Ellipse(Shape):
    """``ellipse at (x, y) rx ry color c [rotate a]``

    ``rotation`` is parsed and analysed but not drawn.
    """

    position: Point
    radius_x: Expression
    radius_y: Expression
    color: Expression
    rotation: Optional[Expression] = None
    line: int = 0
    column: int = 0


@dataclass
class Arc(Shape):
    """``arc at (x, y) radius r startAngle a endAngle b color c``

    Angles are in degrees.  The grammar has no way to set
    ``counterclockwise``, so parsed arcs are always drawn clockwise.
    """

    position: Point
    radius: Expression
    start_angle: Expression
    end_angle: Expression
    color: Expression
    counterclockwise: bool = False
    line: int = 0
    column: int = 0


@dataclass
class Text(Shape):
    """``text at (x, y) content color c [font f] [size s]``

    ``align`` is never set by the parser and never emitted.
    """

    position: Point
    content: Expression
    color: Expression
    font: Optional[Expression] = None
    size: Optional[Expression] = None
    align: Optional[str] = None
    line: int = 0
    column: int = 0


SHAPE_TYPES = (
    Circle,
    Rect,
    Line,
    Triangle,
    Polygon,
    Ellipse,
    Arc,
    Text,
)


__all__ = [
    "Shape",
    "Circle",
    "Rect",
    "Line",
    "Triangle",
    "Polygon",
    "Ellipse",
    "Arc",
    "Text",
    "SHAPE_TYPES",
]
