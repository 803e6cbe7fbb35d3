"""MFlow abstract syntax tree."""

from .base import (
    Node,
    Expression,
    Statement,
    Identifier,
    NumberLiteral,
    StringLiteral,
    ColorLiteral,
    BooleanLiteral,
    NullLiteral,
    ArrayLiteral,
    ObjectProperty,
    ObjectLiteral,
    BinaryExpression,
    UnaryExpression,
    AssignmentExpression,
    CallExpression,
    MemberExpression,
    IndexExpression,
    Point,
    EXPRESSION_TYPES,
    is_assignable,
)
from .shapes import (
    Shape,
    Circle,
    Rect,
    Line,
    Triangle,
    Polygon,
    Ellipse,
    Arc,
    Text,
    SHAPE_TYPES,
)
from .animations import (
    AnimationCommand,
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
    ANIMATION_TYPES,
)
from .statements import (
    LetStatement,
    FunctionDeclaration,
    ReturnStatement,
    IfStatement,
    RepeatStatement,
    WhileStatement,
    ForStatement,
    AnimateBlock,
    SceneBlock,
    ImportStatement,
    ExpressionStatement,
    STATEMENT_TYPES,
)
from .program import Program
from .visitor import ALL_NODE_TYPES, NodeVisitor

__all__ = [
    # Bases
    "Node",
    "Expression",
    "Statement",
    "Shape",
    "AnimationCommand",
    "Point",
    "ObjectProperty",
    # Expressions
    "Identifier",
    "NumberLiteral",
    "StringLiteral",
    "ColorLiteral",
    "BooleanLiteral",
    "NullLiteral",
    "ArrayLiteral",
    "ObjectLiteral",
    "BinaryExpression",
    "UnaryExpression",
    "AssignmentExpression",
    "CallExpression",
    "MemberExpression",
    "IndexExpression",
    # Shapes
    "Circle",
    "Rect",
    "Line",
    "Triangle",
    "Polygon",
    "Ellipse",
    "Arc",
    "Text",
    # Animations
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
    # Statements
    "LetStatement",
    "FunctionDeclaration",
    "ReturnStatement",
    "IfStatement",
    "RepeatStatement",
    "WhileStatement",
    "ForStatement",
    "AnimateBlock",
    "SceneBlock",
    "ImportStatement",
    "ExpressionStatement",
    "Program",
    # Grouping and traversal
    "EXPRESSION_TYPES",
    "SHAPE_TYPES",
    "ANIMATION_TYPES",
    "STATEMENT_TYPES",
    "ALL_NODE_TYPES",
    "NodeVisitor",
    "is_assignable",
]
