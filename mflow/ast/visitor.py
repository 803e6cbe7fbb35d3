"""Exhaustive visitor base for MFlow AST consumers.

Dispatch works like :class:`ast.NodeVisitor`: ``visit(node)`` calls
``visit_<ClassName>``.  Unlike the stdlib visitor there is no generic
fallback.  A subclass declares the node classes it consumes in
``handles`` and the class statement itself fails with ``TypeError`` when
any of them lacks a handler, so adding a node type without teaching
every consumer about it is caught at import time.
"""

from __future__ import annotations

from typing import Any, Tuple, Type

from .animations import ANIMATION_TYPES
from .base import EXPRESSION_TYPES, Node
from .program import Program
from .shapes import SHAPE_TYPES
from .statements import STATEMENT_TYPES


ALL_NODE_TYPES: Tuple[Type[Node], ...] = (
    (Program,) + STATEMENT_TYPES + EXPRESSION_TYPES + SHAPE_TYPES + ANIMATION_TYPES
)


def missing_handlers(cls: type, node_types: Tuple[Type[Node], ...]) -> list:
    """Names of node classes in *node_types* that *cls* cannot visit."""
    return [
        node_type.__name__
        for node_type in node_types
        if not callable(getattr(cls, f"visit_{node_type.__name__}", None))
    ]


class NodeVisitor:
    """Base class for AST walkers with a handler per node class."""

    handles: Tuple[Type[Node], ...] = ()

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        missing = missing_handlers(cls, cls.handles)
        if missing:
            raise TypeError(
                f"{cls.__name__} has no handler for: {', '.join(missing)}"
            )

    def visit(self, node: Node) -> Any:
        method = getattr(self, f"visit_{type(node).__name__}", None)
        if method is None:
            raise TypeError(f"{type(self).__name__} cannot visit {type(node).__name__}")
        return method(node)


__all__ = ["ALL_NODE_TYPES", "NodeVisitor", "missing_handlers"]
