"""MFlow language specification helpers."""

from .keywords import (
    STATEMENT_KEYWORDS,
    CONTROL_FLOW_KEYWORDS,
    SHAPE_KEYWORDS,
    ANIMATION_KEYWORDS,
    LITERAL_KEYWORDS,
    RESERVED_WORDS,
    SHAPE_FIELD_WORDS,
    DIRECTION_WORDS,
    KEYWORD_TYPOS,
    is_reserved,
    suggest_keyword,
    format_keyword_list,
)

__all__ = [
    # Keyword sets
    "STATEMENT_KEYWORDS",
    "CONTROL_FLOW_KEYWORDS",
    "SHAPE_KEYWORDS",
    "ANIMATION_KEYWORDS",
    "LITERAL_KEYWORDS",
    "RESERVED_WORDS",
    "SHAPE_FIELD_WORDS",
    "DIRECTION_WORDS",
    "KEYWORD_TYPOS",
    # Helpers
    "is_reserved",
    "suggest_keyword",
    "format_keyword_list",
]
