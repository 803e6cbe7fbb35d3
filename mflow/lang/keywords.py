"""
MFlow keywords and grammar word tables.

Single source of truth for the words the lexer reserves, the words the
shape and animation grammars match contextually, and the statement-start
set the parser uses as recovery points.

**Usage:**
    from mflow.lang import ANIMATION_KEYWORDS, suggest_keyword

    if word not in ANIMATION_KEYWORDS:
        hint = suggest_keyword(word, 'animate')
"""

from __future__ import annotations

from typing import Dict, FrozenSet, List, Optional
import difflib


# ============================================================================
# Statement keywords
# ============================================================================

STATEMENT_KEYWORDS: FrozenSet[str] = frozenset({
    'let',
    'fn',
    'return',
    'if',
    'repeat',
    'while',
    'for',
    'animate',
    'scene',
    'import',
})

CONTROL_FLOW_KEYWORDS: FrozenSet[str] = frozenset({
    'if',
    'else',
    'repeat',
    'while',
    'for',
    'return',
})


# ============================================================================
# Shapes and animation verbs
# ============================================================================

SHAPE_KEYWORDS: FrozenSet[str] = frozenset({
    'circle',
    'rect',
    'line',
    'triangle',
    'polygon',
    'ellipse',
    'arc',
    'text',
})

ANIMATION_KEYWORDS: FrozenSet[str] = frozenset({
    'move',
    'rotate',
    'scale',
    'fade',
    'bounce',
    'wave',
    'orbit',
    'pulse',
    'wobble',
    'spring',
})

LITERAL_KEYWORDS: FrozenSet[str] = frozenset({
    'true',
    'false',
    'null',
})

# Words the lexer turns into keyword tokens.  Everything else made of
# letters, digits and underscores is an identifier.
RESERVED_WORDS: FrozenSet[str] = (
    STATEMENT_KEYWORDS
    | CONTROL_FLOW_KEYWORDS
    | SHAPE_KEYWORDS
    | ANIMATION_KEYWORDS
    | LITERAL_KEYWORDS
    | frozenset({'from'})
)


# ============================================================================
# Contextual words (plain identifiers outside their grammar slot)
# ============================================================================

SHAPE_FIELD_WORDS: FrozenSet[str] = frozenset({
    'at',
    'size',
    'color',
    'width',
    'height',
    'sides',
    'radius',
    'startAngle',
    'endAngle',
    'font',
})

DIRECTION_WORDS: FrozenSet[str] = frozenset({
    'up',
    'down',
    'left',
    'right',
})


KEYWORD_TYPOS: Dict[str, str] = {
    'rotation': 'rotate',
    'roate': 'rotate',
    'moving': 'move',
    'fadeout': 'fade',
    'scaling': 'scale',
    'osc': 'wave',
    'colour': 'color',
    'pos': 'at',
    'function': 'fn',
    'def': 'fn',
    'var': 'let',
    'const': 'let',
    'loop': 'repeat',
    'rectangle': 'rect',
    'square': 'rect',
    'oval': 'ellipse',
}


_CONTEXT_WORDS: Dict[str, FrozenSet[str]] = {
    'statement': STATEMENT_KEYWORDS | SHAPE_KEYWORDS,
    'animate': ANIMATION_KEYWORDS,
    'shape': SHAPE_FIELD_WORDS,
    'direction': DIRECTION_WORDS,
}


def is_reserved(word: str) -> bool:
    """Return True when *word* can never be used as an identifier."""
    return word in RESERVED_WORDS


def suggest_keyword(unknown: str, context: str = 'statement') -> Optional[str]:
    """
    Suggest the most likely intended word for an unknown one.

    Looks at the explicit typo table first, then fuzzy-matches against the
    words valid in *context* ('statement', 'animate', 'shape', 'direction').

    Examples:
        >>> suggest_keyword('rotat', 'animate')
        'rotate'

        >>> suggest_keyword('colour', 'shape')
        'color'

        >>> suggest_keyword('xyz123', 'animate') is None
        True
    """
    candidates = _candidates(context)
    typo = KEYWORD_TYPOS.get(unknown)
    if typo is not None and typo in candidates:
        return typo

    close_matches = difflib.get_close_matches(unknown, sorted(candidates), n=1, cutoff=0.6)
    if close_matches:
        return close_matches[0]
    return None


def _candidates(context: str) -> FrozenSet[str]:
    if context == 'any':
        merged: FrozenSet[str] = frozenset()
        for words in _CONTEXT_WORDS.values():
            merged = merged | words
        return merged
    return _CONTEXT_WORDS.get(context, frozenset())


def format_keyword_list(keywords: List[str], max_items: int = 10) -> str:
    """
    Format a keyword list for an error message.

    Examples:
        >>> format_keyword_list(['move', 'rotate', 'scale'])
        "'move', 'rotate', 'scale'"
    """
    ordered = sorted(keywords)
    shown = ", ".join(f"'{kw}'" for kw in ordered[:max_items])
    if len(ordered) > max_items:
        shown += f", ... ({len(ordered) - max_items} more)"
    return shown


__all__ = [
    'STATEMENT_KEYWORDS',
    'CONTROL_FLOW_KEYWORDS',
    'SHAPE_KEYWORDS',
    'ANIMATION_KEYWORDS',
    'LITERAL_KEYWORDS',
    'RESERVED_WORDS',
    'SHAPE_FIELD_WORDS',
    'DIRECTION_WORDS',
    'KEYWORD_TYPOS',
    'is_reserved',
    'suggest_keyword',
    'format_keyword_list',
]
