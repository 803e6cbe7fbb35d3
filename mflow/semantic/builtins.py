"""Names the generated runtime prelude makes available to MFlow programs."""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Pattern

from .scope import Symbol, SymbolKind


MATH_HELPERS: FrozenSet[str] = frozenset({
    'sin', 'cos', 'tan', 'asin', 'acos', 'atan', 'atan2',
    'sqrt', 'pow', 'abs', 'floor', 'ceil', 'round', 'min', 'max',
    'random', 'noise', 'lerp', 'map', 'constrain', 'dist', 'radians', 'degrees',
    'PI', 'TWO_PI', 'HALF_PI',
})

COLOR_HELPERS: FrozenSet[str] = frozenset({'rgb', 'rgba', 'hsl', 'hsla'})

ARRAY_HELPERS: FrozenSet[str] = frozenset({'length', 'push', 'pop', 'slice', 'concat', 'join'})

INPUT_HELPERS: FrozenSet[str] = frozenset({'mouseX', 'mouseY', 'time', 'frameCount', 'keyDown'})

HOST_GLOBALS: FrozenSet[str] = frozenset({'console'})

BUILTIN_NAMES: FrozenSet[str] = (
    MATH_HELPERS | COLOR_HELPERS | ARRAY_HELPERS | INPUT_HELPERS | HOST_GLOBALS
)

# Module-scope names the generated code itself relies on.  Programs may not
# declare them, since a declaration inside ``main`` would shadow them for
# every shape and animation emitted after it.
RESERVED_RUNTIME_NAMES: FrozenSet[str] = frozenset({
    'ctx',
    'canvas',
    'mflow',
    'animationState',
    'applyTransform',
    'resetTransform',
    'clear',
    'main',
    'Math',
    'String',
})

# JavaScript reserved words and restricted globals; programs may not declare them.
JS_RESERVED_WORDS: FrozenSet[str] = frozenset({
    'break', 'case', 'catch', 'class', 'const', 'continue',
    'debugger', 'default', 'delete', 'do', 'else', 'enum',
    'export', 'extends', 'false', 'finally', 'for', 'function',
    'if', 'import', 'in', 'instanceof', 'new', 'null',
    'return', 'super', 'switch', 'this', 'throw', 'true',
    'try', 'typeof', 'var', 'void', 'while', 'with',
    'yield', 'await', 'let', 'static', 'implements',
    'interface', 'package', 'private', 'protected', 'public',
    'arguments', 'eval', 'undefined', 'NaN', 'Infinity',
})

# Names of the functions and temporaries the generator emits inside ``main``:
# ``animate``, ``animate_2``, ``scene_<name>`` and ``__``-prefixed locals.
GENERATED_NAME_RE: Pattern[str] = re.compile(r"animate(?:_\d+)?|scene_\w+|__\w*")


def is_generated_name(name: str) -> bool:
    return GENERATED_NAME_RE.fullmatch(name) is not None


def builtin_symbols() -> Dict[str, Symbol]:
    """Fresh symbol map for the bottom of a ``ScopeStack``."""
    return {
        name: Symbol(name=name, kind=SymbolKind.BUILTIN)
        for name in sorted(BUILTIN_NAMES | RESERVED_RUNTIME_NAMES)
    }


__all__ = [
    'MATH_HELPERS',
    'COLOR_HELPERS',
    'ARRAY_HELPERS',
    'INPUT_HELPERS',
    'HOST_GLOBALS',
    'BUILTIN_NAMES',
    'RESERVED_RUNTIME_NAMES',
    'JS_RESERVED_WORDS',
    'GENERATED_NAME_RE',
    'is_generated_name',
    'builtin_symbols',
]
