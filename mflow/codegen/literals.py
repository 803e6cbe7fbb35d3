"""Rendering of literal values as JavaScript source text."""

from __future__ import annotations

import math

_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def format_number(value: float) -> str:
    """
    Format a number the way JavaScript's ``Number.prototype.toString`` does.

    Examples:
        >>> format_number(150.0)
        '150'
        >>> format_number(0.016)
        '0.016'
        >>> format_number(1e21)
        '1e+21'
        >>> format_number(1e-7)
        '1e-7'
    """
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value < 0:
        return "-" + format_number(-value)

    # repr() yields the shortest round-tripping digits, as JavaScript does.
    mantissa, _, exponent = repr(value).partition("e")
    int_part, _, frac_part = mantissa.partition(".")
    digits = int_part + frac_part
    point = len(int_part) + (int(exponent) if exponent else 0)

    stripped = digits.lstrip("0")
    point -= len(digits) - len(stripped)
    digits = stripped.rstrip("0")
    k = len(digits)

    if k <= point <= 21:
        return digits + "0" * (point - k)
    if 0 < point <= 21:
        return digits[:point] + "." + digits[point:]
    if -6 < point <= 0:
        return "0." + "0" * (-point) + digits

    exp = point - 1
    sign = "+" if exp >= 0 else "-"
    head = digits if k == 1 else digits[0] + "." + digits[1:]
    return f"{head}e{sign}{abs(exp)}"


def format_string(value: str) -> str:
    """Render ``value`` as a double-quoted JavaScript string literal."""
    return '"' + "".join(_STRING_ESCAPES.get(char, char) for char in value) + '"'


def format_color(value: str) -> str:
    """Colors pass through unvalidated as string literals."""
    return format_string(value)


__all__ = ["format_number", "format_string", "format_color"]
