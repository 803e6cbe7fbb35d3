"""Line-level source maps (revision 3).

Each generated line that came from a program statement gets a single
segment pointing at column 0 of that statement's source line.  Prelude
lines carry no mapping.
"""

from __future__ import annotations

import json
from typing import List, Optional, Sequence

from .emitter import EmittedLine

_BASE64 = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"


def encode_vlq(value: int) -> str:
    """Base64 VLQ encoding of one signed integer.

    >>> encode_vlq(0), encode_vlq(1), encode_vlq(-1), encode_vlq(16)
    ('A', 'C', 'D', 'gB')
    """
    vlq = ((-value) << 1) | 1 if value < 0 else value << 1
    encoded = []
    while True:
        digit = vlq & 31
        vlq >>= 5
        if vlq:
            digit |= 32
        encoded.append(_BASE64[digit])
        if not vlq:
            return "".join(encoded)


def encode_mappings(lines: Sequence[EmittedLine], indent_unit: str = "  ") -> str:
    groups: List[str] = []
    previous_source_line = 0
    for entry in lines:
        if entry.source_line is None or not entry.text.strip():
            groups.append("")
            continue
        column = len(indent_unit) * entry.level + len(entry.text) - len(entry.text.lstrip())
        source_line = entry.source_line - 1
        segment = [column, 0, source_line - previous_source_line, 0]
        previous_source_line = source_line
        groups.append("".join(encode_vlq(value) for value in segment))
    return ";".join(groups)


def build_source_map(
    lines: Sequence[EmittedLine],
    *,
    source_name: str,
    file: str = "",
    source_content: Optional[str] = None,
    indent_unit: str = "  ",
) -> str:
    """Serialize the mapping for *lines* as a JSON source map document."""
    document = {
        "version": 3,
        "file": file,
        "sources": [source_name],
        "names": [],
        "mappings": encode_mappings(lines, indent_unit),
    }
    if source_content is not None:
        document["sourcesContent"] = [source_content]
    return json.dumps(document)


def source_map_comment(map_name: str) -> str:
    return f"//# sourceMappingURL={map_name}\n"


__all__ = ["build_source_map", "encode_mappings", "encode_vlq", "source_map_comment"]
