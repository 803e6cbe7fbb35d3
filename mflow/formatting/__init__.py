"""
AST-based formatter for MFlow source.

The formatter parses a document, re-prints the tree in canonical layout
and is shared by ``mflow format`` and editor integrations.
"""

from __future__ import annotations

__all__ = ["SourceFormatter", "FormattingOptions", "FormattedResult", "format_source", "DefaultFormattingRules"]

from .core import FormattedResult, FormattingOptions, SourceFormatter, format_source


class DefaultFormattingRules:
    @staticmethod
    def standard() -> FormattingOptions:
        return FormattingOptions(indent_size=2, insert_final_newline=True)
