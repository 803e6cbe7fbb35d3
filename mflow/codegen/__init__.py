"""JavaScript code generation for MFlow programs."""

from .emitter import EmittedLine, Emitter, render_lines
from .generator import JavaScriptGenerator, generate
from .literals import format_color, format_number, format_string
from .minify import minify, minify_lines
from .page import PageOptions, render_page
from .prelude import DEFAULT_CANVAS_ID, render_prelude
from .sourcemap import build_source_map, source_map_comment

__all__ = [
    "EmittedLine",
    "Emitter",
    "render_lines",
    "JavaScriptGenerator",
    "generate",
    "format_color",
    "format_number",
    "format_string",
    "minify",
    "minify_lines",
    "PageOptions",
    "render_page",
    "DEFAULT_CANVAS_ID",
    "render_prelude",
    "build_source_map",
    "source_map_comment",
]
