"""HTML host page for compiled scripts (used by ``mflow run``)."""

from __future__ import annotations

from dataclasses import dataclass

from jinja2 import BaseLoader, Environment, TemplateSyntaxError

from mflow.errors import MFlowTemplateError

from .prelude import DEFAULT_CANVAS_ID

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>{{ title }}</title>
  <style>
    html, body { margin: 0; height: 100%; background: {{ background }}; }
    body { display: flex; align-items: center; justify-content: center; }
  </style>
</head>
<body>
  <canvas id="{{ canvas_id }}" width="{{ width }}" height="{{ height }}"></canvas>
  <script src="{{ script_src }}"></script>
</body>
</html>
"""


@dataclass
class PageOptions:
    title: str = "MFlow"
    canvas_id: str = DEFAULT_CANVAS_ID
    width: int = 800
    height: int = 600
    background: str = "#0D0B0A"


_env = Environment(loader=BaseLoader(), autoescape=True, keep_trailing_newline=True)


def render_page(script_src: str, options: PageOptions | None = None) -> str:
    """Render the host page loading *script_src* onto a sized canvas."""
    options = options or PageOptions()
    try:
        template = _env.from_string(PAGE_TEMPLATE)
    except TemplateSyntaxError as exc:
        raise MFlowTemplateError(f"Invalid page template: {exc}") from exc
    return template.render(
        title=options.title,
        canvas_id=options.canvas_id,
        width=options.width,
        height=options.height,
        background=options.background,
        script_src=script_src,
    )


__all__ = ["PAGE_TEMPLATE", "PageOptions", "render_page"]
