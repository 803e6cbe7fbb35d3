"""Built-in starter projects."""

from __future__ import annotations

from typing import Any, Dict, Tuple

from mflow.codegen.prelude import DEFAULT_CANVAS_ID

from .registry import ProjectTemplate, TemplateFile

CONFIG_TEMPLATE = """{
  "entry": "src/main.mflow",
  "output": "dist/bundle.js",
  "canvas": {
    "id": "{{ canvas_id }}",
    "width": {{ width }},
    "height": {{ height }},
    "background": "{{ background }}"
  },
  "minify": false,
  "sourcemap": false
}
"""

README_TEMPLATE = """# {{ project_name }}

An MFlow project.

```
mflow compile src/main.mflow -o dist/bundle.js
mflow run src/main.mflow
```
"""

BASIC_MAIN = """// {{ project_name }}
let cx = {{ width // 2 }}
let cy = {{ height // 2 }}

circle at (cx, cy) size 60 color #F5A623
rect at (cx - 150, cy) width 80 height 80 color #4A90E2

animate {
  rotate 2
  pulse 0.8 1.2 2
}
"""

SCENES_MAIN = """// {{ project_name }}
fn ring(x, y, count, radius) {
  repeat count {
    circle at (x + random(-radius, radius), y + random(-radius, radius)) size 4 color #F8E71C
  }
}

scene sky {
  rect at ({{ width // 2 }}, {{ height // 2 }}) width {{ width }} height {{ height }} color #0D0B0A
  ring({{ width // 2 }}, {{ height // 2 }}, 40, 200)
}

scene title {
  text at (40, 60) "{{ project_name }}" color #FFFFFF size 32
}

animate {
  orbit {{ width // 2 }} {{ height // 2 }} 120 1
  wobble 10
}
"""


def starter_files(main_source: str) -> Tuple[TemplateFile, ...]:
    return (
        TemplateFile("src/main.mflow", main_source),
        TemplateFile("mflow.config.json", CONFIG_TEMPLATE),
        TemplateFile("README.md", README_TEMPLATE),
        TemplateFile("dist/.gitkeep", ""),
    )


def starter_defaults() -> Dict[str, Any]:
    return {
        "project_name": "mflow-project",
        "canvas_id": DEFAULT_CANVAS_ID,
        "width": 800,
        "height": 600,
        "background": "#0D0B0A",
    }


NEXT_STEP = "Next: mflow run src/main.mflow"


class BasicTemplate(ProjectTemplate):
    def __init__(self):
        super().__init__(
            id="basic",
            name="Basic",
            description="Two shapes and an animate block",
            tags=["starter"],
            files=starter_files(BASIC_MAIN),
            defaults=starter_defaults(),
            next_step=NEXT_STEP,
        )


class ScenesTemplate(ProjectTemplate):
    def __init__(self):
        super().__init__(
            id="scenes",
            name="Scenes",
            description="Functions, scenes and time-driven animation",
            tags=["starter", "scenes"],
            files=starter_files(SCENES_MAIN),
            defaults=starter_defaults(),
            next_step=NEXT_STEP,
        )


__all__ = ["BasicTemplate", "ScenesTemplate"]
