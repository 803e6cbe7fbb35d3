"""
Starter projects for ``mflow init``.

Templates:
- basic: two shapes and an animate block
- scenes: functions, scenes and time-driven animation
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import List

from .generator import TemplateGenerator
from .registry import ProjectTemplate, TemplateFile, TemplateRegistry
from .starters import BasicTemplate, ScenesTemplate

DEFAULT_TEMPLATE = "basic"


@lru_cache(maxsize=None)
def get_registry() -> TemplateRegistry:
    """The registry of built-in templates, created on first use."""
    registry = TemplateRegistry()
    for template in (BasicTemplate(), ScenesTemplate()):
        registry.register(template)
    return registry


def list_templates() -> List[ProjectTemplate]:
    return get_registry().list_all()


def generate_project(template_id: str, output_dir: str | Path, **config) -> List[Path]:
    """
    Write the files of *template_id* into *output_dir*.

    Keyword arguments are template variables: ``project_name``,
    ``canvas_id``, ``width``, ``height``, ``background``.
    """
    return TemplateGenerator(get_registry()).generate(template_id, output_dir, config)


__all__ = [
    "DEFAULT_TEMPLATE",
    "BasicTemplate",
    "ProjectTemplate",
    "ScenesTemplate",
    "TemplateFile",
    "TemplateGenerator",
    "TemplateRegistry",
    "generate_project",
    "get_registry",
    "list_templates",
]
