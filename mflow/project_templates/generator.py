"""Render a project template into a directory."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Tuple

from jinja2 import BaseLoader, Environment, StrictUndefined, TemplateError

from mflow.errors import MFlowTemplateError

from .registry import ProjectTemplate, TemplateRegistry

logger = logging.getLogger(__name__)


class TemplateGenerator:
    """Writes the files of a registered template, rendered with Jinja2."""

    def __init__(self, registry: TemplateRegistry):
        self.registry = registry
        self.env = Environment(
            loader=BaseLoader(),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def resolve(self, template_id: str) -> ProjectTemplate:
        template = self.registry.get(template_id)
        if template is None:
            raise MFlowTemplateError(
                f"Template not found: {template_id}",
                hint=f"Available: {', '.join(self.registry.ids())}",
            )
        return template

    def render(self, template: ProjectTemplate, variables: Dict[str, Any]) -> List[Tuple[str, str]]:
        """``(relative path, text)`` for every file of *template*."""
        rendered = []
        for item in template.get_files(variables):
            try:
                text = self.env.from_string(item.content).render(**variables)
            except TemplateError as exc:
                raise MFlowTemplateError(f"Cannot render {item.path}: {exc}") from exc
            rendered.append((item.path, text))
        return rendered

    def generate(self, template_id: str, output_dir: str | Path, config: Dict[str, Any]) -> List[Path]:
        """
        Generate a project from a template.

        Nothing is written when any target file already exists.

        Args:
            template_id: Registered template id
            output_dir: Target directory, created when missing
            config: Template variables; ``None`` values keep the defaults

        Returns:
            Paths of the files written

        Raises:
            MFlowTemplateError: Unknown template, invalid variables or existing files
        """
        template = self.resolve(template_id)
        variables = template.get_default_config()
        variables.update((key, value) for key, value in config.items() if value is not None)
        try:
            template.validate_config(variables)
        except ValueError as exc:
            raise MFlowTemplateError(f"Invalid configuration: {exc}") from exc

        root = Path(output_dir).resolve()
        files = self.render(template, variables)
        existing = [path for path, _ in files if (root / path).exists()]
        if existing:
            raise MFlowTemplateError(
                f"Refusing to overwrite existing files in {root}: {', '.join(existing)}"
            )

        written = []
        for relative, text in files:
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(text, encoding="utf-8")
            logger.debug("Wrote %s", target)
            written.append(target)
        return written


__all__ = ["TemplateGenerator"]
