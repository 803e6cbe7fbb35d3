"""Template model and registry for ``mflow init``."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple


@dataclass(frozen=True)
class TemplateFile:
    """One file of a new project: a relative path and its Jinja2 source."""

    path: str
    content: str


@dataclass
class ProjectTemplate:
    """
    A starter project.

    Subclasses provide ``files``; every file is rendered with the
    template variables from :meth:`get_default_config`, overridden by the
    caller's values.
    """

    id: str
    name: str
    description: str
    tags: List[str] = field(default_factory=list)

    files: Tuple[TemplateFile, ...] = ()
    defaults: Dict[str, Any] = field(default_factory=dict)
    next_step: str = ""

    def get_files(self, config: Dict[str, Any]) -> List[TemplateFile]:
        return list(self.files)

    def get_default_config(self) -> Dict[str, Any]:
        return dict(self.defaults)

    def validate_config(self, config: Dict[str, Any]) -> None:
        """
        Raises:
            ValueError: If the canvas size is not a pair of positive integers
        """
        for key in ("width", "height"):
            value = config.get(key)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{key} must be a positive integer, got {value!r}")

    def get_post_generation_instructions(self, config: Dict[str, Any]) -> str:
        return self.next_step


class TemplateRegistry:
    """Templates by id, in registration order."""

    def __init__(self) -> None:
        self._by_id: Dict[str, ProjectTemplate] = {}

    def __contains__(self, template_id: object) -> bool:
        return template_id in self._by_id

    def __iter__(self) -> Iterator[ProjectTemplate]:
        return iter(self._by_id.values())

    def register(self, template: ProjectTemplate) -> None:
        if template.id in self:
            raise ValueError(f"Template '{template.id}' already registered")
        self._by_id[template.id] = template

    def get(self, template_id: str) -> Optional[ProjectTemplate]:
        return self._by_id.get(template_id)

    def list_all(self) -> List[ProjectTemplate]:
        return list(self)

    def ids(self) -> List[str]:
        return list(self._by_id)


__all__ = ["TemplateFile", "ProjectTemplate", "TemplateRegistry"]
