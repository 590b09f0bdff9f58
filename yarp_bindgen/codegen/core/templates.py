"""
Jinja2 environment for binding templates.

Templates render source code, not markup: nothing is escaped, undefined
names fail loudly and block tags leave no stray whitespace behind.
"""

from pathlib import Path
from typing import Any, Callable, Dict, Optional

from jinja2 import DictLoader, Environment, FileSystemLoader, StrictUndefined

from .docs import doc_comment, docstring_lines
from .naming import struct_name, type_name
from ...logging_config import get_logger

logger = get_logger(__name__)


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    pass


def docstring_body(value: str, spaces: int = 4, example_language: str = "ruby") -> str:
    """Fence examples in free text and indent it as a docstring body."""
    indent = " " * spaces
    return "\n".join(
        indent + line if line.strip() else ""
        for line in docstring_lines(str(value), example_language)
    )


class TemplateEngine:
    """A Jinja2 environment with the naming and documentation filters."""

    def __init__(self, template_dir: Optional[Path] = None):
        self.template_dir = template_dir

        if template_dir and template_dir.exists():
            loader = FileSystemLoader(str(template_dir))
        else:
            loader = DictLoader({})

        self._env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters.update(
            struct_name=struct_name,
            type_name=type_name,
            doc_comment=doc_comment,
            docstring=docstring_body,
        )

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a named template.

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        try:
            return self._env.get_template(template_name).render(**context)
        except Exception as e:
            logger.debug("Rendering %s failed", template_name, exc_info=True)
            raise TemplateError(f"Failed to render template {template_name}: {e}") from e

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        try:
            return self._env.from_string(template_string).render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template string: {e}") from e

    def add_template(self, name: str, content: str):
        """Register an in-memory template, replacing a file loader if present."""
        if not isinstance(self._env.loader, DictLoader):
            self._env.loader = DictLoader({})
        self._env.loader.mapping[name] = content

    def template_exists(self, template_name: str) -> bool:
        return template_name in self._env.loader.list_templates()

    def add_global(self, name: str, value: Any):
        self._env.globals[name] = value

    def add_filter(self, name: str, func: Callable[..., Any]):
        self._env.filters[name] = func


def create_template_engine(template_dir: Optional[Path] = None) -> TemplateEngine:
    """Create a template engine, optionally bound to a template directory."""
    return TemplateEngine(template_dir)
