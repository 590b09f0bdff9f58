"""
Python binding generator implementation.

Generates a self-contained module of ctypes layouts and read-only views
over a YARP syntax tree, scoped by a ``Parser`` context manager.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.schema import Schema
from ....logging_config import get_logger
from .naming import create_python_sanitizer, field_ctype, item_ctype

logger = get_logger(__name__)

DEFAULT_MODULE_DOCSTRING = "Typed views over a parsed YARP syntax tree."


class PythonGenerator(CodeGenerator):
    """Code generator for the Python ctypes views."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Python generator with configuration."""
        super().__init__(config)

        # Extract configuration
        self.module_docstring = self.config.language_config.get(
            "module_docstring", DEFAULT_MODULE_DOCSTRING
        )
        self.check_released = self.config.language_config.get("check_released", True)

        self.template_engine.add_filter("ctype", field_ctype)
        self.template_engine.add_filter("item_ctype", item_ctype)
        self.template_engine.add_filter("accessor_name", self.sanitizer.sanitize_name)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "python"

    @property
    def file_extension(self) -> str:
        """Return Python file extension."""
        return ".py"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Python templates directory."""
        return Path(__file__).parent / "templates"

    def create_sanitizer(self):
        return create_python_sanitizer()

    def build_context(self, schema: Schema) -> Dict[str, Any]:
        context = super().build_context(schema)
        context["module_docstring"] = self.module_docstring
        context["check_released"] = bool(self.check_released)
        return context

    def generate(self, schema: Schema) -> str:
        """Generate the complete Python module source."""
        context = self.build_context(schema)

        parts = [
            self.render_template("prelude.py.j2", context),
            self.render_template("union.py.j2", context),
        ]

        for node in context["nodes"]:
            logger.debug("Emitting Python view for %s", node["name"])
            parts.append(self.render_template("node.py.j2", {**context, "node": node}))

        parts.append(self.render_template("visitor.py.j2", context))

        # Top-level definitions are separated by two blank lines
        return "\n\n\n".join(part.strip("\n") for part in parts) + "\n"

    def validate_schema(self, schema: Schema) -> List[str]:
        """Validate a schema for Python generation."""
        warnings = super().validate_schema(schema)

        if not self.module_docstring:
            warnings.append("Generated module has no docstring")

        return warnings


def create_python_generator(config: Optional[Dict[str, Any]] = None) -> PythonGenerator:
    """Create a Python generator with default configuration."""
    from ...core.config import load_config

    return PythonGenerator(load_config("python", custom_config=config))
