"""
Rust binding generator implementation.

Generates safe, lifetime-scoped Rust wrappers over the raw YARP C
structures exposed by the ``-sys`` crate.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path

from ...core.config import GeneratorConfig
from ...core.generator import CodeGenerator
from ...core.schema import Schema
from ....logging_config import get_logger
from .naming import RUST_RESERVED_WORDS, create_rust_sanitizer, native_field_name

logger = get_logger(__name__)


class RustGenerator(CodeGenerator):
    """Code generator for the Rust node, list and visitor bindings."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        """Initialize Rust generator with configuration."""
        super().__init__(config)

        # Extract configuration
        self.sys_crate = self.config.language_config.get("sys_crate", "yarp_sys")
        self.lifetime = self.config.language_config.get("lifetime", "pr")

        self.template_engine.add_filter("native_field", native_field_name)
        self.template_engine.add_filter("accessor_name", self.sanitizer.sanitize_name)

    @property
    def language_name(self) -> str:
        """Return the language name."""
        return "rust"

    @property
    def file_extension(self) -> str:
        """Return Rust file extension."""
        return ".rs"

    def get_template_directory(self) -> Optional[Path]:
        """Return the Rust templates directory."""
        return Path(__file__).parent / "templates"

    def create_sanitizer(self):
        return create_rust_sanitizer()

    def build_context(self, schema: Schema) -> Dict[str, Any]:
        context = super().build_context(schema)
        context["sys_crate"] = self.sys_crate
        context["lt"] = f"'{self.lifetime}"
        return context

    def generate(self, schema: Schema) -> str:
        """Generate the complete Rust bindings source unit."""
        context = self.build_context(schema)

        # Shared view types, union, wrappers, then the visitor
        parts = [
            self.render_template("prelude.rs.j2", context),
            self.render_template("union.rs.j2", context),
        ]

        for node in context["nodes"]:
            logger.debug("Emitting Rust wrapper for %s", node["name"])
            parts.append(self.render_template("node.rs.j2", {**context, "node": node}))

        parts.append(self.render_template("visitor.rs.j2", context))

        return "\n".join(parts)

    def validate_schema(self, schema: Schema) -> List[str]:
        """Validate a schema for Rust generation."""
        warnings = super().validate_schema(schema)

        for node in schema.nodes:
            if node.name in RUST_RESERVED_WORDS:
                warnings.append(f"Node name '{node.name}' is a Rust keyword")

        if not self.lifetime.isidentifier():
            warnings.append(f"Invalid Rust lifetime name: {self.lifetime}")

        return warnings


def create_rust_generator(config: Optional[Dict[str, Any]] = None) -> RustGenerator:
    """Create a Rust generator with default configuration."""
    from ...core.config import load_config

    return RustGenerator(load_config("rust", custom_config=config))
