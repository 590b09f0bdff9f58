"""
Base generator interface for all binding targets.

Defines the contract that all language generators must implement, and
the shared context every target renders from.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from .accessors import AccessStrategy, plan_accessors
from .config import GeneratorConfig
from .dispatch import LIST_FAMILIES, DispatchTable
from .naming import NameSanitizer
from .schema import FieldKind, Schema, SchemaError
from .templates import TemplateEngine, create_template_engine
from .traversal import TraversalMode, plan_traversal
from ...logging_config import get_logger

logger = get_logger(__name__)

# More than two consecutive blank lines
_BLANK_RUN = re.compile(r"\n{4,}")


class CodeGenerator(ABC):
    """Abstract base class for all binding generators."""

    def __init__(self, config: Optional[GeneratorConfig] = None):
        self.config = config or GeneratorConfig()
        self.namer = self.config.namer
        self.sanitizer = self.create_sanitizer()
        self.template_engine: TemplateEngine = create_template_engine(
            self.get_template_directory()
        )

        # Templates switch on plan members by identity
        self.template_engine.add_global("AccessStrategy", AccessStrategy)
        self.template_engine.add_global("TraversalMode", TraversalMode)

    @property
    @abstractmethod
    def language_name(self) -> str:
        """Registry name of the target, e.g. ``rust``."""

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Suffix of generated files, e.g. ``.rs``."""

    def get_template_directory(self) -> Optional[Path]:
        """Directory holding the target's templates; None for in-memory only."""
        return None

    def create_sanitizer(self) -> NameSanitizer:
        """Return the sanitizer for accessor names. No reserved words by default."""
        return NameSanitizer()

    @abstractmethod
    def generate(self, schema: Schema) -> str:
        """Render the complete binding source unit for a validated schema."""

    def build_context(self, schema: Schema) -> Dict[str, Any]:
        """
        Build the template context shared by every section of the output.

        Each node is described once: its dispatch entry, accessor plan and
        default traversal. Targets extend the result with their own keys.
        """
        table = DispatchTable.from_schema(schema, self.namer)

        nodes = []
        for entry in table:
            logger.debug("Planning node %s (%s)", entry.name, entry.tag_name)
            nodes.append(
                {
                    "name": entry.name,
                    "entry": entry,
                    "documentation": entry.node.documentation,
                    "accessors": plan_accessors(entry.node, self.sanitizer),
                    "traversal": plan_traversal(entry.node),
                }
            )

        return {
            "nodes": nodes,
            "table": table,
            "list_families": LIST_FAMILIES,
            "namer": self.namer,
            "config": self.config,
            "language_config": self.config.language_config,
            "add_comments": self.config.add_comments,
            "example_language": self.config.example_language,
        }

    def validate_schema(self, schema: Schema) -> List[str]:
        """
        Validate a schema for emission, collecting non-fatal warnings.

        Targets extend this with their own checks.

        Raises:
            SchemaError: If the schema cannot be emitted at all
        """
        schema.validate()
        warnings = []

        if not schema.nodes:
            warnings.append("Schema declares no nodes, the node union will be empty")

        for node in schema.nodes:
            if not node.documentation.strip():
                warnings.append(f"Node '{node.name}' has no documentation")

            method_names = {}
            for field_spec in node.fields:
                if field_spec.kind is FieldKind.STRING:
                    warnings.append(
                        f"String field {node.name}.{field_spec.name} is emitted as an "
                        f"accessor that always returns an empty string"
                    )

                renamed = self.sanitizer.sanitize_name(field_spec.name)
                if renamed in method_names:
                    raise SchemaError(
                        f"Fields {node.name}.{method_names[renamed]} and "
                        f"{node.name}.{field_spec.name} both map to accessor {renamed}"
                    )
                method_names[renamed] = field_spec.name

                if renamed != field_spec.name:
                    warnings.append(
                        f"Field {node.name}.{field_spec.name} renamed to {renamed} "
                        f"to avoid a {self.language_name} keyword or generated member"
                    )

        return warnings

    def format_code(self, code: str) -> str:
        """Strip trailing whitespace and cap blank runs at two lines."""
        stripped = "\n".join(line.rstrip() for line in code.split("\n"))
        collapsed = _BLANK_RUN.sub("\n\n\n", stripped).rstrip() + "\n"
        return collapsed.replace("\n", self.config.line_ending)

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        return self.template_engine.render_template(template_name, context)


@dataclass
class GenerationResult:
    """Generated code with the warnings and metadata of one run."""

    code: str
    warnings: List[str] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    success: bool = True
    error_message: Optional[str] = None
    exception: Optional[Exception] = None

    @classmethod
    def error(cls, message: str, exception: Optional[Exception] = None) -> "GenerationResult":
        """Create a failed generation result."""
        return cls(code="", success=False, error_message=message, exception=exception)


def generate_code(generator: CodeGenerator, schema: Schema) -> GenerationResult:
    """
    Run a generator over a schema, capturing failures in the result.

    Args:
        generator: Code generator instance
        schema: Schema to generate bindings for

    Returns:
        GenerationResult with code, warnings, and metadata
    """
    logger.info(
        "Generating %s bindings for %d node kinds", generator.language_name, len(schema)
    )

    try:
        warnings = generator.validate_schema(schema)
        for warning in warnings:
            logger.debug("Schema warning: %s", warning)

        code = generator.format_code(generator.generate(schema))
    except Exception as e:
        logger.error("Code generation failed: %s", e)
        return GenerationResult.error(f"Code generation failed: {e}", exception=e)

    metadata = {
        "language": generator.language_name,
        "file_extension": generator.file_extension,
        "node_count": len(schema),
        "field_count": sum(len(node.fields) for node in schema.nodes),
        "nodes_with_children": sum(1 for node in schema.nodes if node.has_children),
        "tag_prefix": generator.config.tag_prefix,
    }

    logger.info("Generated %d lines", code.count("\n"))
    return GenerationResult(code, warnings, metadata)
