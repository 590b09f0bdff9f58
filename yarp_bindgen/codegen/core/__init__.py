"""
Core code generation components.

Provides the schema model, the language-neutral plans and the base
classes used by all binding targets.
"""

from .generator import CodeGenerator, GenerationResult, generate_code
from .schema import FieldKind, FieldSpec, NodeSpec, Schema, SchemaError
from .naming import (
    NameSanitizer,
    NodeNamer,
    node_name_from_struct_name,
    node_name_from_type_name,
    struct_name,
    type_name,
)
from .docs import doc_comment, docstring_lines, fence_examples
from .accessors import AccessStrategy, Accessor, plan_accessors
from .dispatch import LIST_FAMILIES, DispatchEntry, DispatchTable, ListFamily
from .traversal import TraversalMode, TraversalStep, plan_all, plan_traversal
from .config import GeneratorConfig, ConfigManager, ConfigError, load_config
from .templates import TemplateEngine, TemplateError, create_template_engine

__all__ = [
    # Base generator interface
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    # Schema model
    "FieldKind",
    "FieldSpec",
    "NodeSpec",
    "Schema",
    "SchemaError",
    # Naming
    "NameSanitizer",
    "NodeNamer",
    "node_name_from_struct_name",
    "node_name_from_type_name",
    "struct_name",
    "type_name",
    # Documentation
    "doc_comment",
    "docstring_lines",
    "fence_examples",
    # Plans
    "AccessStrategy",
    "Accessor",
    "plan_accessors",
    "LIST_FAMILIES",
    "DispatchEntry",
    "DispatchTable",
    "ListFamily",
    "TraversalMode",
    "TraversalStep",
    "plan_all",
    "plan_traversal",
    # Configuration system
    "GeneratorConfig",
    "ConfigManager",
    "ConfigError",
    "load_config",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
]
