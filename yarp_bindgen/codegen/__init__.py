"""
YARP binding generation module.

Generates typed bindings over YARP's native syntax tree from the node
configuration document.
"""

from .registry import (
    GeneratorRegistry,
    RegistryError,
    get_generator,
    get_language_info,
    list_supported_languages,
)
from .core.generator import CodeGenerator, GenerationResult, generate_code
from .core.schema import FieldKind, FieldSpec, NodeSpec, Schema, SchemaError
from .core.config import GeneratorConfig, ConfigManager, load_config


def generate_from_document(document, language="rust", config=None):
    """
    Generate bindings from a parsed node configuration document.

    Args:
        document: Mapping with a ``nodes`` list, as read from config.yml
        language: Target language name or alias
        config: Generator configuration dict, path or GeneratorConfig

    Returns:
        GenerationResult with generated code

    Raises:
        SchemaError: If the document is malformed
    """
    schema = Schema.from_dict(document)
    generator = get_generator(language, config)
    return generate_code(generator, schema)


def quick_generate(document, language="rust", **options):
    """
    Generate bindings and return the code directly.

    Args:
        document: Parsed node configuration document
        language: Target language
        **options: Generator options

    Returns:
        Generated code string
    """
    result = generate_from_document(document, language, options or None)

    if result.success:
        return result.code
    else:
        raise RuntimeError(f"Code generation failed: {result.error_message}")


# Export main interfaces
__all__ = [
    "GeneratorRegistry",
    "RegistryError",
    "CodeGenerator",
    "GenerationResult",
    "generate_code",
    "FieldKind",
    "FieldSpec",
    "NodeSpec",
    "Schema",
    "SchemaError",
    "GeneratorConfig",
    "ConfigManager",
    "load_config",
    "generate_from_document",
    "quick_generate",
    "get_generator",
    "get_language_info",
    "list_supported_languages",
]
