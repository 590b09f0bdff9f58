"""
Naming utilities for safe code generation.

Derives the C-side identifiers of a node kind from its CamelCase schema
name, and handles reserved-word conflicts for generated accessor names.
"""

from dataclasses import dataclass
from typing import Dict, Set

DEFAULT_TAG_PREFIX = "YP_NODE"
DEFAULT_STRUCT_PREFIX = "yp"


def struct_name(name: str) -> str:
    """
    Return the lowercase struct suffix for a node name.

    A separator is inserted before every uppercase character, the first
    one included, so ``CallNode`` becomes ``_call_node``. Generated
    identifiers are built by gluing a prefix in front of this form
    (``yp`` + ``_call_node`` + ``_t``).
    """
    result = []

    for char in name:
        if char.isupper():
            result.append("_")
        result.append(char.lower())

    return "".join(result)


def type_name(name: str, prefix: str = DEFAULT_TAG_PREFIX) -> str:
    """
    Return the discriminant constant name for a node name.

    ``CallNode`` becomes ``YP_NODE_CALL_NODE`` with the default prefix.
    """
    result = [prefix]

    for char in name:
        if char.isupper():
            result.append("_")
        result.append(char.upper())

    return "".join(result)


def node_name_from_struct_name(struct: str) -> str:
    """Invert ``struct_name`` for CamelCase input (``_call_node`` -> ``CallNode``)."""
    return "".join(part[:1].upper() + part[1:] for part in struct.split("_") if part)


def node_name_from_type_name(constant: str, prefix: str = DEFAULT_TAG_PREFIX) -> str:
    """Invert ``type_name`` for CamelCase input (``YP_NODE_CALL_NODE`` -> ``CallNode``)."""
    if not constant.startswith(prefix):
        raise ValueError(f"'{constant}' does not start with prefix '{prefix}'")

    parts = constant[len(prefix):].split("_")
    return "".join(part[:1] + part[1:].lower() for part in parts if part)


@dataclass(frozen=True)
class NodeNamer:
    """Naming scheme for every identifier derived from a node name."""

    tag_prefix: str = DEFAULT_TAG_PREFIX
    struct_prefix: str = DEFAULT_STRUCT_PREFIX

    def struct_name(self, name: str) -> str:
        return struct_name(name)

    def type_name(self, name: str) -> str:
        return type_name(name, self.tag_prefix)

    def c_struct(self, name: str) -> str:
        """Native layout name, e.g. ``yp_call_node_t``."""
        return f"{self.struct_prefix}{struct_name(name)}_t"

    def visit_method(self, name: str) -> str:
        """Per-kind visitor hook, e.g. ``visit_call_node``."""
        return f"visit{struct_name(name)}"

    def downcast_method(self, name: str) -> str:
        """Union downcast accessor, e.g. ``as_call_node``."""
        return f"as{struct_name(name)}"


class NameSanitizer:
    """Handles reserved-word conflicts in generated identifiers."""

    def __init__(self, reserved_words: Set[str] = None, escape_format: str = "{}_"):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Set of target language reserved words
            escape_format: Format applied to a conflicting name
        """
        self.reserved_words = reserved_words or set()
        self.escape_format = escape_format
        self._name_cache: Dict[str, str] = {}

    def sanitize_name(self, name: str) -> str:
        """
        Sanitize a name for safe use in the target language.

        Args:
            name: Original field name from the schema

        Returns:
            The name itself, or its escaped form if it is reserved
        """
        if name in self._name_cache:
            return self._name_cache[name]

        if name in self.reserved_words:
            final_name = self.escape_format.format(name)
        else:
            final_name = name

        self._name_cache[name] = final_name
        return final_name

    def is_reserved(self, name: str) -> bool:
        return name in self.reserved_words
