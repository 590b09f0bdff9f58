"""
Core schema representation for code generation.

Converts the parsed node configuration document into a normalized,
validated internal format that every target generator works from.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
from enum import Enum


class SchemaError(Exception):
    """Exception raised when a schema document is malformed."""

    pass


class FieldKind(Enum):
    """Supported field kinds, keyed by their spelling in the schema."""

    NODE = "node"
    OPTIONAL_NODE = "node?"
    NODE_LIST = "node[]"
    STRING = "string"  # Always empty for now
    CONSTANT = "constant"
    CONSTANT_LIST = "constant[]"
    LOCATION = "location"
    OPTIONAL_LOCATION = "location?"
    LOCATION_LIST = "location[]"
    UINT32 = "uint32"
    FLAGS = "flags"

    @classmethod
    def from_tag(cls, tag: str) -> "FieldKind":
        """
        Map a schema type tag to its field kind.

        Args:
            tag: Type spelling from the schema (e.g. ``"node?"``)

        Returns:
            Matching FieldKind

        Raises:
            SchemaError: If the tag is not a known field type
        """
        try:
            return cls(tag)
        except ValueError:
            valid = ", ".join(kind.value for kind in cls)
            raise SchemaError(
                f"Unknown field type '{tag}' (expected one of: {valid})"
            ) from None

    @property
    def is_child_bearing(self) -> bool:
        """Whether fields of this kind hold child nodes visited on traversal."""
        return self in (FieldKind.NODE, FieldKind.OPTIONAL_NODE, FieldKind.NODE_LIST)

    @property
    def is_narrowable(self) -> bool:
        """Whether fields of this kind may declare a specific node kind."""
        return self in (FieldKind.NODE, FieldKind.OPTIONAL_NODE)

    @property
    def is_optional(self) -> bool:
        return self in (FieldKind.OPTIONAL_NODE, FieldKind.OPTIONAL_LOCATION)


@dataclass(frozen=True)
class FieldSpec:
    """Represents a single field of a node."""

    name: str
    kind: FieldKind
    narrowed_kind: Optional[str] = None  # Specific node type expected in the slot


@dataclass(frozen=True)
class NodeSpec:
    """Represents one node kind declared in the schema."""

    name: str
    fields: tuple = ()
    documentation: str = ""

    @property
    def child_fields(self) -> List[FieldSpec]:
        """Child-bearing fields in declaration order."""
        return [f for f in self.fields if f.kind.is_child_bearing]

    @property
    def has_children(self) -> bool:
        return any(f.kind.is_child_bearing for f in self.fields)

    def get_field(self, name: str) -> Optional[FieldSpec]:
        """Get field by name."""
        for field_spec in self.fields:
            if field_spec.name == name:
                return field_spec
        return None


@dataclass(frozen=True)
class Schema:
    """The full, ordered set of node declarations."""

    nodes: tuple = field(default_factory=tuple)

    def __iter__(self) -> Iterator[NodeSpec]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def get_node(self, name: str) -> Optional[NodeSpec]:
        """Get node by name."""
        for node in self.nodes:
            if node.name == name:
                return node
        return None

    @property
    def node_names(self) -> List[str]:
        return [node.name for node in self.nodes]

    def validate(self) -> None:
        """
        Check the structural invariants generation relies on.

        Node names must be unique, field names must be unique within
        their node, and every narrowed kind must name a declared node.

        Raises:
            SchemaError: On the first violation found
        """
        seen_nodes = set()

        for node in self.nodes:
            if not node.name:
                raise SchemaError("Node declared without a name")
            if node.name in seen_nodes:
                raise SchemaError(f"Duplicate node name '{node.name}'")
            seen_nodes.add(node.name)

        for node in self.nodes:
            seen_fields = set()
            for field_spec in node.fields:
                if field_spec.name in seen_fields:
                    raise SchemaError(
                        f"Duplicate field '{field_spec.name}' in node '{node.name}'"
                    )
                seen_fields.add(field_spec.name)

                if field_spec.narrowed_kind is None:
                    continue

                if not field_spec.kind.is_narrowable:
                    raise SchemaError(
                        f"Field {node.name}.{field_spec.name} of type "
                        f"'{field_spec.kind.value}' cannot declare a kind"
                    )
                if field_spec.narrowed_kind not in seen_nodes:
                    raise SchemaError(
                        f"Field {node.name}.{field_spec.name} refers to unknown "
                        f"node kind '{field_spec.narrowed_kind}'"
                    )

    @classmethod
    def from_dict(cls, document: Dict[str, Any]) -> "Schema":
        """
        Convert a parsed configuration document to a validated Schema.

        Args:
            document: Mapping of the form ``{"nodes": [{name, fields, comment}]}``

        Returns:
            Schema: Normalized, validated schema

        Raises:
            SchemaError: If a required key is missing, a type tag is unknown,
                or the node set violates a uniqueness/reference invariant
        """
        if not isinstance(document, dict) or "nodes" not in document:
            raise SchemaError("Schema document must be a mapping with a 'nodes' key")

        nodes = []
        for index, raw_node in enumerate(document["nodes"] or []):
            nodes.append(_convert_node(raw_node, index))

        schema = cls(nodes=tuple(nodes))
        schema.validate()
        return schema


def _convert_node(raw_node: Dict[str, Any], index: int) -> NodeSpec:
    """Convert one raw node entry to a NodeSpec."""
    if not isinstance(raw_node, dict):
        raise SchemaError(f"Node entry #{index} must be a mapping")

    for key in ("name", "comment"):
        if key not in raw_node:
            label = raw_node.get("name", f"#{index}")
            raise SchemaError(f"Node {label} is missing required key '{key}'")

    fields = []
    for raw_field in raw_node.get("fields") or []:
        if not isinstance(raw_field, dict):
            raise SchemaError(f"Field entry in node {raw_node['name']} must be a mapping")

        for key in ("name", "type"):
            if key not in raw_field:
                raise SchemaError(
                    f"Field in node {raw_node['name']} is missing required key '{key}'"
                )

        fields.append(
            FieldSpec(
                name=raw_field["name"],
                kind=FieldKind.from_tag(raw_field["type"]),
                narrowed_kind=raw_field.get("kind"),
            )
        )

    return NodeSpec(
        name=raw_node["name"],
        fields=tuple(fields),
        documentation=raw_node["comment"] or "",
    )
