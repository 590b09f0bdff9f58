"""
Accessor planning for node wrappers.

Maps every field of a node to the strategy a generated accessor uses to
read it from native memory. Targets render one accessor per entry, in
field declaration order.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from .schema import FieldKind, FieldSpec, NodeSpec


class AccessStrategy(Enum):
    """How a generated accessor reads a field."""

    NARROWED_CHILD = "narrowed_child"  # Reinterpret as the declared kind
    DISPATCHED_CHILD = "dispatched_child"  # Read the discriminant, then wrap
    OPTIONAL_NARROWED_CHILD = "optional_narrowed_child"
    OPTIONAL_DISPATCHED_CHILD = "optional_dispatched_child"
    NODE_LIST = "node_list"
    EMPTY_TEXT = "empty_text"
    SYMBOL = "symbol"
    SYMBOL_LIST = "symbol_list"
    LOCATION = "location"
    OPTIONAL_LOCATION = "optional_location"
    LOCATION_LIST = "location_list"
    UINT32 = "uint32"
    HEADER_FLAGS = "header_flags"


_DIRECT_STRATEGIES = {
    FieldKind.NODE_LIST: AccessStrategy.NODE_LIST,
    FieldKind.STRING: AccessStrategy.EMPTY_TEXT,
    FieldKind.CONSTANT: AccessStrategy.SYMBOL,
    FieldKind.CONSTANT_LIST: AccessStrategy.SYMBOL_LIST,
    FieldKind.LOCATION: AccessStrategy.LOCATION,
    FieldKind.OPTIONAL_LOCATION: AccessStrategy.OPTIONAL_LOCATION,
    FieldKind.LOCATION_LIST: AccessStrategy.LOCATION_LIST,
    FieldKind.UINT32: AccessStrategy.UINT32,
    FieldKind.FLAGS: AccessStrategy.HEADER_FLAGS,
}


@dataclass(frozen=True)
class Accessor:
    """One generated accessor method."""

    field: FieldSpec
    strategy: AccessStrategy
    method_name: str

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def narrowed_kind(self) -> Optional[str]:
        return self.field.narrowed_kind

    @property
    def returns_optional(self) -> bool:
        return self.field.kind.is_optional

    @property
    def has_storage(self) -> bool:
        """Whether the field occupies its own slot in the native layout."""
        return self.strategy is not AccessStrategy.HEADER_FLAGS


def strategy_for(field_spec: FieldSpec) -> AccessStrategy:
    """Select the access strategy for a single field."""
    kind = field_spec.kind

    if kind is FieldKind.NODE:
        if field_spec.narrowed_kind:
            return AccessStrategy.NARROWED_CHILD
        return AccessStrategy.DISPATCHED_CHILD

    if kind is FieldKind.OPTIONAL_NODE:
        if field_spec.narrowed_kind:
            return AccessStrategy.OPTIONAL_NARROWED_CHILD
        return AccessStrategy.OPTIONAL_DISPATCHED_CHILD

    return _DIRECT_STRATEGIES[kind]


def plan_accessors(node: NodeSpec, sanitizer=None) -> List[Accessor]:
    """
    Build the accessor plan for a node.

    Args:
        node: Node to plan accessors for
        sanitizer: Optional NameSanitizer for target reserved words

    Returns:
        One Accessor per field, in declaration order
    """
    accessors = []

    for field_spec in node.fields:
        method_name = field_spec.name
        if sanitizer is not None:
            method_name = sanitizer.sanitize_name(field_spec.name)

        accessors.append(
            Accessor(
                field=field_spec,
                strategy=strategy_for(field_spec),
                method_name=method_name,
            )
        )

    return accessors
