"""
Default traversal planning for generated visitors.

The default visit function of a node kind recurses into exactly the
child-bearing fields of that kind, in declaration order. The plan is
computed once from the schema; generated code never inspects fields at
traversal time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from .schema import FieldKind, FieldSpec, NodeSpec, Schema


class TraversalMode(Enum):
    """How a default traversal step reaches its children."""

    VISIT = "visit"  # Generic entry point, re-reads the discriminant
    VISIT_NARROWED = "visit_narrowed"  # Straight to the per-kind hook
    VISIT_OPTIONAL = "visit_optional"
    VISIT_OPTIONAL_NARROWED = "visit_optional_narrowed"
    VISIT_EACH = "visit_each"  # Every list element through the entry point


@dataclass(frozen=True)
class TraversalStep:
    field: FieldSpec
    mode: TraversalMode

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def narrowed_kind(self) -> Optional[str]:
        return self.field.narrowed_kind


def _mode_for(field_spec: FieldSpec) -> Optional[TraversalMode]:
    kind = field_spec.kind

    if kind is FieldKind.NODE:
        return TraversalMode.VISIT_NARROWED if field_spec.narrowed_kind else TraversalMode.VISIT
    if kind is FieldKind.OPTIONAL_NODE:
        if field_spec.narrowed_kind:
            return TraversalMode.VISIT_OPTIONAL_NARROWED
        return TraversalMode.VISIT_OPTIONAL
    if kind is FieldKind.NODE_LIST:
        return TraversalMode.VISIT_EACH

    # Everything else contributes nothing to traversal
    return None


def plan_traversal(node: NodeSpec) -> List[TraversalStep]:
    """
    Build the default traversal of a node kind.

    Args:
        node: Node to plan

    Returns:
        One step per child-bearing field, in declaration order. Empty when
        the node has no children.
    """
    steps = []

    for field_spec in node.fields:
        mode = _mode_for(field_spec)
        if mode is not None:
            steps.append(TraversalStep(field=field_spec, mode=mode))

    return steps


def plan_all(schema: Schema) -> Dict[str, List[TraversalStep]]:
    """Traversal plans for every node, keyed by node name, in schema order."""
    return {node.name: plan_traversal(node) for node in schema.nodes}
