"""
Discriminant dispatch table and list family descriptions.

The table maps every node kind to its tag constant and numeric value.
It is built once per generation run and checked for collisions there,
so the generated construction switch is exhaustive over the schema.
"""

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .naming import NodeNamer
from .schema import NodeSpec, Schema, SchemaError


@dataclass(frozen=True)
class DispatchEntry:
    """One variant of the generated node union."""

    node: NodeSpec
    tag_name: str  # e.g. YP_NODE_CALL_NODE
    tag_value: int
    struct_name: str  # e.g. _call_node
    c_struct: str  # e.g. yp_call_node_t

    @property
    def name(self) -> str:
        return self.node.name

    @property
    def visit_method(self) -> str:
        return f"visit{self.struct_name}"

    @property
    def downcast_method(self) -> str:
        return f"as{self.struct_name}"


class DispatchTable:
    """Ordered discriminant to variant mapping."""

    # yp_node_type numbers node kinds from 1 in declaration order
    FIRST_TAG_VALUE = 1

    def __init__(self, entries: List[DispatchEntry]):
        self.entries = list(entries)
        self._by_value: Dict[int, DispatchEntry] = {e.tag_value: e for e in self.entries}
        self._by_name: Dict[str, DispatchEntry] = {e.name: e for e in self.entries}

    @classmethod
    def from_schema(cls, schema: Schema, namer: Optional[NodeNamer] = None) -> "DispatchTable":
        """
        Build and validate the dispatch table for a schema.

        Args:
            schema: Loaded schema
            namer: Naming scheme for tag constants and struct names

        Returns:
            DispatchTable with one entry per node, in schema order

        Raises:
            SchemaError: If two nodes would share a name, tag constant or value
        """
        namer = namer or NodeNamer()
        entries = []
        names = set()
        tag_names = set()

        for index, node in enumerate(schema.nodes):
            tag_name = namer.type_name(node.name)

            if node.name in names:
                raise SchemaError(f"Duplicate node name '{node.name}'")
            if tag_name in tag_names:
                raise SchemaError(
                    f"Node '{node.name}' maps to tag constant {tag_name}, "
                    f"which is already in use"
                )

            names.add(node.name)
            tag_names.add(tag_name)
            entries.append(
                DispatchEntry(
                    node=node,
                    tag_name=tag_name,
                    tag_value=cls.FIRST_TAG_VALUE + index,
                    struct_name=namer.struct_name(node.name),
                    c_struct=namer.c_struct(node.name),
                )
            )

        table = cls(entries)
        if len(table._by_value) != len(entries):
            raise SchemaError("Discriminant values are not unique")
        return table

    def __iter__(self) -> Iterator[DispatchEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def lookup(self, tag_value: int) -> Optional[DispatchEntry]:
        return self._by_value.get(tag_value)

    def entry_for(self, name: str) -> DispatchEntry:
        return self._by_name[name]


@dataclass(frozen=True)
class ListFamily:
    """A lazily iterated view over a foreign ``size + items`` record."""

    list_type: str
    iterator_type: str
    item_type: str
    c_list: str
    items_field: str
    needs_parser: bool
    item_is_pointer: bool  # Backing array holds pointers rather than records
    noun: str = "items"


LIST_FAMILIES = (
    ListFamily(
        list_type="LocationList",
        iterator_type="LocationListIter",
        item_type="Location",
        c_list="yp_location_list_t",
        items_field="locations",
        needs_parser=False,
        item_is_pointer=False,
        noun="ranges",
    ),
    ListFamily(
        list_type="NodeList",
        iterator_type="NodeListIter",
        item_type="Node",
        c_list="yp_node_list",
        items_field="nodes",
        needs_parser=True,
        item_is_pointer=True,
        noun="nodes",
    ),
    ListFamily(
        list_type="ConstantList",
        iterator_type="ConstantListIter",
        item_type="ConstantId",
        c_list="yp_constant_id_list_t",
        items_field="ids",
        needs_parser=True,
        item_is_pointer=False,
        noun="constants",
    ),
)
