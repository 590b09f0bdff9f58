"""
Python-specific naming utilities and sanitization.

Handles Python reserved words in accessor names and ctypes field names.
"""

import keyword

from ...core.naming import NameSanitizer
from ...core.schema import FieldKind


PYTHON_RESERVED_WORDS = frozenset(keyword.kwlist)

# Members of every generated wrapper class and its ctypes layout
WRAPPER_MEMBERS = {"as_node", "location", "address", "base", "_record", "_parser", "_pointer"}

# ctypes storage for each field kind; flags live in the common header
FIELD_CTYPES = {
    FieldKind.NODE: "ctypes.POINTER(yp_node_t)",
    FieldKind.OPTIONAL_NODE: "ctypes.POINTER(yp_node_t)",
    FieldKind.NODE_LIST: "yp_node_list",
    FieldKind.STRING: "yp_string_t",
    FieldKind.CONSTANT: "yp_constant_id_t",
    FieldKind.CONSTANT_LIST: "yp_constant_id_list_t",
    FieldKind.LOCATION: "yp_location_t",
    FieldKind.OPTIONAL_LOCATION: "yp_location_t",
    FieldKind.LOCATION_LIST: "yp_location_list_t",
    FieldKind.UINT32: "ctypes.c_uint32",
}

# ctypes element type of each list family's backing array
LIST_ITEM_CTYPES = {
    "Location": "yp_location_t",
    "Node": "ctypes.POINTER(yp_node_t)",
    "ConstantId": "yp_constant_id_t",
}


def create_python_sanitizer() -> NameSanitizer:
    """Create a name sanitizer configured for Python accessor names."""
    return NameSanitizer(PYTHON_RESERVED_WORDS | WRAPPER_MEMBERS, escape_format="{}_")


def field_ctype(accessor) -> str:
    """Return the ctypes type expression backing an accessor's field."""
    return FIELD_CTYPES[accessor.field.kind]


def item_ctype(family) -> str:
    """Return the ctypes element type of a list family."""
    return LIST_ITEM_CTYPES[family.item_type]
