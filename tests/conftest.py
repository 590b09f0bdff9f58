"""Shared fixtures: small schemas, generated-module loading and ctypes memory."""

import ctypes
import types

import pytest

from yarp_bindgen.codegen.core.config import GeneratorConfig
from yarp_bindgen.codegen.core.schema import Schema
from yarp_bindgen.codegen.languages.python import PythonGenerator
from yarp_bindgen.codegen.languages.rust import RustGenerator


ROOT_LEAF_DOCUMENT = {
    "nodes": [
        {
            "name": "Root",
            "fields": [{"name": "body", "type": "node[]"}],
            "comment": "The top of the tree.",
        },
        {
            "name": "Leaf",
            "fields": [{"name": "value", "type": "uint32"}],
            "comment": "Holds a number.\n\n    leaf = 1\n\nNothing below it.",
        },
    ]
}

# One node per field kind, plus narrowing and a keyword field name
FULL_DOCUMENT = {
    "nodes": [
        {
            "name": "CallNode",
            "fields": [
                {"name": "receiver", "type": "node?"},
                {"name": "arguments", "type": "node?", "kind": "ArgumentsNode"},
                {"name": "block", "type": "node?"},
                {"name": "message_loc", "type": "location"},
                {"name": "opening_loc", "type": "location?"},
                {"name": "name", "type": "string"},
                {"name": "flags", "type": "flags"},
            ],
            "comment": "Represents a method call.\n\n    foo.bar(1)\n    ^^^^^^^^^^",
        },
        {
            "name": "ArgumentsNode",
            "fields": [{"name": "arguments", "type": "node[]"}],
            "comment": "Represents a set of arguments.",
        },
        {
            "name": "StatementsNode",
            "fields": [{"name": "body", "type": "node[]"}],
            "comment": "Represents a set of statements.",
        },
        {
            "name": "DefNode",
            "fields": [
                {"name": "name", "type": "constant"},
                {"name": "statements", "type": "node", "kind": "StatementsNode"},
                {"name": "locals", "type": "constant[]"},
                {"name": "def_keyword_loc", "type": "location"},
            ],
            "comment": "Represents a method definition.",
        },
        {
            "name": "ClassNode",
            "fields": [
                {"name": "class", "type": "location"},
                {"name": "constant_path", "type": "node"},
                {"name": "body", "type": "node?"},
            ],
            "comment": "Represents a class declaration.",
        },
        {
            "name": "MultiWriteNode",
            "fields": [
                {"name": "targets", "type": "node[]"},
                {"name": "operator_loc", "type": "location?"},
                {"name": "value", "type": "node?"},
                {"name": "paren_locs", "type": "location[]"},
            ],
            "comment": "Represents a multi-target write.",
        },
        {
            "name": "IntegerNode",
            "fields": [],
            "comment": "Represents an integer literal.",
        },
        {
            "name": "NumberedReferenceReadNode",
            "fields": [{"name": "number", "type": "uint32"}],
            "comment": "Represents reading a numbered reference.",
        },
    ]
}


@pytest.fixture
def root_leaf_schema():
    return Schema.from_dict(ROOT_LEAF_DOCUMENT)


@pytest.fixture
def full_schema():
    return Schema.from_dict(FULL_DOCUMENT)


@pytest.fixture
def rust_generator():
    return RustGenerator(GeneratorConfig(language_config={"sys_crate": "yarp_sys", "lifetime": "pr"}))


@pytest.fixture
def python_generator():
    return PythonGenerator(GeneratorConfig(language_config={"check_released": True}))


def load_module(source, name="generated_nodes"):
    """Execute generated Python source into a fresh module."""
    module = types.ModuleType(name)
    exec(compile(source, f"<{name}>", "exec"), module.__dict__)
    return module


@pytest.fixture
def load_generated():
    return load_module


class Memory:
    """
    Builds native-looking trees with the layouts of a generated module.

    Every ctypes object created here is kept alive for the life of the
    builder so views never point at freed memory.
    """

    def __init__(self, module):
        self.module = module
        self._keep = []
        self._constants = []
        self.pool = module.yp_constant_pool_t()

    def keep(self, obj):
        self._keep.append(obj)
        return obj

    def node(self, layout_name, tag, **fields):
        record = self.keep(getattr(self.module, layout_name)())
        record.base.type = tag
        for name, value in fields.items():
            setattr(record, name, value)
        return record

    def pointer(self, record):
        """A ``yp_node_t *`` to a node record."""
        return self.keep(ctypes.cast(ctypes.pointer(record), ctypes.POINTER(self.module.yp_node_t)))

    def fill_node_list(self, node_list, records):
        array_type = ctypes.POINTER(self.module.yp_node_t) * len(records)
        array = self.keep(array_type(*[self.pointer(record) for record in records]))
        node_list.nodes = ctypes.cast(array, ctypes.POINTER(ctypes.POINTER(self.module.yp_node_t)))
        node_list.size = len(records)
        node_list.capacity = len(records)

    def source(self, text):
        """Copy source bytes into native memory and return the buffer address."""
        buffer = self.keep(ctypes.create_string_buffer(text))
        return ctypes.addressof(buffer)

    def set_location(self, location, start, end):
        location.start = start
        location.end = end

    def fill_location_list(self, location_list, ranges):
        array = self.keep((self.module.yp_location_t * len(ranges))())
        for item, (start, end) in zip(array, ranges):
            item.start = start
            item.end = end
        location_list.locations = ctypes.cast(array, ctypes.POINTER(self.module.yp_location_t))
        location_list.size = len(ranges)
        location_list.capacity = len(ranges)

    def intern(self, text):
        """Add a constant to the pool and return its id."""
        self._constants.append(text)
        constants = self.keep((self.module.yp_constant_t * len(self._constants))())
        for index, value in enumerate(self._constants):
            constants[index].id = index
            constants[index].start = self.source(value)
            constants[index].length = len(value)
        self.pool.constants = ctypes.cast(constants, ctypes.POINTER(self.module.yp_constant_t))
        self.pool.size = len(self._constants)
        self.pool.capacity = len(self._constants)
        return len(self._constants) - 1

    def fill_constant_list(self, id_list, ids):
        array = self.keep((self.module.yp_constant_id_t * len(ids))(*ids))
        id_list.ids = ctypes.cast(array, ctypes.POINTER(self.module.yp_constant_id_t))
        id_list.size = len(ids)
        id_list.capacity = len(ids)

    def parser(self, release=None):
        return self.module.Parser(ctypes.pointer(self.pool), release=release)


@pytest.fixture
def make_memory():
    return Memory
