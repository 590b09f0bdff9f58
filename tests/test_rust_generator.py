"""Tests for the Rust target output text."""

import re

import pytest

from yarp_bindgen.codegen.core.config import GeneratorConfig
from yarp_bindgen.codegen.core.generator import generate_code
from yarp_bindgen.codegen.core.naming import type_name
from yarp_bindgen.codegen.core.schema import Schema, SchemaError
from yarp_bindgen.codegen.languages.rust import RustGenerator


def generate(generator, schema):
    result = generate_code(generator, schema)
    assert result.success, result.error_message
    return result.code


def function_body(code, signature):
    """The text between a function signature and its closing brace."""
    start = code.index(signature)
    end = code.index("\n}\n", start)
    return code[start:end]


# Field names that are Rust keywords or collide with the wrapper's own methods
RESERVED_FIELDS_DOCUMENT = {
    "nodes": [
        {
            "name": "TypedNode",
            "fields": [
                {"name": "type", "type": "location"},
                {"name": "location", "type": "uint32"},
                {"name": "as_node", "type": "node?"},
            ],
            "comment": "Has fields named after a keyword and generated methods.",
        }
    ]
}


@pytest.fixture
def reserved_schema():
    return Schema.from_dict(RESERVED_FIELDS_DOCUMENT)


class TestPrelude:
    def test_sys_crate_import(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        assert code.startswith("use std::marker::PhantomData;\nuse std::ptr::NonNull;\n")
        assert "use yarp_sys::*;" in code

    def test_custom_crate_and_lifetime(self, root_leaf_schema):
        generator = RustGenerator(GeneratorConfig(language_config={"sys_crate": "my_sys", "lifetime": "a"}))
        code = generate(generator, root_leaf_schema)
        assert "use my_sys::*;" in code
        assert "pub struct Root<'a> {" in code
        assert "'pr" not in code

    def test_list_families(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        for family in ("LocationList", "NodeList", "ConstantList"):
            assert f"pub struct {family}<'pr> {{" in code
            assert f"pub struct {family}Iter<'pr> {{" in code
            assert f"impl<'pr> Iterator for {family}Iter<'pr> {{" in code
        assert "Some(Node::new(self.parser, node))" in code
        assert "Some(ConstantId::new(self.parser, constant_id))" in code

    def test_location_length_is_checked(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        assert '.expect("end should point to memory after start")' in code


class TestUnion:
    def test_tag_constants(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "const YP_NODE_CALL_NODE: u16 = yp_node_type::YP_NODE_CALL_NODE as u16;" in code

    def test_constructor_dispatches_every_tag(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        body = function_body(code, "pub(crate) fn new(")
        arms = re.findall(r"^\s+(YP_NODE_\w+) => Self::(\w+) \{", body, re.MULTILINE)
        assert arms == [(type_name(n), n) for n in full_schema.node_names]
        assert 'panic!("Unknown node type: {}"' in body

    def test_downcasts(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub fn as_call_node(&self) -> Option<CallNode<'_>> {" in code
        assert "pub fn as_integer_node(&self) -> Option<IntegerNode<'_>> {" in code


class TestRootLeaf:
    def test_body_returns_node_list(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        assert "pub fn body(&self) -> NodeList<'pr> {" in code
        assert "let pointer: *mut yp_node_list = unsafe { &mut (*self.pointer).body };" in code

    def test_value_is_a_direct_read(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        assert "pub fn value(&self) -> u32 {\n        unsafe { (*self.pointer).value }\n    }" in code

    def test_default_traversal(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        root = function_body(code, "pub fn visit_root<'pr, V>(")
        assert "for node in node.body().iter() {\n        visitor.visit(&node);\n    }" in root
        assert (
            "pub fn visit_leaf<'pr, V>(_visitor: &mut V, _node: &Leaf<'pr>)\n"
            "where\n    V: Visit<'pr> + ?Sized,\n{}\n"
        ) in code

    def test_docs_are_fenced(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        assert "/// Holds a number.\n///\n/// ```ruby\n/// leaf = 1\n/// ```\n///\n/// Nothing below it.\npub struct Leaf<'pr> {" in code

    def test_debug(self, rust_generator, root_leaf_schema):
        code = generate(rust_generator, root_leaf_schema)
        assert 'write!(f, "Leaf({:?})", self.value())' in code


class TestAccessors:
    def test_narrowed_child(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub fn statements(&self) -> StatementsNode<'pr> {" in code
        assert "let node: *mut yp_statements_node_t = unsafe { (*self.pointer).statements };" in code

    def test_optional_children(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub fn receiver(&self) -> Option<Node<'pr>> {" in code
        assert "pub fn arguments(&self) -> Option<ArgumentsNode<'pr>> {" in code

    def test_optional_location_checks_start(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        body = function_body(code, "pub fn opening_loc(&self)")
        assert "if unsafe { (*pointer).start.is_null() } {" in body

    def test_string_stub(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert 'pub const fn name(&self) -> &str {\n        ""\n    }' in code

    def test_symbols(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub fn name(&self) -> ConstantId<'pr> {" in code
        assert "pub fn locals(&self) -> ConstantList<'pr> {" in code

    def test_flags_read_the_header(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub fn flags(&self) -> yp_node_flags_t {\n        unsafe { (*self.pointer).base.flags }" in code

    def test_keyword_field(self, rust_generator, reserved_schema):
        code = generate(rust_generator, reserved_schema)
        assert "pub fn r#type(&self) -> Location<'pr> {" in code
        assert "&mut (*self.pointer).type_ };" in code

    def test_non_keyword_field_keeps_its_name(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub fn class(&self) -> Location<'pr> {" in code
        assert "&mut (*self.pointer).class };" in code

    def test_generated_member_names_are_escaped(self, rust_generator, reserved_schema):
        code = generate(rust_generator, reserved_schema)
        assert "pub fn location_(&self) -> u32 {\n        unsafe { (*self.pointer).location }" in code
        assert "pub fn as_node_(&self) -> Option<Node<'pr>> {" in code
        # One on Node, one on TypedNode
        assert code.count("pub fn location(&self) -> Location<'pr> {") == 2
        assert code.count("pub fn as_node(&self) -> Node<'pr> {") == 1

    def test_debug_uses_escaped_names(self, rust_generator, reserved_schema):
        code = generate(rust_generator, reserved_schema)
        assert "self.r#type(), self.location_(), self.as_node_())" in code

    def test_empty_debug(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert 'write!(f, "IntegerNode()")' in code


class TestVisitor:
    def test_trait_dispatch(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        assert "pub trait Visit<'pr> {" in code
        assert "Node::CallNode { parser, pointer, marker } => self.visit_call_node(" in code

    def test_narrowed_traversal_uses_kind_hook(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        body = function_body(code, "pub fn visit_def_node<'pr, V>(")
        assert "visitor.visit_statements_node(&node.statements());" in body

    def test_traversal_skips_non_children(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        body = function_body(code, "pub fn visit_call_node<'pr, V>(")
        assert "node.receiver()" in body
        assert "visitor.visit_arguments_node(&node);" in body
        assert "message_loc" not in body
        assert "flags" not in body

    def test_dispatched_child_uses_generic_entry(self, rust_generator, full_schema):
        code = generate(rust_generator, full_schema)
        body = function_body(code, "pub fn visit_class_node<'pr, V>(")
        assert "visitor.visit(&node.constant_path());" in body


class TestGenerationResult:
    def test_metadata(self, rust_generator, full_schema):
        result = generate_code(rust_generator, full_schema)
        assert result.metadata["language"] == "rust"
        assert result.metadata["file_extension"] == ".rs"
        assert result.metadata["node_count"] == 8
        assert result.metadata["tag_prefix"] == "YP_NODE"

    def test_field_metadata(self, rust_generator, root_leaf_schema):
        result = generate_code(rust_generator, root_leaf_schema)
        assert result.metadata["field_count"] == 2
        assert result.metadata["nodes_with_children"] == 1

    def test_string_fields_warn(self, rust_generator, full_schema):
        result = generate_code(rust_generator, full_schema)
        assert any("CallNode.name" in warning for warning in result.warnings)
        assert not any("ClassNode.class" in warning for warning in result.warnings)

    def test_renamed_fields_warn(self, rust_generator, reserved_schema):
        warnings = generate_code(rust_generator, reserved_schema).warnings
        assert any("TypedNode.type renamed to r#type" in warning for warning in warnings)
        assert any("TypedNode.location renamed to location_" in warning for warning in warnings)

    def test_accessor_collision_fails(self, rust_generator):
        fields = [{"name": "location", "type": "uint32"}, {"name": "location_", "type": "uint32"}]
        schema = Schema.from_dict({"nodes": [{"name": "Mark", "fields": fields, "comment": "A mark."}]})
        result = generate_code(rust_generator, schema)
        assert not result.success
        assert isinstance(result.exception, SchemaError)
        assert "both map to accessor location_" in result.error_message

    def test_deterministic(self, rust_generator, full_schema):
        assert generate(rust_generator, full_schema) == generate(rust_generator, full_schema)
