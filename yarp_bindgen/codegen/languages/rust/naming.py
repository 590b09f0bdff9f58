"""
Rust-specific naming utilities and sanitization.

Handles Rust keywords in accessor names and in the native field names
that bindgen produces for them.
"""

from ...core.naming import NameSanitizer


# Rust strict and reserved keywords
RUST_RESERVED_WORDS = {
    "abstract",
    "as",
    "async",
    "await",
    "become",
    "box",
    "break",
    "const",
    "continue",
    "crate",
    "do",
    "dyn",
    "else",
    "enum",
    "extern",
    "false",
    "final",
    "fn",
    "for",
    "if",
    "impl",
    "in",
    "let",
    "loop",
    "macro",
    "match",
    "mod",
    "move",
    "mut",
    "override",
    "priv",
    "pub",
    "ref",
    "return",
    "self",
    "Self",
    "static",
    "struct",
    "super",
    "trait",
    "true",
    "try",
    "type",
    "typeof",
    "unsafe",
    "unsized",
    "use",
    "virtual",
    "where",
    "while",
    "yield",
}

# Keywords that cannot be written as raw identifiers
RAW_IDENTIFIER_FORBIDDEN = {"crate", "self", "Self", "super"}

# Methods every generated wrapper defines itself
GENERATED_MEMBERS = {"as_node", "location"}


class RustNameSanitizer(NameSanitizer):
    """
    Escapes keywords as raw identifiers (``r#type``) where Rust allows it.

    Names that cannot be raw identifiers, and names of the wrapper's own
    methods, get a trailing underscore instead: ``r#location`` would still
    be the same method as ``location``.
    """

    def sanitize_name(self, name: str) -> str:
        if name in RAW_IDENTIFIER_FORBIDDEN or name in GENERATED_MEMBERS:
            return f"{name}_"
        return super().sanitize_name(name)


def create_rust_sanitizer() -> RustNameSanitizer:
    """Create a name sanitizer configured for Rust accessor names."""
    return RustNameSanitizer(RUST_RESERVED_WORDS, escape_format="r#{}")


def native_field_name(name: str) -> str:
    """
    Return the field name bindgen generates for a C struct member.

    bindgen appends an underscore to members that collide with Rust
    keywords, e.g. ``type`` becomes ``type_``.
    """
    if name in RUST_RESERVED_WORDS:
        return f"{name}_"
    return name
