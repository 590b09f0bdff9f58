"""
Rust binding generator module.

Generates lifetime-scoped Rust wrappers, the node enum and the ``Visit``
trait over the raw YARP C structures.
"""

from .generator import RustGenerator, create_rust_generator
from .naming import (
    RUST_RESERVED_WORDS,
    RustNameSanitizer,
    create_rust_sanitizer,
    native_field_name,
)

__all__ = [
    "RustGenerator",
    "create_rust_generator",
    "RUST_RESERVED_WORDS",
    "RustNameSanitizer",
    "create_rust_sanitizer",
    "native_field_name",
]
