"""
Language-specific binding generators.

This module contains one generator per target language.
"""

from .rust import RustGenerator, create_rust_generator
from .python import PythonGenerator, create_python_generator

__all__ = [
    "RustGenerator",
    "create_rust_generator",
    "PythonGenerator",
    "create_python_generator",
]
