"""
Python binding generator module.

Generates a ctypes module of node layouts, read-only views, the node
union and a visitor, scoped by a ``Parser`` context manager.
"""

from .generator import PythonGenerator, create_python_generator
from .naming import PYTHON_RESERVED_WORDS, create_python_sanitizer

__all__ = [
    "PythonGenerator",
    "create_python_generator",
    "PYTHON_RESERVED_WORDS",
    "create_python_sanitizer",
]
