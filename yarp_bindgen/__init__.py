"""Typed binding generator for YARP's syntax tree."""

__version__ = "0.1.0"
