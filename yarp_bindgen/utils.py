"""Utility functions for loading node configuration documents.

This module provides functions for loading the YAML or JSON document that
declares YARP's node kinds, with proper error handling and validation.
"""

import json
from pathlib import Path
from typing import Any

import yaml

from .codegen.core.schema import Schema
from .logging_config import get_logger

logger = get_logger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}
JSON_SUFFIXES = {".json"}


class SchemaLoadError(Exception):
    """Raised when a schema document cannot be read or decoded."""

    pass


def load_document(file_path: str | Path) -> dict[str, Any]:
    """Load a node configuration document from a local file.

    Args:
        file_path: Path to a ``.yml``/``.yaml`` or ``.json`` file.

    Returns:
        The decoded document.

    Raises:
        SchemaLoadError: If the file is missing, unreadable, of an unknown
            type, or does not decode to a mapping.
    """
    file_path = Path(file_path)
    logger.debug("Attempting to load schema from file: %s", file_path)

    if not file_path.exists():
        logger.error("File not found: %s", file_path)
        raise SchemaLoadError(f"File not found: {file_path}")

    suffix = file_path.suffix.lower()
    if suffix not in YAML_SUFFIXES | JSON_SUFFIXES:
        raise SchemaLoadError(
            f"Unsupported schema file type '{suffix}' (expected .yml, .yaml or .json): {file_path}"
        )

    try:
        with file_path.open("r", encoding="utf-8") as f:
            if suffix in YAML_SUFFIXES:
                document = yaml.safe_load(f)
            else:
                document = json.load(f)
    except yaml.YAMLError as e:
        logger.error("Invalid YAML in file %s: %s", file_path, e)
        raise SchemaLoadError(f"Invalid YAML in file {file_path}: {e}") from e
    except json.JSONDecodeError as e:
        logger.error("Invalid JSON in file %s: %s", file_path, e)
        raise SchemaLoadError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        logger.error("Error reading file %s: %s", file_path, e, exc_info=True)
        raise SchemaLoadError(f"Error reading file {file_path}: {e}") from e

    if not isinstance(document, dict):
        raise SchemaLoadError(f"Schema file must contain a mapping at the top level: {file_path}")

    logger.info("Loaded %d node declarations from %s", len(document.get("nodes") or []), file_path)
    return document


def load_schema_file(file_path: str | Path) -> Schema:
    """Load and validate a node configuration file.

    Args:
        file_path: Path to the schema document.

    Returns:
        The validated Schema.

    Raises:
        SchemaLoadError: If the file cannot be read or decoded.
        SchemaError: If the document is malformed.
    """
    return Schema.from_dict(load_document(file_path))
