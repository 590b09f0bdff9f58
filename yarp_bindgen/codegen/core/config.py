"""
Configuration management for code generation.

Settings come from three layers, later ones winning: per-target
defaults, an optional JSON file and explicit overrides. Keys that are
not :class:`GeneratorConfig` fields are target settings and land in
``language_config``.
"""

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .naming import DEFAULT_STRUCT_PREFIX, DEFAULT_TAG_PREFIX, NodeNamer

TARGET_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "rust": {
        "sys_crate": "yarp_sys",
        "lifetime": "pr",
    },
    "python": {
        "module_docstring": "Typed views over a parsed YARP syntax tree.",
        "check_released": True,
    },
}


class ConfigError(Exception):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class GeneratorConfig:
    """Base configuration for code generators."""

    output_file: Optional[str] = None

    line_ending: str = "\n"

    tag_prefix: str = DEFAULT_TAG_PREFIX  # Discriminant constants
    struct_prefix: str = DEFAULT_STRUCT_PREFIX  # Native layout names

    add_comments: bool = True
    example_language: str = "ruby"  # Language tag on fenced examples

    language_config: Dict[str, Any] = field(default_factory=dict)

    @property
    def namer(self) -> NodeNamer:
        return NodeNamer(tag_prefix=self.tag_prefix, struct_prefix=self.struct_prefix)


_CONFIG_FIELDS = frozenset(f.name for f in fields(GeneratorConfig))


class ConfigManager:
    """Builds and checks generator configurations."""

    def __init__(self, target_defaults: Optional[Dict[str, Dict[str, Any]]] = None):
        self.target_defaults = target_defaults if target_defaults is not None else TARGET_DEFAULTS

    def get_config(self, language: Optional[str] = None,
                   custom_config: Optional[Dict[str, Any]] = None,
                   config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
        """
        Get complete configuration for a target.

        Args:
            language: Primary target name; unknown names get no defaults
            custom_config: Overrides applied last
            config_file: Path to a JSON configuration file

        Returns:
            Merged configuration
        """
        settings: Dict[str, Any] = {
            "language_config": dict(self.target_defaults.get(language or "", {}))
        }

        if config_file:
            _merge_settings(settings, self._load_config_file(config_file))
        if custom_config:
            _merge_settings(settings, custom_config)

        return GeneratorConfig(**settings)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        path = Path(config_path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with open(path, "r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigError(f"Configuration file must contain a JSON object: {path}")

        return config

    def validate_config(self, config: GeneratorConfig, language: str) -> List[str]:
        """Return warnings for settings the target cannot use."""
        warnings = []

        for name in ("tag_prefix", "struct_prefix"):
            value = getattr(config, name)
            if not value.isidentifier():
                warnings.append(f"Invalid {name}: {value}")

        target = config.language_config
        if language == "rust":
            lifetime = str(target.get("lifetime", "pr"))
            if not lifetime.isidentifier():
                warnings.append(f"Invalid Rust lifetime name: {lifetime}")
        elif language == "python":
            check_released = target.get("check_released", True)
            if not isinstance(check_released, bool):
                warnings.append(f"check_released must be a boolean, got {check_released!r}")

        return warnings


def _merge_settings(settings: Dict[str, Any], overrides: Dict[str, Any]) -> None:
    """Merge one layer into ``settings``, routing target keys to ``language_config``."""
    target = settings["language_config"]

    for key, value in overrides.items():
        if key == "language_config" and isinstance(value, dict):
            target.update(value)
        elif key in _CONFIG_FIELDS:
            settings[key] = value
        else:
            target[key] = value


_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(language: Optional[str] = None,
                custom_config: Optional[Dict[str, Any]] = None,
                config_file: Optional[Union[str, Path]] = None) -> GeneratorConfig:
    """Merge defaults, file and overrides into a GeneratorConfig for a target."""
    return get_config_manager().get_config(language, custom_config, config_file)
