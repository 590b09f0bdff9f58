"""
Registry of binding targets.

Maps target names and their aliases to generator classes and builds
configured generators for them.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import CodeGenerator
from ..logging_config import get_logger

logger = get_logger(__name__)

ConfigSource = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


@dataclass(frozen=True)
class TargetEntry:
    """One registered target."""

    name: str
    generator_class: Type[CodeGenerator]
    aliases: Tuple[str, ...] = ()

    @property
    def names(self) -> Tuple[str, ...]:
        return (self.name,) + self.aliases


class GeneratorRegistry:
    """Targets by primary name, plus a lookup of every accepted name."""

    def __init__(self):
        self._targets: Dict[str, TargetEntry] = {}
        self._names: Dict[str, str] = {}

    def register(
        self,
        language: str,
        generator_class: Type[CodeGenerator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator class under a primary name and aliases.

        Registering a name twice is a no-op unless ``replace`` is set.

        Raises:
            RegistryError: If the class is not a generator or a name is
                already taken by another target
        """
        if not (isinstance(generator_class, type) and issubclass(generator_class, CodeGenerator)):
            raise RegistryError(f"{generator_class!r} is not a CodeGenerator subclass")

        key = language.lower()
        if key in self._targets:
            if not replace:
                logger.debug("Target %s already registered", key)
                return
            self.unregister(key)

        alias_keys = tuple(sorted({alias.lower() for alias in aliases or ()} - {key}))
        entry = TargetEntry(key, generator_class, alias_keys)

        for name in entry.names:
            owner = self._names.get(name)
            if owner is not None and owner != key:
                raise RegistryError(f"Name '{name}' already points to '{owner}'")

        self._targets[key] = entry
        for name in entry.names:
            self._names[name] = key

    def unregister(self, language: str):
        """Remove a target and all of its names."""
        entry = self._targets.pop(language.lower(), None)
        if entry is None:
            return
        for name in entry.names:
            self._names.pop(name, None)

    def resolve_language(self, language: str) -> str:
        """
        Map a target name or alias to its primary name.

        Raises:
            RegistryError: If nothing is registered under the name
        """
        try:
            return self._names[language.lower()]
        except KeyError:
            raise RegistryError(
                f"Unsupported language '{language}'. "
                f"Available: {', '.join(self.list_languages())}"
            ) from None

    def create_generator(self, language: str, config: ConfigSource = None) -> CodeGenerator:
        """
        Build a configured generator for a target.

        Args:
            language: Target name or alias
            config: A GeneratorConfig used as is, a dict of overrides or a
                JSON config file path merged over the target's defaults

        Raises:
            RegistryError: If the target is unknown or the generator fails
                to initialize
        """
        entry = self._targets[self.resolve_language(language)]

        if isinstance(config, GeneratorConfig):
            final_config = config
        elif isinstance(config, (str, Path)):
            final_config = load_config(entry.name, config_file=config)
        elif isinstance(config, dict):
            final_config = load_config(entry.name, custom_config=config)
        elif config is None:
            final_config = load_config(entry.name)
        else:
            raise RegistryError(f"Invalid config type: {type(config)}")

        try:
            return entry.generator_class(final_config)
        except Exception as e:
            raise RegistryError(f"Failed to create {entry.name} generator: {e}") from e

    def list_languages(self) -> List[str]:
        """Primary target names, sorted."""
        return sorted(self._targets)

    def is_supported(self, language: str) -> bool:
        return language.lower() in self._names

    def get_language_info(self, language: str) -> Dict[str, Any]:
        """Describe a target: extension, class, aliases and default settings."""
        entry = self._targets[self.resolve_language(language)]
        defaults = load_config(entry.name)
        generator = entry.generator_class(defaults)

        return {
            "name": generator.language_name,
            "class": entry.generator_class.__name__,
            "module": entry.generator_class.__module__,
            "file_extension": generator.file_extension,
            "aliases": list(entry.aliases),
            "settings": dict(defaults.language_config),
        }


_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global registry with the built-in targets registered."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _register_builtin_targets(_global_registry)
    return _global_registry


def _register_builtin_targets(registry: GeneratorRegistry):
    from .languages.python import PythonGenerator
    from .languages.rust import RustGenerator

    registry.register("rust", RustGenerator, aliases=["rs"])
    registry.register("python", PythonGenerator, aliases=["py", "ctypes"])


def get_generator(language: str, config: ConfigSource = None) -> CodeGenerator:
    """Build a generator from the global registry."""
    return get_registry().create_generator(language, config)


def list_supported_languages() -> List[str]:
    return get_registry().list_languages()


def is_language_supported(language: str) -> bool:
    return get_registry().is_supported(language)


def get_language_info(language: str) -> Dict[str, Any]:
    return get_registry().get_language_info(language)


def list_all_language_info() -> Dict[str, Dict[str, Any]]:
    """Info for every registered target, keyed by primary name."""
    return {language: get_language_info(language) for language in list_supported_languages()}
