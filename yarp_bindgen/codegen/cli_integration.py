"""
CLI integration for binding generation.

Provides the argument groups and handlers behind the ``yarp-bindgen``
command.
"""

import argparse
import sys
from pathlib import Path

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.syntax import Syntax
from rich import box

from . import list_supported_languages, get_generator, get_language_info, GeneratorConfig
from .core.config import ConfigError, get_config_manager, load_config
from .core.generator import GenerationResult, generate_code
from .core.schema import Schema, SchemaError
from .core.templates import TemplateError
from .registry import (
    RegistryError,
    get_registry,
    is_language_supported,
    list_all_language_info,
)
from ..logging_config import get_logger
from ..utils import SchemaLoadError, load_schema_file

logger = get_logger(__name__)


class CLIError(Exception):
    """Exception raised for CLI-related errors."""

    pass


# Generated code goes to stdout, diagnostics to stderr
console = Console()
err_console = Console(stderr=True)

# Syntax lexer per target
SYNTAX_NAMES = {"rust": "rust", "python": "python"}


def add_codegen_args(parser: argparse.ArgumentParser):
    """Add binding generation arguments to a parser."""
    parser.add_argument(
        "schema",
        nargs="?",
        metavar="SCHEMA",
        help="Node configuration file (.yml, .yaml or .json)",
    )

    codegen_group = parser.add_argument_group("binding generation")

    codegen_group.add_argument(
        "--language",
        "-l",
        metavar="LANGUAGE",
        help="Target language (use --list-languages to see options)",
    )

    codegen_group.add_argument(
        "--output",
        "-o",
        metavar="FILE",
        help="Output file for generated code (default: stdout)",
    )

    codegen_group.add_argument(
        "--config", metavar="FILE", help="JSON configuration file for code generation"
    )

    codegen_group.add_argument(
        "--tag-prefix",
        metavar="PREFIX",
        help="Prefix of the node type constants (default: YP_NODE)",
    )

    codegen_group.add_argument(
        "--no-comments",
        action="store_true",
        help="Don't emit node documentation in output code",
    )

    codegen_group.add_argument(
        "--verbose",
        action="store_true",
        help="Show generation result metadata",
    )

    info_group = parser.add_argument_group("information")
    info_group.add_argument(
        "--list-languages",
        action="store_true",
        help="List supported target languages and exit",
    )
    info_group.add_argument(
        "--language-info",
        metavar="LANGUAGE",
        help="Show detailed information about a specific language and exit",
    )


def handle_codegen_command(args: argparse.Namespace) -> int:
    """
    Handle binding generation from CLI arguments.

    Args:
        args: Parsed command line arguments

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    try:
        # Handle informational commands first
        if args.list_languages:
            return _list_languages()

        if args.language_info:
            return _show_language_info(args.language_info)

        if not args.language:
            raise CLIError("--language is required for code generation")

        if not args.schema:
            raise CLIError("A schema file is required for code generation")

        if not _validate_language(args.language):
            return 1

        schema = load_schema_file(args.schema)
        config = _build_config(args)

        return _generate_and_output(schema, args.language, config, args)

    except (CLIError, SchemaLoadError, SchemaError, ConfigError, RegistryError) as e:
        logger.debug("Generation aborted", exc_info=True)
        err_console.print(f"[red]✗ Error:[/red] {e}")
        return 1



def _list_languages() -> int:
    """Print one row per registered target."""
    table = Table(title="Binding targets", box=box.ROUNDED, title_style="bold cyan")
    table.add_column("Target", style="bold green", no_wrap=True)
    table.add_column("Aliases", style="blue")
    table.add_column("Extension", style="cyan")
    table.add_column("Defaults", style="dim")

    for name, info in list_all_language_info().items():
        defaults = ", ".join(f"{key}={value}" for key, value in info["settings"].items())
        table.add_row(name, ", ".join(info["aliases"]) or "-", info["file_extension"], defaults)

    console.print(table)
    console.print("[dim]yarp-bindgen config.yml --language TARGET -o OUTPUT[/dim]")
    return 0


def _show_language_info(language: str) -> int:
    """Print the generator, naming defaults and target settings of one target."""
    if not _validate_language(language):
        return 1

    info = get_language_info(language)
    config = get_generator(language).config

    rows = [
        ("Generator", info["class"]),
        ("Module", info["module"]),
        ("Extension", info["file_extension"]),
        ("Aliases", ", ".join(info["aliases"]) or "-"),
        ("Tag prefix", config.tag_prefix),
        ("Struct prefix", config.struct_prefix),
        ("Comments", str(config.add_comments)),
        ("Example language", config.example_language),
    ]
    rows.extend((key, str(value)) for key, value in info["settings"].items())

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Setting", style="bold")
    table.add_column("Value", style="green")
    for row in rows:
        table.add_row(*row)

    console.print(Panel(table, title=f"{info['name']} bindings", border_style="green"))
    return 0


def _validate_language(language: str) -> bool:
    """Report an unsupported target on stderr."""
    if is_language_supported(language):
        return True

    err_console.print(f"[red]✗ Unsupported language '{language}'[/red]")
    err_console.print(f"[dim]Supported languages: {', '.join(list_supported_languages())}[/dim]")
    return False


def _build_config(args: argparse.Namespace) -> GeneratorConfig:
    """Layer CLI flags over the config file and the target defaults."""
    overrides = {}

    if args.no_comments:
        overrides["add_comments"] = False
    if args.tag_prefix:
        overrides["tag_prefix"] = args.tag_prefix
    if args.output:
        overrides["output_file"] = args.output

    language = get_registry().resolve_language(args.language)
    config = load_config(language, custom_config=overrides, config_file=args.config)

    for warning in get_config_manager().validate_config(config, language):
        err_console.print(f"[yellow]warning:[/yellow] {warning}")

    return config


def _generate_and_output(
    schema: Schema, language: str, config: GeneratorConfig, args: argparse.Namespace
) -> int:
    """Generate bindings and send them to the output file or stdout."""
    generator = get_generator(language, config)

    with err_console.status(f"[green]Generating {generator.language_name} bindings..."):
        result = generate_code(generator, schema)

    if not result.success:
        err_console.print(f"[red]✗ {result.error_message}[/red]")
        if isinstance(result.exception, TemplateError) and result.exception.__cause__:
            err_console.print(f"[dim]Details: {result.exception.__cause__}[/dim]")
        return 1

    if args.output:
        output_path = Path(args.output)
        try:
            output_path.write_text(result.code, encoding="utf-8")
        except OSError as e:
            err_console.print(f"[red]✗ Failed to write to {output_path}:[/red] {e}")
            return 1
        err_console.print(f"[green]✓[/green] Wrote {len(schema)} node bindings to [cyan]{output_path}[/cyan]")
    elif console.is_terminal:
        console.print(Syntax(result.code, SYNTAX_NAMES[generator.language_name], theme="monokai"))
    else:
        # Piped output stays byte-exact
        sys.stdout.write(result.code)

    if args.verbose:
        _print_metadata(result)

    for warning in result.warnings:
        err_console.print(f"[yellow]warning:[/yellow] {warning}")

    return 0


def _print_metadata(result: GenerationResult):
    table = Table(title="Generation", box=box.SIMPLE, header_style="bold cyan")
    table.add_column("Property", style="bold")
    table.add_column("Value", style="green")

    for key, value in result.metadata.items():
        table.add_row(key.replace("_", " "), str(value))

    err_console.print(table)
