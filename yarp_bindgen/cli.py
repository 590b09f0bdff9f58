from __future__ import annotations

import argparse
from typing import Sequence

from .codegen.cli_integration import add_codegen_args, handle_codegen_command
from .logging_config import get_logger, setup_logging

logger = get_logger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def create_parser() -> argparse.ArgumentParser:
    """Create the ``yarp-bindgen`` argument parser."""
    parser = argparse.ArgumentParser(
        prog="yarp-bindgen",
        description="Generate typed bindings over YARP's syntax tree from its node configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  yarp-bindgen config.yml --language rust -o node.rs
  yarp-bindgen config.yml -l python -o yarp_nodes.py
  yarp-bindgen --list-languages
  yarp-bindgen --language-info rust
        """.strip(),
    )

    add_codegen_args(parser)

    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    parser.add_argument(
        "--plain-logs",
        action="store_true",
        help="Log plain timestamped lines instead of rich output",
    )

    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv: Arguments without the program name; ``sys.argv`` when None.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, rich_output=not args.plain_logs)
    logger.debug("Parsed arguments: %s", args)

    return handle_codegen_command(args)
