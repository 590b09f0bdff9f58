"""Logging configuration for yarp_bindgen.

Library modules only ask for named loggers; the CLI decides where the
records go by calling :func:`setup_logging` once at startup.
"""

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "yarp_bindgen"

PLAIN_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the package namespace.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        The logger, parented to the ``yarp_bindgen`` logger.
    """
    if name != ROOT_LOGGER_NAME and not name.startswith(ROOT_LOGGER_NAME + "."):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def setup_logging(level: str | int = "WARNING", rich_output: bool = True) -> logging.Logger:
    """Configure the package logger.

    Args:
        level: Log level name or number.
        rich_output: Render records with rich instead of a plain stream.

    Returns:
        The configured package logger.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown log level: {level}")
        level = resolved

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Replace handlers from an earlier call
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    if rich_output:
        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(PLAIN_FORMAT))

    logger.addHandler(handler)
    logger.propagate = False
    return logger
