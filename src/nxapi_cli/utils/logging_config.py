"""Logging setup for the CLI.

The library only creates module loggers under ``nxapi_cli``; handlers are
installed here, once, by the CLI entry point.

Environment Variables:
    NXAPI_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: WARNING, or
        DEBUG with --verbose)
"""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from nxapi_cli.config.constants import ENV_LOG_LEVEL

main_logger = logging.getLogger("nxapi_cli")


def get_log_level(verbose: bool = False) -> int:
    """Get log level from --verbose or the environment."""
    if verbose:
        return logging.DEBUG
    level_str = os.environ.get(ENV_LOG_LEVEL, "WARNING").upper()
    level = logging.getLevelName(level_str)
    return level if isinstance(level, int) else logging.WARNING


def setup_logging(verbose: bool = False) -> None:
    """Attach a stderr Rich handler to the package logger."""
    main_logger.setLevel(get_log_level(verbose))
    if any(isinstance(h, RichHandler) for h in main_logger.handlers):
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s", datefmt="[%X]"))
    main_logger.addHandler(handler)
