"""Logging setup for the command line."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from sonarqube_provider.config.constants import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL


def resolve_level(verbose: bool = False) -> str:
    if verbose:
        return "DEBUG"
    return os.environ.get(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL).upper()


def setup_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Route package logs to stderr through rich.

    An unknown level name falls back to the default with a warning.
    """
    logger = logging.getLogger("sonarqube_provider")
    for h in list(logger.handlers):
        logger.removeHandler(h)

    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    numeric = getattr(logging, level.upper(), None)
    if isinstance(numeric, int):
        logger.setLevel(numeric)
        return
    logger.setLevel(DEFAULT_LOG_LEVEL)
    logger.warning("Unknown log level %r, using %s", level, DEFAULT_LOG_LEVEL)
