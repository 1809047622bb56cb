"""Logging setup for the CLI."""

from __future__ import annotations

import logging
import os

from rich.logging import RichHandler

from dbtestgen.cli.common.exits import USAGE_ERROR, die
from dbtestgen.cli.common.output import console

_LOGGER_NAME = "dbtestgen"
_LEVEL_ENV = "DBTESTGEN_LOG_LEVEL"


def configure_logging(verbose: bool = False) -> logging.Logger:
    """
    Route the `dbtestgen` loggers to a Rich handler on stderr (idempotent).

    `--verbose` selects DEBUG, otherwise WARNING; the DBTESTGEN_LOG_LEVEL
    environment variable takes precedence over both.
    """
    logger = logging.getLogger(_LOGGER_NAME)
    level = os.getenv(_LEVEL_ENV, "DEBUG" if verbose else "WARNING").upper()
    try:
        logger.setLevel(level)
    except ValueError:
        die(f"Unknown log level in {_LEVEL_ENV}: '{level}'", code=USAGE_ERROR)

    if not logger.handlers:
        handler = RichHandler(console=console, show_path=False, markup=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        logger.addHandler(handler)
        logger.propagate = False

    return logger
