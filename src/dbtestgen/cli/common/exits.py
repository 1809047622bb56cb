"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from dbtestgen.cli.common.output import out
from dbtestgen.core.errors import ConfigurationError

# Exit code for bad input (mirrors click's usage error code).
USAGE_ERROR = 2


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_code_for(exc: Exception) -> int:
    """Configuration problems are usage errors; everything else exits 1."""
    return USAGE_ERROR if isinstance(exc, ConfigurationError) else 1


def exit_from_exc(exc: Exception, *, message: str | None = None) -> NoReturn:
    """
    Print an error message for `exc` and exit with its mapped code.

    Chains the original exception so tracebacks stay useful with --verbose.
    """
    out.error(message or str(exc))
    raise typer.Exit(exit_code_for(exc)) from exc
