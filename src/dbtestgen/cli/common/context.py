"""Application context management for the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dbtestgen.cli.common.exits import die, exit_from_exc
from dbtestgen.core.adapters import postgres  # noqa: F401  (registers the dialect)
from dbtestgen.core.dialect import DialectParser, get_dialect
from dbtestgen.core.errors import DbTestGenError


@dataclass
class AppContext:
    """Application context holding the selected dialect and an open connection."""

    dialect_name: str
    dialect: DialectParser
    connection: Any

    def close(self) -> None:
        """Close the database connection if the driver supports it."""
        close = getattr(self.connection, "close", None)
        if callable(close):
            close()


def build_context(dsn: str | None, dialect_name: str) -> AppContext:
    """Select the dialect and open a pinged connection, exiting on failure.

    Args:
        dsn: Connection string (from --dsn or DBTESTGEN_DSN).
        dialect_name: Registered dialect name.

    Returns:
        AppContext: Context with dialect and connection ready for recovery.
    """
    try:
        dialect = get_dialect(dialect_name)
    except DbTestGenError as exc:
        exit_from_exc(exc)

    if not dsn:
        die("Missing connection string. Use --dsn or set DBTESTGEN_DSN.", code=2)

    connect = getattr(dialect, "connect", None)
    if not callable(connect):
        die(f"Dialect '{dialect_name}' can't open connections.", code=2)

    try:
        connection = connect(dsn)
    except DbTestGenError as exc:
        exit_from_exc(exc)

    return AppContext(dialect_name=dialect_name, dialect=dialect, connection=connection)
