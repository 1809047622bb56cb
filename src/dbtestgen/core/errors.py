"""Error taxonomy for DDL script generation.

Every failure raised by the core carries the object it was working on
(``schema.table`` or ``schema.procedure``) so a failed run can be diagnosed
without re-running it. Presentation and exit codes are left to the CLI.
"""

from __future__ import annotations


class DbTestGenError(RuntimeError):
    """Base class for all dbtestgen failures."""

    def __init__(self, message: str, *, target: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.target = target

    def __str__(self) -> str:
        if self.target:
            return f"{self.target}: {self.message}"
        return self.message


class ConnectionFailure(DbTestGenError):
    """Raised when the database handle cannot be opened or pinged."""


class QueryFailure(DbTestGenError):
    """Raised when a catalog query returns an error."""


class ConfigurationError(DbTestGenError):
    """Raised when the requested set is empty or malformed."""


class MissingColumns(DbTestGenError):
    """Raised when a table has no columns to render."""


class UnsupportedType(DbTestGenError):
    """Raised when a dialect cannot render a column's type."""
