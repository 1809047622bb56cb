"""Dialect parser contract and registry.

A dialect parser knows how to query one database product's catalog. The
engine only talks to the four operations of `DialectParser`; which concrete
dialect is used is decided once at startup and passed into the engine as a
value, never looked up from global state during recovery.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Protocol

from dbtestgen.core.errors import ConfigurationError


@dataclass(frozen=True)
class RawColumn:
    """
    Column descriptor as reported by a dialect, before rendering.

    Attributes:
        name: Column name.
        type_name: Database type name as the catalog reports it.
        precision: Numeric precision, or None when not applicable.
        scale: Numeric scale, or None when not applicable.
        length: Character length, or None when not applicable.
        nullable: Nullability, or None when the catalog does not say.
    """

    name: str
    type_name: str
    precision: int | None = None
    scale: int | None = None
    length: int | None = None
    nullable: bool | None = None


@dataclass(frozen=True)
class RawConstraint:
    """
    Constraint descriptor as reported by a dialect.

    Attributes:
        name: Constraint name.
        definition: Constraint body, e.g. `PRIMARY KEY (id)`.
        referenced_table: Table the constraint points to, `schema.name` or a
                          bare name. Equals the owning table when the
                          constraint references nothing else.
        type_code: Raw catalog constraint-type code (`p`, `f`, `u`, ...).
    """

    name: str
    definition: str
    referenced_table: str
    type_code: str


class DialectParser(Protocol):
    """Catalog queries for one database dialect. Implementations are read-only."""

    name: str

    def fetch_columns(self, connection: Any, schema: str, table: str) -> list[RawColumn]:
        """Return the table's columns in catalog order."""
        ...

    def fetch_constraints(
        self, connection: Any, schema: str, table: str
    ) -> list[RawConstraint]:
        """Return every constraint attached to the table, in a stable order."""
        ...

    def render_column_type(self, column: RawColumn) -> str:
        """Return the DDL type fragment for a column."""
        ...

    def fetch_procedure_definition(
        self, connection: Any, schema: str, name_pattern: str
    ) -> str:
        """Return the routine's definition text, or "" when nothing matches."""
        ...


DialectFactory = Callable[[], DialectParser]

_DIALECTS: dict[str, DialectFactory] = {}


def register_dialect(name: str, factory: DialectFactory) -> None:
    """Make a dialect selectable by name (e.g. from the `--dialect` option)."""
    if factory is None:
        raise ValueError("Dialect factory can't be None.")
    _DIALECTS[name.lower()] = factory


def available_dialects() -> list[str]:
    """Return the registered dialect names, sorted."""
    return sorted(_DIALECTS)


def get_dialect(name: str) -> DialectParser:
    """Instantiate a registered dialect by name."""
    factory = _DIALECTS.get(name.strip().lower())
    if factory is None:
        known = ", ".join(available_dialects()) or "none"
        raise ConfigurationError(f"Unknown dialect '{name}' (available: {known}).")
    return factory()
