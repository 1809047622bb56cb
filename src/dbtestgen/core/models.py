"""Core domain models for schema snapshots.

These models describe the requested objects and the metadata recovered for
them in a simple, immutable form. They are free of driver types and of
UI/CLI concerns so every dialect and frontend can share them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from dbtestgen.core.render import render_column


class ConstraintKind(str, Enum):
    """
    Kind of a table constraint. The declaration order is the emission order.

    Values:
        PRIMARY_KEY: Primary key, created before anything can reference it.
        FOREIGN_KEY: Foreign key referencing another requested table.
        UNIQUE: Unique (and any other self-contained) constraint.
    """

    PRIMARY_KEY = "PRIMARY KEY"
    FOREIGN_KEY = "FOREIGN KEY"
    UNIQUE = "UNIQUE"


@dataclass(frozen=True)
class TableRequest:
    """
    A table entry from configuration.

    Attributes:
        schema: Schema the table lives in.
        name: Table name.
        where: Row filter kept from configuration. Reserved; the engine
               never reads it.
    """

    schema: str
    name: str
    where: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclass(frozen=True)
class ProcedureRequest:
    """A stored routine entry from configuration."""

    schema: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclass(frozen=True)
class RequestedSet:
    """The full unit of work: tables and procedures, in configuration order."""

    tables: tuple[TableRequest, ...] = ()
    procedures: tuple[ProcedureRequest, ...] = ()


@dataclass(frozen=True)
class Column:
    """
    One table column as recovered from the catalog.

    Attributes:
        name: Column name.
        type_name: Raw database type name reported by the catalog.
        type_ddl: Type fragment rendered by the dialect (e.g. `NUMERIC(10, 2)`).
        precision: Optional numeric precision.
        scale: Optional numeric scale.
        length: Optional character length.
        nullable: True/False when known, None when the catalog does not say.
    """

    name: str
    type_name: str
    type_ddl: str
    precision: int | None = None
    scale: int | None = None
    length: int | None = None
    nullable: bool | None = None

    @property
    def ddl(self) -> str:
        """Return the `name TYPE [NOT] NULL` fragment used in CREATE TABLE."""
        return render_column(self.name, self.type_ddl, self.nullable)


@dataclass(frozen=True)
class Constraint:
    """
    A primary-key, foreign-key or unique constraint attached to a table.

    Attributes:
        name: Constraint name.
        kind: Classified constraint kind.
        schema: Schema of the owning table.
        table: Name of the owning table.
        referenced_schema: Schema of the referenced table (owner if none).
        referenced_table: Name of the referenced table (owner if none).
        ddl: Pre-rendered `ALTER TABLE ... ADD CONSTRAINT ...;` statement.
    """

    name: str
    kind: ConstraintKind
    schema: str
    table: str
    referenced_schema: str
    referenced_table: str
    ddl: str

    @property
    def owner_full_name(self) -> str:
        return f"{self.schema}.{self.table}"

    @property
    def referenced_full_name(self) -> str:
        return f"{self.referenced_schema}.{self.referenced_table}"


@dataclass(frozen=True)
class Table:
    """A requested table with its columns and constraints in catalog order."""

    schema: str
    name: str
    columns: tuple[Column, ...] = ()
    constraints: tuple[Constraint, ...] = ()

    @property
    def full_name(self) -> str:
        return f"{self.schema}.{self.name}"


@dataclass(frozen=True)
class Procedure:
    """A stored routine and its raw definition text (empty when not found)."""

    schema: str
    name: str
    definition: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.schema}.{self.name}"
