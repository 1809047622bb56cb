"""Plain-text rendering of DDL statements.

Identifiers are emitted as given: schema, table and column names are trusted
literals from configuration or catalog output and are never quoted.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dbtestgen.core.errors import ConfigurationError, MissingColumns

if TYPE_CHECKING:
    from dbtestgen.core.dialect import RawColumn
    from dbtestgen.core.models import Table

COLUMN_SEPARATOR = ",\n"


def render_type(column: RawColumn, type_name: str | None = None) -> str:
    """
    Render `TYPE(precision[, scale])(length)` for a raw column.

    Precision, scale and length are only appended when positive. `type_name`
    overrides the raw name when a dialect normalizes it first.
    """
    ddl = type_name if type_name is not None else column.type_name

    if column.precision:
        ddl += f"({column.precision}"
        if column.scale:
            ddl += f", {column.scale}"
        ddl += ")"

    if column.length:
        ddl += f"({column.length})"

    return ddl


def render_column(name: str, type_ddl: str, nullable: bool | None) -> str:
    """Render one `name TYPE [NOT] NULL` column fragment."""
    ddl = f"{name} {type_ddl}"
    if nullable is True:
        ddl += " NULL"
    elif nullable is False:
        ddl += " NOT NULL"
    return ddl


def render_create_table(table: Table) -> str:
    """Render the CREATE TABLE statement for a recovered table."""
    if not table.schema or not table.name:
        raise ConfigurationError(
            "Table needs a schema and a name.", target=table.full_name
        )
    if not table.columns:
        raise MissingColumns("Table has no columns.", target=table.full_name)

    columns = COLUMN_SEPARATOR.join(c.ddl for c in table.columns)
    return f"CREATE TABLE {table.schema}.{table.name} ( {columns} );"


def render_constraint(schema: str, table: str, name: str, definition: str) -> str:
    """Render `ALTER TABLE schema.table ADD CONSTRAINT name definition;`."""
    return f"ALTER TABLE {schema}.{table} ADD CONSTRAINT {name} {definition};"
