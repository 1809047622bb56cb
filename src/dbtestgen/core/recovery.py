"""Metadata recovery for requested tables and procedures.

Recovery is synchronous and read-only. Each table is recovered on its own
(columns, then constraints), so independent tables may be recovered in
parallel; results are always returned in request order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

from dbtestgen.core.constraints import collect_constraints
from dbtestgen.core.dialect import DialectParser
from dbtestgen.core.errors import MissingColumns, UnsupportedType
from dbtestgen.core.models import (
    Column,
    Procedure,
    ProcedureRequest,
    Table,
    TableRequest,
)

logger = logging.getLogger(__name__)


def _require_dialect(dialect: DialectParser | None) -> DialectParser:
    if dialect is None:
        raise RuntimeError("No dialect parser given; select a dialect before recovery.")
    return dialect


def recover_columns(
    dialect: DialectParser,
    connection: Any,
    schema: str,
    table: str,
) -> list[Column]:
    """Fetch a table's columns and render each type, keeping catalog order."""
    columns: list[Column] = []
    for raw in dialect.fetch_columns(connection, schema, table):
        try:
            type_ddl = dialect.render_column_type(raw)
        except UnsupportedType as exc:
            if exc.target is None:
                exc.target = f"{schema}.{table}.{raw.name}"
            raise
        columns.append(
            Column(
                name=raw.name,
                type_name=raw.type_name,
                type_ddl=type_ddl,
                precision=raw.precision,
                scale=raw.scale,
                length=raw.length,
                nullable=raw.nullable,
            )
        )
    return columns


def recover_table(
    dialect: DialectParser | None,
    connection: Any,
    request: TableRequest,
) -> Table:
    """
    Recover one table's columns and constraints.

    Raises:
        MissingColumns: If the catalog reports no columns for the table.
        QueryFailure / UnsupportedType: Propagated from the dialect.
    """
    dialect = _require_dialect(dialect)

    columns = recover_columns(dialect, connection, request.schema, request.name)
    if not columns:
        raise MissingColumns("Catalog returned no columns.", target=request.full_name)

    constraints = collect_constraints(dialect, connection, request.schema, request.name)
    logger.debug(
        "Recovered %s: %d column(s), %d constraint(s)",
        request.full_name,
        len(columns),
        len(constraints),
    )
    return Table(
        schema=request.schema,
        name=request.name,
        columns=tuple(columns),
        constraints=tuple(constraints),
    )


def recover_tables(
    dialect: DialectParser | None,
    connection: Any,
    requests: Sequence[TableRequest],
    max_parallel: int = 1,
) -> list[Table]:
    """
    Recover several tables, optionally in parallel.

    Args:
        dialect: Dialect parser used for every catalog query.
        connection: Open database handle shared by all queries.
        requests: Tables to recover, in configuration order.
        max_parallel: Number of tables recovered concurrently.

    Returns:
        The recovered tables in the same order as `requests`. The first
        failure is raised and no tables are returned.
    """
    if max_parallel < 1:
        raise ValueError("max_parallel must be >= 1")
    dialect = _require_dialect(dialect)
    if not requests:
        return []

    if max_parallel == 1 or len(requests) == 1:
        return [recover_table(dialect, connection, r) for r in requests]

    with ThreadPoolExecutor(max_workers=max_parallel) as pool:
        futures = [pool.submit(recover_table, dialect, connection, r) for r in requests]
        return [f.result() for f in futures]


def recover_procedure(
    dialect: DialectParser | None,
    connection: Any,
    request: ProcedureRequest,
) -> Procedure:
    """Look up a stored routine's definition (empty when not found)."""
    dialect = _require_dialect(dialect)
    definition = dialect.fetch_procedure_definition(
        connection, request.schema, request.name
    )
    if not definition:
        logger.warning("Procedure %s not found in the catalog", request.full_name)
    return Procedure(schema=request.schema, name=request.name, definition=definition or "")
