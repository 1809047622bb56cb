"""Assembly of the final DDL script.

The script has three sections separated by blank lines: CREATE TABLE
statements in configuration order, the filtered and ordered constraint
statements, then procedure definitions. Either the whole script is produced
or an error is raised; there is no partial output.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Sequence

from dbtestgen.core.constraints import filter_constraints, order_constraints
from dbtestgen.core.dialect import DialectParser
from dbtestgen.core.errors import ConfigurationError
from dbtestgen.core.models import Constraint, Procedure, RequestedSet, Table
from dbtestgen.core.recovery import recover_procedure, recover_tables
from dbtestgen.core.render import render_create_table

logger = logging.getLogger(__name__)

STATEMENT_SEPARATOR = "\n\n"


def validate_requested_set(requested: RequestedSet) -> None:
    """
    Check the requested set before any query is issued.

    Raises:
        ConfigurationError: If no tables are requested, an entry lacks a
            schema or name, or a table is requested twice.
    """
    if not requested.tables:
        raise ConfigurationError("At least one table must be requested.")

    seen: set[tuple[str, str]] = set()
    for i, t in enumerate(requested.tables):
        if not (t.schema or "").strip() or not (t.name or "").strip():
            raise ConfigurationError(f"Schema and name must be filled in table: item {i}")
        key = (t.schema.strip().lower(), t.name.strip().lower())
        if key in seen:
            raise ConfigurationError("Table requested more than once.", target=t.full_name)
        seen.add(key)

    for i, p in enumerate(requested.procedures):
        if not (p.schema or "").strip() or not (p.name or "").strip():
            raise ConfigurationError(
                f"Schema and name must be filled in procedure: item {i}"
            )


def _procedure_ddl(procedure: Procedure) -> str:
    definition = procedure.definition.strip()
    if not definition.endswith(";"):
        definition += ";"
    return definition


def assemble_script(
    tables: Sequence[Table],
    constraints: Iterable[Constraint],
    procedures: Iterable[Procedure] = (),
) -> str:
    """
    Join rendered tables, constraints and procedures into one script.

    `constraints` must already be filtered and ordered. Procedures whose
    definition is empty are skipped.
    """
    sections: list[str] = []

    sections.append(STATEMENT_SEPARATOR.join(render_create_table(t) for t in tables))

    constraint_ddl = [c.ddl for c in constraints]
    if constraint_ddl:
        sections.append(STATEMENT_SEPARATOR.join(constraint_ddl))

    procedure_ddl = [_procedure_ddl(p) for p in procedures if p.definition.strip()]
    if procedure_ddl:
        sections.append(STATEMENT_SEPARATOR.join(procedure_ddl))

    return STATEMENT_SEPARATOR.join(s for s in sections if s) + "\n"


def generate_script(
    dialect: DialectParser | None,
    connection: Any,
    requested: RequestedSet,
    *,
    max_parallel: int = 1,
) -> str:
    """
    Produce the DDL script for a requested set.

    Steps: validate the set, recover every table, filter the global
    constraint pool against the set, order it, recover procedures, then
    assemble the text.
    """
    validate_requested_set(requested)

    tables = recover_tables(dialect, connection, requested.tables, max_parallel)

    pool = [c for t in tables for c in t.constraints]
    constraints = order_constraints(filter_constraints(pool, requested.tables))
    logger.debug("Keeping %d of %d constraint(s)", len(constraints), len(pool))

    procedures = [recover_procedure(dialect, connection, p) for p in requested.procedures]

    return assemble_script(tables, constraints, procedures)
