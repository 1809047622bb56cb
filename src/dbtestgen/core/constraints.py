"""Constraint collection, classification, filtering and ordering.

Constraints are gathered per table, then filtered against the whole
requested set and ordered so the resulting script runs top-to-bottom:
primary keys first, foreign keys second, everything else last.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from dbtestgen.core.dialect import DialectParser
from dbtestgen.core.models import Constraint, ConstraintKind, TableRequest
from dbtestgen.core.render import render_constraint

logger = logging.getLogger(__name__)

EMISSION_ORDER = (
    ConstraintKind.PRIMARY_KEY,
    ConstraintKind.FOREIGN_KEY,
    ConstraintKind.UNIQUE,
)

_KIND_BY_CODE = {
    "p": ConstraintKind.PRIMARY_KEY,
    "f": ConstraintKind.FOREIGN_KEY,
}


def classify(type_code: str) -> ConstraintKind:
    """Map a catalog constraint-type code to a kind (`p`, `f`, anything else)."""
    return _KIND_BY_CODE.get((type_code or "").strip().lower(), ConstraintKind.UNIQUE)


def normalize_table_ref(ref: str, default_schema: str) -> tuple[str, str]:
    """
    Normalize a table reference to a lowercase `(schema, name)` pair.

    A bare name is resolved against `default_schema`, which is the schema of
    the table owning the reference. Requested tables and referenced tables
    go through this same function so they compare on one convention.
    """
    ref = ref.strip()
    if "." in ref:
        schema, name = ref.rsplit(".", 1)
    else:
        schema, name = default_schema, ref
    return schema.strip().lower(), name.strip().lower()


def collect_constraints(
    dialect: DialectParser,
    connection: Any,
    schema: str,
    table: str,
) -> list[Constraint]:
    """Fetch and classify every constraint attached to `schema.table`."""
    out: list[Constraint] = []
    for raw in dialect.fetch_constraints(connection, schema, table):
        ref_schema, ref_name = normalize_table_ref(
            raw.referenced_table or f"{schema}.{table}", schema
        )
        out.append(
            Constraint(
                name=raw.name,
                kind=classify(raw.type_code),
                schema=schema,
                table=table,
                referenced_schema=ref_schema,
                referenced_table=ref_name,
                ddl=render_constraint(schema, table, raw.name, raw.definition),
            )
        )
    return out


def membership(tables: Iterable[TableRequest]) -> set[tuple[str, str]]:
    """Return the normalized `(schema, name)` keys of the requested tables."""
    return {normalize_table_ref(t.name, t.schema) for t in tables}


def filter_constraints(
    pool: Iterable[Constraint],
    tables: Iterable[TableRequest],
) -> list[Constraint]:
    """
    Keep only constraints internal to the requested set.

    A constraint survives when both its owning table and its referenced
    table are requested. Anything pointing outside the set is dropped.
    """
    members = membership(tables)
    kept: list[Constraint] = []
    for c in pool:
        owner = normalize_table_ref(c.table, c.schema)
        referenced = (c.referenced_schema.lower(), c.referenced_table.lower())
        if owner in members and referenced in members:
            kept.append(c)
        else:
            logger.debug(
                "Dropping constraint %s on %s (references %s outside the requested set)",
                c.name,
                c.owner_full_name,
                c.referenced_full_name,
            )
    return kept


def order_constraints(constraints: Iterable[Constraint]) -> list[Constraint]:
    """Stable-partition constraints into primary keys, foreign keys, then uniques."""
    buckets: dict[ConstraintKind, list[Constraint]] = {k: [] for k in EMISSION_ORDER}
    for c in constraints:
        buckets[c.kind].append(c)
    return [c for kind in EMISSION_ORDER for c in buckets[kind]]
