"""Commands for browsing what can be scripted."""

from __future__ import annotations

import typer

from dbtestgen.cli.common.context import build_context
from dbtestgen.cli.common.exits import die, exit_from_exc, warn_exit
from dbtestgen.cli.common.logs import configure_logging
from dbtestgen.cli.common.options import DialectOpt, DsnOpt, VerboseOpt
from dbtestgen.cli.common.output import out
from dbtestgen.core.dialect import available_dialects
from dbtestgen.core.errors import DbTestGenError


def tables(
    schema: str = typer.Argument(..., help="Schema whose tables are listed"),
    dsn: str | None = DsnOpt,
    dialect: str = DialectOpt,
    verbose: bool = VerboseOpt,
):
    """List the tables of a schema."""
    configure_logging(verbose)
    appctx = build_context(dsn, dialect)

    list_tables = getattr(appctx.dialect, "list_tables", None)
    try:
        if not callable(list_tables):
            die(f"Dialect '{dialect}' can't list tables.", code=2)
        with out.status(f"Loading tables of {schema}..."):
            names = list_tables(appctx.connection, schema)
    except DbTestGenError as exc:
        exit_from_exc(exc)
    finally:
        appctx.close()

    if not names:
        warn_exit(f"No tables found in schema '{schema}'.", code=0)

    out.header("Tables")
    out.info(f"Schema: {schema} | Tables: {len(names)}")
    out.tables_table([f"{schema}.{n}" for n in names], title="Tables")


def dialects():
    """List the available catalog dialects."""
    out.dialects_table(available_dialects())
