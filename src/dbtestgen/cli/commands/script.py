"""Command generating the DDL script."""

from __future__ import annotations

from pathlib import Path

import typer

from dbtestgen.cli.common.context import AppContext, build_context
from dbtestgen.cli.common.exits import die, exit_from_exc, warn_exit
from dbtestgen.cli.common.logs import configure_logging
from dbtestgen.cli.common.options import (
    ConfigOpt,
    DialectOpt,
    DsnOpt,
    ForceOpt,
    OutputOpt,
    ParallelOpt,
    PickOpt,
    ProcsOpt,
    TablesOpt,
    VerboseOpt,
)
from dbtestgen.cli.common.output import out
from dbtestgen.cli.tui import select_tables
from dbtestgen.core.config import build_requested_set, parse_table_list
from dbtestgen.core.errors import DbTestGenError
from dbtestgen.core.models import RequestedSet
from dbtestgen.core.script import generate_script, validate_requested_set


def _pick_tables(appctx: AppContext, schema: str) -> list[str]:
    """List a schema's tables and let the user tick the ones to script."""
    list_tables = getattr(appctx.dialect, "list_tables", None)
    if not callable(list_tables):
        die(f"Dialect '{appctx.dialect_name}' can't list tables.", code=2)

    try:
        with out.status(f"Loading tables of {schema}..."):
            names = list_tables(appctx.connection, schema)
    except DbTestGenError as exc:
        exit_from_exc(exc)

    if not names:
        warn_exit(f"No tables found in schema '{schema}'.", code=0)

    return select_tables(schema, names)


def _write_output(script: str, output: Path | None, *, force: bool) -> None:
    if output is None:
        typer.echo(script, nl=False)
        return

    if output.exists() and not force:
        if not out.confirm(f"Overwrite {output}?"):
            warn_exit("Cancelled: script not written.", code=1)

    try:
        output.write_text(script, encoding="utf-8")
    except OSError as exc:
        die(f"Cannot write {output}: {exc}")
    out.success(f"Script written to {output}")


def script(
    dsn: str | None = DsnOpt,
    dialect: str = DialectOpt,
    tables: list[str] = TablesOpt,
    procs: list[str] = ProcsOpt,
    config: Path | None = ConfigOpt,
    pick: str | None = PickOpt,
    parallel: int = ParallelOpt,
    output: Path | None = OutputOpt,
    force: bool = ForceOpt,
    verbose: bool = VerboseOpt,
):
    """
    Generate CREATE TABLE / ALTER TABLE ... ADD CONSTRAINT statements for
    the requested tables, followed by the requested procedures.
    """
    configure_logging(verbose)

    try:
        requested = build_requested_set(
            tables=tables, procedures=procs, config_path=config
        )
        if pick is None:
            validate_requested_set(requested)
    except DbTestGenError as exc:
        exit_from_exc(exc)

    appctx = build_context(dsn, dialect)
    try:
        if pick is not None:
            picked = parse_table_list(_pick_tables(appctx, pick))
            if not picked and not requested.tables:
                warn_exit("No tables selected.", code=0)
            requested = RequestedSet(
                tables=requested.tables + tuple(picked),
                procedures=requested.procedures,
            )

        if verbose:
            out.requested_table(requested)

        try:
            with out.status("Reading catalog metadata..."):
                text = generate_script(
                    appctx.dialect,
                    appctx.connection,
                    requested,
                    max_parallel=parallel,
                )
        except DbTestGenError as exc:
            exit_from_exc(exc)
    finally:
        appctx.close()

    _write_output(text, output, force=force)
