"""CLI application for generating DDL scripts from a database catalog."""

import typer

from dbtestgen.cli.commands.catalog import dialects, tables
from dbtestgen.cli.commands.script import script

app = typer.Typer(
    help="dbtestgen - recreate tables and their relationships as a DDL script",
    no_args_is_help=True,
)

app.command("script")(script)
app.command("tables")(tables)
app.command("dialects")(dialects)


if __name__ == "__main__":
    app()
