"""Output formatting utilities for the CLI.

Messages, tables and prompts all go to stderr so stdout carries nothing but
the generated script.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterable

import questionary
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

from dbtestgen.cli.common.tui_style import OVERWRITE_CONFIRM_STYLE

_THEME = Theme(
    {
        "ok": "bold green",
        "warn": "yellow",
        "err": "bold red",
        "title": "bold cyan",
        "meta": "dim",
    }
)

console = Console(theme=_THEME, stderr=True)


@dataclass(frozen=True)
class Out:
    """Output formatter for CLI messages and tables."""

    def _q(self, message: str) -> str:
        """Prefix Questionary prompts to be DBTESTGEN consistent."""
        return f"[DBTESTGEN] {message}"

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(f"[title]›[/] {msg}")

    @contextmanager
    def status(self, msg: str):
        """Show a transient status spinner while work is in progress."""
        with console.status(msg, spinner="dots"):
            yield

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[ok]✓[/] {msg}")

    def warn(self, msg: str) -> None:
        """Print a warning message."""
        console.print(f"[warn]⚠[/] {msg}")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[err]✗[/] {escape(msg)}", highlight=False)

    def header(self, title: str) -> None:
        """Print a header message."""
        console.print(f"[title]{title}[/]")

    def confirm(self, message: str, *, default: bool = False) -> bool:
        """
        Ask the user for confirmation using a standardized Questionary prompt.

        Args:
            message: Confirmation question shown to the user.
            default: Default answer if the user just presses enter.

        Returns:
            True if the user confirms, False otherwise.
        """
        console.print("[meta]Use y/n then Enter[/]")
        prompt = questionary.confirm(
            self._q(message),
            default=default,
            style=OVERWRITE_CONFIRM_STYLE,
            qmark="✦",
            auto_enter=False,
        )
        return bool(prompt.ask())

    def tables_table(self, tables: Iterable[str], title: str = "Tables") -> None:
        """Render a table of fully qualified table names (schema.table)."""
        t = Table(title=title, show_lines=False)
        t.add_column("Table", style="ok")

        for name in tables:
            t.add_row(str(name))

        console.print(t)

    def requested_table(self, requested: Any, title: str = "Requested objects") -> None:
        """
        Render the requested set.

        Expects an object with `.tables` and `.procedures` (like
        dbtestgen.core.models.RequestedSet).
        """
        t = Table(title=title, show_lines=False)
        t.add_column("Object", style="ok")
        t.add_column("Kind", style="meta")
        t.add_column("Where", style="meta")

        for tbl in getattr(requested, "tables", ()):
            t.add_row(tbl.full_name, "table", str(getattr(tbl, "where", "") or ""))
        for proc in getattr(requested, "procedures", ()):
            t.add_row(proc.full_name, "procedure", "")

        console.print(t)

    def dialects_table(self, names: Iterable[str], title: str = "Dialects") -> None:
        """Render the registered dialect names."""
        t = Table(title=title, show_lines=False)
        t.add_column("Dialect", style="ok")

        for name in names:
            t.add_row(name)

        console.print(t)


out = Out()
