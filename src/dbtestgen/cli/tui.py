"""Terminal UI utilities for picking tables."""

from __future__ import annotations

import questionary

from dbtestgen.cli.common.tui_style import TABLE_PICKER_STYLE

_MAX_TABLE_NAME_WIDTH = 96


def _truncate(text: str, max_len: int) -> str:
    """Return text capped at max_len characters using an ASCII ellipsis."""
    if max_len <= 3 or len(text) <= max_len:
        return text[:max_len]
    return f"{text[: max_len - 3]}..."


def _table_choice_title(schema: str, table: str) -> str:
    """Format one table choice as `schema.table`, truncated for narrow terminals."""
    return _truncate(f"{schema}.{table}", _MAX_TABLE_NAME_WIDTH)


def select_tables(schema: str, tables: list[str]) -> list[str]:
    """Display a checkbox prompt to select tables of one schema.

    Args:
        schema: Schema the tables belong to.
        tables: Table names (without schema) to choose from.

    Returns:
        The selected `schema.table` names in listing order, or an empty list.
    """
    choices = [
        questionary.Choice(title=_table_choice_title(schema, t), value=f"{schema}.{t}")
        for t in tables
    ]

    picked = (
        questionary.checkbox(
            f"Select tables from {schema}:",
            choices=choices,
            style=TABLE_PICKER_STYLE,
        ).ask()
        or []
    )
    order = {c.value: i for i, c in enumerate(choices)}
    return sorted(picked, key=order.__getitem__)
