"""prompt_toolkit styles for the two questionary prompts the CLI shows."""

from __future__ import annotations

from prompt_toolkit.styles import Style

_ACCENT = "bold ansibrightcyan"
_MUTED = "ansibrightblack"

# `dbtestgen script --pick` table checkbox
TABLE_PICKER_STYLE = Style(
    [
        ("question", _ACCENT),
        ("instruction", _MUTED),
        ("pointer", "bold ansibrightgreen"),
        ("highlighted", "bold ansibrightgreen"),
        ("checkbox", _MUTED),
        ("checkbox-selected", "bold ansibrightgreen"),
    ]
)

# overwrite prompt for an existing --output file
OVERWRITE_CONFIRM_STYLE = Style(
    [
        ("question", "bold ansibrightyellow"),
        ("instruction", _MUTED),
        ("answer", "bold ansibrightyellow"),
    ]
)
