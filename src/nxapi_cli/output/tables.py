"""Rich table rendering helpers."""

from __future__ import annotations

import json
from typing import Any, Sequence

from rich.table import Table
from rich.text import Text

# Status words worth colouring in state columns
STATE_STYLES = {
    "up": "green",
    "active": "green",
    "ok": "green",
    "down": "red",
    "failed": "red",
    "suspend": "yellow",
    "act/lshut": "yellow",
}


def cell(value: Any) -> str:
    """Render one value for a table cell."""
    if value is None:
        return ""
    if isinstance(value, list):
        return ", ".join(cell(v) for v in value)
    if isinstance(value, dict):
        return json.dumps(value, default=str)
    return str(value)


def _is_numeric(values: list[Any]) -> bool:
    present = [v for v in values if v is not None and v != ""]
    return bool(present) and all(
        isinstance(v, (int, float)) and not isinstance(v, bool) for v in present
    )


def make_table(
    title: str | None,
    columns: Sequence[str],
    rows: Sequence[Sequence[Any]],
    *,
    show_lines: bool = False,
) -> Table:
    """Build a Rich Table from column headers and row data.

    Columns holding only numbers are right-aligned; known status words
    are coloured.
    """
    table = Table(title=title, show_lines=show_lines)
    for index, name in enumerate(columns):
        numeric = _is_numeric([row[index] for row in rows if index < len(row)])
        table.add_column(name, justify="right" if numeric else "left")
    for row in rows:
        rendered = []
        for value in row:
            text = cell(value)
            style = STATE_STYLES.get(text.lower(), "") if isinstance(value, str) else ""
            rendered.append(Text(text, style=style))
        table.add_row(*rendered)
    return table


def kv_table(data: dict[str, Any], *, title: str | None = None) -> Table:
    """Key-value view of a dict."""
    table = Table(title=title, show_header=False)
    table.add_column("Key", style="bold cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    for key, value in data.items():
        table.add_row(str(key), Text(cell(value)))
    return table
