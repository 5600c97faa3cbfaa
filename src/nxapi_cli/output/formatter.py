"""Output dispatcher — renders data in table, JSON, YAML, or CSV format."""

from __future__ import annotations

import csv
import io
import json
from collections.abc import Sequence
from enum import Enum
from typing import Any

from pydantic import BaseModel
from rich.console import Console

from nxapi_cli.output.tables import kv_table, make_table

console = Console()


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    YAML = "yaml"
    CSV = "csv"


def to_plain(data: Any) -> Any:
    """Convert models (and lists of models) to JSON-compatible data."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [to_plain(item) for item in data]
    return data


def output_json(data: Any) -> None:
    console.print_json(json.dumps(to_plain(data), default=str))


def output_yaml(data: Any) -> None:
    import yaml

    text = yaml.safe_dump(to_plain(data), default_flow_style=False, sort_keys=False)
    console.print(text, end="", markup=False, highlight=False, soft_wrap=True)


def output_csv(columns: Sequence[str], rows: Sequence[Sequence[Any]]) -> None:
    """Print rows as CSV; ``None`` cells are left empty."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow(["" if value is None else value for value in row])
    console.print(buf.getvalue(), end="", markup=False, highlight=False, soft_wrap=True)


def output_table(
    data: Any,
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
    kv: bool = False,
) -> None:
    """Print data as a Rich table.

    Explicit *columns*/*rows* win unless *kv* asks for a key-value view of a
    dict; other dicts fall back to key-value, anything else is printed as is.
    """
    data = to_plain(data)
    if columns and rows is not None and not (kv and isinstance(data, dict)):
        console.print(make_table(title, columns, rows))
    elif isinstance(data, dict):
        console.print(kv_table(data, title=title))
    else:
        console.print(data)


def output(
    data: Any,
    fmt: str = OutputFormat.TABLE,
    *,
    columns: Sequence[str] | None = None,
    rows: Sequence[Sequence[Any]] | None = None,
    title: str | None = None,
    kv: bool = False,
) -> None:
    """Render *data* in the requested format.

    CSV needs *columns* and *rows*; without them the data is printed as JSON.
    """
    fmt = OutputFormat(fmt)
    if fmt is OutputFormat.JSON or (fmt is OutputFormat.CSV and not columns):
        output_json(data)
    elif fmt is OutputFormat.YAML:
        output_yaml(data)
    elif fmt is OutputFormat.CSV:
        output_csv(columns, rows or [])
    else:
        output_table(data, columns=columns, rows=rows, title=title, kv=kv)
