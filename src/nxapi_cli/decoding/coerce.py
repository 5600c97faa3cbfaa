"""Value coercion helpers shared by every shape table.

Device firmware is inconsistent about encodings: counters arrive as JSON
numbers or numeric strings, single-row tables arrive as an object instead of
a one-element list, and absent values are spelled ``"--"`` or ``"N/A"``.
Everything is normalized here so shape tables stay declarative.
"""

from __future__ import annotations

import logging
import math
import re
import warnings
from collections.abc import Callable
from typing import Any

from nxapi_cli.client.errors import FieldCoercionWarning

logger = logging.getLogger(__name__)

Coercer = Callable[[Any, str], Any]

_MISSING = object()

# Path naming the object itself, for nested models read from flattened fields
SELF = "@"

# Placeholders devices print instead of omitting a value
_BLANKS = frozenset({"", "--", "-", "n/a", "N/A", "NA", "none", "None"})

# Leading number, optionally signed, optionally followed by a unit ("79 W")
_NUMBER_RE = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?)")

# Widest counter a device reports (unsigned 64-bit)
MAX_COUNTER = 2**64 - 1


def degrade(path: str, value: Any, target: str) -> None:
    """Report a field that could not be coerced."""
    warning = FieldCoercionWarning(path, value, target)
    logger.warning("%s", warning)
    warnings.warn(warning, stacklevel=3)


def is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip() in _BLANKS)


def to_str(value: Any, path: str = "") -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    degrade(path, value, "str")
    return ""


def _counter(number: int | float) -> int | None:
    """Integer value of *number*, or None when it is not a usable counter."""
    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        number = int(number)
    return number if abs(number) <= MAX_COUNTER else None


def to_int(value: Any, path: str = "") -> int:
    if is_blank(value):
        return 0
    if isinstance(value, bool):
        return int(value)
    number: int | float | None = None
    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        match = _NUMBER_RE.match(text)
        if text.lower().startswith("0x"):
            try:
                number = int(text, 16)
            except ValueError:
                pass
        elif match:
            digits = match.group(1)
            try:
                # int() keeps 64-bit counters exact
                number = float(digits) if "." in digits else int(digits)
            except ValueError:
                pass
    result = _counter(number) if number is not None else None
    if result is not None:
        return result
    degrade(path, value, "int")
    return 0


def to_float(value: Any, path: str = "") -> float:
    if is_blank(value):
        return 0.0
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            number = math.inf
        if math.isfinite(number):
            return number
    elif isinstance(value, str):
        match = _NUMBER_RE.match(value)
        if match and math.isfinite(float(match.group(1))):
            return float(match.group(1))
    degrade(path, value, "float")
    return 0.0


def to_bool(value: Any, path: str = "") -> bool:
    if is_blank(value):
        return False
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "enabled", "enable", "on", "up", "1"):
            return True
        if text in ("false", "no", "disabled", "disable", "off", "down", "0"):
            return False
    degrade(path, value, "bool")
    return False


def to_str_list(value: Any, path: str = "") -> list[str]:
    """Normalize a comma-separated string or list of strings."""
    if is_blank(value):
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, list):
        items: list[str] = []
        for item in value:
            items.extend(to_str_list(item, path))
        return items
    return [to_str(value, path)]


def as_list(value: Any) -> list[Any]:
    """Normalize a single object or a list of objects to a list."""
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def rows(table: Any, name: str) -> list[Any]:
    """Flatten a ``TABLE_<name>`` / ``ROW_<name>`` wrapper into a row list.

    *table* may be the wrapper itself or the object holding it.
    """
    if isinstance(table, dict) and f"TABLE_{name}" in table:
        table = table[f"TABLE_{name}"]
    if isinstance(table, list):
        # Some firmware splits one table into several ROW chunks
        out: list[Any] = []
        for chunk in table:
            out.extend(rows(chunk, name))
        return out
    if isinstance(table, dict) and f"ROW_{name}" in table:
        return as_list(table[f"ROW_{name}"])
    return []


def dig(data: Any, path: str, default: Any = _MISSING) -> Any:
    """Follow a dotted *path* through nested dicts.

    A list met on the way is entered at its first element. Returns *default*
    (or the module sentinel) when a step is missing.
    """
    if path == SELF:
        return data
    current = data
    for step in path.split("."):
        if isinstance(current, list):
            if not current:
                return default
            current = current[0]
        if not isinstance(current, dict) or step not in current:
            return default
        current = current[step]
    return current


def has_path(data: Any, path: str) -> bool:
    return dig(data, path) is not _MISSING


def first_present(data: Any, paths: tuple[str, ...]) -> tuple[str, Any] | None:
    """Return ``(path, value)`` for the first of *paths* found in *data*."""
    for path in paths:
        value = dig(data, path)
        if value is not _MISSING:
            return path, value
    return None
