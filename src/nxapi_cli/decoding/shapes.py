"""Declarative field matchers for schema-drifted device output.

A :class:`Shape` describes one historically observed layout of a JSON
object: the paths that must be present for the layout to apply, and one
:class:`FieldSpec` per entity attribute. Each FieldSpec lists alternative
paths (firmware renames) and the coercer that normalizes the value.

When several shapes are candidates for the same object, :func:`select` keeps
those whose required paths are all present and picks the one that finds the
most declared fields; declaration order breaks ties.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from nxapi_cli.client.errors import SchemaMismatchError, excerpt
from nxapi_cli.decoding.coerce import (
    SELF,
    Coercer,
    as_list,
    degrade,
    dig,
    first_present,
    has_path,
    rows,
    to_str,
)

SNIPPET_LEN = 160


@dataclass(frozen=True)
class FieldSpec:
    """How to fill one entity attribute.

    Without *combine*, the first path present wins. With *combine*, every
    path is read (missing ones coerce from ``None``) and the coerced values
    are passed to *combine* positionally.
    """

    name: str
    paths: tuple[str, ...]
    coerce: Coercer = to_str
    combine: Callable[..., Any] | None = None

    def present(self, data: Any) -> bool:
        return any(has_path(data, p) for p in self.paths)

    def read(self, data: Any, base: str) -> Any:
        if self.combine is not None:
            parts = [
                self.coerce(dig(data, p, None), _join(base, p))
                for p in self.paths
            ]
            return self.combine(*parts)
        hit = first_present(data, self.paths)
        if hit is None:
            return None
        path, value = hit
        return self.coerce(value, _join(base, path))


def field(
    name: str,
    *paths: str,
    coerce: Coercer = to_str,
    combine: Callable[..., Any] | None = None,
) -> FieldSpec:
    """Shorthand for FieldSpec; *paths* defaults to ``(name,)``."""
    return FieldSpec(name, paths or (name,), coerce, combine)


@dataclass(frozen=True)
class Shape:
    """One known layout of an object."""

    name: str
    required: tuple[str, ...]
    fields: tuple[FieldSpec, ...]

    def matches(self, data: Any) -> bool:
        return isinstance(data, dict) and all(has_path(data, p) for p in self.required)

    def score(self, data: Any) -> int:
        return sum(1 for spec in self.fields if spec.present(data))

    def extract(self, data: Any, base: str = "") -> dict[str, Any]:
        """Read every present field; absent ones are left to model defaults."""
        values: dict[str, Any] = {}
        for spec in self.fields:
            if not spec.present(data):
                continue
            value = spec.read(data, base)
            if value is not None:
                values[spec.name] = value
        return values


def select(shapes: Sequence[Shape], data: Any) -> Shape | None:
    """Return the best matching shape for *data*, or None."""
    best: Shape | None = None
    best_score = -1
    for shape in shapes:
        if not shape.matches(data):
            continue
        score = shape.score(data)
        if score > best_score:
            best, best_score = shape, score
    return best


def snippet(data: Any) -> str:
    try:
        text = json.dumps(data, default=str)
    except (TypeError, ValueError):
        text = repr(data)
    return excerpt(text, SNIPPET_LEN)


def decode_with(kind: str, shapes: Sequence[Shape], data: Any, base: str = "") -> dict[str, Any]:
    """Select a shape for *data* and extract it, or raise SchemaMismatchError."""
    shape = select(shapes, data)
    if shape is None:
        raise SchemaMismatchError(kind, snippet(data))
    return shape.extract(data, base)


def record(kind: str, *shapes: Shape) -> Coercer:
    """Coercer for a nested object matched against *shapes*."""

    def coerce(value: Any, path: str) -> dict[str, Any] | None:
        if isinstance(value, list) and len(value) == 1:
            value = value[0]
        if not isinstance(value, dict):
            degrade(path, value, kind)
            return None
        return decode_with(kind, shapes, value, path)

    return coerce


def each(kind: str, *shapes: Shape) -> Coercer:
    """Coercer for an object-or-list of rows matched against *shapes*."""

    def coerce(value: Any, path: str) -> list[dict[str, Any]]:
        return [
            decode_with(kind, shapes, row, f"{path}[{i}]")
            for i, row in enumerate(as_list(value))
        ]

    return coerce


def table(name: str, kind: str, *shapes: Shape) -> Coercer:
    """Coercer for a ``TABLE_<name>``/``ROW_<name>`` wrapper."""

    def coerce(value: Any, path: str) -> list[dict[str, Any]]:
        return [
            decode_with(kind, shapes, row, f"{path}.ROW_{name}[{i}]")
            for i, row in enumerate(rows(value, name))
        ]

    return coerce


def _join(base: str, path: str) -> str:
    if path == SELF:
        return base
    return f"{base}.{path}" if base else path
