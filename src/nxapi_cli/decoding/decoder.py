"""Decode envelope payloads into domain models."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel

from nxapi_cli.client.errors import SchemaMismatchError
from nxapi_cli.decoding import variants
from nxapi_cli.decoding.shapes import Shape, select, snippet
from nxapi_cli.models import (
    BgpSummary,
    Environment,
    Interface,
    RunningConfig,
    SystemInfo,
    SystemResources,
    Transceiver,
    Vlan,
)
from nxapi_cli.protocol.commands import LogicalCommand

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EntitySchema:
    """Model and candidate shapes for one structured command.

    When *many* is set, the matched shape yields an ``items`` list and each
    item becomes one model.
    """

    model: type[BaseModel]
    shapes: Sequence[Shape]
    many: bool = False


SCHEMAS: dict[LogicalCommand, EntitySchema] = {
    LogicalCommand.SYSTEM_INFO: EntitySchema(SystemInfo, variants.SYSTEM_INFO_SHAPES),
    LogicalCommand.INTERFACES: EntitySchema(Interface, variants.INTERFACES_SHAPES, many=True),
    LogicalCommand.VLANS: EntitySchema(Vlan, variants.VLANS_SHAPES, many=True),
    LogicalCommand.SYSTEM_RESOURCES: EntitySchema(
        SystemResources, variants.SYSTEM_RESOURCES_SHAPES,
    ),
    LogicalCommand.ENVIRONMENT: EntitySchema(Environment, variants.ENVIRONMENT_SHAPES),
    LogicalCommand.TRANSCEIVERS: EntitySchema(
        Transceiver, variants.TRANSCEIVERS_SHAPES, many=True,
    ),
}

TEXT_MODELS: dict[LogicalCommand, type[RunningConfig] | type[BgpSummary]] = {
    LogicalCommand.RUNNING_CONFIG: RunningConfig,
    LogicalCommand.BGP_SUMMARY: BgpSummary,
}


def decode_domain(cmd: LogicalCommand, payload: Any) -> Any:
    """Decode *payload* into the domain model for *cmd*.

    Free-text commands never fail on content. Structured commands raise
    SchemaMismatchError when no known shape matches.
    """
    if cmd in TEXT_MODELS:
        return TEXT_MODELS[cmd](text=as_text(payload))

    schema = SCHEMAS[cmd]
    shape = select(schema.shapes, payload)
    if shape is None:
        raise SchemaMismatchError(cmd.value, snippet(payload))
    logger.debug("Decoding %s with shape %s", cmd.value, shape.name)
    values = shape.extract(payload)
    if schema.many:
        return [schema.model(**item) for item in values.get("items", [])]
    return schema.model(**values)


def as_text(payload: Any) -> str:
    """Return a free-text payload verbatim."""
    if payload is None:
        return ""
    if isinstance(payload, str):
        return payload
    # Some firmware answers text commands with a structured body
    return json.dumps(payload, indent=2)
