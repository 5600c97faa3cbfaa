"""Catalog of supported show commands."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType


class OutputKind(str, Enum):
    """How the device renders a command's output."""

    STRUCTURED = "structured"
    TEXT = "text"


class LogicalCommand(str, Enum):
    """A supported device query, independent of the wire command string."""

    SYSTEM_INFO = "system_info"
    INTERFACES = "interfaces"
    VLANS = "vlans"
    SYSTEM_RESOURCES = "system_resources"
    ENVIRONMENT = "environment"
    RUNNING_CONFIG = "running_config"
    BGP_SUMMARY = "bgp_summary"
    TRANSCEIVERS = "transceivers"

    @property
    def command(self) -> str:
        return lookup(self)

    @property
    def output_kind(self) -> OutputKind:
        return _OUTPUT_KINDS[self]

    @property
    def is_text(self) -> bool:
        return self.output_kind is OutputKind.TEXT


_CATALOG: MappingProxyType[LogicalCommand, str] = MappingProxyType({
    LogicalCommand.SYSTEM_INFO: "show version",
    LogicalCommand.INTERFACES: "show interface",
    LogicalCommand.VLANS: "show vlan",
    LogicalCommand.SYSTEM_RESOURCES: "show system resources",
    LogicalCommand.ENVIRONMENT: "show environment",
    LogicalCommand.RUNNING_CONFIG: "show running-config",
    LogicalCommand.BGP_SUMMARY: "show ip bgp summary vrf all",
    LogicalCommand.TRANSCEIVERS: "show interface transceiver details",
})

_OUTPUT_KINDS: MappingProxyType[LogicalCommand, OutputKind] = MappingProxyType({
    cmd: (
        OutputKind.TEXT
        if cmd in (LogicalCommand.RUNNING_CONFIG, LogicalCommand.BGP_SUMMARY)
        else OutputKind.STRUCTURED
    )
    for cmd in LogicalCommand
})

_BY_COMMAND: MappingProxyType[str, LogicalCommand] = MappingProxyType(
    {text: cmd for cmd, text in _CATALOG.items()}
)


def lookup(cmd: LogicalCommand) -> str:
    """Return the canonical command string for *cmd*."""
    return _CATALOG[cmd]


def from_command_string(text: str) -> LogicalCommand:
    """Map a command string back to its LogicalCommand.

    Whitespace runs are collapsed before matching. Raises ``KeyError`` for
    commands outside the catalog.
    """
    return _BY_COMMAND[" ".join(text.split())]
