"""Shared helpers for CLI commands — client factory, options."""

from __future__ import annotations

from typing import Annotated

import typer

from nxapi_cli.client.device import NXAPIClient
from nxapi_cli.config.manager import ConfigManager
from nxapi_cli.output.formatter import OutputFormat
from nxapi_cli.protocol.envelope import ProtocolMode

# Shared Typer option type aliases
DeviceOpt = Annotated[
    str | None,
    typer.Option("--device", "-d", help="Device profile"),
]
HostOpt = Annotated[
    str | None,
    typer.Option("--host", help="Device host override"),
]
PortOpt = Annotated[
    int | None,
    typer.Option("--port", help="Device port override"),
]
ProtocolOpt = Annotated[
    str | None,
    typer.Option("--protocol", help="URL scheme override (http or https)"),
]
ApiOpt = Annotated[
    ProtocolMode | None,
    typer.Option("--api", help="NX-API envelope override"),
]
UsernameOpt = Annotated[
    str | None,
    typer.Option("--username", "-u", help="Username override"),
]
PasswordOpt = Annotated[
    str | None,
    typer.Option("--password", "-p", help="Password override"),
]
FormatOpt = Annotated[
    OutputFormat | None,
    typer.Option("--format", "-f", help="Output format (defaults to the configured one)"),
]
TimeoutOpt = Annotated[
    float | None,
    typer.Option("--timeout", help="Request timeout in seconds"),
]


def make_client(
    device: str | None,
    host: str | None = None,
    username: str | None = None,
    password: str | None = None,
    *,
    port: int | None = None,
    protocol: str | None = None,
    api: ProtocolMode | None = None,
) -> NXAPIClient:
    """Create an NXAPIClient from CLI options, env vars, or config profile."""
    mgr = ConfigManager()
    profile = mgr.resolve_device(
        profile_name=device,
        host=host,
        username=username,
        password=password,
        port=port,
        protocol=protocol,
        api=api,
    )
    return NXAPIClient(profile)


def resolve_format(fmt: OutputFormat | None) -> OutputFormat:
    """An explicit ``--format`` wins over the configured default."""
    if fmt is not None:
        return fmt
    return ConfigManager().config.default_format
