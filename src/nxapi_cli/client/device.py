"""NX-API device client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from nxapi_cli.client.errors import NXAPIError
from nxapi_cli.client.transport import DeviceTransport
from nxapi_cli.config.models import DeviceProfile
from nxapi_cli.decoding.decoder import decode_domain
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
from nxapi_cli.protocol.commands import LogicalCommand, from_command_string
from nxapi_cli.protocol.envelope import ResponseEnvelope, decode_envelope, encode_request

logger = logging.getLogger(__name__)


def _resolve(cmd: LogicalCommand | str) -> LogicalCommand:
    if isinstance(cmd, LogicalCommand):
        return cmd
    try:
        return from_command_string(cmd)
    except KeyError as exc:
        raise ValueError(f"Unsupported command: {cmd!r}") from exc


class NXAPIClient:
    """Synchronous client for NX-API show commands.

    Each call encodes one request, performs one HTTP round trip and decodes
    the reply. The profile is immutable, so a single client may serve
    concurrent callers; to talk to another device or protocol, build a new
    client.
    """

    def __init__(
        self,
        profile: DeviceProfile,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.profile = profile
        self._transport = DeviceTransport(profile, transport=transport)

    def close(self) -> None:
        self._transport.close()

    def __enter__(self) -> NXAPIClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def execute(
        self, cmd: LogicalCommand | str, *, timeout: float | None = None,
    ) -> ResponseEnvelope:
        """Run *cmd* and return the decoded envelope.

        *cmd* may be given as a catalog command string (``"show vlan"``);
        anything outside the catalog raises ValueError.
        """
        cmd = _resolve(cmd)
        mode = self.profile.api
        logger.debug("Running %r over %s", cmd.command, mode.value)
        raw = self._transport.post(
            encode_request(cmd, mode),
            content_type=mode.content_type,
            command=cmd.command,
            timeout=timeout,
        )
        try:
            envelope = decode_envelope(raw, text=cmd.is_text)
        except NXAPIError as exc:
            exc.command = cmd.command
            raise
        envelope.raise_for_error(cmd.command)
        return envelope

    def fetch(self, cmd: LogicalCommand | str, *, timeout: float | None = None) -> Any:
        """Run *cmd* and decode its payload into the matching model."""
        cmd = _resolve(cmd)
        envelope = self.execute(cmd, timeout=timeout)
        try:
            return decode_domain(cmd, envelope.payload)
        except NXAPIError as exc:
            exc.command = cmd.command
            raise

    def get_system_info(self, **kwargs: Any) -> SystemInfo:
        return self.fetch(LogicalCommand.SYSTEM_INFO, **kwargs)

    def get_interfaces(self, **kwargs: Any) -> list[Interface]:
        return self.fetch(LogicalCommand.INTERFACES, **kwargs)

    def get_vlans(self, **kwargs: Any) -> list[Vlan]:
        return self.fetch(LogicalCommand.VLANS, **kwargs)

    def get_system_resources(self, **kwargs: Any) -> SystemResources:
        return self.fetch(LogicalCommand.SYSTEM_RESOURCES, **kwargs)

    def get_environment(self, **kwargs: Any) -> Environment:
        return self.fetch(LogicalCommand.ENVIRONMENT, **kwargs)

    def get_running_config(self, **kwargs: Any) -> RunningConfig:
        return self.fetch(LogicalCommand.RUNNING_CONFIG, **kwargs)

    def get_bgp_summary(self, **kwargs: Any) -> BgpSummary:
        return self.fetch(LogicalCommand.BGP_SUMMARY, **kwargs)

    def get_transceivers(self, **kwargs: Any) -> list[Transceiver]:
        return self.fetch(LogicalCommand.TRANSCEIVERS, **kwargs)
