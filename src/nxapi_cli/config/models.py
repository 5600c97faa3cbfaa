"""Pydantic models for CLI configuration."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from nxapi_cli.config.constants import (
    API_PATH,
    DEFAULT_PORTS,
    DEFAULT_PROTOCOL,
    DEFAULT_TIMEOUT,
)
from nxapi_cli.output.formatter import OutputFormat
from nxapi_cli.protocol.envelope import ProtocolMode


class DeviceProfile(BaseModel):
    """A named device connection profile.

    Profiles are immutable. A client built from a profile never sees it
    change; use a new profile (and a new client) to reconfigure.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    host: str = Field(description="Device hostname or IP address")
    port: int | None = Field(
        default=None, ge=1, le=65535, description="Defaults to the scheme's port",
    )
    protocol: Literal["http", "https"] = Field(
        default=DEFAULT_PROTOCOL, description="URL scheme",
    )
    username: str | None = Field(default=None, description="Basic auth username")
    password: str | None = Field(default=None, description="Basic auth password")
    api: ProtocolMode = Field(
        default=ProtocolMode.JSON_RPC, description="NX-API envelope (jsonrpc or ins_api)",
    )
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")
    timeout: float = Field(
        default=DEFAULT_TIMEOUT, gt=0, le=600, description="Request timeout in seconds",
    )

    @field_validator("host")
    @classmethod
    def validate_host(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if not v:
            raise ValueError("Host must not be empty")
        if "://" in v:
            raise ValueError("Host must not include a scheme; use --protocol")
        return v

    @property
    def effective_port(self) -> int:
        return self.port or DEFAULT_PORTS[self.protocol]

    @property
    def base_url(self) -> str:
        return f"{self.protocol}://{self.host}:{self.effective_port}"

    @property
    def url(self) -> str:
        return f"{self.base_url}{API_PATH}"

    @property
    def auth_configured(self) -> bool:
        return self.username is not None and self.password is not None


class CLIConfig(BaseModel):
    """Root configuration model."""

    default_profile: str | None = None
    default_format: OutputFormat = OutputFormat.TABLE
    profiles: dict[str, DeviceProfile] = Field(default_factory=dict)
