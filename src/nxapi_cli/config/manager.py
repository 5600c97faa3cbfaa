"""Configuration manager — read/write TOML config, resolve device profiles."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from nxapi_cli.client.errors import ConfigurationError
from nxapi_cli.config.constants import (
    CONFIG_FILE,
    ENV_HOST,
    ENV_PASSWORD,
    ENV_PROFILE,
    ENV_USERNAME,
)
from nxapi_cli.config.models import CLIConfig, DeviceProfile
from nxapi_cli.output.formatter import OutputFormat

try:
    import tomllib
except ModuleNotFoundError:
    import tomli as tomllib

logger = logging.getLogger(__name__)


def _profile_table(profile: DeviceProfile) -> dict[str, Any]:
    """TOML table for *profile*, leaving out values equal to the defaults."""
    values = profile.model_dump(mode="json", exclude={"name"}, exclude_none=True)
    defaults = DeviceProfile(name=profile.name, host=profile.host).model_dump(
        mode="json", exclude={"name", "host"}, exclude_none=True,
    )
    return {k: v for k, v in values.items() if defaults.get(k, object()) != v}


class ConfigManager:
    """Keeps the CLI config file and resolves which device to talk to."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or CONFIG_FILE
        self._config: CLIConfig | None = None

    @property
    def config(self) -> CLIConfig:
        if self._config is None:
            self._config = self._load()
        return self._config

    def _load(self) -> CLIConfig:
        if not self.config_path.exists():
            return CLIConfig()
        try:
            document = tomllib.loads(self.config_path.read_text())
            return CLIConfig(
                default_profile=document.get("default_profile"),
                default_format=document.get("default_format", OutputFormat.TABLE),
                profiles={
                    name: DeviceProfile(name=name, **table)
                    for name, table in document.get("profiles", {}).items()
                },
            )
        except (tomllib.TOMLDecodeError, ValidationError, TypeError) as exc:
            raise ConfigurationError(
                f"Invalid config file {self.config_path}: {exc}"
            ) from exc

    def _document(self) -> dict[str, Any]:
        document: dict[str, Any] = {}
        if self.config.default_profile:
            document["default_profile"] = self.config.default_profile
        if self.config.default_format is not OutputFormat.TABLE:
            document["default_format"] = self.config.default_format.value
        if self.config.profiles:
            document["profiles"] = {
                name: _profile_table(profile)
                for name, profile in self.config.profiles.items()
            }
        return document

    def save(self) -> None:
        """Write the config atomically, readable by the owner only."""
        directory = self.config_path.parent
        directory.mkdir(parents=True, exist_ok=True)
        # Profiles hold device passwords
        os.chmod(directory, 0o700)
        staging = self.config_path.with_suffix(".tmp")
        fd = os.open(str(staging), os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as fh:
            tomli_w.dump(self._document(), fh)
        staging.replace(self.config_path)
        logger.debug("Saved %d profile(s) to %s", len(self.config.profiles), self.config_path)

    def add_profile(self, profile: DeviceProfile) -> None:
        self.config.profiles[profile.name] = profile
        if not self.config.default_profile:
            self.config.default_profile = profile.name
        self.save()

    def remove_profile(self, name: str) -> bool:
        if self.config.profiles.pop(name, None) is None:
            return False
        if self.config.default_profile == name:
            self.config.default_profile = next(iter(self.config.profiles), None)
        self.save()
        return True

    def set_default(self, name: str) -> bool:
        if name not in self.config.profiles:
            return False
        self.config.default_profile = name
        self.save()
        return True

    def get_profile(self, name: str | None = None) -> DeviceProfile | None:
        """Return the named profile, or the default one when *name* is empty."""
        key = name or self.config.default_profile
        return self.config.profiles.get(key) if key else None

    def resolve_device(
        self,
        profile_name: str | None = None,
        host: str | None = None,
        username: str | None = None,
        password: str | None = None,
        **overrides: Any,
    ) -> DeviceProfile:
        """Resolve the device connection.

        Precedence: CLI flags > env vars > config profile. *overrides* holds
        further profile fields (port, protocol, api, ...) given on the command
        line; ``None`` values are ignored.
        """
        profile = self.get_profile(profile_name or os.environ.get(ENV_PROFILE))
        if profile_name and profile is None:
            raise ConfigurationError(f"Profile '{profile_name}' not found.")

        resolved_host = host or os.environ.get(ENV_HOST) or (profile.host if profile else None)
        if not resolved_host:
            raise ConfigurationError(
                "No device configured. Use 'nxapi-cli config add' or set "
                f"{ENV_HOST} or pass --host."
            )

        fields: dict[str, Any] = (
            profile.model_dump(exclude={"name", "host"}) if profile else {}
        )
        fields["username"] = username or os.environ.get(ENV_USERNAME) or fields.get("username")
        fields["password"] = password or os.environ.get(ENV_PASSWORD) or fields.get("password")
        fields.update({k: v for k, v in overrides.items() if v is not None})
        return DeviceProfile(
            name=profile.name if profile else "cli",
            host=resolved_host,
            **fields,
        )
