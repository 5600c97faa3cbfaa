"""Authentication for NX-API requests."""

from __future__ import annotations

import httpx

from nxapi_cli.config.models import DeviceProfile


def resolve_auth(profile: DeviceProfile) -> httpx.Auth | None:
    """Resolve HTTP Basic auth from a device profile."""
    if profile.username and profile.password:
        return httpx.BasicAuth(profile.username, profile.password)
    return None
