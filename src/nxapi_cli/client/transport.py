"""HTTP transport to the NX-API endpoint."""

from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from nxapi_cli.client.auth import resolve_auth
from nxapi_cli.client.errors import (
    AuthenticationError,
    DeviceConnectionError,
    DeviceTimeoutError,
    TransportError,
    excerpt,
)
from nxapi_cli.config.constants import API_PATH
from nxapi_cli.config.models import DeviceProfile

logger = logging.getLogger(__name__)


class DeviceTransport:
    """POSTs request bodies to ``/ins`` and returns the raw reply bytes.

    No retries are attempted: retry policy belongs to the caller.
    """

    def __init__(
        self,
        profile: DeviceProfile,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.profile = profile
        if not profile.verify_ssl:
            logger.warning("TLS certificate verification is disabled for %s", profile.host)
        self._client = httpx.Client(
            base_url=profile.base_url,
            auth=resolve_auth(profile),
            verify=profile.verify_ssl,
            timeout=profile.timeout,
            transport=transport or httpx.HTTPTransport(retries=0),
            headers={"Accept": "application/json"},
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> DeviceTransport:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def _handle_response(
        self, response: httpx.Response, command: str | None,
    ) -> httpx.Response:
        if response.is_success:
            return response
        status = response.status_code
        body = response.text
        if status in (401, 403):
            raise AuthenticationError(
                f"Authentication failed for {self.profile.host}. "
                "Check the username and password.",
                status_code=status,
                body=body,
                command=command,
            )
        raise TransportError(
            f"Device returned {status}: {excerpt(body)}",
            status_code=status,
            body=body,
            command=command,
        )

    def post(
        self,
        body: bytes,
        *,
        content_type: str,
        command: str | None = None,
        timeout: float | None = None,
    ) -> bytes:
        """Send *body* and return the reply bytes of a 2xx response."""
        started = time.perf_counter()
        try:
            response = self._client.post(
                API_PATH,
                content=body,
                headers={"Content-Type": content_type},
                timeout=timeout if timeout is not None else httpx.USE_CLIENT_DEFAULT,
            )
        except httpx.TimeoutException as exc:
            raise DeviceTimeoutError(
                f"Request to {self.profile.url} timed out: {exc}",
                command=command,
            ) from exc
        except httpx.ConnectError as exc:
            raise DeviceConnectionError(
                f"Cannot connect to device at {self.profile.url}: {exc}",
                command=command,
            ) from exc
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as exc:
            raise DeviceConnectionError(
                f"Invalid URL for device at {self.profile.url}: {exc}",
                command=command,
            ) from exc
        except httpx.TransportError as exc:
            raise TransportError(
                f"Request to {self.profile.url} failed: {exc}",
                command=command,
            ) from exc
        logger.debug(
            "%s -> %s (%d bytes) in %.3fs",
            command, response.status_code, len(response.content),
            time.perf_counter() - started,
        )
        return self._handle_response(response, command).content
