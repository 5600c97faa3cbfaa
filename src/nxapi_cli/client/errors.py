"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)

# Longest body excerpt carried in exception messages
EXCERPT_LEN = 200


def excerpt(data: bytes | str, limit: int = EXCERPT_LEN) -> str:
    """Return a printable, length-limited excerpt of a payload."""
    if isinstance(data, bytes):
        data = data.decode("utf-8", errors="replace")
    data = data.strip()
    if len(data) > limit:
        return data[:limit] + "..."
    return data


class NXAPIError(Exception):
    """Base exception for nxapi-cli."""

    exit_code: int = 1
    command: str | None = None


class TransportError(NXAPIError):
    """The HTTP exchange with the device failed."""

    exit_code = 2

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body: str = "",
        command: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.body = body
        self.command = command
        super().__init__(message)


class DeviceConnectionError(TransportError):
    """Cannot connect to the device (refused, DNS failure, bad URL)."""


class AuthenticationError(TransportError):
    """Authentication failed (401/403)."""

    exit_code = 3


class DeviceTimeoutError(NXAPIError, TimeoutError):
    """The device did not answer within the configured timeout."""

    exit_code = 4

    def __init__(self, message: str, *, command: str | None = None) -> None:
        self.command = command
        super().__init__(message)


class UnsupportedPayloadError(NXAPIError):
    """The response carries neither a JSON-RPC nor an ins_api marker."""

    exit_code = 5

    def __init__(self, payload: bytes) -> None:
        self.payload = payload
        super().__init__(f"Unsupported payload: {excerpt(payload)}")


class FormatError(NXAPIError):
    """The response envelope is malformed."""

    exit_code = 5


class CommandError(NXAPIError):
    """The device rejected the command inside a well-formed envelope."""

    exit_code = 6

    def __init__(
        self,
        message: str,
        *,
        code: int | str | None = None,
        command: str | None = None,
    ) -> None:
        self.code = code
        self.command = command
        super().__init__(message)


class SchemaMismatchError(NXAPIError):
    """The payload matches none of the known shapes for a command."""

    exit_code = 7

    def __init__(self, kind: str, snippet: str) -> None:
        self.kind = kind
        self.snippet = snippet
        super().__init__(f"Unrecognized {kind} payload: {snippet}")


class ConfigurationError(NXAPIError):
    """No usable device configuration."""

    exit_code = 8


class FieldCoercionWarning(UserWarning):
    """A present field could not be coerced and was set to its zero value."""

    def __init__(self, path: str, value: Any, target: str) -> None:
        self.path = path
        self.value = value
        self.target = target
        super().__init__(f"Cannot coerce {path}={value!r} to {target}")


def error_handler(func: F) -> F:
    """Decorator that catches NXAPIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except NXAPIError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
