"""NX-API wire envelopes — request encoding and response envelope decoding.

Two protocols are spoken by different firmware generations:

* JSON-RPC 2.0: the request is a batch (list) holding one call object; the
  reply carries the output under ``result.body`` (structured) or
  ``result.msg`` (text).
* Legacy ``ins_api``: a single object; the reply carries the output under
  ``ins_api.outputs.output.body``, sometimes as a string holding more JSON.

Both decode to the same :class:`ResponseEnvelope`, so domain decoding never
needs to know which protocol was spoken.
"""

from __future__ import annotations

import json
import logging
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel

from nxapi_cli.client.errors import (
    CommandError,
    FormatError,
    UnsupportedPayloadError,
    excerpt,
)
from nxapi_cli.protocol.commands import LogicalCommand, lookup

logger = logging.getLogger(__name__)

JSONRPC_MARKER = b'"jsonrpc"'
INS_API_MARKER = b'"ins_api"'


class ProtocolMode(str, Enum):
    """Wire protocol used to talk to the device."""

    JSON_RPC = "jsonrpc"
    INS_API = "ins_api"

    @property
    def content_type(self) -> str:
        if self is ProtocolMode.JSON_RPC:
            return "application/json-rpc"
        return "application/json"


class JsonRpcParams(BaseModel):
    cmd: str
    version: int = 1


class JsonRpcRequest(BaseModel):
    """One call inside a JSON-RPC batch."""

    jsonrpc: Literal["2.0"] = "2.0"
    method: str
    params: JsonRpcParams
    id: int = 1


class InsApiParams(BaseModel):
    version: str = "1.0"
    type: str
    chunk: str = "0"
    sid: str = "1"
    input: str
    output_format: str = "json"


class InsApiRequest(BaseModel):
    """Legacy single-command request."""

    ins_api: InsApiParams


RequestEnvelope = JsonRpcRequest | InsApiRequest


class ResponseEnvelope(BaseModel):
    """Protocol-independent view of a device reply."""

    protocol: ProtocolMode
    command: str | None = None
    error: dict[str, Any] | None = None
    payload: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self, command: str | None = None) -> None:
        """Raise CommandError if the device reported a command failure."""
        if self.error is None:
            return
        message = self.error.get("message") or "Command failed"
        detail = self.error.get("detail")
        if detail:
            message = f"{message}: {detail}"
        raise CommandError(
            message,
            code=self.error.get("code"),
            command=command or self.command,
        )


def build_request(cmd: LogicalCommand, mode: ProtocolMode) -> RequestEnvelope:
    """Build the request model for *cmd* in the given protocol."""
    text = lookup(cmd)
    if mode is ProtocolMode.JSON_RPC:
        method = "cli_ascii" if cmd.is_text else "cli"
        return JsonRpcRequest(method=method, params=JsonRpcParams(cmd=text))
    show_type = "cli_show_ascii" if cmd.is_text else "cli_show"
    return InsApiRequest(ins_api=InsApiParams(type=show_type, input=text))


def encode_request(cmd: LogicalCommand, mode: ProtocolMode) -> bytes:
    """Serialize the wire payload for *cmd*."""
    request = build_request(cmd, mode)
    if isinstance(request, JsonRpcRequest):
        data: Any = [request.model_dump()]
    else:
        data = request.model_dump()
    return json.dumps(data).encode()


def request_command(raw: bytes) -> str:
    """Extract the command string from an encoded request."""
    _require_marker(raw)
    data = _load_json(raw)
    mode = _protocol_of(data, raw)
    try:
        if mode is ProtocolMode.JSON_RPC:
            if not isinstance(data, list) or len(data) != 1:
                raise FormatError("Expected a JSON-RPC batch holding one request")
            return str(data[0]["params"]["cmd"])
        return str(data["ins_api"]["input"])
    except (KeyError, TypeError) as exc:
        raise FormatError(f"Malformed request: {excerpt(raw)}") from exc


def detect_protocol(raw: bytes) -> ProtocolMode:
    """Pick the protocol from the markers present in *raw*.

    A top-level ``jsonrpc`` or ``ins_api`` key decides; the byte markers
    only settle replies whose structure names neither, so a marker quoted
    inside a payload value cannot flip the protocol.
    """
    _require_marker(raw)
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        data = None
    return _protocol_of(data, raw)


def _require_marker(raw: bytes) -> None:
    if JSONRPC_MARKER not in raw and INS_API_MARKER not in raw:
        raise UnsupportedPayloadError(raw)


def _protocol_of(data: Any, raw: bytes) -> ProtocolMode:
    top = data[0] if isinstance(data, list) and data else data
    if isinstance(top, dict):
        if "jsonrpc" in top:
            return ProtocolMode.JSON_RPC
        if "ins_api" in top:
            return ProtocolMode.INS_API
    if JSONRPC_MARKER in raw:
        return ProtocolMode.JSON_RPC
    return ProtocolMode.INS_API


def decode_envelope(raw: bytes, *, text: bool = False) -> ResponseEnvelope:
    """Decode a device reply into a :class:`ResponseEnvelope`.

    Raises UnsupportedPayloadError when no protocol marker is present and
    FormatError when the envelope itself is malformed. A command failure
    reported by the device is kept in ``error``; call
    :meth:`ResponseEnvelope.raise_for_error` to turn it into an exception.

    With *text* set (free-text commands) a string body is kept verbatim even
    when it happens to parse as JSON.
    """
    _require_marker(raw)
    data = _load_json(raw)
    if _protocol_of(data, raw) is ProtocolMode.JSON_RPC:
        envelope = _decode_jsonrpc(data, raw, text=text)
    else:
        envelope = _decode_ins_api(data, raw, text=text)
    logger.debug(
        "Decoded %s envelope for %r (error=%s)",
        envelope.protocol.value, envelope.command, envelope.error is not None,
    )
    return envelope


def _load_json(raw: bytes) -> Any:
    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise FormatError(f"Invalid JSON in reply: {excerpt(raw)}") from exc


def _decode_jsonrpc(data: Any, raw: bytes, *, text: bool = False) -> ResponseEnvelope:
    # Devices answer a one-call batch with a bare object
    replies = [data] if isinstance(data, dict) else data
    if not isinstance(replies, list):
        raise FormatError(f"Unexpected JSON-RPC reply: {excerpt(raw)}")
    if len(replies) != 1:
        raise FormatError(
            f"Expected a single JSON-RPC reply, got {len(replies)}"
        )
    reply = replies[0]
    if not isinstance(reply, dict):
        raise FormatError(f"Unexpected JSON-RPC reply: {excerpt(raw)}")

    error = reply.get("error")
    if error:
        if not isinstance(error, dict):
            error = {"message": str(error)}
        data_msg = error.get("data")
        if isinstance(data_msg, dict):
            data_msg = data_msg.get("msg")
        return ResponseEnvelope(
            protocol=ProtocolMode.JSON_RPC,
            error={
                "code": error.get("code"),
                "message": error.get("message"),
                "detail": _clean(data_msg),
            },
        )

    if "result" not in reply:
        raise FormatError(f"JSON-RPC reply has no result: {excerpt(raw)}")
    result = reply["result"]
    if result is None:
        payload = None
    elif isinstance(result, dict) and "body" in result:
        payload = _unwrap_body(result["body"], text)
    elif isinstance(result, dict) and "msg" in result:
        payload = result["msg"]
    else:
        raise FormatError(f"JSON-RPC result has no body: {excerpt(raw)}")
    return ResponseEnvelope(protocol=ProtocolMode.JSON_RPC, payload=payload)


def _decode_ins_api(data: Any, raw: bytes, *, text: bool = False) -> ResponseEnvelope:
    try:
        output = data["ins_api"]["outputs"]["output"]
    except (KeyError, TypeError) as exc:
        raise FormatError(f"ins_api reply has no output: {excerpt(raw)}") from exc
    if isinstance(output, list):
        if len(output) != 1:
            raise FormatError(
                f"Expected a single ins_api output, got {len(output)}"
            )
        output = output[0]
    if not isinstance(output, dict):
        raise FormatError(f"Unexpected ins_api output: {excerpt(raw)}")

    command = output.get("input")
    code = str(output.get("code", "200"))
    if code != "200":
        return ResponseEnvelope(
            protocol=ProtocolMode.INS_API,
            command=command,
            error={
                "code": code,
                "message": output.get("msg"),
                "detail": _clean(output.get("clierror")),
            },
        )
    return ResponseEnvelope(
        protocol=ProtocolMode.INS_API,
        command=command,
        payload=_unwrap_body(output.get("body"), text),
    )


def _unwrap_body(body: Any, text: bool = False) -> Any:
    """Parse a string body that holds JSON; keep any other string verbatim."""
    if text or not isinstance(body, str):
        return body
    if body.lstrip()[:1] not in ("{", "["):
        return body
    try:
        return json.loads(body)
    except json.JSONDecodeError:
        return body


def _clean(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None

