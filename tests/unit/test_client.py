"""Tests for the NX-API client and its HTTP transport."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor

import httpx
import pytest
import respx
from conftest import DEVICE_URL, StubDevice, load_fixture

from nxapi_cli.client.auth import resolve_auth
from nxapi_cli.client.device import NXAPIClient
from nxapi_cli.client.errors import (
    AuthenticationError,
    CommandError,
    DeviceConnectionError,
    DeviceTimeoutError,
    SchemaMismatchError,
    TransportError,
    UnsupportedPayloadError,
)
from nxapi_cli.config.models import DeviceProfile
from nxapi_cli.protocol.commands import LogicalCommand
from nxapi_cli.protocol.envelope import ProtocolMode


def as_ins_api(reply: dict, command: str) -> dict:
    """Re-wrap a JSON-RPC reply's body in an ins_api envelope."""
    return {"ins_api": {
        "type": "cli_show", "version": "1.0", "sid": "eoc",
        "outputs": {"output": {
            "input": command, "msg": "Success", "code": "200",
            "body": reply["result"]["body"],
        }},
    }}


class TestAuth:
    def test_resolve_auth_basic(self, sample_profile: DeviceProfile):
        auth = resolve_auth(sample_profile)
        assert isinstance(auth, httpx.BasicAuth)

    def test_resolve_auth_none(self):
        assert resolve_auth(DeviceProfile(name="t", host="nx1")) is None

    def test_resolve_auth_needs_both(self):
        assert resolve_auth(DeviceProfile(name="t", host="nx1", username="admin")) is None


class TestEndToEnd:
    def test_system_info(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client:
            info = client.get_system_info()
        assert info.hostname
        assert info.kickstart_image.version
        assert isinstance(info.uptime, int)
        assert info.uptime >= 0

    def test_interfaces_keep_order(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client:
            items = client.get_interfaces()
        assert len(items) == 4
        assert [i.name for i in items] == ["mgmt0", "Ethernet1/1", "Vlan10", "loopback0"]

    def test_running_config_is_verbatim(self, stub_device, sample_profile: DeviceProfile):
        embedded = load_fixture("resp.show.running.config.1.json")["result"]["msg"]
        with NXAPIClient(sample_profile) as client:
            conf = client.get_running_config()
        assert len(conf.text) == len(embedded)
        assert conf.text == embedded

    def test_every_getter(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client:
            assert len(client.get_vlans()) == 3
            assert client.get_system_resources().processes.total == 612
            assert len(client.get_environment().fans) == 3
            assert "65001" in client.get_bgp_summary().text
            assert len(client.get_transceivers()) == 3
        sent = [json.loads(r.content)[0]["params"]["cmd"] for r in stub_device.requests]
        assert sent == [
            "show vlan",
            "show system resources",
            "show environment",
            "show ip bgp summary vrf all",
            "show interface transceiver details",
        ]

    def test_request_wire_format(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client:
            client.get_running_config()
        request = stub_device.requests[-1]
        assert request.headers["Content-Type"] == "application/json-rpc"
        assert request.headers["Authorization"] == "Basic YWRtaW46c2VjcmV0"
        assert stub_device.last_body == [{
            "jsonrpc": "2.0",
            "method": "cli_ascii",
            "params": {"cmd": "show running-config", "version": 1},
            "id": 1,
        }]

    def test_ins_api_mode(self, stub_device, sample_profile: DeviceProfile):
        profile = sample_profile.model_copy(update={"api": ProtocolMode.INS_API})
        stub_device.replies["show version"] = "resp.show.version.2.json"
        with NXAPIClient(profile) as client:
            info = client.get_system_info()
        assert info.hostname == "nx-spine-02"
        request = stub_device.requests[-1]
        assert request.headers["Content-Type"] == "application/json"
        assert stub_device.last_body["ins_api"]["type"] == "cli_show"
        assert stub_device.last_body["ins_api"]["input"] == "show version"

    @respx.mock
    def test_same_result_over_both_protocols(self, sample_profile: DeviceProfile):
        reply = load_fixture("resp.show.version.1.json")
        route = respx.post(DEVICE_URL)

        route.mock(return_value=httpx.Response(200, json=reply))
        with NXAPIClient(sample_profile) as client:
            over_jsonrpc = client.get_system_info()

        route.mock(return_value=httpx.Response(200, json=as_ins_api(reply, "show version")))
        profile = sample_profile.model_copy(update={"api": ProtocolMode.INS_API})
        with NXAPIClient(profile) as client:
            over_ins_api = client.get_system_info()

        assert over_jsonrpc == over_ins_api

    def test_execute_returns_envelope(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client:
            envelope = client.execute(LogicalCommand.VLANS)
        assert envelope.ok
        assert envelope.protocol is ProtocolMode.JSON_RPC
        assert "TABLE_vlanbriefxbrief" in envelope.payload

    def test_fetch_by_command_string(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client:
            vlans = client.fetch("show  vlan")
        assert [v.id for v in vlans] == [1, 10, 99]
        assert stub_device.last_body[0]["params"]["cmd"] == "show vlan"

    def test_fetch_rejects_unknown_command(self, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client, pytest.raises(ValueError, match="show clock"):
            client.fetch("show clock")

    @respx.mock
    def test_text_body_that_parses_as_json_is_verbatim(self, sample_profile: DeviceProfile):
        body = '{"note": "config archived"}'
        respx.post(DEVICE_URL).mock(return_value=httpx.Response(200, json={"ins_api": {
            "type": "cli_show_ascii", "version": "1.0", "sid": "eoc",
            "outputs": {"output": {
                "input": "show running-config", "msg": "Success", "code": "200", "body": body,
            }},
        }}))
        profile = sample_profile.model_copy(update={"api": ProtocolMode.INS_API})
        with NXAPIClient(profile) as client:
            assert client.get_running_config().text == body

    def test_per_call_timeout(self, sample_profile: DeviceProfile):
        stub = StubDevice()
        with NXAPIClient(sample_profile, transport=httpx.MockTransport(stub)) as client:
            client.get_vlans(timeout=2.5)
            client.get_vlans()
        assert stub.requests[0].extensions["timeout"]["read"] == 2.5
        assert stub.requests[1].extensions["timeout"]["read"] == 30.0

    def test_concurrent_callers(self, stub_device, sample_profile: DeviceProfile):
        with NXAPIClient(sample_profile) as client, ThreadPoolExecutor(max_workers=4) as pool:
            futures = [
                pool.submit(client.get_interfaces),
                pool.submit(client.get_vlans),
                pool.submit(client.get_interfaces),
                pool.submit(client.get_vlans),
            ]
            results = [f.result() for f in futures]
        assert [len(r) for r in results] == [4, 3, 4, 3]


class TestErrors:
    def test_unsupported_command_status(self, stub_device, sample_profile: DeviceProfile):
        del stub_device.replies["show environment"]
        with NXAPIClient(sample_profile) as client, pytest.raises(TransportError) as exc_info:
            client.get_environment()
        exc = exc_info.value
        assert exc.status_code == 400
        assert "unsupported command" in exc.body
        assert exc.command == "show environment"
        assert "400" in str(exc)

    @respx.mock
    def test_auth_error(self, sample_profile: DeviceProfile):
        respx.post(DEVICE_URL).mock(return_value=httpx.Response(401, text="Unauthorized"))
        with NXAPIClient(sample_profile) as client, pytest.raises(
            AuthenticationError, match="Check the username and password",
        ) as exc_info:
            client.get_system_info()
        assert exc_info.value.status_code == 401

    @respx.mock
    def test_timeout(self, sample_profile: DeviceProfile):
        respx.post(DEVICE_URL).mock(side_effect=httpx.ReadTimeout("timed out"))
        with NXAPIClient(sample_profile) as client, pytest.raises(DeviceTimeoutError) as exc_info:
            client.get_system_info()
        assert isinstance(exc_info.value, TimeoutError)
        assert exc_info.value.command == "show version"

    @respx.mock
    def test_connection_refused(self, sample_profile: DeviceProfile):
        respx.post(DEVICE_URL).mock(side_effect=httpx.ConnectError("refused"))
        with NXAPIClient(sample_profile) as client, pytest.raises(
            DeviceConnectionError, match="Cannot connect",
        ):
            client.get_system_info()

    @respx.mock
    def test_unsupported_payload(self, sample_profile: DeviceProfile):
        respx.post(DEVICE_URL).mock(
            return_value=httpx.Response(200, text="<html>Login required</html>"),
        )
        with NXAPIClient(sample_profile) as client, pytest.raises(
            UnsupportedPayloadError,
        ) as exc_info:
            client.get_system_info()
        assert exc_info.value.payload == b"<html>Login required</html>"
        assert exc_info.value.command == "show version"

    @respx.mock
    def test_command_error(self, sample_profile: DeviceProfile):
        respx.post(DEVICE_URL).mock(return_value=httpx.Response(200, json={
            "jsonrpc": "2.0",
            "error": {"code": -32602, "message": "Invalid params",
                      "data": {"msg": "Request contains invalid special characters"}},
            "id": 1,
        }))
        with NXAPIClient(sample_profile) as client, pytest.raises(
            CommandError, match="invalid special characters",
        ) as exc_info:
            client.get_vlans()
        assert exc_info.value.command == "show vlan"

    @respx.mock
    def test_schema_mismatch_names_command(self, sample_profile: DeviceProfile):
        respx.post(DEVICE_URL).mock(return_value=httpx.Response(200, json={
            "jsonrpc": "2.0", "result": {"body": {"unexpected": True}}, "id": 1,
        }))
        with NXAPIClient(sample_profile) as client, pytest.raises(SchemaMismatchError) as exc_info:
            client.get_system_resources()
        assert exc_info.value.kind == "system_resources"
        assert exc_info.value.command == "show system resources"
