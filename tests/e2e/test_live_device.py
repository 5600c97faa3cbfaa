"""End-to-end tests against a live NX-OS device.

Skipped by default unless device credentials are provided. Only show
commands are sent, so the device configuration is never changed.

Run with:
    pytest tests/e2e --device-host=192.0.2.10 --device-username=admin \
        --device-password=secret [--device-api=ins_api]
"""

from __future__ import annotations

import json

import pytest
from typer.testing import CliRunner

from nxapi_cli.app import app

runner = CliRunner()


def invoke_json(args: list[str], device_opts: list[str]):
    """Invoke a show command with JSON output and return the parsed data."""
    result = runner.invoke(app, [*args, *device_opts, "--format", "json"])
    assert result.exit_code == 0, (
        f"Command failed: {' '.join(args)}\n"
        f"Exit code: {result.exit_code}\n"
        f"Output: {result.output}"
    )
    return json.loads(result.output)


class TestLiveShow:
    def test_version(self, device_opts):
        data = invoke_json(["show", "version"], device_opts)
        assert data["hostname"]
        assert data["kickstart_image"]["version"]
        assert data["uptime"] >= 0

    def test_interfaces(self, device_opts):
        data = invoke_json(["show", "interfaces"], device_opts)
        assert data
        assert all(i["name"] for i in data)

    def test_vlans(self, device_opts):
        data = invoke_json(["show", "vlans"], device_opts)
        assert 1 in [v["id"] for v in data]

    def test_resources(self, device_opts):
        data = invoke_json(["show", "resources"], device_opts)
        assert data["memory"]["total"] > 0

    def test_environment(self, device_opts):
        data = invoke_json(["show", "environment"], device_opts)
        assert data["fans"] or data["power_supplies"] or data["sensors"]

    def test_transceivers(self, device_opts):
        invoke_json(["show", "transceivers"], device_opts)

    @pytest.mark.parametrize("command", ["running-config", "bgp"])
    def test_text_commands(self, command: str, device_opts):
        result = runner.invoke(app, ["show", command, *device_opts])
        assert result.exit_code == 0, result.output
