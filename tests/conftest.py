"""Shared test fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import httpx
import pytest
import respx

from nxapi_cli.config.manager import ConfigManager
from nxapi_cli.config.models import DeviceProfile
from nxapi_cli.protocol.envelope import request_command

FIXTURES = Path(__file__).parent / "fixtures"

DEVICE_HOST = "nx-leaf-01"
DEVICE_PORT = 8443
DEVICE_URL = f"https://{DEVICE_HOST}:{DEVICE_PORT}/ins"

# Canned reply per command string
DEFAULT_REPLIES = {
    "show version": "resp.show.version.1.json",
    "show interface": "resp.show.interfaces.4.json",
    "show vlan": "resp.show.vlans.2.json",
    "show system resources": "resp.show.system.resources.1.json",
    "show environment": "resp.show.environment.1.json",
    "show running-config": "resp.show.running.config.1.json",
    "show ip bgp summary vrf all": "resp.show.ip.bgp.summary.vrf.all.1.json",
    "show interface transceiver details": "resp.show.interface.transceiver.details.1.json",
}


def pytest_addoption(parser):
    parser.addoption("--device-host", action="store", default=None)
    parser.addoption("--device-username", action="store", default=None)
    parser.addoption("--device-password", action="store", default=None)
    parser.addoption("--device-api", action="store", default=None)


def fixture_bytes(name: str) -> bytes:
    return (FIXTURES / name).read_bytes()


def load_fixture(name: str) -> Any:
    return json.loads(fixture_bytes(name))


class StubDevice:
    """Answers NX-API POSTs with canned replies keyed by command string."""

    def __init__(self) -> None:
        self.replies = dict(DEFAULT_REPLIES)
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        command = request_command(request.read())
        name = self.replies.get(command)
        if name is None:
            return httpx.Response(
                400, text=f"Bad Request, unsupported command: {command}",
            )
        return httpx.Response(
            200, content=fixture_bytes(name),
            headers={"Content-Type": "application/json"},
        )

    @property
    def last_body(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep tests away from the user's config file and NXAPI_* variables."""
    path = tmp_path / "isolated" / "config.toml"
    monkeypatch.setattr("nxapi_cli.config.manager.CONFIG_FILE", path)
    for var in ("NXAPI_HOST", "NXAPI_USERNAME", "NXAPI_PASSWORD", "NXAPI_PROFILE", "NXAPI_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return path


@pytest.fixture
def tmp_config(tmp_path: Path) -> Path:
    """Return a temporary config file path."""
    return tmp_path / "config.toml"


@pytest.fixture
def config_manager(tmp_config: Path) -> ConfigManager:
    """Return a ConfigManager pointed at a temp config file."""
    return ConfigManager(config_path=tmp_config)


@pytest.fixture
def sample_profile() -> DeviceProfile:
    """Return a sample device profile for testing."""
    return DeviceProfile(
        name="leaf",
        host=DEVICE_HOST,
        port=DEVICE_PORT,
        username="admin",
        password="secret",
    )


@pytest.fixture
def stub_device():
    """Route every POST to the device URL through a StubDevice."""
    device = StubDevice()
    with respx.mock(assert_all_called=False) as router:
        router.post(DEVICE_URL).mock(side_effect=device)
        yield device


@pytest.fixture
def device_opts(request):
    """CLI options for a live device; skips unless credentials are given."""
    host = request.config.getoption("--device-host")
    username = request.config.getoption("--device-username")
    password = request.config.getoption("--device-password")
    if not host or not username or not password:
        pytest.skip("Live device credentials not provided")
    opts = ["--host", host, "-u", username, "-p", password]
    api = request.config.getoption("--device-api")
    if api:
        opts += ["--api", api]
    return opts
