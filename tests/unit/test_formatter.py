"""Tests for output formatting."""

from __future__ import annotations

import json
from io import StringIO
from unittest.mock import patch

import pytest
import yaml
from rich.console import Console

from nxapi_cli.models import Interface, SystemInfo, Vlan
from nxapi_cli.output.formatter import OutputFormat, output, output_csv, to_plain


def _capture():
    buf = StringIO()
    console = Console(file=buf, force_terminal=False, width=200)
    return buf, patch("nxapi_cli.output.formatter.console", console)


class TestToPlain:
    def test_model(self):
        assert to_plain(Vlan(id=10, name="servers"))["name"] == "servers"

    def test_list_of_models(self):
        data = to_plain([Vlan(id=1), Vlan(id=2)])
        assert [v["id"] for v in data] == [1, 2]

    def test_plain_data_unchanged(self):
        assert to_plain({"a": [1, 2]}) == {"a": [1, 2]}


class TestOutputJson:
    def test_dict(self):
        buf, patcher = _capture()
        with patcher:
            output({"key": "val"}, "json")
        assert json.loads(buf.getvalue()) == {"key": "val"}

    def test_pydantic_model(self):
        buf, patcher = _capture()
        with patcher:
            output(SystemInfo(hostname="nx-leaf-01", uptime=42), "json")
        data = json.loads(buf.getvalue())
        assert data["hostname"] == "nx-leaf-01"
        assert data["uptime"] == 42
        assert data["kickstart_image"]["version"] == ""

    def test_list_of_models(self):
        buf, patcher = _capture()
        with patcher:
            output([Interface(name="Ethernet1/1", mtu=9216)], "json")
        assert json.loads(buf.getvalue())[0]["mtu"] == 9216


class TestOutputYaml:
    def test_dict(self):
        buf, patcher = _capture()
        with patcher:
            output({"key": "val"}, "yaml")
        assert yaml.safe_load(buf.getvalue()) == {"key": "val"}

    def test_model_list(self):
        buf, patcher = _capture()
        with patcher:
            output([Vlan(id=10, interfaces=["Ethernet1/1"])], "yaml")
        assert yaml.safe_load(buf.getvalue())[0]["interfaces"] == ["Ethernet1/1"]


class TestOutputCsv:
    def test_csv_output(self):
        buf, patcher = _capture()
        with patcher:
            output_csv(["Name", "Value"], [["a", "1"], ["b", None]])
        out = buf.getvalue()
        assert "Name,Value" in out
        assert "a,1" in out
        assert "b," in out

    def test_csv_without_rows_falls_back_to_json(self):
        buf, patcher = _capture()
        with patcher:
            output({"items": []}, "csv")
        assert json.loads(buf.getvalue()) == {"items": []}


class TestOutputTable:
    def test_kv_table(self):
        buf, patcher = _capture()
        with patcher:
            output({"Hostname": "nx-leaf-01"}, "table", kv=True, title="System Info")
        out = buf.getvalue()
        assert "System Info" in out
        assert "nx-leaf-01" in out

    def test_columns_rows(self):
        buf, patcher = _capture()
        with patcher:
            output(
                [{"a": 1}],
                "table",
                columns=["Name", "MTU"],
                rows=[["Ethernet1/1", 9216]],
                title="Interfaces",
            )
        out = buf.getvalue()
        assert "Ethernet1/1" in out
        assert "9216" in out

    def test_fallback_dict_as_kv(self):
        buf, patcher = _capture()
        with patcher:
            output({"k": "v"}, "table")
        assert "v" in buf.getvalue()

    def test_none_values_in_dict(self):
        output({"key": None, "other": "val"}, "table", kv=True)


class TestOutputFormat:
    def test_accepts_enum_member(self):
        buf, patcher = _capture()
        with patcher:
            output({"key": "val"}, OutputFormat.JSON)
        assert json.loads(buf.getvalue()) == {"key": "val"}

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            output({"key": "val"}, "xml")
