"""Tests for the command catalog."""

import pytest

from nxapi_cli.protocol.commands import (
    LogicalCommand,
    OutputKind,
    from_command_string,
    lookup,
)


class TestCatalog:
    def test_every_command_has_a_string(self):
        for cmd in LogicalCommand:
            assert lookup(cmd).startswith("show ")

    def test_command_strings_are_unique(self):
        strings = [lookup(cmd) for cmd in LogicalCommand]
        assert len(set(strings)) == len(strings)

    def test_known_strings(self):
        assert lookup(LogicalCommand.SYSTEM_INFO) == "show version"
        assert lookup(LogicalCommand.BGP_SUMMARY) == "show ip bgp summary vrf all"
        assert LogicalCommand.TRANSCEIVERS.command == "show interface transceiver details"

    def test_text_commands(self):
        text = {cmd for cmd in LogicalCommand if cmd.is_text}
        assert text == {LogicalCommand.RUNNING_CONFIG, LogicalCommand.BGP_SUMMARY}
        assert LogicalCommand.VLANS.output_kind is OutputKind.STRUCTURED


class TestFromCommandString:
    def test_round_trip(self):
        for cmd in LogicalCommand:
            assert from_command_string(lookup(cmd)) is cmd

    def test_collapses_whitespace(self):
        assert from_command_string("  show   ip bgp summary\tvrf all ") is LogicalCommand.BGP_SUMMARY

    def test_unknown_command(self):
        with pytest.raises(KeyError):
            from_command_string("show clock")
