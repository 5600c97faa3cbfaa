"""Show commands — version, interfaces, VLANs, resources, environment, config."""

from __future__ import annotations

from typing import Any

import typer
from rich.console import Console

from nxapi_cli.client.errors import error_handler
from nxapi_cli.commands._common import (
    ApiOpt,
    DeviceOpt,
    FormatOpt,
    HostOpt,
    PasswordOpt,
    PortOpt,
    ProtocolOpt,
    TimeoutOpt,
    UsernameOpt,
    make_client,
    resolve_format,
)
from nxapi_cli.output.formatter import OutputFormat, output
from nxapi_cli.protocol.commands import LogicalCommand
from nxapi_cli.protocol.envelope import ProtocolMode

app = typer.Typer(name="show", help="Query device state.")
console = Console()


def _fetch(
    cmd: LogicalCommand,
    device: str | None,
    host: str | None,
    username: str | None,
    password: str | None,
    port: int | None,
    protocol: str | None,
    api: ProtocolMode | None,
    timeout: float | None,
) -> Any:
    with make_client(
        device, host, username, password, port=port, protocol=protocol, api=api,
    ) as client:
        return client.fetch(cmd, timeout=timeout)


def _uptime(seconds: int) -> str:
    days, rem = divmod(seconds, 86400)
    hours, rem = divmod(rem, 3600)
    minutes, secs = divmod(rem, 60)
    return f"{days}d {hours:02d}:{minutes:02d}:{secs:02d}"


@app.command()
@error_handler
def version(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = None,
) -> None:
    """Show hostname, software version and uptime."""
    fmt = resolve_format(fmt)
    info = _fetch(
        LogicalCommand.SYSTEM_INFO,
        device, host, username, password, port, protocol, api, timeout,
    )
    summary = {
        "Hostname": info.hostname,
        "Chassis": info.chassis,
        "Processor Board ID": info.processor_board_id,
        "Kickstart Version": info.kickstart_image.version,
        "System Version": info.system_version,
        "BIOS Version": info.bios_version,
        "Memory (kB)": info.memory_kb,
        "Uptime": _uptime(info.uptime),
        "Last Reset": info.last_reset_reason,
    }
    output(info if fmt in (OutputFormat.JSON, OutputFormat.YAML) else summary, fmt, kv=True, title="System Info")


@app.command()
@error_handler
def interfaces(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = None,
) -> None:
    """List interfaces with state and counters."""
    fmt = resolve_format(fmt)
    items = _fetch(
        LogicalCommand.INTERFACES,
        device, host, username, password, port, protocol, api, timeout,
    )
    columns = ["Name", "State", "Admin", "Speed", "MTU", "Description", "In Pkts", "Out Pkts"]
    rows = [
        [i.name, i.state, i.admin_state, i.speed, i.mtu, i.description, i.in_packets, i.out_packets]
        for i in items
    ]
    output([i.model_dump() for i in items], fmt, columns=columns, rows=rows, title="Interfaces")


@app.command()
@error_handler
def vlans(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = None,
) -> None:
    """List VLANs and their member ports."""
    fmt = resolve_format(fmt)
    items = _fetch(
        LogicalCommand.VLANS,
        device, host, username, password, port, protocol, api, timeout,
    )
    columns = ["ID", "Name", "State", "Ports"]
    rows = [[v.id, v.name, v.state, ", ".join(v.interfaces)] for v in items]
    output([v.model_dump() for v in items], fmt, columns=columns, rows=rows, title="VLANs")


@app.command()
@error_handler
def resources(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = None,
) -> None:
    """Show CPU, memory and process usage."""
    fmt = resolve_format(fmt)
    res = _fetch(
        LogicalCommand.SYSTEM_RESOURCES,
        device, host, username, password, port, protocol, api, timeout,
    )
    if fmt in (OutputFormat.JSON, OutputFormat.YAML):
        output(res, fmt)
        return
    summary = {
        "Load (1/5/15 min)": (
            f"{res.load.one_minute:.2f} / {res.load.five_minutes:.2f}"
            f" / {res.load.fifteen_minutes:.2f}"
        ),
        "CPU idle %": f"{res.cpu_total.idle:.2f}",
        "CPUs": len(res.cpus),
        "Processes": f"{res.processes.total} ({res.processes.running} running)",
        "Memory used (kB)": f"{res.memory.used} / {res.memory.total}",
        "Memory status": res.memory.status,
    }
    output(summary, fmt, kv=True, title="System Resources")


@app.command()
@error_handler
def environment(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = None,
) -> None:
    """Show fans, power supplies and temperature sensors."""
    fmt = resolve_format(fmt)
    env = _fetch(
        LogicalCommand.ENVIRONMENT,
        device, host, username, password, port, protocol, api, timeout,
    )
    columns = ["Component", "Name", "Model", "Reading", "Status"]
    rows: list[list[object]] = []
    rows.extend(["Fan", f.name, f.model, f.direction, f.status] for f in env.fans)
    rows.extend(
        ["Power", str(p.number), p.model, f"{p.output_watts:g} W / {p.capacity_watts:g} W", p.status]
        for p in env.power_supplies
    )
    rows.extend(
        ["Sensor", f"{s.module}/{s.name}", "", f"{s.current:g} C", s.status]
        for s in env.sensors
    )
    output(env, fmt, columns=columns, rows=rows, title="Environment")


@app.command("running-config")
@error_handler
def running_config(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
) -> None:
    """Print the running configuration."""
    conf = _fetch(
        LogicalCommand.RUNNING_CONFIG,
        device, host, username, password, port, protocol, api, timeout,
    )
    console.print(conf.text, markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
@error_handler
def bgp(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
) -> None:
    """Print the BGP summary for all VRFs."""
    summary = _fetch(
        LogicalCommand.BGP_SUMMARY,
        device, host, username, password, port, protocol, api, timeout,
    )
    console.print(summary.text, markup=False, highlight=False, soft_wrap=True, end="")


@app.command()
@error_handler
def transceivers(
    device: DeviceOpt = None,
    host: HostOpt = None,
    username: UsernameOpt = None,
    password: PasswordOpt = None,
    port: PortOpt = None,
    protocol: ProtocolOpt = None,
    api: ApiOpt = None,
    timeout: TimeoutOpt = None,
    fmt: FormatOpt = None,
) -> None:
    """List transceivers with optical readings."""
    fmt = resolve_format(fmt)
    items = _fetch(
        LogicalCommand.TRANSCEIVERS,
        device, host, username, password, port, protocol, api, timeout,
    )
    columns = ["Interface", "Type", "Vendor", "Part", "Serial", "Temp", "Tx dBm", "Rx dBm"]
    rows = []
    for t in items:
        if not t.present:
            rows.append([t.interface, "not present", "", "", "", "", "", ""])
            continue
        lane = t.lanes[0] if t.lanes else None
        rows.append([
            t.interface, t.type, t.vendor, t.part_number, t.serial_number,
            f"{lane.temperature:g}" if lane else "",
            f"{lane.tx_power:g}" if lane else "",
            f"{lane.rx_power:g}" if lane else "",
        ])
    output([t.model_dump() for t in items], fmt, columns=columns, rows=rows, title="Transceivers")
