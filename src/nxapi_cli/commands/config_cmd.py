"""Config commands — manage device profiles."""

from __future__ import annotations

from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.prompt import Confirm, IntPrompt, Prompt

from nxapi_cli.client.errors import error_handler
from nxapi_cli.commands._common import FormatOpt
from nxapi_cli.config.constants import DEFAULT_PROTOCOL, DEFAULT_TIMEOUT
from nxapi_cli.config.manager import ConfigManager
from nxapi_cli.config.models import DeviceProfile
from nxapi_cli.output.formatter import OutputFormat, output
from nxapi_cli.protocol.envelope import ProtocolMode

app = typer.Typer(name="config", help="Manage device profiles and CLI configuration.")
console = Console()


def _get_manager() -> ConfigManager:
    return ConfigManager()


def _require_profile(mgr: ConfigManager, name: str) -> DeviceProfile:
    profile = mgr.get_profile(name)
    if profile is None:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)
    return profile


@app.command()
@error_handler
def init() -> None:
    """Interactive setup wizard — create your first device profile."""
    mgr = _get_manager()
    console.print("[bold]NX-API CLI Setup Wizard[/]\n")

    name = Prompt.ask("Profile name", default="default")
    host = Prompt.ask("Device host or address")
    protocol = Prompt.ask("Scheme", choices=["https", "http"], default=DEFAULT_PROTOCOL)
    port = IntPrompt.ask("Port (0 keeps the scheme's port)", default=0)
    api = Prompt.ask(
        "Envelope", choices=[mode.value for mode in ProtocolMode],
        default=ProtocolMode.JSON_RPC.value,
    )
    username = Prompt.ask("Username", default="admin")
    password = Prompt.ask("Password", password=True)

    mgr.add_profile(DeviceProfile(
        name=name,
        host=host,
        port=port or None,
        protocol=protocol,
        api=ProtocolMode(api),
        username=username or None,
        password=password or None,
        verify_ssl=Confirm.ask("Verify the device certificate?", default=True),
    ))
    mgr.set_default(name)
    console.print(f"\n[green]Profile '{name}' saved as the default.[/]")
    console.print(f"Config file: {mgr.config_path}")


@app.command()
@error_handler
def add(
    name: Annotated[str, typer.Argument(help="Profile name")],
    host: Annotated[str, typer.Option("--host", "-H", help="Device host")],
    port: Annotated[Optional[int], typer.Option("--port", help="Device port")] = None,
    protocol: Annotated[str, typer.Option("--protocol", help="http or https")] = DEFAULT_PROTOCOL,
    api: Annotated[ProtocolMode, typer.Option("--api", help="NX-API envelope")] = ProtocolMode.JSON_RPC,
    username: Annotated[Optional[str], typer.Option("--username", "-u", help="Username")] = None,
    password: Annotated[Optional[str], typer.Option("--password", "-p", help="Password")] = None,
    timeout: Annotated[float, typer.Option("--timeout", help="Request timeout in seconds")] = DEFAULT_TIMEOUT,
    no_verify_ssl: Annotated[bool, typer.Option("--no-verify-ssl", help="Skip certificate checks")] = False,
    make_default: Annotated[bool, typer.Option("--default", help="Use as the default profile")] = False,
) -> None:
    """Add (or replace) a device profile."""
    mgr = _get_manager()
    mgr.add_profile(DeviceProfile(
        name=name,
        host=host,
        port=port,
        protocol=protocol,
        api=api,
        username=username,
        password=password,
        timeout=timeout,
        verify_ssl=not no_verify_ssl,
    ))
    if make_default:
        mgr.set_default(name)
    console.print(f"[green]Profile '{name}' added.[/]")


@app.command("list")
@error_handler
def list_profiles(fmt: FormatOpt = None) -> None:
    """List all configured profiles."""
    mgr = _get_manager()
    profiles = mgr.config.profiles
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'nxapi-cli config init' to get started.[/]")
        return

    default = mgr.config.default_profile
    rows = [
        [name, p.url, p.api.value, "basic" if p.auth_configured else "none", "*" if name == default else ""]
        for name, p in profiles.items()
    ]
    data = {
        "profiles": [
            p.model_dump(mode="json", exclude={"password"}, exclude_none=True)
            for p in profiles.values()
        ],
    }
    output(
        data,
        fmt or mgr.config.default_format,
        columns=["Name", "URL", "API", "Auth", "Default"],
        rows=rows,
        title="Device Profiles",
    )


@app.command()
@error_handler
def show(
    name: Annotated[str, typer.Argument(help="Profile name")],
    fmt: FormatOpt = None,
) -> None:
    """Show one profile, password masked."""
    mgr = _get_manager()
    profile = _require_profile(mgr, name)
    data = profile.model_dump(mode="json", exclude_none=True)
    data["url"] = profile.url
    if profile.password is not None:
        data["password"] = "***"
    output(data, fmt or mgr.config.default_format, kv=True, title=f"Profile: {name}")


@app.command("set-default")
@error_handler
def set_default(
    name: Annotated[str, typer.Argument(help="Profile name to set as default")],
) -> None:
    """Set the default device profile."""
    mgr = _get_manager()
    _require_profile(mgr, name)
    mgr.set_default(name)
    console.print(f"[green]Default profile set to '{name}'.[/]")


@app.command("set-format")
@error_handler
def set_format(
    fmt: Annotated[OutputFormat, typer.Argument(help="Output format used when --format is omitted")],
) -> None:
    """Set the default output format."""
    mgr = _get_manager()
    mgr.config.default_format = fmt
    mgr.save()
    console.print(f"[green]Default format set to '{fmt.value}'.[/]")


@app.command()
@error_handler
def test(
    name: Annotated[Optional[str], typer.Argument(help="Profile name (uses default if omitted)")] = None,
) -> None:
    """Check a device answers 'show version'."""
    from nxapi_cli.client.device import NXAPIClient

    profile = _get_manager().resolve_device(profile_name=name)
    console.print(f"Testing connection to [bold]{profile.url}[/] ({profile.api.value})...")

    with NXAPIClient(profile) as client:
        info = client.get_system_info()
    console.print(
        f"[green]Connected![/] Device: {info.hostname or 'Unknown'}"
        f" v{info.kickstart_image.version or '?'}"
    )


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", "-f", help="Skip confirmation")] = False,
) -> None:
    """Remove a device profile."""
    mgr = _get_manager()
    _require_profile(mgr, name)
    if not force and not Confirm.ask(f"Remove profile '{name}'?"):
        console.print("Cancelled.")
        return
    mgr.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
