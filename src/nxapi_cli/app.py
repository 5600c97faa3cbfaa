"""Root Typer app — global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer

from nxapi_cli import __version__
from nxapi_cli.commands import config_cmd, show
from nxapi_cli.utils.logging_config import setup_logging

app = typer.Typer(
    name="nxapi-cli",
    help="CLI tool for the NX-API device management interface.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"nxapi-cli {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log requests and decoding details to stderr."
    ),
) -> None:
    """NX-API CLI — query device state over JSON-RPC or ins_api."""
    setup_logging(verbose)


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(show.app, name="show")


def main() -> None:
    app()
