"""CLI entry point using Typer."""

from __future__ import annotations

import typer

from android_adb_bridge.cli.commands import devices, stream
from android_adb_bridge.cli.utils import configure_logging

app = typer.Typer(
    name="android-adb-bridge",
    help="Talk to devices through the adb server's host protocol",
    no_args_is_help=True,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging to stderr"),
) -> None:
    """Configure logging before any subcommand runs."""
    configure_logging(verbose)


@app.command()
def version() -> None:
    """Show version information."""
    from android_adb_bridge import __version__

    typer.echo(f"android-adb-bridge v{__version__}")


app.add_typer(devices.app, name="devices")
app.add_typer(stream.app, name="stream")


if __name__ == "__main__":
    app()
