"""Device discovery CLI commands."""

from __future__ import annotations

import typer

from android_adb_bridge.cli.utils import (
    build_config,
    build_launcher,
    connect_timeout_option,
    device_query_option,
    format_json,
    host_option,
    port_option,
    render_error,
    socket_timeout_option,
    start_server_option,
)
from android_adb_bridge.device.client import create_client
from android_adb_bridge.device.discovery import list_devices
from android_adb_bridge.errors import AdbError

app = typer.Typer(help="Device discovery commands")


@app.command("list")
def devices_list(
    host: str = host_option(),
    port: int = port_option(),
    connect_timeout: float | None = connect_timeout_option(),
    socket_timeout: float | None = socket_timeout_option(),
    start_server: bool = start_server_option(),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """List devices attached to the adb server."""
    config = build_config(
        host, port, connect_timeout=connect_timeout, socket_timeout=socket_timeout
    )
    launcher = build_launcher(start_server)
    try:
        if launcher is not None:
            launcher.ensure_running(config.host, config.port)
        records = list_devices(config)
    except AdbError as exc:
        render_error(exc, json_output=json_output)

    if json_output:
        data = {
            "devices": [
                {"serial": record.serial, "transport_id": record.transport_id}
                for record in records
            ]
        }
        typer.echo(format_json(data))
        return

    for record in records:
        typer.echo(f"{record.serial}  transport_id={record.transport_id}")


@app.command("features")
def devices_features(
    device_query: str = device_query_option(),
    serial: str | None = typer.Option(None, "--serial", "-s", help="Display name override"),
    host: str = host_option(),
    port: int = port_option(),
    connect_timeout: float | None = connect_timeout_option(),
    socket_timeout: float | None = socket_timeout_option(),
    start_server: bool = start_server_option(),
    json_output: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Show the feature list of the queried device."""
    config = build_config(host, port, device_query, connect_timeout, socket_timeout)
    try:
        client = create_client(config, serial=serial, launcher=build_launcher(start_server))
    except AdbError as exc:
        render_error(exc, json_output=json_output)

    features = sorted(client.features)
    if json_output:
        typer.echo(format_json({"device": client.name, "features": features}))
        return

    typer.echo(f"{client.name}:")
    for feature in features:
        typer.echo(f"  {feature}")
