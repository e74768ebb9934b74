"""Raw stream CLI commands."""

from __future__ import annotations

import sys
from typing import BinaryIO

import typer

from android_adb_bridge.cli.utils import (
    build_config,
    build_launcher,
    connect_timeout_option,
    device_query_option,
    host_option,
    port_option,
    render_error,
    socket_timeout_option,
    start_server_option,
)
from android_adb_bridge.device.client import create_client
from android_adb_bridge.errors import AdbError
from android_adb_bridge.protocol.stream import AdbStream

app = typer.Typer(help="Raw stream commands")

CHUNK_SIZE = 65536


def pump(stream: AdbStream, out: BinaryIO) -> int:
    """Copy bytes from stream to out until the device closes it."""
    total = 0
    while True:
        chunk = stream.read(CHUNK_SIZE)
        if not chunk:
            break
        out.write(chunk)
        out.flush()
        total += len(chunk)
    return total


@app.command("exec")
def stream_exec(
    destination: str = typer.Argument(..., help="Service to open, e.g. 'shell:getprop'"),
    device_query: str = device_query_option(),
    host: str = host_option(),
    port: int = port_option(),
    connect_timeout: float | None = connect_timeout_option(),
    socket_timeout: float | None = socket_timeout_option(),
    start_server: bool = start_server_option(),
) -> None:
    """Open DESTINATION on the device and copy its raw output to stdout."""
    config = build_config(host, port, device_query, connect_timeout, socket_timeout)
    try:
        client = create_client(config, launcher=build_launcher(start_server))
        with client.open(destination) as stream:
            pump(stream, sys.stdout.buffer)
    except AdbError as exc:
        render_error(exc)
