"""Shared CLI helpers and constants."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any, NoReturn

import structlog
import typer
from pydantic import ValidationError

from android_adb_bridge.config import DEFAULT_HOST, DEFAULT_PORT, AdbServerConfig
from android_adb_bridge.device.selector import TRANSPORT_ANY
from android_adb_bridge.errors import AdbError
from android_adb_bridge.server.launcher import AdbBinaryLauncher, ServerLauncher

HOST_ENVVAR = "ANDROID_ADB_SERVER_ADDRESS"
PORT_ENVVAR = "ANDROID_ADB_SERVER_PORT"


def host_option() -> Any:
    return typer.Option(DEFAULT_HOST, "--host", envvar=HOST_ENVVAR, help="adb server host")


def port_option() -> Any:
    return typer.Option(DEFAULT_PORT, "--port", "-P", envvar=PORT_ENVVAR, help="adb server port")


def device_query_option() -> Any:
    return typer.Option(
        TRANSPORT_ANY,
        "--device-query",
        "-q",
        help="host:transport-any|host:transport-usb|host:transport-local|"
        "host:transport-id:<id>|host-serial:<serial>",
    )


def connect_timeout_option() -> Any:
    return typer.Option(None, "--connect-timeout", help="Connect timeout in seconds")


def socket_timeout_option() -> Any:
    return typer.Option(None, "--socket-timeout", help="Read/write timeout in seconds")


def start_server_option() -> Any:
    return typer.Option(
        True,
        "--start-server/--no-start-server",
        help="Start a local adb server if none is listening",
    )


def format_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=True)


def configure_logging(verbose: bool) -> None:
    """Send structlog output to stderr so stdout carries only command output."""
    level = logging.DEBUG if verbose else logging.WARNING
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(sys.stderr),
    )


def build_config(
    host: str,
    port: int,
    device_query: str = TRANSPORT_ANY,
    connect_timeout: float | None = None,
    socket_timeout: float | None = None,
) -> AdbServerConfig:
    try:
        return AdbServerConfig(
            host=host,
            port=port,
            device_query=device_query,
            connect_timeout=connect_timeout,
            socket_timeout=socket_timeout,
        )
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        typer.echo(f"Error: {field}: {first['msg']}")
        raise typer.Exit(code=1) from None


def build_launcher(start_server: bool) -> ServerLauncher | None:
    return AdbBinaryLauncher() if start_server else None


def render_error(error: AdbError, json_output: bool = False) -> NoReturn:
    """Print an AdbError and exit with status 1."""
    if json_output:
        typer.echo(format_json({"error": error.to_dict()}))
        raise typer.Exit(code=1)
    typer.echo(f"{error.code}: {error.message}", err=True)
    if error.remediation:
        typer.echo(f"Hint: {error.remediation}", err=True)
    raise typer.Exit(code=1)
