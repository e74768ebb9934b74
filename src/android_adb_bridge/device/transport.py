"""Transport binder - connect, route to a device, then hand off a raw stream."""

from __future__ import annotations

import socket
from typing import Protocol

import structlog

from android_adb_bridge.errors import connection_error
from android_adb_bridge.protocol.session import send_command
from android_adb_bridge.protocol.stream import AdbStream

logger = structlog.get_logger()


class Connector(Protocol):
    """Opens a connected socket to the adb server."""

    def __call__(
        self,
        host: str,
        port: int,
        connect_timeout: float | None,
        socket_timeout: float | None,
    ) -> socket.socket: ...


def open_connection(
    host: str,
    port: int,
    connect_timeout: float | None = None,
    socket_timeout: float | None = None,
) -> socket.socket:
    """Open a TCP connection to the adb server.

    Args:
        host: Server host
        port: Server port
        connect_timeout: Seconds to wait for the connect, None to block
        socket_timeout: Seconds to wait on each read/write afterwards, None to block

    Raises:
        AdbConnectionError: If the server is unreachable or the connect times out
    """
    try:
        sock = socket.create_connection((host, port), timeout=connect_timeout)
    except OSError as exc:
        raise connection_error(host, port, str(exc) or type(exc).__name__) from exc
    sock.settimeout(socket_timeout)
    return sock


def handshake(
    host: str,
    port: int,
    device_query: str,
    destination: str,
    *,
    connect_timeout: float | None = None,
    socket_timeout: float | None = None,
    connector: Connector = open_connection,
) -> AdbStream:
    """Open a stream to destination on the device selected by device_query.

    The device query's status is always read before the destination is
    sent; the server routes the second request based on the first. On any
    failure the socket is closed before the error propagates. On success
    the caller owns the returned stream and must close it.

    Raises:
        AdbConnectionError: If the server cannot be reached
        CommandError: If the server rejects the device query or the destination
        ProtocolError: If the server replies with something other than OKAY/FAIL
    """
    sock = connector(host, port, connect_timeout, socket_timeout)
    try:
        send_command(sock, device_query)
        send_command(sock, destination)
    except BaseException:
        sock.close()
        raise
    logger.debug("stream_opened", device_query=device_query, destination=destination)
    return AdbStream(sock, destination)
