"""Command session - one request/status exchange on a connected socket."""

from __future__ import annotations

import structlog

from android_adb_bridge.errors import command_error, protocol_error, stream_error
from android_adb_bridge.protocol.wire import (
    LENGTH_PREFIX_SIZE,
    Connection,
    encode_command,
    read_exact,
    read_string,
)

STATUS_OKAY = b"OKAY"
STATUS_FAIL = b"FAIL"

logger = structlog.get_logger()


def send_command(connection: Connection, command: str) -> None:
    """Write a request and wait for its status.

    Returns as soon as OKAY is read; nothing past the status token is consumed.

    Raises:
        CommandError: If the server answers FAIL (carries its diagnostic verbatim)
        ProtocolError: If the status token is neither OKAY nor FAIL
        EncodingError: If the request does not fit in one frame
    """
    frame = encode_command(command)
    try:
        connection.sendall(frame)
    except OSError as exc:
        raise stream_error(str(exc) or type(exc).__name__) from exc
    logger.debug("command_sent", command=command)

    status = read_exact(connection, LENGTH_PREFIX_SIZE)
    if status == STATUS_OKAY:
        return
    if status == STATUS_FAIL:
        diagnostic = read_string(connection)
        logger.debug("command_failed", command=command, diagnostic=diagnostic)
        raise command_error(command, diagnostic)
    raise protocol_error("unexpected status token", command=command, status=status.hex())


def read_payload(connection: Connection) -> str:
    """Read a length-prefixed response body (listing, features, diagnostics)."""
    return read_string(connection)
