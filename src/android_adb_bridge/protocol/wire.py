"""Wire codec - length-prefixed string frames spoken by the adb server."""

from __future__ import annotations

import re
from typing import Protocol

from android_adb_bridge.errors import encoding_error, protocol_error, stream_error

MAX_FRAME_LENGTH = 0xFFFF
LENGTH_PREFIX_SIZE = 4

# Exactly four hex digits; int(..., 16) alone would accept "0x1f", " +1f" or "1_f"
LENGTH_PATTERN = re.compile(rb"[0-9a-fA-F]{4}")


class Connection(Protocol):
    """Minimal socket surface the codec reads from and writes to."""

    def recv(self, bufsize: int) -> bytes: ...

    def sendall(self, data: bytes) -> None: ...


def encode_length(length: int) -> bytes:
    """Encode a length as four lowercase, zero-padded hex digits."""
    if length < 0 or length > MAX_FRAME_LENGTH:
        raise encoding_error(length, MAX_FRAME_LENGTH)
    return f"{length:04x}".encode("ascii")


def encode_command(command: str) -> bytes:
    """Frame a request: hex length of the UTF-8 payload, then the payload.

    Raises:
        EncodingError: If the payload is longer than 0xFFFF bytes
    """
    payload = command.encode("utf-8")
    return encode_length(len(payload)) + payload


def decode_length(prefix: bytes) -> int:
    """Parse a four-byte ASCII hex length prefix.

    Raises:
        ProtocolError: If the prefix is not exactly four hex digits
    """
    if not LENGTH_PATTERN.fullmatch(prefix):
        raise protocol_error("malformed length prefix", prefix=prefix.hex())
    return int(prefix, 16)


def decode_frame(data: bytes) -> str:
    """Decode one complete in-memory frame back into its string."""
    length = decode_length(data[:LENGTH_PREFIX_SIZE])
    body = data[LENGTH_PREFIX_SIZE : LENGTH_PREFIX_SIZE + length]
    if len(body) < length:
        raise protocol_error("unexpected end of stream", expected=length, received=len(body))
    return body.decode("utf-8", errors="replace")


def read_exact(source: Connection, n: int) -> bytes:
    """Read exactly n bytes from source.

    Raises:
        ProtocolError: If the peer closes the stream early
        AdbConnectionError: On socket errors, including timeouts
    """
    buf = bytearray()
    while len(buf) < n:
        try:
            chunk = source.recv(n - len(buf))
        except OSError as exc:
            raise stream_error(str(exc) or type(exc).__name__) from exc
        if not chunk:
            raise protocol_error("unexpected end of stream", expected=n, received=len(buf))
        buf.extend(chunk)
    return bytes(buf)


def read_string(source: Connection) -> str:
    """Read a length-prefixed UTF-8 string."""
    length = decode_length(read_exact(source, LENGTH_PREFIX_SIZE))
    return read_exact(source, length).decode("utf-8", errors="replace")
