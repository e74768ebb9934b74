"""Raw duplex stream handed to the caller after a successful handshake."""

from __future__ import annotations

import socket
from types import TracebackType

from android_adb_bridge.errors import stream_error
from android_adb_bridge.protocol.wire import read_exact


class AdbStream:
    """A live socket in raw pass-through mode.

    The stream owns its socket exclusively. Bytes read or written here are
    never interpreted; closing the stream closes the socket.
    """

    def __init__(self, sock: socket.socket, destination: str = "") -> None:
        self._sock = sock
        self._destination = destination
        self._closed = False

    @property
    def socket(self) -> socket.socket:
        return self._sock

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def closed(self) -> bool:
        return self._closed

    def fileno(self) -> int:
        return self._sock.fileno()

    def recv(self, bufsize: int) -> bytes:
        try:
            return self._sock.recv(bufsize)
        except OSError as exc:
            raise stream_error(str(exc) or type(exc).__name__) from exc

    def sendall(self, data: bytes) -> None:
        try:
            self._sock.sendall(data)
        except OSError as exc:
            raise stream_error(str(exc) or type(exc).__name__) from exc

    def read(self, bufsize: int = 65536) -> bytes:
        """Read up to bufsize bytes; b"" means the peer closed the stream."""
        return self.recv(bufsize)

    def read_exact(self, n: int) -> bytes:
        return read_exact(self, n)

    def write(self, data: bytes) -> None:
        self.sendall(data)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._sock.close()

    def __enter__(self) -> AdbStream:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"AdbStream(destination={self._destination!r}, {state})"
