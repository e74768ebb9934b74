"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import pytest


class FakeConnection:
    """In-memory socket: replays scripted bytes and records what is written."""

    def __init__(self, incoming: bytes = b"", chunk_size: int | None = None) -> None:
        self._incoming = bytearray(incoming)
        self._chunk_size = chunk_size
        self.sent: list[bytes] = []
        self.events: list[tuple[str, bytes]] = []
        self.close_count = 0
        self.timeout: float | None = None

    @property
    def remaining(self) -> bytes:
        return bytes(self._incoming)

    @property
    def written(self) -> bytes:
        return b"".join(self.sent)

    def recv(self, bufsize: int) -> bytes:
        if self.close_count:
            raise OSError("connection closed")
        n = bufsize if self._chunk_size is None else min(bufsize, self._chunk_size)
        data = bytes(self._incoming[:n])
        del self._incoming[:n]
        self.events.append(("recv", data))
        return data

    def sendall(self, data: bytes) -> None:
        if self.close_count:
            raise OSError("connection closed")
        self.sent.append(bytes(data))
        self.events.append(("send", bytes(data)))

    def settimeout(self, timeout: float | None) -> None:
        self.timeout = timeout

    def fileno(self) -> int:
        return -1

    def close(self) -> None:
        self.close_count += 1


class ScriptedConnector:
    """Connector that hands out prepared FakeConnections in order."""

    def __init__(self, connections: Iterable[FakeConnection]) -> None:
        self._connections = list(connections)
        self.calls: list[tuple[str, int, float | None, float | None]] = []

    def __call__(
        self,
        host: str,
        port: int,
        connect_timeout: float | None,
        socket_timeout: float | None,
    ) -> Any:
        self.calls.append((host, port, connect_timeout, socket_timeout))
        return self._connections.pop(0)


def _frame(text: str) -> bytes:
    payload = text.encode("utf-8")
    return f"{len(payload):04x}".encode("ascii") + payload


@pytest.fixture
def frame() -> Callable[[str], bytes]:
    """Build a length-prefixed frame the way the server sends one."""
    return _frame


@pytest.fixture
def fake_connection() -> type[FakeConnection]:
    return FakeConnection


@pytest.fixture
def scripted_connector() -> type[ScriptedConnector]:
    return ScriptedConnector


@pytest.fixture
def features_reply() -> Callable[[str], FakeConnection]:
    """Connection that accepts a device query and answers a features request."""

    def _make(features: str) -> FakeConnection:
        return FakeConnection(b"OKAY" + b"OKAY" + _frame(features))

    return _make


@pytest.fixture
def sample_device_listing() -> str:
    """Sample 'devices -l' body."""
    return (
        "59652cce               device usb:34603008X product:NE2213EEA "
        "model:NE2213 device:OP516FL1 transport_id:5\n"
        "emulator-5554          device product:sdk_gphone64_arm64 "
        "model:sdk_gphone64_arm64 device:emu64a transport_id:12\n"
        "R58M123ABC             unauthorized usb:1-1 transport_id:7\n"
        "emulator-5556 offline\n"
        "\n"
    )
