"""Bound client - a handle on one device behind the adb server."""

from __future__ import annotations

from types import TracebackType
from typing import TYPE_CHECKING

import structlog

from android_adb_bridge.config import AdbServerConfig
from android_adb_bridge.device.discovery import list_devices
from android_adb_bridge.device.selector import (
    display_name,
    features_destination,
    transport_id_query,
)
from android_adb_bridge.device.transport import Connector, handshake, open_connection
from android_adb_bridge.protocol.session import read_payload
from android_adb_bridge.protocol.stream import AdbStream
from android_adb_bridge.validation import validate_device_query

if TYPE_CHECKING:
    from android_adb_bridge.server.launcher import ServerLauncher

logger = structlog.get_logger()


def parse_features(body: str) -> frozenset[str]:
    """Split a features body; empty components are kept as-is."""
    return frozenset(body.split(","))


class AdbServerClient:
    """Opens streams to one device, routed through the adb server.

    The device's feature list is fetched once, at construction. Every
    open() uses a fresh connection; the client itself holds no sockets.
    """

    def __init__(
        self,
        config: AdbServerConfig,
        name: str | None = None,
        *,
        launcher: ServerLauncher | None = None,
        connector: Connector = open_connection,
    ) -> None:
        validate_device_query(config.device_query)
        self._config = config
        self._name = name if name is not None else display_name(config.device_query)
        self._launcher = launcher
        self._connector = connector
        self._features = self._negotiate_features()
        logger.info(
            "client_bound",
            name=self._name,
            device_query=config.device_query,
            feature_count=len(self._features),
        )

    @property
    def config(self) -> AdbServerConfig:
        return self._config

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def device_query(self) -> str:
        return self._config.device_query

    @property
    def connect_timeout(self) -> float | None:
        return self._config.connect_timeout

    @property
    def socket_timeout(self) -> float | None:
        return self._config.socket_timeout

    @property
    def name(self) -> str:
        return self._name

    @property
    def features(self) -> frozenset[str]:
        return self._features

    def supports_feature(self, feature: str) -> bool:
        return feature in self._features

    def open(self, destination: str) -> AdbStream:
        """Open a raw stream to destination (e.g. 'shell:ls').

        The returned stream is owned by the caller.

        Raises:
            CommandError: If the device query or the destination is rejected
            AdbConnectionError: If the server cannot be reached
        """
        if self._launcher is not None:
            self._launcher.ensure_running(self.host, self.port)
        return handshake(
            self.host,
            self.port,
            self.device_query,
            destination,
            connect_timeout=self.connect_timeout,
            socket_timeout=self.socket_timeout,
            connector=self._connector,
        )

    def close(self) -> None:
        """Nothing to release; streams are closed by their owners."""

    def _negotiate_features(self) -> frozenset[str]:
        with self.open(features_destination(self.device_query)) as stream:
            body = read_payload(stream)
        return parse_features(body)

    def __enter__(self) -> AdbServerClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.close()

    def __str__(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return (
            f"AdbServerClient(name={self._name!r}, device_query={self.device_query!r}, "
            f"host={self.host!r}, port={self.port})"
        )


def create_client(
    config: AdbServerConfig | None = None,
    serial: str | None = None,
    *,
    launcher: ServerLauncher | None = None,
    connector: Connector = open_connection,
) -> AdbServerClient:
    """Bind a client to config.device_query.

    Args:
        config: Server location, device query and timeouts
        serial: Known serial, used as the display name
        launcher: Optional server launcher consulted before each connection
        connector: Socket factory, replaceable in tests

    Raises:
        CommandError: If the features handshake is rejected
            (e.g. "more than one device/emulator")
    """
    config = config or AdbServerConfig()
    name = display_name(config.device_query, serial)
    return AdbServerClient(config, name, launcher=launcher, connector=connector)


def list_clients(
    config: AdbServerConfig | None = None,
    *,
    launcher: ServerLauncher | None = None,
    connector: Connector = open_connection,
) -> list[AdbServerClient]:
    """Bind one client per attached device, addressed by transport id.

    Returns an empty list when a launcher is given and the server cannot be
    started.
    """
    config = config or AdbServerConfig()
    if launcher is not None and not launcher.try_start(config.host, config.port):
        return []

    return [
        create_client(
            config.with_device_query(transport_id_query(record.transport_id)),
            serial=record.serial,
            launcher=launcher,
            connector=connector,
        )
        for record in list_devices(config, connector=connector)
    ]
