"""android-adb-bridge - client for the adb server's host protocol."""

from android_adb_bridge.config import AdbServerConfig
from android_adb_bridge.device.client import (
    AdbServerClient,
    create_client,
    list_clients,
    parse_features,
)
from android_adb_bridge.device.discovery import DeviceRecord, list_devices, parse_device_list
from android_adb_bridge.errors import (
    AdbConnectionError,
    AdbError,
    CommandError,
    EncodingError,
    ProtocolError,
)
from android_adb_bridge.protocol.stream import AdbStream
from android_adb_bridge.server.launcher import AdbBinaryLauncher, ServerLauncher

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AdbServerConfig",
    "AdbServerClient",
    "AdbStream",
    "DeviceRecord",
    "create_client",
    "list_clients",
    "list_devices",
    "parse_device_list",
    "parse_features",
    "AdbError",
    "AdbConnectionError",
    "CommandError",
    "EncodingError",
    "ProtocolError",
    "AdbBinaryLauncher",
    "ServerLauncher",
]
