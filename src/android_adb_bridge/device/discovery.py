"""Device discovery - list devices known to the adb server."""

from __future__ import annotations

import contextlib
import re
from dataclasses import dataclass

import structlog

from android_adb_bridge.config import AdbServerConfig
from android_adb_bridge.device.selector import DEVICES_QUERY
from android_adb_bridge.device.transport import Connector, open_connection
from android_adb_bridge.protocol.session import read_payload, send_command

logger = structlog.get_logger()

TRANSPORT_ID_PREFIX = "transport_id:"
TRANSPORT_ID_PATTERN = re.compile(r"transport_id:([0-9]+)")


@dataclass(frozen=True)
class DeviceRecord:
    """One attached device as reported by 'devices -l'."""

    serial: str
    transport_id: int


def parse_device_line(line: str) -> DeviceRecord | None:
    """Parse one listing line, or return None if it carries no transport id.

    Example line:
        59652cce   device usb:34603008X product:NE2213EEA model:NE2213 transport_id:5
    """
    parts = line.split()
    if not parts:
        return None
    # First transport_id: field wins if the server ever repeats it
    field = next((p for p in parts[1:] if p.startswith(TRANSPORT_ID_PREFIX)), None)
    if field is None:
        return None
    match = TRANSPORT_ID_PATTERN.fullmatch(field)
    if match is None:
        return None
    return DeviceRecord(serial=parts[0], transport_id=int(match.group(1)))


def parse_device_list(output: str) -> list[DeviceRecord]:
    """Parse a 'devices -l' body; lines without a transport id are skipped."""
    records: list[DeviceRecord] = []
    for line in output.splitlines():
        if not line.strip():
            continue
        record = parse_device_line(line)
        if record is None:
            logger.debug("device_line_skipped", line=line)
            continue
        records.append(record)
    return records


def list_devices(
    config: AdbServerConfig | None = None,
    *,
    connector: Connector = open_connection,
) -> list[DeviceRecord]:
    """List devices attached to the adb server.

    Args:
        config: Server location and timeouts (device_query is ignored)
        connector: Socket factory, replaceable in tests

    Returns:
        One record per device that reports a transport id
    """
    config = config or AdbServerConfig()
    sock = connector(config.host, config.port, config.connect_timeout, config.socket_timeout)
    with contextlib.closing(sock):
        send_command(sock, DEVICES_QUERY)
        output = read_payload(sock)

    records = parse_device_list(output)
    logger.info("devices_listed", host=config.host, port=config.port, device_count=len(records))
    return records
