"""Validation helpers for user input."""

from __future__ import annotations

import re

from android_adb_bridge.errors import invalid_device_query_error

# host:..., host-serial:..., host-transport-id:..., host-usb:..., host-local:...
DEVICE_QUERY_PATTERN = re.compile(r"host[a-z-]*:\S+")


def validate_device_query(query: str) -> None:
    """Validate device query syntax.

    Args:
        query: Device query to validate

    Raises:
        AdbError: If the query is empty, contains whitespace or lacks a host prefix
    """
    if not DEVICE_QUERY_PATTERN.fullmatch(query):
        raise invalid_device_query_error(query)
