"""Error model - Actionable errors with remediation hints."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class AdbError(Exception):
    """
    Base error with context and remediation guidance.

    All errors should be actionable - tell the caller what went wrong
    and what they can do about it.
    """

    code: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)
    remediation: str = ""

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "code": self.code,
            "message": self.message,
            "context": self.context,
            "remediation": self.remediation,
        }


class EncodingError(AdbError):
    """Request payload does not fit in a single frame."""


class ProtocolError(AdbError):
    """The server violated the wire contract."""


class CommandError(AdbError):
    """The server answered FAIL for a request."""

    @property
    def command(self) -> str:
        return str(self.context.get("command", ""))

    @property
    def diagnostic(self) -> str:
        return str(self.context.get("diagnostic", ""))


class AdbConnectionError(AdbError):
    """Socket-level failure talking to the adb server."""


# Specific error constructors for common cases


def encoding_error(length: int, limit: int) -> EncodingError:
    """Create error for a request that exceeds the frame limit."""
    return EncodingError(
        code="ERR_ENCODING",
        message=f"Command is {length} bytes, frame limit is {limit}",
        context={"length": length, "limit": limit},
        remediation="Split the request or shorten its arguments.",
    )


def protocol_error(reason: str, **context: Any) -> ProtocolError:
    """Create error for a wire-level contract violation."""
    return ProtocolError(
        code="ERR_PROTOCOL",
        message=reason,
        context=context,
        remediation="Check that host/port point at an adb server, not another service.",
    )


def command_error(command: str, diagnostic: str) -> CommandError:
    """Create error for a request the server rejected."""
    return CommandError(
        code="ERR_COMMAND_FAILED",
        message=f"Command failed ({command}): {diagnostic}",
        context={"command": command, "diagnostic": diagnostic},
        remediation=(
            "Check 'devices list' and select one device explicitly with "
            "host-serial:<serial> or host:transport-id:<id>."
        ),
    )


def connection_error(host: str, port: int, reason: str) -> AdbConnectionError:
    """Create error for adb server connection failure."""
    return AdbConnectionError(
        code="ERR_CONNECTION",
        message=f"Cannot talk to adb server at {host}:{port}: {reason}",
        context={"host": host, "port": port, "reason": reason},
        remediation="Ensure the adb server is running ('adb start-server') and reachable.",
    )


def stream_error(reason: str) -> AdbConnectionError:
    """Create error for a socket failure after the connection was established."""
    return AdbConnectionError(
        code="ERR_CONNECTION",
        message=f"Socket error: {reason}",
        context={"reason": reason},
        remediation="Increase --socket-timeout or check that the device is still attached.",
    )


def invalid_device_query_error(query: str) -> AdbError:
    """Create error for invalid device query syntax."""
    return AdbError(
        code="ERR_INVALID_DEVICE_QUERY",
        message=f"Invalid device query: {query!r}",
        context={"device_query": query},
        remediation=(
            "Use host:transport-any, host:transport-usb, host:transport-local, "
            "host:transport-id:<id> or host-serial:<serial>"
        ),
    )


def adb_not_found_error() -> AdbError:
    """Create error for missing adb binary."""
    return AdbError(
        code="ERR_ADB_NOT_FOUND",
        message="adb command not found",
        context={},
        remediation="Install Android platform-tools and ensure adb is in PATH.",
    )


def server_start_error(host: str, port: int, reason: str) -> AdbError:
    """Create error for adb server start failure."""
    return AdbError(
        code="ERR_SERVER_START",
        message=f"Cannot start adb server on {host}:{port}: {reason}",
        context={"host": host, "port": port, "reason": reason},
        remediation="Start the server manually with 'adb -P <port> start-server'.",
    )
