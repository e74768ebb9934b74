"""Pydantic configuration for reaching an adb server."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5037
DEFAULT_DEVICE_QUERY = "host:transport-any"


class AdbServerConfig(BaseModel):
    """Where the adb server lives and which device requests are routed to.

    Timeouts are in seconds; None blocks indefinitely.
    """

    model_config = ConfigDict(frozen=True)

    host: str = DEFAULT_HOST
    port: int = Field(default=DEFAULT_PORT, ge=1, le=65535)
    device_query: str = DEFAULT_DEVICE_QUERY
    connect_timeout: float | None = None
    socket_timeout: float | None = None

    @field_validator("connect_timeout", "socket_timeout")
    @classmethod
    def _positive_timeout(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("timeout must be > 0 seconds, or None to block")
        return value

    def with_device_query(self, device_query: str) -> AdbServerConfig:
        """Return a copy bound to a different device query."""
        return self.model_copy(update={"device_query": device_query})
