"""Server launcher - make sure an adb server is listening before connecting."""

from __future__ import annotations

import shutil
import socket
import subprocess
from typing import Protocol

import structlog

from android_adb_bridge.errors import AdbError, adb_not_found_error, server_start_error

logger = structlog.get_logger()

LOCAL_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


class ServerLauncher(Protocol):
    """Capability to bring up the adb server for a host/port."""

    def ensure_running(self, host: str, port: int) -> None:
        """Start the server if needed; raise AdbError if that is impossible."""
        ...

    def try_start(self, host: str, port: int) -> bool:
        """Like ensure_running, but report failure as False."""
        ...


class AdbBinaryLauncher:
    """Starts the server with the platform-tools adb binary."""

    def __init__(
        self,
        adb_path: str | None = None,
        timeout: float = 30.0,
        probe_timeout: float = 1.0,
    ) -> None:
        self._adb_path = adb_path
        self._timeout = timeout
        self._probe_timeout = probe_timeout

    def is_running(self, host: str, port: int) -> bool:
        """Return True if something accepts connections on host:port."""
        try:
            with socket.create_connection((host, port), timeout=self._probe_timeout):
                return True
        except OSError:
            return False

    def ensure_running(self, host: str, port: int) -> None:
        if self.is_running(host, port):
            return
        if host not in LOCAL_HOSTS:
            raise server_start_error(host, port, "server is remote and not reachable")

        adb_path = self._adb_path or shutil.which("adb")
        if not adb_path:
            raise adb_not_found_error()

        logger.info("adb_server_starting", host=host, port=port, adb=adb_path)
        try:
            subprocess.run(
                [adb_path, "-P", str(port), "start-server"],
                check=True,
                capture_output=True,
                text=True,
                timeout=self._timeout,
            )
        except FileNotFoundError as exc:
            raise adb_not_found_error() from exc
        except subprocess.TimeoutExpired as exc:
            raise server_start_error(host, port, f"timed out after {self._timeout}s") from exc
        except subprocess.CalledProcessError as exc:
            reason = (exc.stderr or exc.stdout or str(exc)).strip()
            raise server_start_error(host, port, reason) from exc
        logger.info("adb_server_started", host=host, port=port)

    def try_start(self, host: str, port: int) -> bool:
        try:
            self.ensure_running(host, port)
        except AdbError as exc:
            logger.warning("adb_server_start_failed", host=host, port=port, error=str(exc))
            return False
        return True
