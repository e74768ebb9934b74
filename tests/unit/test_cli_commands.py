"""Tests for CLI commands."""

from __future__ import annotations

import io
import json
from typing import Any
from unittest.mock import MagicMock, patch

import pytest
import typer

from android_adb_bridge.device.discovery import DeviceRecord
from android_adb_bridge.errors import command_error, connection_error


def _list_kwargs(**overrides: Any) -> dict[str, Any]:
    kwargs: dict[str, Any] = {
        "host": "localhost",
        "port": 5037,
        "connect_timeout": None,
        "socket_timeout": None,
        "start_server": False,
        "json_output": False,
    }
    kwargs.update(overrides)
    return kwargs


class TestDevicesList:
    """Tests for 'devices list'."""

    def test_prints_records(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should print one line per device."""
        from android_adb_bridge.cli.commands import devices

        records = [DeviceRecord("59652cce", 5), DeviceRecord("emulator-5554", 1)]
        with patch.object(devices, "list_devices", return_value=records) as list_mock:
            devices.devices_list(**_list_kwargs(port=5038, socket_timeout=2.0))

        config = list_mock.call_args[0][0]
        assert config.port == 5038
        assert config.socket_timeout == 2.0
        out = capsys.readouterr().out
        assert "59652cce  transport_id=5" in out
        assert "emulator-5554  transport_id=1" in out

    def test_json_output(self, capsys: pytest.CaptureFixture[str]) -> None:
        from android_adb_bridge.cli.commands import devices

        with patch.object(devices, "list_devices", return_value=[DeviceRecord("abc", 3)]):
            devices.devices_list(**_list_kwargs(json_output=True))

        data = json.loads(capsys.readouterr().out)
        assert data == {"devices": [{"serial": "abc", "transport_id": 3}]}

    def test_starts_server_when_asked(self) -> None:
        """Should ensure the server is up before listing."""
        from android_adb_bridge.cli.commands import devices

        launcher = MagicMock()
        with (
            patch.object(devices, "build_launcher", return_value=launcher),
            patch.object(devices, "list_devices", return_value=[]),
        ):
            devices.devices_list(**_list_kwargs(start_server=True))

        launcher.ensure_running.assert_called_once_with("localhost", 5037)

    def test_connection_error_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should render the error with a hint and exit 1."""
        from android_adb_bridge.cli.commands import devices

        error = connection_error("localhost", 5037, "Connection refused")
        with (
            patch.object(devices, "list_devices", side_effect=error),
            pytest.raises(typer.Exit) as exc_info,
        ):
            devices.devices_list(**_list_kwargs())

        assert exc_info.value.exit_code == 1
        err = capsys.readouterr().err
        assert "ERR_CONNECTION" in err
        assert "Hint:" in err

    def test_invalid_port_exits(self, capsys: pytest.CaptureFixture[str]) -> None:
        from android_adb_bridge.cli.commands import devices

        with pytest.raises(typer.Exit):
            devices.devices_list(**_list_kwargs(port=70000))

        assert "port" in capsys.readouterr().out


class TestDevicesFeatures:
    """Tests for 'devices features'."""

    def _kwargs(self, **overrides: Any) -> dict[str, Any]:
        kwargs = _list_kwargs(device_query="host:transport-any", serial=None)
        kwargs.update(overrides)
        return kwargs

    def test_prints_sorted_features(self, capsys: pytest.CaptureFixture[str]) -> None:
        from android_adb_bridge.cli.commands import devices

        client = MagicMock()
        client.name = "emulator-5554"
        client.features = frozenset({"stat_v2", "cmd", "shell_v2"})
        with patch.object(devices, "create_client", return_value=client) as create_mock:
            devices.devices_features(**self._kwargs(device_query="host-serial:emulator-5554"))

        config = create_mock.call_args[0][0]
        assert config.device_query == "host-serial:emulator-5554"
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["emulator-5554:", "  cmd", "  shell_v2", "  stat_v2"]

    def test_ambiguous_device_json_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Should include the command and server diagnostic."""
        from android_adb_bridge.cli.commands import devices

        error = command_error("host:transport-any", "more than one device/emulator")
        with (
            patch.object(devices, "create_client", side_effect=error),
            pytest.raises(typer.Exit),
        ):
            devices.devices_features(**self._kwargs(json_output=True))

        data = json.loads(capsys.readouterr().out)
        assert data["error"]["code"] == "ERR_COMMAND_FAILED"
        assert data["error"]["context"]["diagnostic"] == "more than one device/emulator"


class TestStreamExec:
    """Tests for 'stream exec'."""

    def test_pump_copies_until_eof(self) -> None:
        """Should copy raw bytes without interpretation."""
        from android_adb_bridge.cli.commands.stream import pump

        stream = MagicMock()
        stream.read.side_effect = [b"\x00OKAY", b"line\n", b""]
        out = io.BytesIO()

        assert pump(stream, out) == 10
        assert out.getvalue() == b"\x00OKAYline\n"

    def test_exec_opens_destination(self) -> None:
        from android_adb_bridge.cli.commands import stream as stream_cmd

        opened = MagicMock()
        client = MagicMock()
        client.open.return_value.__enter__.return_value = opened
        with (
            patch.object(stream_cmd, "create_client", return_value=client),
            patch.object(stream_cmd, "pump", return_value=0) as pump_mock,
        ):
            stream_cmd.stream_exec(
                "shell:getprop ro.product.model",
                device_query="host:transport-usb",
                host="localhost",
                port=5037,
                connect_timeout=None,
                socket_timeout=None,
                start_server=False,
            )

        client.open.assert_called_once_with("shell:getprop ro.product.model")
        assert pump_mock.call_args[0][0] is opened
