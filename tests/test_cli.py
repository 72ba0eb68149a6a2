from __future__ import annotations

import errno

from typer.testing import CliRunner

from usbgps import cli
from usbgps.core.errors import NotFoundError
from usbgps.core.model import BaudRate, DefaultDeviceOverride, DeviceProfile, MatchResult, ProfileCatalog, UsbDeviceInfo


class FakeService:
    def __init__(self, *, backend=None, config_path=None) -> None:
        self.config_path = config_path
        self.last_warnings: tuple[str, ...] = ()

    def scan(self) -> MatchResult:
        return MatchResult(device_path="/dev/bus/usb/001/007", baud_rate=BaudRate.B9600)

    def load_profiles(self) -> ProfileCatalog:
        return ProfileCatalog(
            profiles=(DeviceProfile(0x1546, 0x01A7, BaudRate.B9600),),
            default=DefaultDeviceOverride(device_path_hint="/dev/ttyACM0", baud_rate=BaudRate.B4800),
            default_baud_rate=BaudRate.B4800,
            warnings=(),
        )

    def list_devices(self) -> list[UsbDeviceInfo]:
        return [UsbDeviceInfo(vendor_id=0x1546, product_id=0x01A7, bus_number=1, device_address=7)]


runner = CliRunner()


def test_scan_command(monkeypatch):
    monkeypatch.setattr(cli, "ScanService", FakeService)
    result = runner.invoke(cli.app, ["scan"])
    assert result.exit_code == 0
    assert "device name = /dev/bus/usb/001/007, baudrate = B9600" in result.stdout


def test_scan_command_repeats(monkeypatch):
    monkeypatch.setattr(cli, "ScanService", FakeService)
    result = runner.invoke(cli.app, ["scan", "--count", "3"])
    assert result.exit_code == 0
    assert result.stdout.count("device name = ") == 3


def test_scan_command_passes_config_path(monkeypatch, tmp_path):
    seen = []

    class RecordingService(FakeService):
        def __init__(self, *, backend=None, config_path=None) -> None:
            super().__init__(config_path=config_path)
            seen.append(config_path)

    monkeypatch.setattr(cli, "ScanService", RecordingService)
    result = runner.invoke(cli.app, ["scan", "--config", str(tmp_path / "gps.yaml")])
    assert result.exit_code == 0
    assert seen == [tmp_path / "gps.yaml"]


def test_scan_error_exit_code_is_clean(monkeypatch):
    class MissingService(FakeService):
        def scan(self) -> MatchResult:
            raise NotFoundError("No attached USB device matched any registered GPS profile.")

    monkeypatch.setattr(cli, "ScanService", MissingService)
    result = runner.invoke(cli.app, ["scan"])
    assert result.exit_code == errno.ENOENT
    assert "Error: No attached USB device matched" in result.output
    assert "Traceback" not in result.output


def test_profiles_command(monkeypatch):
    monkeypatch.setattr(cli, "ScanService", FakeService)
    result = runner.invoke(cli.app, ["profiles"])
    assert result.exit_code == 0
    assert "default: /dev/ttyACM0 baudrate=4800" in result.stdout
    assert "1546:01a7 baudrate=9600" in result.stdout


def test_profiles_command_without_profiles(monkeypatch):
    class EmptyService(FakeService):
        def load_profiles(self) -> ProfileCatalog:
            return ProfileCatalog(profiles=(), default=None, default_baud_rate=BaudRate.B9600, warnings=())

    monkeypatch.setattr(cli, "ScanService", EmptyService)
    result = runner.invoke(cli.app, ["profiles"])
    assert result.exit_code == 1
    assert "default: <none> baudrate=9600" in result.stdout
    assert "No device profiles registered" in result.stdout


def test_devices_command(monkeypatch):
    monkeypatch.setattr(cli, "ScanService", FakeService)
    result = runner.invoke(cli.app, ["devices"])
    assert result.exit_code == 0
    assert "001:007 1546:01a7" in result.stdout


def test_warnings_are_printed(monkeypatch):
    class WarnService(FakeService):
        def __init__(self, *, backend=None, config_path=None) -> None:
            super().__init__(config_path=config_path)
            self.last_warnings = ("<usbdev vid=None pid='01a7'>: idVendor or idProduct is missing",)

    monkeypatch.setattr(cli, "ScanService", WarnService)
    result = runner.invoke(cli.app, ["scan"])
    assert result.exit_code == 0
    assert "Warning: <usbdev vid=None" in result.output
