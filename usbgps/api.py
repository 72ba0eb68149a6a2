"""Stable public API for building tooling on top of usbgps.

This module is the supported integration surface for third-party callers, such
as a GPS HAL that polls for a dongle and opens its serial port. Avoid importing
from internal modules unless intentionally depending on non-stable internals.
"""

from __future__ import annotations

from pathlib import Path

from usbgps.backends.base import UsbBackend
from usbgps.backends.pyusb import PyUSBBackend
from usbgps.core.baudrate import BaudRateTable
from usbgps.core.config_loader import DEFAULT_CONFIG_PATH
from usbgps.core.errors import (
    ConfigLoadError,
    DeviceUnavailableError,
    InvalidArgumentError,
    NotFoundError,
    OutOfCapacityError,
    OutOfMemoryError,
    UsbDescriptorError,
    UsbGpsError,
)
from usbgps.core.model import (
    BaudRate,
    DefaultDeviceOverride,
    DeviceProfile,
    MatchResult,
    ProfileCatalog,
    UsbDeviceInfo,
)
from usbgps.core.service import ScanService

__all__ = [
    "UsbGpsError",
    "InvalidArgumentError",
    "ConfigLoadError",
    "OutOfMemoryError",
    "OutOfCapacityError",
    "DeviceUnavailableError",
    "UsbDescriptorError",
    "NotFoundError",
    "BaudRate",
    "DefaultDeviceOverride",
    "DeviceProfile",
    "MatchResult",
    "ProfileCatalog",
    "UsbDeviceInfo",
    "PyUSBBackend",
    "DEFAULT_CONFIG_PATH",
    "Client",
    "scan_usb_gps_device",
]


class Client:
    """Public client for locating a configured USB GPS dongle.

    A `Client` instance wraps configuration loading, USB enumeration and
    profile matching behind a stable API. Each `scan()` call is independent.
    """

    def __init__(
        self,
        *,
        config_path: Path | str = DEFAULT_CONFIG_PATH,
        backend: UsbBackend | None = None,
    ) -> None:
        self._service = ScanService(backend=backend, config_path=config_path)

    @property
    def config_path(self) -> Path:
        return self._service.config_path

    @property
    def last_warnings(self) -> tuple[str, ...]:
        return self._service.last_warnings

    def scan(self) -> MatchResult:
        return self._service.scan()

    def load_profiles(self) -> ProfileCatalog:
        return self._service.load_profiles()

    def list_devices(self) -> list[UsbDeviceInfo]:
        return self._service.list_devices()

    @staticmethod
    def baud_rate_name(baud_rate: int) -> str:
        return BaudRateTable.name_of(baud_rate)


def scan_usb_gps_device(
    config_path: Path | str = DEFAULT_CONFIG_PATH,
    *,
    backend: UsbBackend | None = None,
) -> MatchResult:
    """Return the device path and baud rate of the attached GPS dongle.

    Raises a `UsbGpsError` subclass whose `exit_code` is the errno-style code
    of the failure.
    """
    return ScanService(backend=backend, config_path=config_path).scan()
