"""USB enumeration interfaces."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol

from usbgps.core.model import UsbDeviceInfo


class UsbBackend(Protocol):
    def init(self) -> Any:
        """Open the USB subsystem and return a handle for the other calls."""

    def list_devices(self, handle: Any) -> Sequence[Any]:
        """Return attached devices in enumeration order."""

    def describe(self, device: Any) -> UsbDeviceInfo:
        """Read vendor/product IDs and bus location of one device."""

    def release(self, devices: Sequence[Any]) -> None:
        """Drop a list returned by ``list_devices``."""

    def shutdown(self, handle: Any) -> None:
        """Close the handle returned by ``init``."""
