"""Per-scan state shared by traversal and matching."""

from __future__ import annotations

from usbgps.core.baudrate import BaudRateTable
from usbgps.core.model import BaudRate, DefaultDeviceOverride
from usbgps.core.registry import DeviceRegistry


class ScanState:
    """Registry, default-device override and baud-rate fallback for one scan.

    A fresh instance starts from the compiled-in 9600 fallback, so settings
    from a previous scan's ``<default>`` entry never leak into the next one.
    """

    def __init__(self) -> None:
        self.baud_rates = BaudRateTable()
        self.registry = DeviceRegistry(self.baud_rates)
        self.default_device: str | None = None
        self.default_applied = False

    @property
    def default_override(self) -> DefaultDeviceOverride | None:
        if not self.default_applied:
            return None
        return DefaultDeviceOverride(
            device_path_hint=self.default_device,
            baud_rate=self.baud_rates.default,
        )

    @property
    def default_baud_rate(self) -> BaudRate:
        return self.baud_rates.default

    def release(self) -> None:
        self.registry.release()
        self.default_device = None
        self.default_applied = False
