"""USB enumeration backed by PyUSB and libusb-1.0."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import usb.backend.libusb1
import usb.core
import usb.util

from usbgps.core.errors import DeviceUnavailableError, UsbDescriptorError
from usbgps.core.model import UsbDeviceInfo


class PyUSBBackend:
    def init(self) -> Any:
        try:
            backend = usb.backend.libusb1.get_backend()
        except usb.core.USBError as exc:
            raise DeviceUnavailableError(f"Could not initialize libusb: {exc}") from exc
        if backend is None:
            raise DeviceUnavailableError(
                "libusb-1.0 is not available. Install libusb and check USB permissions."
            )
        return backend

    def list_devices(self, handle: Any) -> Sequence[Any]:
        try:
            return list(usb.core.find(find_all=True, backend=handle))
        except (usb.core.USBError, usb.core.NoBackendError) as exc:
            raise DeviceUnavailableError(f"USB device enumeration failed: {exc}") from exc

    def describe(self, device: Any) -> UsbDeviceInfo:
        try:
            return UsbDeviceInfo(
                vendor_id=int(device.idVendor),
                product_id=int(device.idProduct),
                bus_number=int(device.bus),
                device_address=int(device.address),
            )
        except (usb.core.USBError, AttributeError, TypeError) as exc:
            raise UsbDescriptorError(f"Could not read descriptor of {device!r}: {exc}") from exc

    def release(self, devices: Sequence[Any]) -> None:
        for device in devices:
            usb.util.dispose_resources(device)

    def shutdown(self, handle: Any) -> None:
        # libusb contexts opened by PyUSB are finalized with the backend object.
        return None
