from __future__ import annotations

from types import SimpleNamespace

import pytest
import usb.backend.libusb1
import usb.core
import usb.util

from usbgps.backends.pyusb import PyUSBBackend
from usbgps.core.errors import DeviceUnavailableError, UsbDescriptorError
from usbgps.core.model import UsbDeviceInfo


def test_init_without_libusb_raises(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(usb.backend.libusb1, "get_backend", lambda: None)

    with pytest.raises(DeviceUnavailableError):
        PyUSBBackend().init()


def test_list_devices_passes_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    seen: dict[str, object] = {}
    device = SimpleNamespace(idVendor=0x1546, idProduct=0x01A7, bus=1, address=7)

    def fake_find(find_all: bool, backend: object):
        seen["find_all"] = find_all
        seen["backend"] = backend
        return iter([device])

    monkeypatch.setattr(usb.core, "find", fake_find)

    assert PyUSBBackend().list_devices("ctx") == [device]
    assert seen == {"find_all": True, "backend": "ctx"}


def test_list_devices_failure_is_device_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_find(find_all: bool, backend: object):
        raise usb.core.USBError("Access denied")

    monkeypatch.setattr(usb.core, "find", fake_find)

    with pytest.raises(DeviceUnavailableError):
        PyUSBBackend().list_devices("ctx")


def test_describe_reads_ids_and_location() -> None:
    device = SimpleNamespace(idVendor=0x1546, idProduct=0x01A7, bus=1, address=7)
    assert PyUSBBackend().describe(device) == UsbDeviceInfo(
        vendor_id=0x1546,
        product_id=0x01A7,
        bus_number=1,
        device_address=7,
    )


def test_describe_without_bus_location_fails() -> None:
    device = SimpleNamespace(idVendor=0x1546, idProduct=0x01A7, bus=None, address=None)
    with pytest.raises(UsbDescriptorError):
        PyUSBBackend().describe(device)


def test_release_disposes_every_device(monkeypatch: pytest.MonkeyPatch) -> None:
    disposed: list[object] = []
    monkeypatch.setattr(usb.util, "dispose_resources", disposed.append)

    devices = [object(), object()]
    PyUSBBackend().release(devices)
    assert disposed == devices
