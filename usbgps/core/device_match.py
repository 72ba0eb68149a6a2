"""Match attached USB devices against the profile registry."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import TypeVar

from usbgps.core.errors import NotFoundError, UsbDescriptorError
from usbgps.core.model import MatchResult, UsbDeviceInfo
from usbgps.core.registry import DeviceRegistry

DeviceT = TypeVar("DeviceT")
LOGGER = logging.getLogger(__name__)


def format_device_path(bus_number: int, device_address: int) -> str:
    return f"/dev/bus/usb/{bus_number:03d}/{device_address:03d}"


def find_first_match(
    devices: Iterable[DeviceT],
    registry: DeviceRegistry,
    describe: Callable[[DeviceT], UsbDeviceInfo],
) -> MatchResult:
    """Return the first device, in enumeration order, with a registered profile."""
    for device in devices:
        try:
            info = describe(device)
        except UsbDescriptorError as exc:
            LOGGER.warning("failed to get device descriptor: %s", exc)
            continue

        profile = registry.lookup(info.vendor_id, info.product_id)
        if profile is None:
            continue

        path = format_device_path(info.bus_number, info.device_address)
        LOGGER.info(
            "Matched %04x:%04x at %s (baudrate %d)",
            info.vendor_id,
            info.product_id,
            path,
            profile.baud_rate,
        )
        return MatchResult(device_path=path, baud_rate=profile.baud_rate, profile=profile, device=info)

    raise NotFoundError("No attached USB device matched any registered GPS profile.")
