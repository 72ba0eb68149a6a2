"""Fixed-capacity, insertion-ordered registry of GPS dongle profiles."""

from __future__ import annotations

from collections.abc import Iterator

from usbgps.core.baudrate import BaudRateTable
from usbgps.core.errors import InvalidArgumentError, OutOfCapacityError, OutOfMemoryError
from usbgps.core.model import DeviceProfile

_MAX_USB_ID = 0xFFFF


def parse_usb_id(value: str, *, context: str) -> int:
    text = value.strip()
    try:
        parsed = int(text, 16)
    except ValueError as exc:
        raise InvalidArgumentError(f"{context} '{value}' is not a hexadecimal number") from exc
    if not 0 <= parsed <= _MAX_USB_ID:
        raise InvalidArgumentError(f"{context} '{value}' is outside 0000..ffff")
    return parsed


def _allocate_slots(capacity: int) -> list[DeviceProfile | None]:
    return [None] * capacity


class DeviceRegistry:
    def __init__(self, baud_rates: BaudRateTable) -> None:
        self.baud_rates = baud_rates
        self._slots: list[DeviceProfile | None] = []
        self._cursor = 0

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def profiles(self) -> tuple[DeviceProfile, ...]:
        return tuple(self)

    def __len__(self) -> int:
        return self._cursor

    def __iter__(self) -> Iterator[DeviceProfile]:
        for profile in self._slots[: self._cursor]:
            if profile is not None:
                yield profile

    def create_pool(self, capacity: int) -> None:
        """Start a fresh pool with room for ``capacity`` profiles.

        Any previously held pool is dropped, so a configuration with two
        ``<devices>`` blocks keeps only the entries that follow the last one.
        """
        if capacity <= 0:
            raise InvalidArgumentError(f"Device pool capacity must be positive, got {capacity}")

        self.release()
        try:
            self._slots = _allocate_slots(capacity)
        except MemoryError as exc:
            raise OutOfMemoryError(f"Could not allocate a pool of {capacity} devices") from exc

    def add(
        self,
        vendor_id: str | None,
        product_id: str | None,
        baud_token: str | None,
    ) -> DeviceProfile:
        if vendor_id is None or product_id is None:
            raise InvalidArgumentError("idVendor or idProduct is missing")

        profile = DeviceProfile(
            vendor_id=parse_usb_id(vendor_id, context="idVendor"),
            product_id=parse_usb_id(product_id, context="idProduct"),
            baud_rate=self.baud_rates.parse(baud_token),
        )
        if self._cursor >= len(self._slots):
            raise OutOfCapacityError(
                f"Device pool is full ({len(self._slots)} entries); "
                f"cannot add {profile.vendor_id:04x}:{profile.product_id:04x}"
            )
        self._slots[self._cursor] = profile
        self._cursor += 1
        return profile

    def lookup(self, vendor_id: int, product_id: int) -> DeviceProfile | None:
        for profile in self:
            if profile.vendor_id == vendor_id and profile.product_id == product_id:
                return profile
        return None

    def release(self) -> None:
        self._slots = []
        self._cursor = 0
