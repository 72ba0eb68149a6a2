"""Symbolic baud-rate tokens used by the configuration document."""

from __future__ import annotations

from usbgps.core.errors import InvalidArgumentError
from usbgps.core.model import BaudRate

DEFAULT_BAUD_RATE = BaudRate.B9600

_TERMBITS: tuple[tuple[str, BaudRate], ...] = (
    ("2400", BaudRate.B2400),
    ("4800", BaudRate.B4800),
    ("9600", BaudRate.B9600),
)


class BaudRateTable:
    """Fixed token table plus a configurable fallback rate.

    Unknown or absent tokens never fail; they resolve to ``default``, which a
    ``<default baudrate="...">`` entry may change for the rest of a scan.
    """

    def __init__(self, default: BaudRate = DEFAULT_BAUD_RATE) -> None:
        self.default = default

    def parse(self, token: str | None) -> BaudRate:
        if token is not None:
            for name, baud_rate in _TERMBITS:
                if name == token:
                    return baud_rate
        return self.default

    def set_default(self, token: str | None) -> BaudRate:
        if token is None:
            raise InvalidArgumentError("Default baud rate token is missing")
        self.default = self.parse(token)
        return self.default

    @staticmethod
    def name_of(baud_rate: int) -> str:
        for name, value in _TERMBITS:
            if value == baud_rate:
                return name
        return "unknown"
