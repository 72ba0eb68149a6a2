"""Core data models used across loader, registry, matcher, and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum


class BaudRate(IntEnum):
    B2400 = 2400
    B4800 = 4800
    B9600 = 9600


@dataclass(frozen=True)
class DeviceProfile:
    vendor_id: int
    product_id: int
    baud_rate: BaudRate


@dataclass(frozen=True)
class DefaultDeviceOverride:
    device_path_hint: str | None
    baud_rate: BaudRate


@dataclass(frozen=True)
class UsbDeviceInfo:
    vendor_id: int
    product_id: int
    bus_number: int
    device_address: int


@dataclass(frozen=True)
class MatchResult:
    device_path: str
    baud_rate: BaudRate
    profile: DeviceProfile | None = None
    device: UsbDeviceInfo | None = None


@dataclass(frozen=True)
class ConfigNode:
    """One node of a parsed configuration document, in document order."""

    name: str
    attributes: dict[str, str] = field(default_factory=dict)
    children: tuple[ConfigNode, ...] = ()
    is_element: bool = True

    def get(self, attribute: str) -> str | None:
        return self.attributes.get(attribute)

    def child_element_count(self) -> int:
        return sum(1 for child in self.children if child.is_element)


@dataclass(frozen=True)
class TraversalOutcome:
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class ProfileCatalog:
    profiles: tuple[DeviceProfile, ...]
    default: DefaultDeviceOverride | None
    default_baud_rate: BaudRate
    warnings: tuple[str, ...]
