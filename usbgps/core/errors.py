"""Domain-specific errors for usbgps."""

import errno


class UsbGpsError(Exception):
    """Base error for usbgps."""

    exit_code = errno.EINVAL


class InvalidArgumentError(UsbGpsError):
    """Raised on a missing/malformed attribute or a non-positive pool capacity."""

    exit_code = errno.EINVAL


class ConfigLoadError(InvalidArgumentError):
    """Raised when the configuration document cannot be read or parsed."""


class OutOfMemoryError(UsbGpsError):
    """Raised when the device registry cannot be allocated."""

    exit_code = errno.ENOMEM


class OutOfCapacityError(UsbGpsError):
    """Raised when more usbdev entries are added than the devices node declared."""

    exit_code = errno.ENOSPC


class DeviceUnavailableError(UsbGpsError):
    """Raised when the USB subsystem cannot be initialized or enumerated."""

    exit_code = errno.ENODEV


class UsbDescriptorError(DeviceUnavailableError):
    """Raised when a single attached device's descriptor cannot be read."""


class NotFoundError(UsbGpsError):
    """Raised when no registered profile matches any attached device."""

    exit_code = errno.ENOENT
