"""Service layer used by the CLI and the public API."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from usbgps.backends.base import UsbBackend
from usbgps.backends.pyusb import PyUSBBackend
from usbgps.core.config_loader import DEFAULT_CONFIG_PATH, load_config
from usbgps.core.device_match import find_first_match
from usbgps.core.errors import DeviceUnavailableError, NotFoundError, UsbDescriptorError, UsbGpsError
from usbgps.core.model import MatchResult, ProfileCatalog, TraversalOutcome, UsbDeviceInfo
from usbgps.core.state import ScanState
from usbgps.core.traversal import populate

LOGGER = logging.getLogger(__name__)


class ScanService:
    def __init__(
        self,
        *,
        backend: UsbBackend | None = None,
        config_path: Path | str = DEFAULT_CONFIG_PATH,
    ) -> None:
        self.backend = backend or PyUSBBackend()
        self.config_path = Path(config_path)
        self.last_warnings: tuple[str, ...] = ()

    def scan(self) -> MatchResult:
        """Find the first attached USB device that has a registered GPS profile.

        The registry is rebuilt from the configuration document on every call
        and released before returning, whatever the outcome.
        """
        state = ScanState()
        try:
            self._load(state)
            if len(state.registry) == 0:
                raise NotFoundError(f"No GPS device profiles registered from {self.config_path}.")
            return self._match_live_devices(state)
        finally:
            state.release()

    def load_profiles(self) -> ProfileCatalog:
        state = ScanState()
        try:
            outcome = self._load(state)
            return ProfileCatalog(
                profiles=state.registry.profiles,
                default=state.default_override,
                default_baud_rate=state.default_baud_rate,
                warnings=outcome.warnings,
            )
        finally:
            state.release()

    def list_devices(self) -> list[UsbDeviceInfo]:
        handle = self._init_backend()
        try:
            devices = self._enumerate(handle)
            try:
                return self._describe_all(devices)
            finally:
                self.backend.release(devices)
        finally:
            self.backend.shutdown(handle)

    def _describe_all(self, devices: Sequence[Any]) -> list[UsbDeviceInfo]:
        described: list[UsbDeviceInfo] = []
        for device in devices:
            try:
                described.append(self.backend.describe(device))
            except UsbDescriptorError as exc:
                LOGGER.warning("failed to get device descriptor: %s", exc)
        return described

    def _load(self, state: ScanState) -> TraversalOutcome:
        self.last_warnings = ()
        root = load_config(self.config_path)
        outcome = populate(root, state)
        self.last_warnings = outcome.warnings
        return outcome

    def _match_live_devices(self, state: ScanState) -> MatchResult:
        handle = self._init_backend()
        try:
            devices = self._enumerate(handle)
            try:
                if not devices:
                    raise NotFoundError("No USB devices are attached.")
                return find_first_match(devices, state.registry, self.backend.describe)
            finally:
                self.backend.release(devices)
        finally:
            self.backend.shutdown(handle)

    def _init_backend(self) -> Any:
        try:
            return self.backend.init()
        except UsbGpsError:
            raise
        except OSError as exc:
            raise DeviceUnavailableError(f"Could not initialize USB subsystem: {exc}") from exc

    def _enumerate(self, handle: Any) -> Sequence[Any]:
        try:
            return self.backend.list_devices(handle)
        except UsbGpsError:
            raise
        except OSError as exc:
            raise DeviceUnavailableError(f"USB device enumeration failed: {exc}") from exc
