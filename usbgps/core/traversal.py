"""Populate a ScanState from a parsed configuration tree."""

from __future__ import annotations

import logging

from usbgps.core.errors import UsbGpsError
from usbgps.core.model import ConfigNode, TraversalOutcome
from usbgps.core.state import ScanState

ROOT_ELEMENT = "odroid-gps"
LOGGER = logging.getLogger(__name__)


def traverse(node: ConfigNode | None, state: ScanState) -> TraversalOutcome:
    """Walk ``node`` and its siblings, filling ``state``.

    Per-entry failures are collected as warnings and never abort the walk.
    A failed ``<devices>`` pool stops the current sibling chain.
    """
    warnings: list[str] = []
    if node is not None:
        _walk((node,), state, warnings)
    return TraversalOutcome(warnings=tuple(warnings))


def _walk(siblings: tuple[ConfigNode, ...], state: ScanState, warnings: list[str]) -> None:
    for node in siblings:
        if node.is_element:
            if node.name == "default":
                _apply_default(node, state, warnings)
            elif node.name == "devices":
                try:
                    state.registry.create_pool(node.child_element_count())
                except UsbGpsError as exc:
                    _warn(warnings, f"<devices>: {exc}")
                    break
            elif node.name == "usbdev":
                try:
                    state.registry.add(node.get("vid"), node.get("pid"), node.get("baudrate"))
                except UsbGpsError as exc:
                    _warn(warnings, f"<usbdev vid={node.get('vid')!r} pid={node.get('pid')!r}>: {exc}")

        _walk(node.children, state, warnings)


def _apply_default(node: ConfigNode, state: ScanState, warnings: list[str]) -> None:
    state.default_device = node.get("device")
    state.default_applied = True
    try:
        state.baud_rates.set_default(node.get("baudrate"))
    except UsbGpsError as exc:
        _warn(warnings, f"<default>: {exc}")


def _warn(warnings: list[str], message: str) -> None:
    LOGGER.warning(message)
    warnings.append(message)


def populate(root: ConfigNode | None, state: ScanState) -> TraversalOutcome:
    """Traverse a document root, ignoring documents not rooted at ``<odroid-gps>``."""
    if root is None:
        return TraversalOutcome(warnings=("Configuration document is empty",))
    if root.name != ROOT_ELEMENT:
        message = f"Root element <{root.name}> is not <{ROOT_ELEMENT}>; document ignored"
        LOGGER.warning(message)
        return TraversalOutcome(warnings=(message,))

    outcome = traverse(root, state)
    LOGGER.info("%d device(s) are listed", len(state.registry))
    return outcome
