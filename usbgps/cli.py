"""Typer CLI entrypoint."""

from __future__ import annotations

import logging
import time
from pathlib import Path

import typer

from usbgps.core.baudrate import BaudRateTable
from usbgps.core.config_loader import DEFAULT_CONFIG_PATH
from usbgps.core.errors import UsbGpsError
from usbgps.core.service import ScanService

app = typer.Typer(help="Locate a configured USB GPS dongle and report its device path and baud rate")

CONFIG_OPTION = typer.Option(DEFAULT_CONFIG_PATH, "--config", help="GPS device list (XML or YAML)")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scan progress to stderr"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


def _print_warnings(service: ScanService) -> None:
    for warning in service.last_warnings:
        typer.echo(f"Warning: {warning}", err=True)


@app.command("scan")
def scan(
    config: Path = CONFIG_OPTION,
    count: int = typer.Option(1, "--count", min=1, help="Number of scans to run"),
    interval: float = typer.Option(0.0, "--interval", min=0.0, help="Seconds to wait between scans"),
) -> None:
    """Scan attached USB devices for a registered GPS dongle."""
    service = ScanService(config_path=config)
    exit_code = 0
    for attempt in range(count):
        if attempt and interval:
            time.sleep(interval)
        try:
            result = service.scan()
        except UsbGpsError as exc:
            _print_warnings(service)
            typer.echo(f"Error: {exc}", err=True)
            exit_code = exc.exit_code
            continue

        _print_warnings(service)
        typer.echo(
            f"device name = {result.device_path}, "
            f"baudrate = B{BaudRateTable.name_of(result.baud_rate)}"
        )
        exit_code = 0

    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command("profiles")
def list_profiles(config: Path = CONFIG_OPTION) -> None:
    """List GPS profiles registered by the configuration document."""
    try:
        service = ScanService(config_path=config)
        catalog = service.load_profiles()
        _print_warnings(service)
        hint = catalog.default.device_path_hint if catalog.default is not None else None
        typer.echo(
            f"default: {hint or '<none>'} "
            f"baudrate={BaudRateTable.name_of(catalog.default_baud_rate)}"
        )
        if not catalog.profiles:
            typer.echo("No device profiles registered")
            raise typer.Exit(code=1)

        for profile in catalog.profiles:
            typer.echo(
                f"{profile.vendor_id:04x}:{profile.product_id:04x} "
                f"baudrate={BaudRateTable.name_of(profile.baud_rate)}"
            )
    except UsbGpsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code) from None


@app.command("devices")
def list_devices() -> None:
    """List attached USB devices."""
    try:
        devices = ScanService().list_devices()
        if not devices:
            typer.echo("No USB devices found")
            return

        for device in devices:
            typer.echo(
                f"{device.bus_number:03d}:{device.device_address:03d} "
                f"{device.vendor_id:04x}:{device.product_id:04x}"
            )
    except UsbGpsError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=exc.exit_code) from None


def run() -> None:
    app()


if __name__ == "__main__":
    run()
