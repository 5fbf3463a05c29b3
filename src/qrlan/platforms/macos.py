"""macOS networksetup and Keychain backed network provider."""

from __future__ import annotations

import logging

from qrlan.constants import MACOS_WIFI_PORT_MARKERS
from qrlan.errors import CredentialLookupError, EnumerationError
from qrlan.platforms.base import NetworkProvider
from qrlan.services.process import run_command
from qrlan.services.wifi_payload import NetworkRecord

logger = logging.getLogger(__name__)

PORTS_COMMAND = ("networksetup", "-listallhardwareports")
DEVICE_PREFIX = "Device: "


def find_wifi_interface(output: str) -> str | None:
    """Return the device name of the first Wi-Fi hardware port."""
    lines = iter(output.splitlines())
    for line in lines:
        if any(marker in line for marker in MACOS_WIFI_PORT_MARKERS):
            device_line = next(lines, "")
            if device_line.startswith(DEVICE_PREFIX):
                return device_line[len(DEVICE_PREFIX):].strip()
    return None


def parse_preferred_networks(output: str) -> list[NetworkRecord]:
    """Parse ``networksetup -listpreferredwirelessnetworks`` output.

    The first line is a header; every other non-blank line is one SSID.
    Password and security type are left for a later lookup.
    """
    return [
        NetworkRecord(ssid=line.strip())
        for line in output.splitlines()[1:]
        if line.strip()
    ]


class NetworkSetupProvider(NetworkProvider):
    """Lists preferred networks per interface; secrets come from the Keychain."""

    name = "networksetup"

    def _wifi_interface(self) -> str:
        try:
            result = run_command(PORTS_COMMAND)
        except OSError as exc:
            raise EnumerationError(
                f"Failed to execute 'networksetup -listallhardwareports': {exc}",
                command=PORTS_COMMAND,
            ) from exc
        if result.returncode != 0:
            raise EnumerationError(
                "'networksetup -listallhardwareports' command failed with status "
                f"{result.returncode}: {result.stderr.strip()}",
                command=PORTS_COMMAND,
                stderr=result.stderr,
            )
        interface = find_wifi_interface(result.stdout)
        if interface is None:
            raise EnumerationError(
                "No active Wi-Fi interface (e.g., en0, en1) could be found.",
                command=PORTS_COMMAND,
            )
        return interface

    def list_known_networks(self) -> list[NetworkRecord]:
        interface = self._wifi_interface()
        command = ("networksetup", "-listpreferredwirelessnetworks", interface)
        try:
            result = run_command(command)
        except OSError as exc:
            raise EnumerationError(
                f"Failed to execute 'networksetup -listpreferredwirelessnetworks': {exc}",
                command=command,
            ) from exc
        if result.returncode != 0:
            if "is not a Wi-Fi interface" in result.stderr:
                message = (
                    f"The identified network interface '{interface}' does not appear "
                    "to be a Wi-Fi interface. Please check your network configuration."
                )
            else:
                message = (
                    "'networksetup -listpreferredwirelessnetworks' command failed for "
                    f"interface '{interface}' with status {result.returncode}: "
                    f"{result.stderr.strip()}"
                )
            raise EnumerationError(message, command=command, stderr=result.stderr)

        networks = parse_preferred_networks(result.stdout)
        if not networks:
            logger.info("No preferred Wi-Fi networks found on interface '%s'.", interface)
        return networks

    def resolve_password(self, ssid: str) -> str | None:
        # Item missing and access denied both exit non-zero; neither is fatal.
        command = ("security", "find-generic-password", "-wa", ssid)
        try:
            result = run_command(command)
        except OSError as exc:
            raise CredentialLookupError(
                f"Failed to execute 'security find-generic-password' command for SSID '{ssid}': {exc}",
                command=command,
            ) from exc
        if result.returncode != 0:
            logger.debug("Keychain lookup for %r failed: %s", ssid, result.stderr.strip())
            return None
        password = result.stdout.strip()
        return password or None
