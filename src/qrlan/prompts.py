"""Terminal prompts used when the host cannot supply a value."""

from __future__ import annotations

import sys

from qrlan.services.paths import default_base_name
from qrlan.services.wifi_payload import NetworkRecord


def _ask(message: str) -> str:
    return input(message).strip()


def prompt_manual_ssid() -> str | None:
    """Offer manual SSID entry; None if the user declines."""
    choice = _ask("Would you like to enter the SSID manually? (y/N) ")
    if choice.lower() != "y":
        return None
    ssid = _ask("Enter the SSID: ")
    return ssid or None


def select_network(networks: list[NetworkRecord]) -> NetworkRecord:
    """Pick a network, asking by index when there is more than one."""
    if len(networks) == 1:
        print(f"Automatically selected the only available network: {networks[0].ssid}")
        return networks[0]

    print("Available Wi-Fi networks:")
    for index, network in enumerate(networks):
        print(f"[{index}]\t{network.ssid}")
    while True:
        answer = _ask("\nPlease select a network by number to generate the QR code for: ")
        if answer.isdigit() and int(answer) < len(networks):
            return networks[int(answer)]
        print(
            f"Invalid selection. Please enter a number between 0 and {len(networks) - 1}.",
            file=sys.stderr,
        )


def prompt_password(ssid: str) -> str:
    return _ask(f"Enter the password for '{ssid}' (leave empty for an open network): ")


def prompt_security() -> str:
    return _ask(
        "Please enter the security type (e.g., WPA, WEP, or nopass if open; defaults to WPA): "
    )


def prompt_title(ssid: str) -> str:
    return _ask(f"Enter a title for the PDF (optional, press Enter to use SSID '{ssid}'): ")


def prompt_filename(ssid: str, extension: str) -> str:
    return _ask(
        f"Enter a filename (optional, press Enter to use '{default_base_name(ssid)}.{extension}'): "
    )
