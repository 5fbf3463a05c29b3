"""Windows netsh backed network provider."""

from __future__ import annotations

import logging

from qrlan.constants import (
    NETSH_AUTHENTICATION_LABEL,
    NETSH_KEY_ABSENT,
    NETSH_KEY_CONTENT_LABEL,
    NETSH_SECURITY_MARKERS,
)
from qrlan.errors import CredentialLookupError, EnumerationError
from qrlan.platforms.base import NetworkProvider
from qrlan.services.process import run_command
from qrlan.services.security import classify_markers
from qrlan.services.wifi_payload import NetworkRecord, SecurityType

logger = logging.getLogger(__name__)

LIST_COMMAND = ("netsh", "wlan", "show", "profiles")


def _value_after_colon(line: str) -> str:
    _, _, value = line.partition(":")
    return value.strip()


def parse_profile_names(output: str) -> list[str]:
    """Extract profile names from lines like ``All User Profile : Name``."""
    names = []
    for line in output.splitlines():
        if ":" not in line:
            continue
        name = _value_after_colon(line)
        if name:
            names.append(name)
    return names


def parse_profile_details(output: str) -> tuple[str | None, SecurityType | None]:
    """Read the key content and authentication type from a profile dump."""
    key_content: str | None = None
    authentication = ""
    for line in output.splitlines():
        stripped = line.strip()
        if stripped.startswith(NETSH_KEY_CONTENT_LABEL):
            key_content = _value_after_colon(stripped)
        elif stripped.startswith(NETSH_AUTHENTICATION_LABEL):
            authentication = _value_after_colon(stripped)

    password = key_content if key_content and key_content.lower() != NETSH_KEY_ABSENT else None
    return password, classify_markers(authentication, NETSH_SECURITY_MARKERS)


def _profile_command(ssid: str) -> tuple[str, ...]:
    return ("netsh", "wlan", "show", "profile", f"name={ssid}", "key=clear")


class NetshProvider(NetworkProvider):
    """Lists WLAN profiles, then queries each one for its key and authentication."""

    name = "netsh"

    def list_known_networks(self) -> list[NetworkRecord]:
        try:
            result = run_command(LIST_COMMAND)
        except OSError as exc:
            raise EnumerationError(
                "Failed to execute 'netsh wlan show profiles'. "
                f"Is WLAN AutoConfig service running? Error: {exc}",
                command=LIST_COMMAND,
            ) from exc
        if result.returncode != 0:
            raise EnumerationError(
                f"'netsh wlan show profiles' command failed with status {result.returncode}: "
                f"{result.stderr.strip()}",
                command=LIST_COMMAND,
                stderr=result.stderr,
            )

        networks = []
        for ssid in parse_profile_names(result.stdout):
            record = NetworkRecord(ssid=ssid)
            try:
                details = run_command(_profile_command(ssid))
            except OSError as exc:
                logger.warning("Failed to execute 'netsh wlan show profile name=%s': %s", ssid, exc)
            else:
                if details.returncode == 0:
                    record.password, record.security = parse_profile_details(details.stdout)
                else:
                    # key=clear needs administrator rights
                    logger.debug("Could not read details for profile %r", ssid)
            networks.append(record)

        if not networks:
            logger.info("No Wi-Fi profiles found using 'netsh'.")
        return networks

    def resolve_password(self, ssid: str) -> str | None:
        command = _profile_command(ssid)
        try:
            result = run_command(command)
        except OSError as exc:
            raise CredentialLookupError(
                f"Failed to execute 'netsh wlan show profile' for SSID '{ssid}': {exc}",
                command=command,
            ) from exc
        if result.returncode != 0:
            return None
        password, _ = parse_profile_details(result.stdout)
        return password
