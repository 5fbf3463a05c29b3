"""NetworkManager (nmcli) backed network provider."""

from __future__ import annotations

import logging

from qrlan.constants import NMCLI_PROFILE_FIELDS, NMCLI_SECURITY_MAP, NMCLI_WIRELESS_TYPE
from qrlan.errors import CredentialLookupError, EnumerationError
from qrlan.platforms.base import NetworkProvider
from qrlan.services.process import run_command
from qrlan.services.security import classify_token
from qrlan.services.wifi_payload import NetworkRecord

logger = logging.getLogger(__name__)

LIST_COMMAND = ("nmcli", "-t", "-f", NMCLI_PROFILE_FIELDS, "connection", "show")
FIELD_COUNT = 5


def split_terse_line(line: str) -> list[str]:
    """Split a line of nmcli terse output on unescaped colons."""
    fields: list[str] = []
    current: list[str] = []
    chars = iter(line)
    for char in chars:
        if char == "\\":
            current.append(next(chars, "\\"))
        elif char == ":":
            fields.append("".join(current))
            current = []
        else:
            current.append(char)
    fields.append("".join(current))
    return fields


def decode_ssid(raw: str, profile_name: str) -> str:
    """Decode a hex SSID, falling back to the profile name."""
    if not raw:
        return profile_name
    try:
        return bytes.fromhex(raw).decode("utf-8")
    except ValueError:
        return profile_name


def parse_connections(output: str) -> list[tuple[str, NetworkRecord]]:
    """Parse ``nmcli -t connection show`` output into (connection name, record) pairs."""
    networks: list[tuple[str, NetworkRecord]] = []
    for line in output.splitlines():
        parts = split_terse_line(line)
        if len(parts) < FIELD_COUNT or parts[4] != NMCLI_WIRELESS_TYPE:
            if line.strip():
                logger.debug("Skipping nmcli line %r", line)
            continue
        name, ssid_raw, key_mgmt, psk = parts[:4]
        ssid = decode_ssid(ssid_raw, name)
        if not ssid:
            continue
        record = NetworkRecord(
            ssid=ssid,
            password=psk or None,
            security=classify_token(key_mgmt, NMCLI_SECURITY_MAP),
        )
        networks.append((name, record))
    return networks


class NmcliProvider(NetworkProvider):
    """Reads saved Wi-Fi connections, including PSK and key management, inline."""

    name = "nmcli"

    def __init__(self) -> None:
        # nmcli looks secrets up by connection name, which may differ from the SSID
        self._connections: dict[str, str] = {}

    def list_known_networks(self) -> list[NetworkRecord]:
        try:
            result = run_command(LIST_COMMAND)
        except OSError as exc:
            raise EnumerationError(
                f"Failed to execute nmcli. Is NetworkManager installed and running? Error: {exc}",
                command=LIST_COMMAND,
            ) from exc
        if result.returncode != 0:
            raise EnumerationError(
                f"nmcli command failed with status {result.returncode}: {result.stderr.strip()}",
                command=LIST_COMMAND,
                stderr=result.stderr,
            )
        rows = parse_connections(result.stdout)
        self._connections = {record.ssid: name for name, record in rows}
        networks = [record for _, record in rows]
        if not networks:
            logger.info("No Wi-Fi connections found via nmcli.")
        return networks

    def resolve_password(self, ssid: str) -> str | None:
        command = (
            "nmcli",
            "--show-secrets",
            "--get-values",
            "802-11-wireless-security.psk",
            "connection",
            "show",
            "id",
            self._connections.get(ssid, ssid),
        )
        try:
            result = run_command(command)
        except OSError as exc:
            raise CredentialLookupError(
                f"Failed to execute nmcli for SSID '{ssid}': {exc}", command=command
            ) from exc
        if result.returncode != 0:
            logger.debug("nmcli secret lookup for %r failed: %s", ssid, result.stderr.strip())
            return None
        password = result.stdout.strip()
        return password or None
