"""Wi-Fi payload helpers and network record model."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from qrlan.constants import SECURITY_ALIASES, WIRE_OPEN, WIRE_WEP, WIRE_WPA

logger = logging.getLogger(__name__)


class SecurityType(str, Enum):
    """Canonical security types; values are the payload wire tokens."""

    WPA = WIRE_WPA
    WEP = WIRE_WEP
    OPEN = WIRE_OPEN


@dataclass
class NetworkRecord:
    """A known network as reported by the host, filled in as the flow proceeds."""

    ssid: str
    password: str | None = None
    security: SecurityType | None = None


def _escape(value: str) -> str:
    """Escape payload delimiters for QR-encoded Wi-Fi strings."""
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace(":", "\\:")
        .replace('"', '\\"')
    )


def normalize_security(value: str) -> str:
    """Normalize security labels into canonical forms."""
    key = value.upper().strip()
    return SECURITY_ALIASES.get(key, key)


def parse_security(value: str) -> SecurityType | None:
    """Map a user-entered security label to a security type, or None if unknown."""
    normalized = normalize_security(value)
    if normalized == "NOPASS":
        return SecurityType.OPEN
    if normalized == "WEP":
        return SecurityType.WEP
    if normalized == "WPA":
        return SecurityType.WPA
    return None


def resolve_security(
    detected: SecurityType | None,
    password: str,
    ask: Callable[[], str | None] | None = None,
) -> SecurityType:
    """Decide the security type for a network whose detection may have failed.

    A detected type always wins. Without one, an empty password means an open
    network; otherwise ``ask`` is consulted and anything it cannot answer
    falls back to WPA.
    """
    if detected is not None:
        return detected
    if not password:
        return SecurityType.OPEN
    answer = ask() if ask is not None else None
    if not answer or not answer.strip():
        logger.info("No security type given; defaulting to WPA")
        return SecurityType.WPA
    security = parse_security(answer)
    if security is None:
        logger.warning("Invalid security type %r entered. Defaulting to WPA.", answer)
        return SecurityType.WPA
    return security


def build_wifi_payload(ssid: str, password: str, security: SecurityType) -> str:
    """Build a Wi-Fi QR payload string.

    The password segment is only emitted for secured networks with a
    non-empty password.
    """
    payload = f"WIFI:S:{_escape(ssid)};T:{security.value};"
    if password and security is not SecurityType.OPEN:
        payload += f"P:{_escape(password)};"
    return payload + ";"
