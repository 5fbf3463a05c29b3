"""Provider contract for reading known networks from the host."""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod

from qrlan.services.wifi_payload import NetworkRecord

logger = logging.getLogger(__name__)


class NetworkProvider(ABC):
    """Lists saved Wi-Fi profiles and looks up their stored secrets."""

    name = "generic"

    @abstractmethod
    def list_known_networks(self) -> list[NetworkRecord]:
        """Return the saved networks; raise EnumerationError if the tool is unusable."""

    def resolve_password(self, ssid: str) -> str | None:
        """Return the stored password for ``ssid``, or None when unavailable."""
        return None


class UnsupportedPlatformProvider(NetworkProvider):
    """Fallback for hosts without a known profile-listing tool."""

    name = "unsupported"

    def list_known_networks(self) -> list[NetworkRecord]:
        logger.warning("Wi-Fi network retrieval is not implemented for %s.", sys.platform)
        return []


def get_provider(platform: str | None = None) -> NetworkProvider:
    """Return the provider for the given (or current) platform."""
    platform = platform or sys.platform
    if platform.startswith("linux"):
        from qrlan.platforms.linux import NmcliProvider

        return NmcliProvider()
    if platform == "darwin":
        from qrlan.platforms.macos import NetworkSetupProvider

        return NetworkSetupProvider()
    if platform == "win32":
        from qrlan.platforms.windows import NetshProvider

        return NetshProvider()
    return UnsupportedPlatformProvider()
