"""Classification of platform security vocabularies."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from qrlan.services.wifi_payload import SecurityType


def classify_token(token: str, table: Mapping[str, str]) -> SecurityType | None:
    """Look up a native token in an exact-match table.

    Tokens are compared lowercased and stripped. Unknown tokens yield None so
    the caller can fall back to manual classification.
    """
    wire = table.get(token.strip().lower())
    return SecurityType(wire) if wire else None


def classify_markers(
    value: str, markers: Iterable[tuple[str, str]]
) -> SecurityType | None:
    """Classify a free-form description by the first marker it contains."""
    haystack = value.strip().upper()
    if not haystack:
        return None
    for marker, wire in markers:
        if marker in haystack:
            return SecurityType(wire)
    return None
