"""Payload construction tests."""

import pytest

from qrlan.services.wifi_payload import (
    SecurityType,
    build_wifi_payload,
    parse_security,
    resolve_security,
)


def test_build_wifi_payload_wpa() -> None:
    """Ensure WPA payloads include a password field."""
    payload = build_wifi_payload("Office", "secret", SecurityType.WPA)
    assert payload == "WIFI:S:Office;T:WPA;P:secret;;"


def test_build_wifi_payload_wep() -> None:
    """Ensure WEP payloads encode correctly."""
    payload = build_wifi_payload("Legacy", "abc123", SecurityType.WEP)
    assert payload == "WIFI:S:Legacy;T:WEP;P:abc123;;"


def test_build_wifi_payload_open_drops_password() -> None:
    """Ensure open networks omit the password field even when one is given."""
    payload = build_wifi_payload("Guest", "ignored", SecurityType.OPEN)
    assert payload == "WIFI:S:Guest;T:nopass;;"


def test_build_wifi_payload_empty_password() -> None:
    """Ensure an empty password never produces a P: segment."""
    payload = build_wifi_payload("Office", "", SecurityType.WPA)
    assert payload == "WIFI:S:Office;T:WPA;;"
    assert "P:" not in payload


@pytest.mark.parametrize(
    ("ssid", "password", "security"),
    [
        ("Cafe", "latte", SecurityType.WPA),
        ("Cafe", "", SecurityType.WEP),
        ("Lobby", "x", SecurityType.OPEN),
        ("", "", SecurityType.OPEN),
    ],
)
def test_payload_framing(ssid: str, password: str, security: SecurityType) -> None:
    """Ensure every payload starts with the SSID segment and ends with a double terminator."""
    payload = build_wifi_payload(ssid, password, security)
    assert payload.startswith("WIFI:S:")
    assert payload.endswith(";;")
    assert f";T:{security.value};" in payload
    expected_segments = 1 if password and security is not SecurityType.OPEN else 0
    assert payload.count("P:") == expected_segments


def test_build_wifi_payload_escapes_delimiters() -> None:
    """Ensure delimiter characters in SSID and password are escaped."""
    payload = build_wifi_payload('A;B:C', 'p,w\\d"', SecurityType.WPA)
    assert payload == 'WIFI:S:A\\;B\\:C;T:WPA;P:p\\,w\\\\d\\";;'


def test_home_network_scenario() -> None:
    """Ensure an undetected type with a password resolves to WPA end to end."""
    security = resolve_security(None, "s3cr3t!", ask=lambda: "")
    assert security is SecurityType.WPA
    payload = build_wifi_payload("Home 5G", "s3cr3t!", security)
    assert payload == "WIFI:S:Home 5G;T:WPA;P:s3cr3t!;;"


def test_guest_network_scenario() -> None:
    """Ensure an undetected type without a password resolves to an open network."""
    security = resolve_security(None, "")
    assert security is SecurityType.OPEN
    assert build_wifi_payload("Guest", "", security) == "WIFI:S:Guest;T:nopass;;"


def test_resolve_security_prefers_detected_type() -> None:
    """Ensure a detected type is used without asking."""

    def ask() -> str:
        raise AssertionError("should not prompt")

    assert resolve_security(SecurityType.WEP, "key", ask=ask) is SecurityType.WEP


def test_resolve_security_open_does_not_ask() -> None:
    """Ensure an empty password classifies as open without prompting."""

    def ask() -> str:
        raise AssertionError("should not prompt")

    assert resolve_security(None, "", ask=ask) is SecurityType.OPEN


@pytest.mark.parametrize(
    ("answer", "expected"),
    [
        ("wep", SecurityType.WEP),
        ("nopass", SecurityType.OPEN),
        ("WPA3", SecurityType.WPA),
        ("bogus", SecurityType.WPA),
        ("   ", SecurityType.WPA),
        (None, SecurityType.WPA),
    ],
)
def test_resolve_security_user_answers(answer: str | None, expected: SecurityType) -> None:
    """Ensure answers are honoured and anything unusable defaults to WPA."""
    assert resolve_security(None, "secret", ask=lambda: answer) is expected


def test_parse_security_aliases() -> None:
    """Ensure open security aliases normalize to open."""
    assert parse_security("open") is SecurityType.OPEN
    assert parse_security("None") is SecurityType.OPEN
    assert parse_security("WPA/WPA2/WPA3") is SecurityType.WPA
    assert parse_security("enterprise") is None
