"""Destination path helpers for exported files."""

from __future__ import annotations

import os
import re
from pathlib import Path

from qrlan.constants import DEFAULT_FILENAME_SUFFIX, KNOWN_OUTPUT_EXTENSIONS

_CASE_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS = re.compile(r"[\W_]+")


def to_snake_case(value: str) -> str:
    """Lowercase words joined by underscores, split on punctuation and case changes."""
    words = []
    for chunk in _SEPARATORS.split(value):
        words.extend(word.lower() for word in _CASE_BOUNDARY.split(chunk) if word)
    return "_".join(words)


def default_base_name(ssid: str) -> str:
    return f"{to_snake_case(ssid) or 'wifi'}{DEFAULT_FILENAME_SUFFIX}"


def strip_known_extension(filename: str) -> str:
    """Drop a trailing .pdf/.png/.jpg/.svg the user may have typed."""
    stem, dot, extension = filename.rpartition(".")
    if dot and stem and extension.lower() in KNOWN_OUTPUT_EXTENSIONS:
        return stem
    return filename


def desktop_dir() -> Path:
    return Path(os.path.expanduser("~/Desktop"))


def _looks_like_directory(path: Path, raw: str) -> bool:
    return path.is_dir() or raw.endswith(("/", "\\"))


def resolve_output_path(
    extension: str,
    ssid: str,
    output: str | None = None,
    filename: str = "",
    desktop: Path | None = None,
) -> Path:
    """Compute where an export is written.

    ``output`` may name a directory (joined with the base file name) or a file
    (its extension is forced to ``extension``). Without it the file goes to the
    desktop. ``filename`` overrides the SSID-derived base name.
    """
    base_name = strip_known_extension(filename.strip()) if filename.strip() else default_base_name(ssid)
    if output:
        path = Path(output).expanduser()
        if _looks_like_directory(path, output):
            return path / f"{base_name}.{extension}"
        return path.with_suffix(f".{extension}")
    return (desktop or desktop_dir()) / f"{base_name}.{extension}"
