"""Export pipeline tests."""

from __future__ import annotations

import io
import os
import stat
import subprocess
import sys
from collections.abc import Sequence
from pathlib import Path

import pytest
from PIL import Image
from pytest import MonkeyPatch

from qrlan.errors import CompilerUnavailableError, RenderError
from qrlan.services import latex_export
from qrlan.services.export_service import (
    ExportFormat,
    ExportTarget,
    center_label,
    export_payload,
    format_console_output,
)

SAMPLE_PAYLOAD = "WIFI:S:Office;T:WPA;P:secret;;"
OVERSIZED_PAYLOAD = "x" * 8000


def test_center_label_padding() -> None:
    """Ensure labels are centred with floor division and left-aligned when too wide."""
    assert center_label("abc", 10) == "   abc"
    assert center_label("abcd", 9) == "  abcd"
    assert center_label("abcdefghij", 10) == "abcdefghij"
    assert center_label("abcdefghijk", 10) == "abcdefghijk"


def test_console_export_prints_code_and_ssid() -> None:
    """Ensure console output is the block render followed by the centred SSID."""
    out = io.StringIO()
    result = export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.CONSOLE), out)

    assert result is None
    lines = out.getvalue().rstrip("\n").splitlines()
    width = max(len(line) for line in lines[1:-1])
    assert lines[0] == ""
    assert lines[-1] == " " * ((width - len("Office")) // 2) + "Office"


def test_format_console_output_wide_ssid() -> None:
    """Ensure an SSID wider than the code is printed without padding."""
    assert format_console_output("██\n██", "LongName") == "██\n██\nLongName"


@pytest.mark.parametrize(
    ("fmt", "pil_format"),
    [(ExportFormat.PNG, "PNG"), (ExportFormat.JPG, "JPEG")],
)
def test_raster_export_creates_directories(tmp_path: Path, fmt: ExportFormat, pil_format: str) -> None:
    """Ensure raster exports create missing folders and use the right codec."""
    destination = tmp_path / "nested" / "dir" / f"office.{fmt.extension}"

    written = export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(fmt, destination))

    assert written == destination
    with Image.open(destination) as image:
        assert image.format == pil_format
        assert image.width <= 2400
    assert [path.name for path in destination.parent.iterdir()] == [destination.name]


def test_raster_export_overwrites(tmp_path: Path) -> None:
    """Ensure an existing image is replaced."""
    destination = tmp_path / "office.png"
    destination.write_bytes(b"stale")

    export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.PNG, destination))

    with Image.open(destination) as image:
        assert image.format == "PNG"


def test_svg_export(tmp_path: Path) -> None:
    """Ensure SVG exports are written as text."""
    destination = tmp_path / "svg" / "office.svg"

    export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.SVG, destination))

    content = destination.read_text(encoding="utf-8")
    assert "<svg" in content
    assert "<path" in content


@pytest.mark.parametrize("fmt", [ExportFormat.CONSOLE, ExportFormat.PNG, ExportFormat.SVG])
def test_oversized_payload_raises_render_error(tmp_path: Path, fmt: ExportFormat) -> None:
    """Ensure an unencodable payload surfaces as RenderError and writes nothing."""
    destination = tmp_path / f"big.{fmt.extension}"
    with pytest.raises(RenderError):
        export_payload(OVERSIZED_PAYLOAD, "Big", ExportTarget(fmt, destination), io.StringIO())
    assert list(tmp_path.iterdir()) == []


def test_pdf_export_missing_compiler_touches_nothing(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Ensure a missing compiler stops the PDF path before any file I/O."""

    def missing(args: Sequence[str], **_: object) -> subprocess.CompletedProcess[str]:
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr(latex_export, "run_command", missing)
    destination = tmp_path / "new" / "office.pdf"

    with pytest.raises(CompilerUnavailableError):
        export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.PDF, destination))
    assert not destination.parent.exists()


def test_pdf_export_uses_ssid_as_default_title(tmp_path: Path, monkeypatch: MonkeyPatch) -> None:
    """Ensure the PDF title falls back to the SSID."""
    sources: list[str] = []

    def fake(args: Sequence[str], **_: object) -> subprocess.CompletedProcess[str]:
        if "--version" not in args:
            source = Path(args[-1])
            sources.append(source.read_text(encoding="utf-8"))
            source.with_suffix(".pdf").write_bytes(b"%PDF")
        return subprocess.CompletedProcess(list(args), 0, "", "")

    monkeypatch.setattr(latex_export, "run_command", fake)
    destination = tmp_path / "office.pdf"

    written = export_payload(SAMPLE_PAYLOAD, "Office_HQ", ExportTarget(ExportFormat.PDF, destination))

    assert written == destination.resolve()
    assert destination.read_bytes() == b"%PDF"
    assert r"Office\_HQ" in sources[0]


def test_file_formats_need_destination() -> None:
    """Ensure file exports without a destination are rejected."""
    with pytest.raises(ValueError):
        export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.PNG))


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_image_export_follows_umask(tmp_path: Path) -> None:
    """Ensure new image files get the umask default mode, like a plain write."""
    previous = os.umask(0o022)
    try:
        png = tmp_path / "office.png"
        svg = tmp_path / "office.svg"
        export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.PNG, png))
        export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.SVG, svg))
    finally:
        os.umask(previous)

    assert stat.S_IMODE(png.stat().st_mode) == 0o644
    assert stat.S_IMODE(svg.stat().st_mode) == 0o644


@pytest.mark.skipif(sys.platform == "win32", reason="POSIX permission bits")
def test_image_export_keeps_existing_mode(tmp_path: Path) -> None:
    """Ensure replacing a file keeps the mode it already had."""
    destination = tmp_path / "office.jpg"
    destination.write_bytes(b"stale")
    destination.chmod(0o640)

    export_payload(SAMPLE_PAYLOAD, "Office", ExportTarget(ExportFormat.JPG, destination))

    assert stat.S_IMODE(destination.stat().st_mode) == 0o640
