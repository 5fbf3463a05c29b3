"""Dispatch of a Wi-Fi payload to the requested output format."""

from __future__ import annotations

import logging
import os
import stat
import sys
import tempfile
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TextIO

from qrlan.errors import RenderError
from qrlan.services.latex_export import TypesetExporter
from qrlan.services.qr_service import (
    generate_qr_image,
    render_console,
    render_svg,
    save_qr_image,
)

logger = logging.getLogger(__name__)


class ExportFormat(str, Enum):
    CONSOLE = "console"
    PNG = "png"
    JPG = "jpg"
    SVG = "svg"
    PDF = "pdf"

    @property
    def extension(self) -> str:
        return self.value


PIL_FORMATS = {ExportFormat.PNG: "PNG", ExportFormat.JPG: "JPEG"}


@dataclass(frozen=True)
class ExportTarget:
    format: ExportFormat
    destination: Path | None = None
    title: str | None = None
    template_path: Path | None = None


def center_label(label: str, width: int) -> str:
    """Pad ``label`` to sit centred under a block ``width`` characters wide."""
    if width > len(label):
        return " " * ((width - len(label)) // 2) + label
    return label


def format_console_output(qr_text: str, ssid: str) -> str:
    width = max((len(line) for line in qr_text.splitlines()), default=0)
    return f"{qr_text}\n{center_label(ssid, width)}"


def _new_file_mode(path: Path) -> int:
    """Mode a plain write would give ``path``: the existing mode, else the umask default."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_atomically(path: Path, write: Callable[[Path], None]) -> None:
    """Write through a temporary sibling file, then move it over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    os.close(fd)
    temp_path = Path(temp_name)
    try:
        # mkstemp creates the file as 0600
        os.chmod(temp_path, _new_file_mode(path))
        write(temp_path)
        os.replace(temp_path, path)
    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def _require_destination(target: ExportTarget) -> Path:
    if target.destination is None:
        raise ValueError(f"{target.format.value} export needs a destination path")
    return target.destination


def _export_console(payload: str, ssid: str, target: ExportTarget, out: TextIO) -> Path | None:
    qr_text = render_console(payload)
    if qr_text is None:
        raise RenderError("Error generating QR code data for console.")
    print(file=out)
    print(format_console_output(qr_text, ssid), file=out)
    return None


def _export_raster(payload: str, ssid: str, target: ExportTarget, out: TextIO) -> Path | None:
    destination = _require_destination(target)
    rendered = generate_qr_image(payload)
    if rendered is None:
        raise RenderError(f"Error creating QR code image for {target.format.value.upper()}.")
    image_format = PIL_FORMATS[target.format]
    _write_atomically(
        destination, lambda path: save_qr_image(rendered.image, str(path), image_format)
    )
    return destination


def _export_svg(payload: str, ssid: str, target: ExportTarget, out: TextIO) -> Path | None:
    destination = _require_destination(target)
    svg = render_svg(payload)
    if svg is None:
        raise RenderError("Error creating QR code SVG.")
    _write_atomically(destination, lambda path: path.write_text(svg, encoding="utf-8"))
    return destination


def _export_pdf(payload: str, ssid: str, target: ExportTarget, out: TextIO) -> Path | None:
    destination = _require_destination(target)
    exporter = TypesetExporter(template_path=target.template_path)
    exporter.check_available()
    rendered = generate_qr_image(payload)
    if rendered is None:
        raise RenderError("Error creating QR code image for PDF.")
    return exporter.export(rendered, destination, target.title or ssid)


EXPORTERS: dict[ExportFormat, Callable[[str, str, ExportTarget, TextIO], Path | None]] = {
    ExportFormat.CONSOLE: _export_console,
    ExportFormat.PNG: _export_raster,
    ExportFormat.JPG: _export_raster,
    ExportFormat.SVG: _export_svg,
    ExportFormat.PDF: _export_pdf,
}


def export_payload(
    payload: str, ssid: str, target: ExportTarget, out: TextIO | None = None
) -> Path | None:
    """Write the payload in the target's format and return the file written.

    Console output returns None. Image formats replace an existing file
    atomically; the PDF path removes an existing file before moving the
    compiled document into place.
    """
    logger.info("Exporting %s as %s", ssid, target.format.value)
    return EXPORTERS[target.format](payload, ssid, target, out or sys.stdout)
