"""QR image generation helpers."""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M
from qrcode.exceptions import DataOverflowError
from qrcode.image.pil import PilImage
from qrcode.image.svg import SvgPathImage

from qrlan.constants import (
    DEFAULT_QR_BACKGROUND_COLOR,
    DEFAULT_QR_BORDER,
    DEFAULT_QR_FILL_COLOR,
    MAX_QR_DIMENSION,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedCode:
    """A rasterized QR symbol and the module matrix it was drawn from."""

    matrix: list[list[bool]]
    module_size: int
    image: Image.Image

    @property
    def size(self) -> int:
        return self.image.width


def _build_qr(payload: str, box_size: int = 1) -> qrcode.QRCode | None:
    """Encode the payload at the smallest version that fits, or None if none does."""
    qr = qrcode.QRCode(
        version=None,
        error_correction=ERROR_CORRECT_M,
        box_size=box_size,
        border=DEFAULT_QR_BORDER,
    )
    qr.add_data(payload)
    try:
        qr.make(fit=True)
    except (DataOverflowError, ValueError):
        # qrcode 8 rejects version 41 with ValueError before DataOverflowError
        logger.debug("Payload of %d characters exceeds QR capacity", len(payload))
        return None
    return qr


def module_scale(modules: int, max_dimension: int = MAX_QR_DIMENSION) -> int:
    """Largest whole pixel size per module that keeps the image within the cap."""
    return max(1, max_dimension // modules)


def generate_qr_image(payload: str, max_dimension: int = MAX_QR_DIMENSION) -> RenderedCode | None:
    """Rasterize the payload, capped at ``max_dimension`` pixels per side."""
    qr = _build_qr(payload)
    if qr is None:
        return None
    matrix = qr.get_matrix()
    qr.box_size = module_scale(len(matrix), max_dimension)
    image_factory = qr.make_image(
        image_factory=PilImage,
        fill_color=DEFAULT_QR_FILL_COLOR,
        back_color=DEFAULT_QR_BACKGROUND_COLOR,
    )
    image: Image.Image = image_factory.get_image().convert("L")
    return RenderedCode(matrix=matrix, module_size=qr.box_size, image=image)


def render_console(payload: str) -> str | None:
    """Render the payload as half-height block characters for a terminal."""
    qr = _build_qr(payload)
    if qr is None:
        return None
    buffer = io.StringIO()
    qr.print_ascii(out=buffer, invert=True)
    return buffer.getvalue().rstrip("\n")


def render_svg(payload: str) -> str | None:
    """Render the payload as SVG path data straight from the module matrix."""
    qr = _build_qr(payload, box_size=10)
    if qr is None:
        return None
    svg = qr.make_image(image_factory=SvgPathImage)
    return svg.to_string(encoding="unicode")


def save_qr_image(image: Image.Image, file_path: str, image_format: str | None = None) -> None:
    """Persist a QR image to disk."""
    image.save(file_path, format=image_format)
