"""Command line argument parsing."""

from __future__ import annotations

import argparse
from importlib import metadata
from pathlib import Path

from qrlan.services.export_service import ExportFormat


def _version() -> str:
    try:
        return metadata.version("qrlan")
    except metadata.PackageNotFoundError:
        return "dev"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qrlan",
        description="Create a QR code that joins a known Wi-Fi network.",
    )
    parser.add_argument(
        "-o",
        "--output-path",
        help=(
            "Directory or file to write to. A directory gets an SSID-based file name; "
            "defaults to the Desktop."
        ),
    )
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {_version()}")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--show", action="store_true", help="Display the QR code in the console")
    mode.add_argument("--png", action="store_true", help="Generate a PNG image")
    mode.add_argument("--jpg", action="store_true", help="Generate a JPG image")
    mode.add_argument("--svg", action="store_true", help="Generate an SVG image")
    parser.add_argument(
        "--design",
        type=Path,
        help="Custom LaTeX template for PDF output (ignored for other formats)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Increase log output (-v info, -vv debug)",
    )
    return parser


def export_format(args: argparse.Namespace) -> ExportFormat:
    """Map the mutually exclusive mode flags to an output format; PDF by default."""
    if args.show:
        return ExportFormat.CONSOLE
    if args.png:
        return ExportFormat.PNG
    if args.jpg:
        return ExportFormat.JPG
    if args.svg:
        return ExportFormat.SVG
    return ExportFormat.PDF
