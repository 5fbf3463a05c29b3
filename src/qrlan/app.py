"""Application entry point."""

from __future__ import annotations

import argparse
import logging
import sys

from qrlan import prompts
from qrlan.cli import build_parser, export_format
from qrlan.errors import (
    CompileError,
    CompilerUnavailableError,
    CredentialLookupError,
    EnumerationError,
    RenderError,
)
from qrlan.platforms.base import NetworkProvider, get_provider
from qrlan.services.export_service import ExportFormat, ExportTarget, export_payload
from qrlan.services.paths import resolve_output_path
from qrlan.services.wifi_payload import NetworkRecord, build_wifi_payload, resolve_security

logger = logging.getLogger(__name__)

LOG_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def configure_logging(verbosity: int) -> None:
    level = LOG_LEVELS[min(verbosity, len(LOG_LEVELS) - 1)]
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def choose_network(provider: NetworkProvider) -> NetworkRecord | int:
    """Return the network to export, or an exit code when there is none."""
    try:
        networks = provider.list_known_networks()
    except EnumerationError as exc:
        logger.warning("Error retrieving Wi-Fi networks: %s", exc)
        ssid = prompts.prompt_manual_ssid()
        if ssid is None:
            print("Exiting application due to error and no manual SSID entry.", file=sys.stderr)
            return 1
        return NetworkRecord(ssid=ssid)

    if not networks:
        print("No known Wi-Fi networks found.")
        ssid = prompts.prompt_manual_ssid()
        if ssid is None:
            print("Exiting application as no SSID was provided.")
            return 0
        return NetworkRecord(ssid=ssid)

    return prompts.select_network(networks)


def fill_credentials(network: NetworkRecord, provider: NetworkProvider) -> None:
    """Complete the password and security type of ``network`` in place."""
    if network.password is None:
        try:
            network.password = provider.resolve_password(network.ssid)
        except CredentialLookupError as exc:
            logger.warning("Error fetching password: %s. Will prompt user.", exc)
    if network.password is None:
        network.password = prompts.prompt_password(network.ssid)

    if network.security is not None:
        print(
            f"Automatically detected security type for '{network.ssid}': "
            f"{network.security.value}"
        )
    else:
        print(f"Could not automatically determine the security type for '{network.ssid}'.")
        if not network.password:
            print("No password was entered; assuming an open network ('nopass').")
    network.security = resolve_security(
        network.security, network.password, ask=prompts.prompt_security
    )


def build_target(args: argparse.Namespace, ssid: str) -> ExportTarget:
    """Turn flags and prompts into an export target."""
    fmt = export_format(args)
    if fmt is ExportFormat.CONSOLE:
        return ExportTarget(format=fmt)

    title = None
    if fmt is ExportFormat.PDF:
        title = prompts.prompt_title(ssid) or ssid
    filename = prompts.prompt_filename(ssid, fmt.extension)
    destination = resolve_output_path(fmt.extension, ssid, args.output_path, filename)
    if not args.output_path:
        print(f"No output path specified, saving to desktop: {destination}")
    return ExportTarget(
        format=fmt,
        destination=destination,
        title=title,
        template_path=args.design if fmt is ExportFormat.PDF else None,
    )


def run(args: argparse.Namespace, provider: NetworkProvider | None = None) -> int:
    """Run one export and return the process exit code."""
    provider = provider or get_provider()
    logger.debug("Using %s network provider", provider.name)

    chosen = choose_network(provider)
    if isinstance(chosen, int):
        return chosen
    network = chosen
    print(f"Selected network: {network.ssid}")

    fill_credentials(network, provider)
    target = build_target(args, network.ssid)
    payload = build_wifi_payload(network.ssid, network.password or "", network.security)

    try:
        written = export_payload(payload, network.ssid, target)
    except CompilerUnavailableError as exc:
        print(exc.remediation, file=sys.stderr)
        return 1
    except (RenderError, CompileError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error writing {target.format.value.upper()} output: {exc}", file=sys.stderr)
        return 1

    if written is not None:
        print(f"Successfully generated QR code {target.format.value.upper()}: {written}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Parse arguments, run the export flow, and return the exit code."""
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        return run(args)
    except (KeyboardInterrupt, EOFError):
        print(file=sys.stderr)
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
