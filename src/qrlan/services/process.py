"""Subprocess helper shared by the platform providers and the document exporter."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from qrlan.constants import COMMAND_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)


def run_command(
    args: Sequence[str],
    timeout: float = COMMAND_TIMEOUT_SECONDS,
    cwd: Path | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a native tool and capture its output.

    Raises OSError when the tool cannot be launched or does not finish in time;
    a failure exit status is returned to the caller, not raised.
    """
    logger.debug("Running %s", " ".join(args))
    try:
        return subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            errors="replace",
            timeout=timeout,
            cwd=cwd,
            check=False,
        )
    except subprocess.TimeoutExpired as exc:
        raise OSError(f"'{args[0]}' did not finish within {timeout} seconds") from exc
