"""Error types raised by the enumeration and export layers."""

from __future__ import annotations

from collections.abc import Sequence


class QrlanError(Exception):
    """Base class for all qrlan errors."""


class EnumerationError(QrlanError):
    """The native network-profile listing tool could not be used."""

    def __init__(self, message: str, command: Sequence[str] = (), stderr: str = "") -> None:
        super().__init__(message)
        self.command = tuple(command)
        self.stderr = stderr


class CredentialLookupError(QrlanError):
    """The native secret-store lookup tool could not be invoked."""

    def __init__(self, message: str, command: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.command = tuple(command)


class RenderError(QrlanError):
    """The payload does not fit into a QR symbol."""


class CompilerUnavailableError(QrlanError):
    """The typesetting compiler is not installed or does not run."""

    def __init__(self, remediation: str) -> None:
        super().__init__(remediation)
        self.remediation = remediation


class CompileError(QrlanError):
    """The typesetting compiler exited with a failure status."""

    def __init__(
        self,
        returncode: int,
        log: str,
        stdout: str,
        stderr: str,
    ) -> None:
        self.returncode = returncode
        self.log = log
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(
            f"pdflatex execution failed with status: {returncode}.\n"
            f"Stdout:\n{stdout}\n"
            f"Stderr:\n{stderr}\n"
            f"Log content:\n{log}"
        )
