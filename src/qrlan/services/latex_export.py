"""PDF export through a LaTeX compiler run in a scratch directory."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from qrlan.constants import (
    COMPILE_TIMEOUT_SECONDS,
    COMPILER_PROBE_TIMEOUT_SECONDS,
    IMAGE_PATH_PLACEHOLDER,
    LATEX_AUX_SUFFIXES,
    LATEX_COMPILER,
    LATEX_INSTALL_HINT_ALL,
    LATEX_INSTALL_HINTS,
    LATEX_MISSING_HEADER,
    TEMP_LATEX_FILENAME,
    TEMP_QR_IMAGE_FILENAME,
    TITLE_PLACEHOLDER,
)
from qrlan.errors import CompileError, CompilerUnavailableError
from qrlan.services.process import run_command
from qrlan.services.qr_service import RenderedCode, save_qr_image

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = Path(__file__).resolve().parents[1] / "resources" / "layouts" / "standard.tex"

LATEX_SPECIAL_CHARS = {
    "\\": r"\textbackslash{}",
    "{": r"\{",
    "}": r"\}",
    "_": r"\_",
    "^": r"\textasciicircum{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "~": r"\textasciitilde{}",
}


class TypesetStage(Enum):
    START = "start"
    WORKSPACE_PREPARED = "workspace prepared"
    IMAGE_STAGED = "image staged"
    SOURCE_GENERATED = "source generated"
    COMPILED = "compiled"
    FINAL_PATH_WRITTEN = "final path written"
    CLEANED_UP = "cleaned up"
    FAILED = "failed"


def escape_latex(text: str) -> str:
    """Escape characters with special meaning in LaTeX.

    Each character is replaced exactly once, so the braces of an inserted
    ``\\textbackslash{}`` are never escaped again.
    """
    return "".join(LATEX_SPECIAL_CHARS.get(char, char) for char in text)


def remediation_text(platform: str | None = None) -> str:
    """Installation advice for a missing LaTeX distribution."""
    platform = platform or sys.platform
    key = "linux" if platform.startswith("linux") else platform
    hint = LATEX_INSTALL_HINTS.get(key, LATEX_INSTALL_HINT_ALL)
    return f"Error:\n{LATEX_MISSING_HEADER}\n\n{hint}"


def load_template(path: Path | None = None) -> str:
    """Read a document template, warning when a placeholder is missing."""
    template_path = path or DEFAULT_TEMPLATE
    template = template_path.read_text(encoding="utf-8")
    for placeholder in (TITLE_PLACEHOLDER, IMAGE_PATH_PLACEHOLDER):
        if placeholder not in template:
            logger.warning("Template %s has no %s placeholder", template_path, placeholder)
    return template


def render_document(template: str, title: str, image_name: str) -> str:
    return template.replace(TITLE_PLACEHOLDER, escape_latex(title)).replace(
        IMAGE_PATH_PLACEHOLDER, image_name
    )


@dataclass(frozen=True)
class ScratchWorkspace:
    """Fixed-name staging files inside one directory."""

    directory: Path

    @property
    def image_path(self) -> Path:
        return self.directory / TEMP_QR_IMAGE_FILENAME

    @property
    def source_path(self) -> Path:
        return self.directory / TEMP_LATEX_FILENAME

    def artifact(self, suffix: str) -> Path:
        """Path of a compiler output named after the source file."""
        return self.directory / f"{self.source_path.stem}{suffix}"

    def staged_files(self) -> list[Path]:
        return [self.image_path, self.source_path] + [
            self.artifact(suffix) for suffix in LATEX_AUX_SUFFIXES
        ]

    def cleanup(self) -> None:
        """Remove every staged file; failures are logged and ignored."""
        for path in self.staged_files():
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.debug("Could not remove %s: %s", path, exc)


@contextmanager
def scratch_workspace(directory: Path) -> Iterator[ScratchWorkspace]:
    """Create ``directory`` if needed and clear the staged files on exit."""
    directory.mkdir(parents=True, exist_ok=True)
    workspace = ScratchWorkspace(directory)
    try:
        yield workspace
    finally:
        workspace.cleanup()


class TypesetExporter:
    """Compiles a QR image into a PDF document using pdflatex."""

    def __init__(self, compiler: str = LATEX_COMPILER, template_path: Path | None = None) -> None:
        self.compiler = compiler
        self.template_path = template_path
        self.stage = TypesetStage.START

    def _advance(self, stage: TypesetStage) -> None:
        logger.debug("Typesetting: %s -> %s", self.stage.value, stage.value)
        self.stage = stage

    def check_available(self) -> None:
        """Raise CompilerUnavailableError unless ``<compiler> --version`` succeeds."""
        try:
            result = run_command(
                (self.compiler, "--version"), timeout=COMPILER_PROBE_TIMEOUT_SECONDS
            )
        except OSError as exc:
            raise CompilerUnavailableError(remediation_text()) from exc
        if result.returncode != 0:
            raise CompilerUnavailableError(remediation_text())

    def export(self, rendered: RenderedCode, output_path: Path, title: str) -> Path:
        """Write ``rendered`` as a titled PDF to ``output_path``.

        The staged image, the generated source and the compiler's sidecar files
        are removed whether or not compilation succeeds.
        """
        self.stage = TypesetStage.START
        template = load_template(self.template_path)
        output_path = output_path.resolve()
        try:
            with scratch_workspace(output_path.parent) as workspace:
                self._advance(TypesetStage.WORKSPACE_PREPARED)

                save_qr_image(rendered.image, str(workspace.image_path), "PNG")
                self._advance(TypesetStage.IMAGE_STAGED)

                document = render_document(template, title, workspace.image_path.name)
                workspace.source_path.write_text(document, encoding="utf-8")
                self._advance(TypesetStage.SOURCE_GENERATED)

                self._compile(workspace)
                self._advance(TypesetStage.COMPILED)

                if output_path.exists():
                    output_path.unlink()
                workspace.artifact(".pdf").replace(output_path)
                self._advance(TypesetStage.FINAL_PATH_WRITTEN)
        except Exception:
            self._advance(TypesetStage.FAILED)
            raise
        self._advance(TypesetStage.CLEANED_UP)
        return output_path

    def _compile(self, workspace: ScratchWorkspace) -> None:
        result = run_command(
            (
                self.compiler,
                "-interaction=nonstopmode",
                "-output-directory",
                str(workspace.directory),
                str(workspace.source_path),
            ),
            timeout=COMPILE_TIMEOUT_SECONDS,
            cwd=workspace.directory,
        )
        if result.returncode == 0:
            return
        log_path = workspace.artifact(".log")
        try:
            log = log_path.read_text(encoding="utf-8", errors="replace")
        except OSError:
            log = "Could not read LaTeX log file."
        raise CompileError(result.returncode, log, result.stdout, result.stderr)
