"""Error taxonomy for project compilation.

Every error below is fatal to a compile: it propagates unchanged to the
command line, which reports it and exits before any output file is written.

The one fail-open path is cleanup of the diagram renderer's temporary
directory (see ``thener.diagrams``): a failure there is logged and dropped.
Resolving imports never touches the process working directory, so there is
no directory to restore and nothing else is swallowed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ThenerError(Exception):
    """Base class for all compile failures."""


class ImportDepthExceeded(ThenerError):
    """Nested ``@import`` directives went deeper than the allowed maximum."""

    def __init__(self, file_name: str, depth: int, max_depth: int) -> None:
        super().__init__(
            f"Import depth exceeded while importing {file_name} "
            f"(depth {depth}, maximum {max_depth})"
        )
        self.file_name = file_name
        self.depth = depth
        self.max_depth = max_depth


class FileReadError(ThenerError):
    """A referenced document is missing or unreadable."""

    def __init__(self, path: Path, reason: str = "") -> None:
        message = f"Could not read file {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.path = path


class DirectoryResolutionError(ThenerError):
    """A document's containing directory cannot be determined or used."""


class PathEncodingError(ThenerError):
    """A resolved path cannot be represented as UTF-8 text."""


class RenderError(ThenerError):
    """The external diagram renderer failed or produced no readable output."""

    def __init__(self, message: str, stderr: Optional[str] = None) -> None:
        super().__init__(message)
        self.stderr = stderr


class ProjectConfigError(ThenerError):
    """The project file is missing, malformed, or incomplete."""


class TemplateError(ThenerError):
    """The HTML template could not be loaded."""


class PdfExportError(ThenerError):
    """The headless browser could not produce a PDF."""
