"""Recursive ``@import`` expansion into a single composed document.

Each file's lines are copied in order; ``@import <path>`` lines are replaced
by the fully expanded content of the referenced file and every other line
goes through the annotation expander.  The expansion of every file is
bracketed by a pair of HTML comments naming it, so the composed document
shows where each piece came from:

    <!-- Importado del archivo start.md -->
    ...
    <!-- fin del archivo start.md -->

Imports are resolved against the directory of the file that contains them.
That directory is passed down explicitly to each recursive call; the
process working directory is never changed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from .annotations import expand
from .config import DOCUMENT_EXTENSION, MAX_IMPORT_DEPTH
from .errors import DirectoryResolutionError, FileReadError, ImportDepthExceeded
from .file_utils import path_text, try_absolute
from .models import DocumentSource

logger = logging.getLogger(__name__)

IMPORT_PREFIX = "@import "
IMPORT_START_MARKER = "<!-- Importado del archivo {name} -->"
IMPORT_END_MARKER = "<!-- fin del archivo {name} -->"


def _source_lines(code: str) -> List[str]:
    # Split on "\n" only (with an optional "\r"), dropping one trailing newline.
    lines = code.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


class MarkdownPreprocessor:
    """Expands imports and annotations, bounded by ``max_import_depth``."""

    def __init__(self, max_import_depth: int = MAX_IMPORT_DEPTH) -> None:
        self.max_import_depth = max_import_depth

    def preprocess_markdown(
        self,
        name: Union[str, Path],
        code: str,
        base_dir: Optional[Path] = None,
    ) -> str:
        """Compose the document rooted at *name* whose text is *code*.

        Args:
            name: Path of the entry document.  A bare file name is taken
                to live in *base_dir*.
            code: Text of the entry document.
            base_dir: Directory relative names resolve against
                (default: the working directory).

        Returns:
            The composed document.

        Raises:
            ImportDepthExceeded, FileReadError, DirectoryResolutionError,
            PathEncodingError: on any failure; nothing partial is returned.
        """
        return self.preprocess(Path(name), code, 0, base_dir)

    def preprocess(
        self,
        file_name: Path,
        code: str,
        import_depth: int = 0,
        base_dir: Optional[Path] = None,
    ) -> str:
        if import_depth >= self.max_import_depth:
            raise ImportDepthExceeded(path_text(file_name), import_depth, self.max_import_depth)

        logger.info("Preprocessing %s", path_text(file_name))
        display_name = self._display_name(file_name)
        container = self._container_dir(file_name, base_dir)

        result = [IMPORT_START_MARKER.format(name=display_name)]
        for line in _source_lines(code):
            if line.startswith(IMPORT_PREFIX):
                result.append(self._expand_import(line[len(IMPORT_PREFIX):], container, import_depth))
            else:
                result.append(expand(line))
        result.append(IMPORT_END_MARKER.format(name=display_name))

        return "\n".join(result)

    def _expand_import(self, target: str, container: Path, import_depth: int) -> str:
        target = target.strip()
        if not target:
            raise FileReadError(container, "@import without a path")

        try:
            file_path = try_absolute(target, container).with_suffix(DOCUMENT_EXTENSION)
        except ValueError as exc:
            raise FileReadError(Path(target), str(exc)) from exc
        logger.info("Importing %s", path_text(file_path))

        source = DocumentSource.load(file_path)
        return self.preprocess(source.path, source.text, import_depth + 1, container)

    @staticmethod
    def _display_name(file_name: Path) -> str:
        name = file_name.name
        if not name or name in (".", ".."):
            raise DirectoryResolutionError(f"Could not determine the file name of {file_name}")
        return path_text(name)

    @staticmethod
    def _container_dir(file_name: Path, base_dir: Optional[Path]) -> Path:
        container = try_absolute(file_name.parent, base_dir)
        if not container.is_dir():
            raise DirectoryResolutionError(f"Could not read the directory {container}")
        return container
