"""Path helpers shared by the preprocessor and the project builder."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .errors import FileReadError, PathEncodingError

PathLike = Union[str, Path]


def try_absolute(path_name: PathLike, base_path: Optional[PathLike] = None) -> Path:
    """Return *path_name* as a normalized absolute path.

    Relative paths are joined onto *base_path* (default: the working
    directory).  ``..`` segments are collapsed lexically and symlinks are
    left alone, so the result names the same entry the user wrote.
    """
    path = Path(path_name)
    if not path.is_absolute():
        path = Path(base_path if base_path is not None else os.getcwd()) / path
    absolute = Path(os.path.normpath(path))
    path_text(absolute)
    return absolute


def path_text(path: PathLike) -> str:
    """Render *path* as text, rejecting names that are not valid UTF-8."""
    text = os.fspath(path)
    try:
        text.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise PathEncodingError(f"Path is not valid UTF-8: {text!r}") from exc
    return text


def read_text(path: Path) -> str:
    """Read a UTF-8 document, mapping any failure to ``FileReadError``."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise FileReadError(path, str(exc)) from exc
