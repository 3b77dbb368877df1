"""Data models shared by the compiler and the project builder."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .file_utils import read_text


@dataclass(frozen=True)
class DocumentSource:
    path: Path
    text: str

    @classmethod
    def load(cls, path: Path) -> "DocumentSource":
        return cls(path=path, text=read_text(path))


@dataclass
class Project:
    """A loaded project file with every path made absolute.

    ``location`` is the directory holding the project file; ``root`` is
    the content directory (the file's ``path`` key) resolved against it.
    The remaining paths are relative to ``root``, as written in the file.
    """

    location: Path
    root: Path
    assets: Path
    entry: Path
    template: Path
    output: Path

    @classmethod
    def from_mapping(cls, data: Dict[str, Any], location: Path) -> "Project":
        root = Path(os.path.normpath(location / (data.get("path") or ".")))
        return cls(
            location=location,
            root=root,
            assets=Path(data["assets"]),
            entry=Path(data["entry"]),
            template=Path(data["template"]),
            output=Path(data.get("output") or "./build"),
        )

    @property
    def entry_path(self) -> Path:
        return Path(os.path.normpath(self.root / self.entry))

    @property
    def template_path(self) -> Path:
        return Path(os.path.normpath(self.root / self.template))

    @property
    def assets_path(self) -> Path:
        return Path(os.path.normpath(self.root / self.assets))

    @property
    def html_dir(self) -> Path:
        return Path(os.path.normpath(self.root / self.output / "html"))

    @property
    def pdf_dir(self) -> Path:
        return Path(os.path.normpath(self.root / self.output / "pdf"))


@dataclass
class BuildResult:
    html_path: Path
    pdf_path: Optional[Path] = None
