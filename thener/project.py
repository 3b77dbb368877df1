"""Project file loading and the full build: compile, template, assets, PDF.

A project file (conventionally ``project.thn``) is JSON::

    {
        "path": ".",
        "assets": "./assets",
        "template": "./templates/main.html",
        "output": "./build",
        "entry": "start.md"
    }

Every path is relative to the directory holding the project file.  A build
produces::

    {output}/html/index.html
    {output}/html/{assets}/...
    {output}/pdf/index.pdf        (pdf format only)
"""

from __future__ import annotations

import json
import logging
import shutil
from pathlib import Path
from typing import List, Optional, Union

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn

from .compiler import markdown_to_html
from .config import OUTPUT_FORMATS
from .diagrams import DiagramRenderer
from .errors import FileReadError, ProjectConfigError
from .file_utils import path_text, read_text, try_absolute
from .models import BuildResult, DocumentSource, Project
from .pdf_export import export_to_pdf
from .preprocessor import MarkdownPreprocessor
from .templates import resolve_template

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ("assets", "entry", "template")
PATH_KEYS = ("path",) + REQUIRED_KEYS + ("output",)


def read_configuration(project_file: Union[str, Path]) -> Project:
    """Load a project file.

    Raises:
        ProjectConfigError: If the file is missing, not a JSON object,
            lacks one of the required keys, or holds a path that is not a
            string.
    """
    project_path = try_absolute(project_file)
    logger.info("Reading project %s", path_text(project_path))

    try:
        data = json.loads(read_text(project_path))
    except FileReadError as exc:
        raise ProjectConfigError(f"Could not read project file {project_path}") from exc
    except json.JSONDecodeError as exc:
        raise ProjectConfigError(f"Invalid project file {project_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ProjectConfigError(f"Project file {project_path} must contain a JSON object")
    missing = [key for key in REQUIRED_KEYS if not data.get(key)]
    if missing:
        raise ProjectConfigError(
            f"Project file {project_path} is missing: {', '.join(missing)}"
        )
    invalid = [key for key in PATH_KEYS if data.get(key) is not None and not isinstance(data[key], str)]
    if invalid:
        raise ProjectConfigError(
            f"Project file {project_path} has non-string paths: {', '.join(invalid)}"
        )

    return Project.from_mapping(data, location=project_path.parent)


def compile_document(entry_path: Path, renderer: Optional[DiagramRenderer] = None) -> str:
    """Preprocess and compile the document rooted at *entry_path* to HTML."""
    entry = DocumentSource.load(entry_path)
    logger.info("Preprocessing markdown")
    composed = MarkdownPreprocessor().preprocess_markdown(entry.path, entry.text)
    logger.info("Generating HTML")
    return markdown_to_html(composed, renderer=renderer)


def _asset_files(source: Path) -> List[Path]:
    return sorted(p for p in source.rglob("*") if p.is_file())


def copy_assets(source: Path, destination: Path, console: Optional[Console] = None) -> Path:
    """Copy the *source* directory into *destination*, overwriting files.

    Returns:
        The copied directory, ``destination / source.name``.
    """
    if not source.is_dir():
        raise ProjectConfigError(f"Assets directory not found: {source}")

    target = destination / source.name
    files = _asset_files(source)

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task("Copying assets", total=len(files))
        for file_path in files:
            relative = file_path.relative_to(source)
            progress.update(task, description=f"Copying {relative}")
            copied = target / relative
            copied.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(file_path, copied)
            logger.debug("Copied %s", relative)
            progress.advance(task)

    return target


def build_project(
    project: Project,
    output_format: str = "pdf",
    renderer: Optional[DiagramRenderer] = None,
    console: Optional[Console] = None,
) -> BuildResult:
    """Build *project* into its output directory.

    The document is compiled and templated before anything is written, so
    a compile error leaves the output directory untouched.
    """
    if output_format not in OUTPUT_FORMATS:
        raise ProjectConfigError(
            f"Unsupported output format: {output_format} (use {' or '.join(OUTPUT_FORMATS)})"
        )

    logger.info("Reading entry point")
    body = compile_document(project.entry_path, renderer=renderer)

    logger.info("Resolving template")
    page = resolve_template(project.template_path, body)

    logger.info("Creating build directory")
    project.html_dir.mkdir(parents=True, exist_ok=True)

    logger.info("Copying assets")
    copy_assets(project.assets_path, project.html_dir, console=console)

    logger.info("Writing HTML")
    html_path = project.html_dir / "index.html"
    html_path.write_text(page, encoding="utf-8")

    result = BuildResult(html_path=html_path)
    if output_format == "pdf":
        logger.info("Generating PDF")
        project.pdf_dir.mkdir(parents=True, exist_ok=True)
        result.pdf_path = export_to_pdf(html_path, project.pdf_dir / "index.pdf")

    logger.info("Done")
    return result
