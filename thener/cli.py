"""Typer-based CLI for compiling thener projects."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__
from .cli_config import config_app
from .compiler import markdown_to_html
from .config import DEFAULT_PROJECT_FILE, OUTPUT_FORMATS
from .errors import ThenerError
from .models import DocumentSource
from .preprocessor import MarkdownPreprocessor
from .project import build_project, read_configuration

logger = logging.getLogger(__name__)

console = Console()

app = typer.Typer(
    help="📚 thener: compile multi-file markdown projects into HTML and PDF.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(config_app, name="config")


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"thener v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool, quiet: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING if quiet else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_time=False, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug output."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only show warnings and errors."),
):
    """thener: imports, annotations and Mermaid diagrams for markdown documents."""
    _configure_logging(verbose, quiet)


def _fail(exc: Exception) -> NoReturn:
    console.print(f"[red]✗[/red] {escape(str(exc))}", soft_wrap=True, highlight=False)
    logger.debug("Command failed", exc_info=True)
    raise typer.Exit(code=1)


def _emit(text: str, output: Optional[Path]) -> None:
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text, encoding="utf-8")
    console.print(f"[green]✓[/green] Wrote {escape(str(output))}", soft_wrap=True, highlight=False)


@app.command("build")
def build(
    project_file: Path = typer.Argument(
        Path(DEFAULT_PROJECT_FILE), dir_okay=False, help="Project file to build."
    ),
    fmt: str = typer.Option("pdf", "--format", "-f", help="Output format: pdf or html."),
):
    """Build a project into HTML and, for pdf, a PDF next to it.

    Example:
      thener build project.thn
      thener build docs/project.thn --format html
    """
    fmt = fmt.lower()
    if fmt not in OUTPUT_FORMATS:
        raise typer.BadParameter(f"Unsupported output format: {fmt}. Use pdf or html.")

    try:
        project = read_configuration(project_file)
        result = build_project(project, output_format=fmt, console=console)
    except (ThenerError, OSError) as exc:
        _fail(exc)

    console.print(f"[green]✓[/green] HTML: {escape(str(result.html_path))}", soft_wrap=True, highlight=False)
    if result.pdf_path is not None:
        console.print(f"[green]✓[/green] PDF:  {escape(str(result.pdf_path))}", soft_wrap=True, highlight=False)


@app.command("preprocess")
def preprocess(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Entry markdown document."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of stdout."),
):
    """Print the composed document: imports and annotations expanded."""
    try:
        source = DocumentSource.load(file)
        composed = MarkdownPreprocessor().preprocess_markdown(source.path, source.text)
        _emit(composed, output)
    except (ThenerError, OSError) as exc:
        _fail(exc)


@app.command("render")
def render(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="Entry markdown document."),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of stdout."),
    no_diagrams: bool = typer.Option(False, "--no-diagrams", help="Leave Mermaid blocks as code."),
):
    """Compile a document to an HTML fragment, without template or assets."""
    try:
        source = DocumentSource.load(file)
        composed = MarkdownPreprocessor().preprocess_markdown(source.path, source.text)
        html = markdown_to_html(composed, render_diagrams=not no_diagrams)
        _emit(html, output)
    except (ThenerError, OSError) as exc:
        _fail(exc)


if __name__ == "__main__":
    app()
