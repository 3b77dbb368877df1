"""`thener config` commands: inspect and change user settings."""

from __future__ import annotations

from typing import Optional

import typer

from . import config_manager
from .diagrams import find_mmdc
from .pdf_export import find_browser

config_app = typer.Typer(
    help="⚙️  Configuration: diagram renderer and PDF browser.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _show_value(label: str, value: Optional[str]) -> None:
    if value:
        typer.echo(f"  {label:<10}{typer.style(str(value), bold=True)}")
    else:
        typer.echo(f"  {label:<10}{typer.style('(not set)', dim=True)}")


@config_app.command("show")
def show_config():
    """Show renderer and PDF settings and the tools they resolve to."""
    renderer = config_manager.load_renderer_config()
    pdf = config_manager.load_pdf_config()

    typer.echo("")
    typer.echo(typer.style("  Diagram renderer", bold=True))
    _show_value("mmdc", renderer.get("mmdc_path"))
    _show_value("Found", find_mmdc())
    _show_value("Background", renderer.get("background_color"))
    timeout = renderer.get("timeout")
    _show_value("Timeout", f"{timeout}s" if timeout is not None else None)

    typer.echo("")
    typer.echo(typer.style("  PDF export", bold=True))
    _show_value("Browser", pdf.get("browser_path"))
    _show_value("Found", find_browser())

    typer.echo("")
    typer.echo(f"  Config    {typer.style(str(config_manager.CONFIG_FILE), dim=True)}")
    typer.echo("")


@config_app.command("set-renderer")
def set_renderer(
    mmdc: str = typer.Option("", "--mmdc", help="Path to the mmdc executable (empty = search PATH)."),
    background: str = typer.Option("transparent", "--background", "-b", help="Diagram background color."),
    timeout: Optional[float] = typer.Option(None, "--timeout", "-t", min=1, help="Seconds to wait per diagram."),
):
    """Configure the Mermaid renderer.

    Examples:
        thener config set-renderer --mmdc /usr/local/bin/mmdc
        thener config set-renderer -b white -t 60
    """
    if not config_manager.save_renderer_config(mmdc, background, timeout):
        typer.echo(f"Could not write {config_manager.CONFIG_FILE}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved renderer settings to {config_manager.CONFIG_FILE}")


@config_app.command("set-browser")
def set_browser(
    browser_path: str = typer.Argument(..., help="Path to a Chromium-family browser."),
):
    """Configure the headless browser used for PDF export."""
    if not config_manager.save_pdf_config(browser_path):
        typer.echo(f"Could not write {config_manager.CONFIG_FILE}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Saved browser settings to {config_manager.CONFIG_FILE}")


@config_app.command("reset")
def reset_config():
    """Clear renderer and PDF settings."""
    if not config_manager.clear_config():
        typer.echo(f"Could not write {config_manager.CONFIG_FILE}", err=True)
        raise typer.Exit(code=1)
    typer.echo("Settings reset to defaults.")
