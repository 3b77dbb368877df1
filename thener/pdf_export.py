"""Print an HTML file to PDF with a headless Chromium-family browser.

Page size and margins come from the document's own CSS (``@page``), so a
template controls the printed layout.  Headers and footers are disabled
and backgrounds are printed.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path
from typing import Optional

from . import config
from .errors import PdfExportError

logger = logging.getLogger(__name__)

BROWSER_CANDIDATES = ("chromium", "chromium-browser", "google-chrome", "google-chrome-stable")


def find_browser() -> Optional[str]:
    """Find a headless-capable browser.

    Search order: thener settings (``[pdf] browser_path``), the
    THENER_BROWSER environment variable, then well-known names on PATH.
    """
    configured = config.BROWSER_PATH
    if configured and os.path.isfile(configured):
        return configured

    env_path = os.environ.get("THENER_BROWSER")
    if env_path and os.path.isfile(env_path):
        return env_path

    for name in BROWSER_CANDIDATES:
        found = shutil.which(name)
        if found:
            return found
    return None


def export_to_pdf(html_path: Path, output_path: Path, browser: Optional[str] = None) -> Path:
    executable = browser or find_browser()
    if executable is None:
        raise PdfExportError(
            "No headless browser found. Install Chromium or set THENER_BROWSER "
            "/ `thener config set-browser PATH`."
        )

    html_url = html_path.resolve().as_uri()
    output_path = output_path.resolve()
    cmd = [
        executable,
        "--headless",
        "--disable-gpu",
        "--no-pdf-header-footer",
        f"--print-to-pdf={output_path}",
        html_url,
    ]
    logger.debug("Browser command: %s", " ".join(cmd))

    try:
        result = subprocess.run(cmd, capture_output=True, text=True)
    except OSError as exc:
        raise PdfExportError(f"Could not run {executable}: {exc}") from exc

    if result.returncode != 0:
        raise PdfExportError(
            f"PDF export failed (exit {result.returncode}):\n{result.stderr.strip()}"
        )
    if not output_path.is_file():
        raise PdfExportError(f"Browser finished but wrote no PDF to {output_path}")

    return output_path
