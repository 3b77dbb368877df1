"""
Render Mermaid diagram source to SVG with the Mermaid CLI (``mmdc``).

The source is piped to ``mmdc`` on stdin and the SVG is written to a
private temporary directory, read back, and the directory removed.
Removing that directory is best-effort: a failure is logged and ignored.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from pathlib import Path
from typing import Callable, Optional

from . import config
from .errors import RenderError

logger = logging.getLogger(__name__)

DiagramRenderer = Callable[[str], str]


def find_mmdc() -> Optional[str]:
    """Find the Mermaid CLI (mmdc) executable.

    Search order:
        1. thener settings (``[renderer] mmdc_path``)
        2. MMDC_PATH environment variable
        3. mmdc on system PATH

    Returns:
        Path to mmdc executable if found, None otherwise.
    """
    configured = config.MMDC_PATH
    if configured and os.path.isfile(configured):
        return configured

    env_path = os.environ.get("MMDC_PATH")
    if env_path and os.path.isfile(env_path):
        return env_path

    return shutil.which("mmdc")


def _remove_temp_dir(tmp_dir: str) -> None:
    try:
        shutil.rmtree(tmp_dir)
    except OSError as exc:
        logger.warning("Could not remove temporary directory %s: %s", tmp_dir, exc)


def render_mermaid_svg(
    code: str,
    mmdc: Optional[str] = None,
    background_color: Optional[str] = None,
    timeout: Optional[float] = None,
) -> str:
    """Render Mermaid source to an SVG document.

    Args:
        code: Mermaid diagram source.
        mmdc: Explicit ``mmdc`` executable; searched for when omitted.
        background_color: SVG background (default from settings).
        timeout: Seconds to wait (default from settings; None waits forever).

    Returns:
        The SVG markup produced by ``mmdc``.

    Raises:
        RenderError: If mmdc cannot be found, exits non-zero, times out,
            or leaves no readable SVG behind.
    """
    executable = mmdc or find_mmdc()
    if executable is None:
        raise RenderError(
            "Mermaid CLI (mmdc) not found. "
            "Install with: npm install -g @mermaid-js/mermaid-cli, "
            "or set MMDC_PATH / `thener config set-renderer --mmdc PATH`."
        )
    if background_color is None:
        background_color = config.MERMAID_BACKGROUND
    if timeout is None:
        timeout = config.RENDER_TIMEOUT

    tmp_dir = tempfile.mkdtemp(prefix="thener_mmd_")
    output = Path(tmp_dir) / "graph.svg"
    cmd = [
        executable,
        "--input", "-",
        "--backgroundColor", background_color,
        "--output", str(output),
    ]
    logger.debug("mmdc command: %s", " ".join(cmd))

    try:
        try:
            result = subprocess.run(
                cmd,
                input=code,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as exc:
            raise RenderError(f"mmdc did not finish within {timeout} seconds") from exc
        except OSError as exc:
            raise RenderError(f"Could not run mmdc: {exc}") from exc

        if result.returncode != 0:
            raise RenderError(
                f"mmdc rendering failed (exit {result.returncode}):\n{result.stderr.strip()}",
                stderr=result.stderr,
            )

        try:
            return output.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise RenderError(f"mmdc produced no readable SVG output: {exc}") from exc
    finally:
        _remove_temp_dir(tmp_dir)
