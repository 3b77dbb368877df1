"""Configuration manager for thener user settings stored as TOML."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger(__name__)

BASE_DIR = Path(os.environ.get("THENER_HOME", str(Path.home() / ".thener"))).expanduser()
CONFIG_FILE = BASE_DIR / "config.toml"

DEFAULT_RENDERER_CONFIG: Dict[str, Any] = {
    "mmdc_path": "",
    "background_color": "transparent",
}

DEFAULT_PDF_CONFIG: Dict[str, Any] = {
    "browser_path": "",
}


def load_full_config() -> Dict[str, Any]:
    """Load the entire TOML config (all sections).

    A missing file yields an empty dict. An unreadable or malformed file
    is reported and treated as empty so the defaults apply.
    """
    if not CONFIG_FILE.exists():
        return {}
    try:
        with open(CONFIG_FILE, "r", encoding="utf-8") as f:
            return toml.load(f)
    except (OSError, toml.TomlDecodeError) as exc:
        logger.warning("Ignoring unreadable config %s: %s", CONFIG_FILE, exc)
        return {}


def _save_full_config(config: Dict[str, Any]) -> bool:
    """Write entire config dict to TOML file, preserving all sections."""
    try:
        CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            toml.dump(config, f)
        return True
    except OSError as exc:
        logger.warning("Could not write config %s: %s", CONFIG_FILE, exc)
        return False


# ------------------------------------------------------------------
# Diagram renderer configuration
# ------------------------------------------------------------------

def load_renderer_config() -> Dict[str, Any]:
    """Load the ``[renderer]`` section merged over its defaults."""
    merged = DEFAULT_RENDERER_CONFIG.copy()
    merged.update(load_full_config().get("renderer", {}))
    return merged


def save_renderer_config(
    mmdc_path: str = "",
    background_color: str = "transparent",
    timeout: Optional[float] = None,
) -> bool:
    """Save Mermaid renderer settings to the config file.

    Preserves the ``[pdf]`` section and any other section in the file.

    Args:
        mmdc_path: Explicit path to the ``mmdc`` executable ("" = search PATH).
        background_color: Background passed to ``mmdc --backgroundColor``.
        timeout: Seconds to wait for one diagram, or None to wait forever.

    Returns:
        True if saved successfully, False otherwise.
    """
    config = load_full_config()
    config["renderer"] = {
        "mmdc_path": mmdc_path,
        "background_color": background_color,
    }
    if timeout is not None:
        config["renderer"]["timeout"] = timeout
    return _save_full_config(config)


# ------------------------------------------------------------------
# PDF export configuration
# ------------------------------------------------------------------

def load_pdf_config() -> Dict[str, Any]:
    """Load the ``[pdf]`` section merged over its defaults."""
    merged = DEFAULT_PDF_CONFIG.copy()
    merged.update(load_full_config().get("pdf", {}))
    return merged


def save_pdf_config(browser_path: str) -> bool:
    """Save the headless browser path used for PDF export."""
    config = load_full_config()
    config["pdf"] = {"browser_path": browser_path}
    return _save_full_config(config)


def clear_config() -> bool:
    """Remove renderer and PDF settings, resetting both to defaults."""
    config = load_full_config()
    config.pop("renderer", None)
    config.pop("pdf", None)
    return _save_full_config(config)
