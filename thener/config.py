"""Configuration paths and settings for thener."""

from __future__ import annotations

from .config_manager import load_pdf_config, load_renderer_config

DEFAULT_PROJECT_FILE = "project.thn"
DOCUMENT_EXTENSION = ".md"
MAX_IMPORT_DEPTH = 100
OUTPUT_FORMATS = ("pdf", "html")

# Loaded from ~/.thener/config.toml (set via `thener config ...`)
_renderer_config = load_renderer_config()
_pdf_config = load_pdf_config()

# Mermaid CLI used to render ```mermaid blocks
MMDC_PATH = _renderer_config.get("mmdc_path", "")
MERMAID_BACKGROUND = _renderer_config.get("background_color", "transparent")
RENDER_TIMEOUT = _renderer_config.get("timeout")

# Headless browser used for PDF export
BROWSER_PATH = _pdf_config.get("browser_path", "")
