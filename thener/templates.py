"""HTML template substitution for compiled documents."""

from __future__ import annotations

from pathlib import Path

from .errors import FileReadError, TemplateError
from .file_utils import read_text

CONTENT_VARIABLE = "contenido"


def resolve_variable(variable_name: str, content: str, variable_value: str) -> str:
    """Replace every ``#{variable_name}#`` placeholder in *content*."""
    return content.replace(f"#{{{variable_name}}}#", variable_value)


def resolve_template(template_path: Path, content_html: str) -> str:
    """Load the template at *template_path* and slot *content_html* into it."""
    try:
        template = read_text(template_path)
    except FileReadError as exc:
        raise TemplateError(f"Could not load template {template_path}") from exc
    return resolve_variable(CONTENT_VARIABLE, template, content_html)
