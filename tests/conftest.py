"""Pytest configuration and fixtures for thener tests."""

import shutil
import tempfile
from pathlib import Path
from typing import Callable, Generator, List

import pytest


@pytest.fixture(autouse=True)
def _isolate_settings(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's ~/.thener settings and tools.

    Settings are loaded at import time, so the loaded values are reset
    here as well as the file the config manager reads and writes.
    """
    settings_dir = tmp_path_factory.mktemp("thener_home")
    monkeypatch.setattr("thener.config_manager.CONFIG_FILE", settings_dir / "config.toml")
    monkeypatch.setattr("thener.config.MMDC_PATH", "")
    monkeypatch.setattr("thener.config.MERMAID_BACKGROUND", "transparent")
    monkeypatch.setattr("thener.config.RENDER_TIMEOUT", None)
    monkeypatch.setattr("thener.config.BROWSER_PATH", "")
    monkeypatch.delenv("MMDC_PATH", raising=False)
    monkeypatch.delenv("THENER_BROWSER", raising=False)


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sample_project_path() -> Path:
    """Get path to sample test project."""
    return Path(__file__).parent / "fixtures" / "sample_project"


@pytest.fixture
def project_copy(temp_dir: Path, sample_project_path: Path) -> Path:
    """A writable copy of the sample project."""
    target = temp_dir / "project"
    shutil.copytree(sample_project_path, target)
    return target


@pytest.fixture
def write_doc(temp_dir: Path) -> Callable[[str, str], Path]:
    """Write a document under the temp dir, creating parent directories."""

    def _write(relative: str, text: str) -> Path:
        path = temp_dir / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


class FakeRenderer:
    """Diagram renderer that records every source it is given."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def __call__(self, code: str) -> str:
        self.calls.append(code)
        return f"<svg data-diagram='{len(self.calls)}'></svg>"


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def mermaid_doc() -> str:
    """A document with one Mermaid block between two paragraphs."""
    return """Before the diagram.

```mermaid
graph TD
  A --> B
```

After the diagram.
"""
