"""Tests for headless-browser PDF export, with subprocess calls faked."""

import subprocess
from pathlib import Path

import pytest

from thener.errors import PdfExportError
from thener.pdf_export import export_to_pdf, find_browser


def fake_browser(returncode=0, write_pdf=True, calls=None):
    def run(cmd, **kwargs):
        if calls is not None:
            calls.append(cmd)
        if write_pdf:
            target = next(arg for arg in cmd if arg.startswith("--print-to-pdf="))
            Path(target.split("=", 1)[1]).write_bytes(b"%PDF-1.4\n")
        return subprocess.CompletedProcess(cmd, returncode, stdout="", stderr="boom")

    return run


@pytest.fixture
def html_file(temp_dir: Path) -> Path:
    path = temp_dir / "index.html"
    path.write_text("<html><body>hi</body></html>", encoding="utf-8")
    return path


def test_writes_pdf(html_file: Path, temp_dir: Path, monkeypatch):
    calls = []
    monkeypatch.setattr("thener.pdf_export.subprocess.run", fake_browser(calls=calls))

    output = export_to_pdf(html_file, temp_dir / "out.pdf", browser="/opt/chromium")

    assert output == (temp_dir / "out.pdf").resolve()
    assert output.read_bytes().startswith(b"%PDF")
    cmd = calls[0]
    assert cmd[0] == "/opt/chromium"
    assert "--headless" in cmd
    assert "--no-pdf-header-footer" in cmd
    assert cmd[-1] == html_file.resolve().as_uri()


def test_browser_failure(html_file: Path, temp_dir: Path, monkeypatch):
    monkeypatch.setattr("thener.pdf_export.subprocess.run", fake_browser(returncode=1, write_pdf=False))

    with pytest.raises(PdfExportError) as exc_info:
        export_to_pdf(html_file, temp_dir / "out.pdf", browser="/opt/chromium")

    assert "boom" in str(exc_info.value)


def test_no_output_written(html_file: Path, temp_dir: Path, monkeypatch):
    monkeypatch.setattr("thener.pdf_export.subprocess.run", fake_browser(write_pdf=False))

    with pytest.raises(PdfExportError):
        export_to_pdf(html_file, temp_dir / "out.pdf", browser="/opt/chromium")


def test_no_browser(html_file: Path, temp_dir: Path, monkeypatch):
    monkeypatch.setattr("thener.pdf_export.shutil.which", lambda name: None)

    with pytest.raises(PdfExportError):
        export_to_pdf(html_file, temp_dir / "out.pdf")


def test_find_browser_prefers_settings(temp_dir: Path, monkeypatch):
    configured = temp_dir / "my-chrome"
    configured.write_text("")
    monkeypatch.setattr("thener.config.BROWSER_PATH", str(configured))

    assert find_browser() == str(configured)


def test_find_browser_from_environment(temp_dir: Path, monkeypatch):
    env = temp_dir / "env-chrome"
    env.write_text("")
    monkeypatch.setenv("THENER_BROWSER", str(env))

    assert find_browser() == str(env)


def test_find_browser_on_path(monkeypatch):
    monkeypatch.setattr(
        "thener.pdf_export.shutil.which",
        lambda name: "/usr/bin/google-chrome" if name == "google-chrome" else None,
    )

    assert find_browser() == "/usr/bin/google-chrome"
