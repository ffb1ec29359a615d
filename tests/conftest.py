from __future__ import annotations

from io import StringIO
from pathlib import Path

import pytest
from rich.console import Console

from html2pdf.settings import get_settings

SAMPLE_HTML = """<!DOCTYPE html>
<html>
<head><title>Sample</title></head>
<body>
<h1>Hello</h1>
<p>Loose <b>markup
<img src="images/logo.png" alt="logo">
</body>
</html>
"""

SAMPLE_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<html xmlns="http://www.w3.org/1999/xhtml" lang="en">
<head><title>Sample</title></head>
<body><p>Strict</p></body>
</html>
"""


class FakeRenderer:
    payload = b"%PDF-1.7\n%fake\n%%EOF\n"

    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.requests: list = []
        self.sinks: list = []

    def run(self, request, sink) -> None:  # type: ignore[no-untyped-def]
        self.requests.append(request)
        self.sinks.append(sink)
        sink.write(self.payload)
        if self.error is not None:
            raise self.error


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("HTML2PDF_CONFIG_PATH", raising=False)
    monkeypatch.delenv("HTML2PDF_LOG_FILE", raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def html_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.html"
    path.write_text(SAMPLE_HTML, encoding="utf-8")
    return path


@pytest.fixture
def xhtml_file(tmp_path: Path) -> Path:
    path = tmp_path / "page.xhtml"
    path.write_text(SAMPLE_XHTML, encoding="utf-8")
    return path


@pytest.fixture
def font_file(tmp_path: Path) -> Path:
    path = tmp_path / "Custom.ttf"
    path.write_bytes(b"\x00\x01\x00\x00")
    return path


@pytest.fixture
def consoles() -> tuple[Console, Console]:
    return (
        Console(file=StringIO(), soft_wrap=True),
        Console(file=StringIO(), soft_wrap=True),
    )


@pytest.fixture
def weasyprint():
    try:
        import weasyprint as module
    except (ImportError, OSError) as exc:
        pytest.skip(f"weasyprint unavailable: {exc}")
    return module
