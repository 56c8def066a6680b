"""Shared fixtures for the static optimizer test suites."""

import sys
from pathlib import Path

import pytest

# Root-level scripts (run_audit.py) importable without installing
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from static_optimizer.document import Document

CLEAN_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <title>Acme Widgets - Hand-made widgets since 1999</title>
  <meta name="description" content="Hand-made widgets, shipped worldwide.">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <link rel="canonical" href="https://example.com/">
  <script src="/app.js" defer></script>
</head>
<body>
  <header><nav><a href="/catalog">Browse the catalog</a></nav></header>
  <main>
    <h1>Acme Widgets</h1>
    <h2>Why widgets</h2>
    <h3>Durability</h3>
    <h2>Pricing</h2>
    <img src="widget.png" alt="A blue widget">
    <img src="spacer.gif" alt="">
  </main>
  <footer><p>Acme Inc.</p></footer>
</body>
</html>
"""


@pytest.fixture
def clean_page() -> str:
    """A page that passes every check."""
    return CLEAN_PAGE


@pytest.fixture
def make_page():
    """
    Build a page from head and body fragments.

    The head gets a valid title, description and viewport unless
    `seo=False`, so tests of other groups don't trip SEO rules.
    """
    def _make(body: str = "", head: str = "", seo: bool = True) -> str:
        seo_head = (
            "<title>A perfectly reasonable title</title>"
            '<meta name="description" content="Test page">'
            '<meta name="viewport" content="width=device-width">'
        ) if seo else ""
        return f"<html><head>{seo_head}{head}</head><body>{body}</body></html>"
    return _make


@pytest.fixture
def parse():
    return Document.parse
