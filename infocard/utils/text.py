from __future__ import annotations

import re

from bs4 import BeautifulSoup

MAX_CONTENT_CHARS = 10_000

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(text: str | None, limit: int = MAX_CONTENT_CHARS) -> str:
    """Collapse every whitespace run (blank lines included) to one space, trim, cap at ``limit``."""
    if not text:
        return ""
    return _WHITESPACE_RE.sub(" ", text).strip()[:limit]


def html_to_text(html: str | None, limit: int = MAX_CONTENT_CHARS) -> str:
    """Strip ``<script>``/``<style>`` blocks and all tags from an HTML document."""
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")
    for node in soup(["script", "style", "noscript", "template"]):
        node.decompose()
    return normalize_text(soup.get_text(" "), limit=limit)
