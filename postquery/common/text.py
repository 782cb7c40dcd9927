from __future__ import annotations

import re

from bs4 import BeautifulSoup

_WHITESPACE_RE = re.compile(r"\s+")
_SCRIPT_STYLE = {"script", "style", "noscript"}


def html_to_text(html: str | None) -> str:
    """Plain text of an HTML fragment, whitespace collapsed."""
    if not html or not html.strip():
        return ""
    soup = BeautifulSoup(html, "lxml")

    for tag in soup.find_all(list(_SCRIPT_STYLE)):
        tag.decompose()

    text = soup.get_text(separator=" ", strip=True)
    return _WHITESPACE_RE.sub(" ", text).strip()
