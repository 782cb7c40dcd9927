from __future__ import annotations

import re
from typing import Iterable


def count_matches(text: str, terms: Iterable[str]) -> int:
    """Total case-insensitive substring hits of every term in ``text``.

    Unlike the highlighter this ignores word edges, so "cat" also counts inside
    "category".
    """
    if not text:
        return 0
    total = 0
    for term in terms:
        if not term:
            continue
        total += len(re.findall(re.escape(term), text, re.IGNORECASE))
    return total
