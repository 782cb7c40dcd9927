from __future__ import annotations

import bisect
import re
from dataclasses import dataclass

from postquery.query.terms import HighlightTerms


@dataclass(frozen=True)
class Segment:
    text: str
    matched: bool = False


def phrase_pattern(phrase: str) -> re.Pattern[str]:
    return re.compile(re.escape(phrase), re.IGNORECASE)


def word_pattern(word: str) -> re.Pattern[str]:
    # lookarounds instead of \b so terms like "c++" still have edges
    return re.compile(rf"(?<!\w){re.escape(word)}(?!\w)", re.IGNORECASE)


class _Claims:
    """Sorted, non-overlapping [start, end) spans already highlighted."""

    def __init__(self) -> None:
        self.starts: list[int] = []
        self.ends: list[int] = []

    def blocker(self, start: int, end: int) -> int | None:
        """End of the claimed span overlapping [start, end), if any."""
        i = bisect.bisect_left(self.ends, start + 1)
        if i < len(self.starts) and self.starts[i] < end:
            return self.ends[i]
        return None

    def add(self, start: int, end: int) -> None:
        i = bisect.bisect_left(self.starts, start)
        self.starts.insert(i, start)
        self.ends.insert(i, end)

    def spans(self) -> list[tuple[int, int]]:
        return list(zip(self.starts, self.ends))


def _claim_all(text: str, pattern: re.Pattern[str], claims: _Claims) -> None:
    pos = 0
    while pos < len(text):
        m = pattern.search(text, pos)
        if m is None or m.end() == m.start():
            return
        blocked_until = claims.blocker(m.start(), m.end())
        if blocked_until is not None:
            pos = blocked_until
            continue
        claims.add(m.start(), m.end())
        pos = m.end()


def highlight(text: str, terms: HighlightTerms) -> list[Segment]:
    """Split ``text`` into matched and unmatched segments.

    Phrases are resolved before words, and no pass can match into a span an
    earlier pass already took. Joining the segment texts gives back ``text``.
    """
    if not text or terms.is_empty():
        return [Segment(text=text, matched=False)]

    claims = _Claims()
    for phrase in terms.phrases:
        if phrase:
            _claim_all(text, phrase_pattern(phrase), claims)
    for word in terms.words:
        if word:
            _claim_all(text, word_pattern(word), claims)

    segments: list[Segment] = []
    cursor = 0
    for start, end in claims.spans():
        if start > cursor:
            segments.append(Segment(text=text[cursor:start]))
        segments.append(Segment(text=text[start:end], matched=True))
        cursor = end
    if cursor < len(text) or not segments:
        segments.append(Segment(text=text[cursor:]))
    return segments


def matched_count(segments: list[Segment]) -> int:
    return sum(1 for s in segments if s.matched)


def render_segments(segments: list[Segment], open_mark: str = "[[", close_mark: str = "]]") -> str:
    return "".join(f"{open_mark}{s.text}{close_mark}" if s.matched else s.text for s in segments)
