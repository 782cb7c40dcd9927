from __future__ import annotations

import logging
from dataclasses import dataclass

from postquery.common.config import settings
from postquery.common.text import html_to_text
from postquery.highlight.counter import count_matches
from postquery.highlight.renderer import Segment, highlight, matched_count
from postquery.query.terms import HighlightTerms

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Post:
    id: int | str
    title: str
    excerpt: str | None = None
    content: str | None = None


@dataclass(frozen=True)
class HighlightedPost:
    id: int | str
    title: list[Segment]
    excerpt: list[Segment]
    content: list[Segment]
    content_matches: int


class PostHighlighter:
    def __init__(
        self,
        terms: HighlightTerms,
        title_chars: int | None = None,
        excerpt_chars: int | None = None,
        content_chars: int | None = None,
        ellipsis: str | None = None,
    ):
        self.terms = terms
        self.title_chars = settings.title_preview_chars if title_chars is None else title_chars
        self.excerpt_chars = settings.excerpt_preview_chars if excerpt_chars is None else excerpt_chars
        self.content_chars = settings.content_preview_chars if content_chars is None else content_chars
        self.ellipsis = settings.preview_ellipsis if ellipsis is None else ellipsis

    def highlight_post(self, post: Post) -> HighlightedPost:
        content_text = html_to_text(post.content)
        # the badge counts the whole body, not just the preview
        content_matches = count_matches(content_text, self.terms.flat())

        hp = HighlightedPost(
            id=post.id,
            title=self._field(html_to_text(post.title), self.title_chars),
            excerpt=self._field(html_to_text(post.excerpt), self.excerpt_chars),
            content=self._field(content_text, self.content_chars),
            content_matches=content_matches,
        )
        log.debug(
            "post_highlighted",
            extra={
                "post_id": post.id,
                "segments": matched_count(hp.title) + matched_count(hp.excerpt) + matched_count(hp.content),
                "content_matches": content_matches,
            },
        )
        return hp

    def highlight_posts(self, posts: list[Post]) -> list[HighlightedPost]:
        return [self.highlight_post(p) for p in posts]

    def _field(self, text: str, limit: int) -> list[Segment]:
        if limit <= 0 or len(text) <= limit:
            return highlight(text, self.terms)
        segments = highlight(text[:limit], self.terms)
        return segments + [Segment(text=self.ellipsis)]
