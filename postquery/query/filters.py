from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Sequence

from .categories import CategoryLookup
from .tokenizer import Token

log = logging.getLogger(__name__)


class Origin(str, Enum):
    ALL = "all"
    WORDPRESS = "wordpress"
    MANUAL = "manual"


class Directive(Enum):
    # Definition order is match priority.
    AUTHOR = "author:"
    CATEGORY = "category:"
    BEFORE = "before:"
    AFTER = "after:"
    ORIGIN = "origin:"
    MINE = "mine:true"

    @property
    def prefix(self) -> str:
        return self.value

    def matches(self, lower: str) -> bool:
        if self is Directive.MINE:
            return lower == self.prefix
        return lower.startswith(self.prefix)

    def value_of(self, unquoted: str) -> str:
        return unquoted[len(self.prefix):].strip()


_SELECTABLE_ORIGINS = {Origin.WORDPRESS.value: Origin.WORDPRESS, Origin.MANUAL.value: Origin.MANUAL}


@dataclass(frozen=True)
class ParsedQuery:
    free_text: str = ""
    author: str | None = None
    category_id: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    origin: Origin = Origin.ALL
    mine_only: bool = False


def match_directive(text: str) -> Directive | None:
    lower = text.lower()
    for directive in Directive:
        if directive.matches(lower):
            return directive
    return None


def extract_filters(
    tokens: Sequence[Token],
    prior: ParsedQuery,
    categories: CategoryLookup,
) -> ParsedQuery:
    """Fold directive tokens into ``prior`` and collect the rest as free text.

    Only fields named by a directive in ``tokens`` change; everything else is
    carried over from ``prior``. Later directives of the same kind win.
    """
    updates: dict[str, Any] = {}
    free: list[str] = []
    seen: list[str] = []

    i = 0
    while i < len(tokens):
        tok = tokens[i]
        unquoted = tok.text
        directive = match_directive(unquoted)
        i += 1

        if directive is None:
            # quotes are kept so phrases survive into the free text
            free.append(tok.raw())
            continue

        seen.append(directive.name.lower())
        value = directive.value_of(unquoted)

        if directive is Directive.AUTHOR:
            updates["author"] = value
        elif directive is Directive.CATEGORY:
            category_id, consumed = _resolve_category(value, tok, tokens[i:], categories)
            i += consumed
            if category_id is not None:
                updates["category_id"] = category_id
            else:
                log.debug("directive_ignored", extra={"directive": "category", "value": value})
        elif directive is Directive.BEFORE:
            updates["date_to"] = value
        elif directive is Directive.AFTER:
            updates["date_from"] = value
        elif directive is Directive.ORIGIN:
            origin = _SELECTABLE_ORIGINS.get(value.lower())
            if origin is not None:
                updates["origin"] = origin
            else:
                log.debug("directive_ignored", extra={"directive": "origin", "value": value})
        elif directive is Directive.MINE:
            updates["mine_only"] = True

    updates["free_text"] = " ".join(free).strip()
    parsed = replace(prior, **updates)
    log.debug("query_parsed", extra={"directives": seen, "free_text_terms": len(free)})
    return parsed


def _resolve_category(
    name: str,
    tok: Token,
    following: Sequence[Token],
    categories: CategoryLookup,
) -> tuple[str | None, int]:
    """Return ``(category_id, extra_tokens_consumed)``.

    An unquoted ``category:`` token may name a multi-word category, so the name
    is extended over the bare words that follow it and the longest name present
    in ``categories`` is taken.
    """
    best = categories.get(name.lower())
    best_consumed = 0

    if not tok.was_quoted:
        parts = [name]
        for n, nxt in enumerate(following, start=1):
            if nxt.was_quoted or match_directive(nxt.text) is not None:
                break
            parts.append(nxt.text)
            ref = categories.get(" ".join(parts).strip().lower())
            if ref is not None:
                best, best_consumed = ref, n

    if best is None:
        return None, 0
    return best.id, best_consumed
