from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .categories import CategoryLookup
from .filters import Origin, ParsedQuery, extract_filters
from .terms import HighlightTerms, classify
from .tokenizer import tokenize, unquoted_texts

log = logging.getLogger(__name__)

SEARCH_HELP = """\
Basics: free text matches title, content, excerpt. Use quotes for exact phrases.
Example: "stolen vehicle"

Filters:
- author:<name>          e.g., author:smith
- category:<name>        e.g., category:Intel Quick Updates
- after:YYYY-MM-DD       e.g., after:2025-01-01
- before:YYYY-MM-DD      e.g., before:2025-06-30
- origin:(manual|wordpress)
- mine:true              (only posts you created)

Combine tokens to AND conditions.
Example:
"vehicle break-in" author:jdoe after:2024-10-01 origin:wordpress mine:true"""


@dataclass(frozen=True)
class Interpretation:
    query: ParsedQuery
    terms: HighlightTerms
    params: dict[str, Any]


def to_query_params(parsed: ParsedQuery) -> dict[str, Any]:
    """Posts API query parameters for ``parsed``; unset filters are omitted."""
    params: dict[str, Any] = {}
    # the posts API takes the free text without phrase quotes
    search = " ".join(unquoted_texts(parsed.free_text))
    if search:
        params["search"] = search
    if parsed.author:
        params["author"] = parsed.author
    if parsed.category_id:
        params["category"] = parsed.category_id
    if parsed.date_from:
        params["dateFrom"] = parsed.date_from
    if parsed.date_to:
        params["dateTo"] = parsed.date_to
    if parsed.origin is not Origin.ALL:
        params["origin"] = parsed.origin.value
    if parsed.mine_only:
        params["mine"] = True
    return params


def interpret(
    raw: str,
    prior: ParsedQuery | None = None,
    categories: CategoryLookup | None = None,
) -> Interpretation:
    parsed = extract_filters(tokenize(raw), prior or ParsedQuery(), categories or {})
    terms = classify(parsed.free_text)
    params = to_query_params(parsed)
    log.debug(
        "query_interpreted",
        extra={"directives": sorted(k for k in params if k != "search"), "free_text_terms": len(terms.flat())},
    )
    return Interpretation(query=parsed, terms=terms, params=params)
