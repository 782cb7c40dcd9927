from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

from postquery.query.categories import CategoryRecord


class HealthResponse(BaseModel):
    status: str = "ok"


class HelpResponse(BaseModel):
    help: str


class ParsedQueryModel(BaseModel):
    free_text: str = ""
    author: str | None = None
    category_id: str | None = None
    date_from: str | None = None
    date_to: str | None = None
    origin: Literal["all", "wordpress", "manual"] = "all"
    mine_only: bool = False


class TermsModel(BaseModel):
    phrases: list[str]
    words: list[str]


class InterpretRequest(BaseModel):
    q: str = Field(default="", max_length=10_000)
    prior: ParsedQueryModel | None = None
    categories: list[CategoryRecord] | None = None


class InterpretResponse(BaseModel):
    query: ParsedQueryModel
    terms: TermsModel
    params: dict[str, Any]


class PostIn(BaseModel):
    id: int | str
    title: str = ""
    excerpt: str | None = None
    content: str | None = None


class SegmentModel(BaseModel):
    text: str
    matched: bool


class HighlightedPostModel(BaseModel):
    id: int | str
    title: list[SegmentModel]
    excerpt: list[SegmentModel]
    content: list[SegmentModel]
    content_matches: int = Field(ge=0)


class HighlightRequest(InterpretRequest):
    posts: list[PostIn] = Field(default_factory=list, max_length=500)


class HighlightResponse(BaseModel):
    query: ParsedQueryModel
    terms: TermsModel
    posts: list[HighlightedPostModel]
