from __future__ import annotations

import logging
from dataclasses import asdict

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import JSONResponse

from postquery.api.deps import get_categories
from postquery.api.middleware import request_logging_middleware
from postquery.api.schemas import (
    HealthResponse,
    HelpResponse,
    HighlightRequest,
    HighlightResponse,
    InterpretRequest,
    InterpretResponse,
    ParsedQueryModel,
)
from postquery.common.config import settings
from postquery.query.categories import CategoryLookup, build_category_lookup, refs_from_records
from postquery.query.filters import Origin, ParsedQuery
from postquery.query.interpreter import SEARCH_HELP, Interpretation, interpret
from postquery.results.highlighter import Post, PostHighlighter

log = logging.getLogger(__name__)


def _prior(model: ParsedQueryModel | None) -> ParsedQuery:
    if model is None:
        return ParsedQuery()
    data = model.model_dump()
    data["origin"] = Origin(data["origin"])
    return ParsedQuery(**data)


def _query_model(parsed: ParsedQuery) -> ParsedQueryModel:
    data = asdict(parsed)
    data["origin"] = parsed.origin.value
    return ParsedQueryModel(**data)


def _interpret(req: InterpretRequest, configured: CategoryLookup) -> Interpretation:
    if len(req.q) > settings.max_query_length:
        raise HTTPException(status_code=422, detail="query too long")
    lookup = configured if req.categories is None else build_category_lookup(refs_from_records(req.categories))
    return interpret(req.q, _prior(req.prior), lookup)


def create_app() -> FastAPI:
    app = FastAPI(title="Postquery", version="1.0.0")

    app.middleware("http")(request_logging_middleware)

    @app.get("/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/help", response_model=HelpResponse)
    def help_text() -> HelpResponse:
        return HelpResponse(help=SEARCH_HELP)

    @app.post("/interpret", response_model=InterpretResponse)
    def interpret_query(
        req: InterpretRequest,
        categories: CategoryLookup = Depends(get_categories),
    ) -> InterpretResponse:
        result = _interpret(req, categories)
        return InterpretResponse(
            query=_query_model(result.query),
            terms=asdict(result.terms),
            params=result.params,
        )

    @app.post("/highlight", response_model=HighlightResponse)
    def highlight_posts(
        req: HighlightRequest,
        categories: CategoryLookup = Depends(get_categories),
    ) -> HighlightResponse:
        result = _interpret(req, categories)
        highlighter = PostHighlighter(result.terms)
        posts = highlighter.highlight_posts([Post(**p.model_dump()) for p in req.posts])
        log.info("posts_highlighted", extra={"posts": len(posts)})
        return HighlightResponse(
            query=_query_model(result.query),
            terms=asdict(result.terms),
            posts=[asdict(p) for p in posts],
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(_, exc: Exception):
        log.exception("unhandled_exception", exc_info=exc)
        return JSONResponse(status_code=500, content={"error": "internal_server_error"})

    return app
