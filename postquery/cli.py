from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from postquery.api.main import create_app
from postquery.common.config import settings
from postquery.common.logging import setup_logging
from postquery.highlight.counter import count_matches
from postquery.highlight.renderer import highlight as highlight_text
from postquery.highlight.renderer import render_segments
from postquery.query.categories import CategoryFileError, CategoryLookup, load_category_lookup
from postquery.query.interpreter import SEARCH_HELP, interpret

app = typer.Typer(add_completion=False, help="Postquery search query interpreter CLI")


def _categories(path: Optional[Path]) -> CategoryLookup:
    source = path or (Path(settings.categories_path) if settings.categories_path else None)
    if source is None:
        return {}
    try:
        return load_category_lookup(source)
    except CategoryFileError as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(code=2) from exc


@app.command()
def parse(
    query: str = typer.Argument(..., help="Search box input"),
    categories: Optional[Path] = typer.Option(None, help="JSON file of categories [{id, name}]"),
) -> None:
    """Interpret a search string and print filters, highlight terms and API params."""
    result = interpret(query, categories=_categories(categories))
    parsed = asdict(result.query)
    parsed["origin"] = result.query.origin.value
    out = {"query": parsed, "terms": asdict(result.terms), "params": result.params}
    typer.echo(json.dumps(out, indent=2, ensure_ascii=False))


@app.command()
def highlight(
    query: str = typer.Argument(..., help="Search box input"),
    text: str = typer.Argument(..., help="Plain text to highlight"),
    categories: Optional[Path] = typer.Option(None, help="JSON file of categories [{id, name}]"),
) -> None:
    """Mark the query's terms in TEXT and report the raw match count."""
    result = interpret(query, categories=_categories(categories))
    typer.echo(render_segments(highlight_text(text, result.terms)))
    typer.echo(f"matches: {count_matches(text, result.terms.flat())}")


@app.command("help")
def search_help() -> None:
    """Print the search syntax reference."""
    typer.echo(SEARCH_HELP)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host to bind"),
    port: int = typer.Option(8000, help="Port to bind"),
    log_level: str = typer.Option("info", help="Uvicorn log level"),
) -> None:
    """Run the FastAPI service."""
    setup_logging(log_level)
    uvicorn.run(create_app(), host=host, port=port, log_level=log_level)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
