"""News reader CLI: entry-point for serving and one-off extractions.

Usage:
    python cli/main.py --help

Commands:
    serve       → run the HTTP API with uvicorn
    article     → extract one article and print it as JSON
    category    → list one category and print it as JSON
    categories  → print the registered category ids
"""

from __future__ import annotations

import sys
from pathlib import Path

# Running `python cli/main.py` puts cli/ on sys.path, not the repo root;
# add the root so the newsreader package resolves without an install.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional

import typer

from newsreader.config import settings
from newsreader.logging_setup import configure_logging
from newsreader.scraper.categories import CATEGORY_REGISTRY
from newsreader.scraper.errors import ScraperError
from newsreader.service import NewsService

app = typer.Typer(
    name="newsreader",
    help="Vietnamese news reader CLI.",
    no_args_is_help=True,
)


def _dump(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, indent=2)


def _run(call: Callable[[NewsService], Awaitable[Any]]) -> Any:
    """Run *call* against a fresh service and always close its browser."""

    async def _main() -> Any:
        service = NewsService()
        try:
            return await call(service)
        finally:
            await service.close()

    try:
        return asyncio.run(_main())
    except ScraperError as exc:
        typer.echo(f"❌ {exc.error}: {exc}", err=True)
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------
@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: $HOST)."),
    port: Optional[int] = typer.Option(None, help="Listen port (default: $PORT)."),
    reload: bool = typer.Option(False, help="Auto-reload on code changes."),
) -> None:
    """Run the HTTP API."""
    if settings.serverless:
        typer.echo("[serve] SERVERLESS is set; not starting a listener.")
        return

    import uvicorn

    uvicorn.run(
        "newsreader.api.app:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
        log_level=settings.log_level.lower(),
    )


# ---------------------------------------------------------------------------
# One-off extraction
# ---------------------------------------------------------------------------
@app.command("article")
def article(
    url: str = typer.Argument(..., help="Article URL (scheme optional)."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scraper progress."),
) -> None:
    """Extract one article and print it as JSON."""
    if verbose:
        configure_logging("INFO")
    result = _run(lambda service: service.fetch_article(url))
    typer.echo(_dump(result.to_dict()))


@app.command("category")
def category(
    category_id: str = typer.Argument(..., help="Category id, e.g. 'the-thao'."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log scraper progress."),
) -> None:
    """List the latest articles of a category and print them as JSON."""
    if verbose:
        configure_logging("INFO")
    listing = _run(lambda service: service.fetch_category(category_id))
    typer.echo(_dump(listing.to_dict()))


@app.command("categories")
def categories() -> None:
    """Print every registered category id with its source URL."""
    for cid, url in CATEGORY_REGISTRY.items():
        typer.echo(f"  {cid:<15} {url}")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
