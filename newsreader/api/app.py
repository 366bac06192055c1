"""Builds the news reader ASGI app.

Lifespan
--------
On startup the app builds one :class:`NewsService` (shared across all
requests via ``request.app.state.news``) and starts a background task that
sweeps expired cache entries.  On shutdown it stops the sweeper and closes
the shared browser.

Routers
-------
All endpoint groups are mounted under ``/api``:

    /api/fetch-article, /api/article     article extraction
    /api/category/{id}, /api/categories  category listings
    /api/popular-sources                 static source list
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from typing import Any, AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from newsreader import __version__
from newsreader.config import settings
from newsreader.logging_setup import configure_logging
from newsreader.scraper.errors import ScraperError
from newsreader.service import NewsService

from newsreader.api.routers import articles as articles_router
from newsreader.api.routers import categories as categories_router
from newsreader.api.routers import sources as sources_router

logger = logging.getLogger(__name__)


async def _sweep_cache(service: NewsService, period: float) -> None:
    """Periodically drop expired cache entries."""
    while True:
        await asyncio.sleep(period)
        removed = service.purge_expired()
        if removed:
            logger.debug("Cache sweep removed %d expired entr(y/ies)", removed)


# ---------------------------------------------------------------------------
# Exception handlers
# ---------------------------------------------------------------------------

def _error_body(error: str, details: Optional[str] = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": error}
    if details and details != error:
        body["details"] = details
    return body


async def _scraper_error_handler(request: Request, exc: ScraperError) -> JSONResponse:
    context = exc.url or request.url.path
    if exc.status_code >= 500:
        logger.error("%s for %s: %s", type(exc).__name__, context, exc)
    else:
        logger.info("Rejected request for %s: %s", context, exc)
    return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error, str(exc)))


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg', '')}"
        for err in exc.errors()
    )
    return JSONResponse(status_code=400, content=_error_body("Invalid input", details))


async def _http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    error = "Not Found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=_error_body(error))


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s", request.url.path)
    return JSONResponse(status_code=500, content=_error_body("Internal Server Error", str(exc)))


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def create_app(service: Optional[NewsService] = None) -> FastAPI:
    """Return a fully-configured FastAPI application instance.

    Args:
        service: Use this service instead of building one at startup.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings.log_level)
        news = service or NewsService()
        app.state.news = news
        sweeper = None
        if settings.cache_check_period > 0:
            sweeper = asyncio.create_task(_sweep_cache(news, settings.cache_check_period))
        try:
            yield
        finally:
            if sweeper is not None:
                sweeper.cancel()
                with suppress(asyncio.CancelledError):
                    await sweeper
            await news.close()

    app = FastAPI(
        title="VN News Reader API",
        description=(
            "Fetches Vietnamese news articles and category listings through a "
            "shared headless browser and returns cleaned content as JSON."
        ),
        version=__version__,
        lifespan=lifespan,
    )

    # Allow browser frontends on any origin.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(ScraperError, _scraper_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    app.include_router(articles_router.router, prefix="/api", tags=["articles"])
    app.include_router(categories_router.router, prefix="/api", tags=["categories"])
    app.include_router(sources_router.router, prefix="/api", tags=["sources"])

    @app.get("/", response_class=PlainTextResponse, include_in_schema=False)
    def root() -> str:
        return "Server is running. Use API endpoints to fetch data."

    @app.get("/health", tags=["health"])
    def health(request: Request) -> dict[str, Any]:
        news: NewsService = request.app.state.news
        return {
            "status": "ok",
            "browser": {
                "connected": news.pool.is_connected,
                "launches": news.pool.launch_count,
            },
            "cache": {
                "articles": news.article_cache.stats(),
                "categories": news.category_cache.stats(),
            },
        }

    return app


# Import target for `serve` and for running uvicorn directly:
#   uvicorn newsreader.api.app:app --reload
app = create_app()
