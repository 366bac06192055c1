"""Article extraction endpoints.

Routes
------
POST /api/fetch-article    Body: {"url": "https://..."}  → ArticleResult
GET  /api/article?url=...                                 → ArticleResult
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Request
from pydantic import BaseModel

from newsreader.scraper.errors import MissingUrlError

router = APIRouter()


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

class FetchArticleRequest(BaseModel):
    # Optional so a missing url gets the domain error, not a 422.
    url: Optional[str] = None


class ArticleResponse(BaseModel):
    title: str
    description: str
    content: str
    url: str


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

async def _fetch(request: Request, url: Optional[str]) -> dict[str, Any]:
    if not url or not url.strip():
        raise MissingUrlError()
    article = await request.app.state.news.fetch_article(url)
    return article.to_dict()


@router.post("/fetch-article", response_model=ArticleResponse)
async def fetch_article(body: FetchArticleRequest, request: Request) -> dict[str, Any]:
    """Render the article at ``body.url`` and return its cleaned content."""
    return await _fetch(request, body.url)


@router.get("/article", response_model=ArticleResponse)
async def get_article(request: Request, url: Optional[str] = None) -> dict[str, Any]:
    """Query-string variant of ``POST /api/fetch-article``."""
    return await _fetch(request, url)
