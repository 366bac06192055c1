"""Category listing endpoints.

Routes
------
GET /api/category/{category_id}   → {category, articles, source, sourceName, sourceUrl}
GET /api/categories               → {categories: [{id, url}]}
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from newsreader.scraper.categories import CATEGORY_REGISTRY

router = APIRouter()


@router.get("/category/{category_id}")
async def get_category(category_id: str, request: Request) -> dict[str, Any]:
    """List the latest articles of a registered category."""
    listing = await request.app.state.news.fetch_category(category_id)
    return listing.to_dict()


@router.get("/categories")
def list_categories() -> dict[str, Any]:
    return {
        "categories": [{"id": cid, "url": url} for cid, url in CATEGORY_REGISTRY.items()]
    }
