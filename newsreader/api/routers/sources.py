"""Static list of popular Vietnamese news sources.

Routes
------
GET /api/popular-sources   → {sources: [{id, name, url, logo}]}
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter

from newsreader.scraper.categories import POPULAR_SOURCES

router = APIRouter()


@router.get("/popular-sources")
def popular_sources() -> dict[str, Any]:
    return {"sources": [s.to_dict() for s in POPULAR_SOURCES]}
