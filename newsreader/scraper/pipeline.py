"""End-to-end extraction: browser render followed by HTML parsing."""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from newsreader.config import Settings
from newsreader.scraper.browser import BrowserPool
from newsreader.scraper.categories import (
    CATEGORY_REGISTRY,
    VNEXPRESS_SOURCE_ID,
    VNEXPRESS_SOURCE_NAME,
    normalize_category_id,
    resolve_category,
)
from newsreader.scraper.errors import ContentNotFoundError
from newsreader.scraper.extractor import extract_article as parse_article
from newsreader.scraper.fetcher import render_page
from newsreader.scraper.listing import extract_summaries
from newsreader.scraper.models import ArticleResult, CategoryListing, ExtractionRequest
from newsreader.scraper.selectors import ARTICLE_READY_SELECTOR, LISTING_READY_SELECTOR

logger = logging.getLogger(__name__)


async def extract_article(
    pool: BrowserPool,
    request: ExtractionRequest,
    cfg: Optional[Settings] = None,
) -> ArticleResult:
    """Render ``request.target_url`` and extract its readable content.

    Raises:
        NavigationError, FetchTimeoutError, ContentNotFoundError, LaunchError
    """
    raw = await render_page(
        pool, request.target_url, ready_selector=ARTICLE_READY_SELECTOR, cfg=cfg
    )
    article = parse_article(raw)
    logger.info("Extracted article %r (%d chars) from %s", article.title, len(article.content), raw.url)
    return article


async def extract_category(
    pool: BrowserPool,
    category_id: str,
    cfg: Optional[Settings] = None,
    registry: Mapping[str, str] = CATEGORY_REGISTRY,
) -> CategoryListing:
    """Render a registered category page and list its articles.

    The registry lookup happens before the browser is touched, so an unknown
    id never triggers navigation.

    Raises:
        UnknownCategoryError, NavigationError, FetchTimeoutError,
        ContentNotFoundError, LaunchError
    """
    url = resolve_category(category_id, registry)
    category = normalize_category_id(category_id)
    cfg = cfg or pool.settings

    raw = await render_page(pool, url, ready_selector=LISTING_READY_SELECTOR, cfg=cfg)
    articles = extract_summaries(
        raw.html,
        url,
        category=category,
        source=VNEXPRESS_SOURCE_ID,
        limit=cfg.category_limit,
    )
    if not articles:
        raise ContentNotFoundError(f"No articles found for category {category!r}", url=url)

    logger.info("Listed %d article(s) for category %r", len(articles), category)
    return CategoryListing(
        category=category,
        source=VNEXPRESS_SOURCE_ID,
        source_name=VNEXPRESS_SOURCE_NAME,
        source_url=url,
        articles=articles,
    )
