"""Cache-fronted access to the scraping pipeline.

The API and CLI talk to :class:`NewsService`; it owns the browser pool and
the two result caches (articles keyed by normalised URL, category listings
keyed by normalised id).  Only successful results are cached.
"""

from __future__ import annotations

import logging
from typing import Optional

from newsreader.cache import ResultCache
from newsreader.config import Settings, settings as default_settings
from newsreader.scraper import pipeline
from newsreader.scraper.browser import BrowserPool
from newsreader.scraper.categories import normalize_category_id, resolve_category
from newsreader.scraper.models import ArticleKind, ArticleResult, CategoryListing
from newsreader.scraper.urls import make_request

logger = logging.getLogger(__name__)


class NewsService:
    def __init__(
        self,
        pool: Optional[BrowserPool] = None,
        article_cache: Optional[ResultCache[ArticleResult]] = None,
        category_cache: Optional[ResultCache[CategoryListing]] = None,
        cfg: Optional[Settings] = None,
    ) -> None:
        self.settings = cfg or default_settings
        self.pool = pool or BrowserPool(self.settings)
        # ResultCache defines __len__, so test for None rather than truthiness.
        if article_cache is None:
            article_cache = ResultCache(self.settings.cache_ttl, self.settings.cache_maxsize)
        if category_cache is None:
            category_cache = ResultCache(self.settings.cache_ttl, self.settings.cache_maxsize)
        self.article_cache = article_cache
        self.category_cache = category_cache

    async def fetch_article(self, url: str) -> ArticleResult:
        """Return the article at *url*, from cache when fresh.

        Raises:
            InvalidInputError: If *url* is missing or malformed.
            ScraperError: Any pipeline failure (never cached).
        """
        request = make_request(url, ArticleKind.ARTICLE)
        key = request.target_url

        cached = self.article_cache.get(key)
        if cached is not None:
            logger.info("Cache hit for article: %s", key)
            return cached

        logger.info("Fetching article: %s", key)
        article = await pipeline.extract_article(self.pool, request, self.settings)
        self.article_cache.set(key, article)
        return article

    async def fetch_category(self, category_id: str) -> CategoryListing:
        """Return the listing for *category_id*, from cache when fresh.

        Raises:
            UnknownCategoryError: If the id is not registered.
            ScraperError: Any pipeline failure (never cached).
        """
        resolve_category(category_id)
        key = normalize_category_id(category_id)

        cached = self.category_cache.get(key)
        if cached is not None:
            logger.info("Cache hit for category: %s", key)
            return cached

        logger.info("Fetching category: %s", key)
        listing = await pipeline.extract_category(self.pool, key, self.settings)
        self.category_cache.set(key, listing)
        return listing

    def purge_expired(self) -> int:
        return self.article_cache.purge() + self.category_cache.purge()

    async def close(self) -> None:
        await self.pool.shutdown()
