"""Tests for the cache-fronted NewsService.

The pipeline functions are patched with ``AsyncMock`` so no browser is used;
the pool is a ``MagicMock`` with an async ``shutdown``.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from newsreader.cache import ResultCache
from newsreader.config import Settings
from newsreader.scraper.errors import (
    InvalidInputError,
    NavigationError,
    UnknownCategoryError,
)
from newsreader.scraper.models import ArticleResult, ArticleSummary, CategoryListing
from newsreader.service import NewsService


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _article(url: str = "https://vnexpress.net/a.html") -> ArticleResult:
    return ArticleResult(title="Tiêu đề", description="Mô tả", content="<p>Nội dung</p>", url=url)


def _listing(category: str = "the-thao") -> CategoryListing:
    return CategoryListing(
        category=category,
        source="vnexpress",
        source_name="VnExpress",
        source_url=f"https://vnexpress.net/{category}",
        articles=[ArticleSummary(title="Tin 1", url="https://vnexpress.net/tin-1.html")],
    )


def _service(ttl: float = 900) -> NewsService:
    pool = MagicMock()
    pool.shutdown = AsyncMock()
    cfg = Settings(cache_ttl=ttl)
    return NewsService(pool=pool, cfg=cfg)


# ---------------------------------------------------------------------------
# Articles
# ---------------------------------------------------------------------------

class TestFetchArticle:
    async def test_second_call_served_from_cache(self) -> None:
        service = _service()
        with patch(
            "newsreader.service.pipeline.extract_article",
            new=AsyncMock(return_value=_article()),
        ) as extract:
            first = await service.fetch_article("https://vnexpress.net/a.html")
            second = await service.fetch_article("https://vnexpress.net/a.html")

        assert first == second
        extract.assert_awaited_once()

    async def test_equivalent_urls_share_one_entry(self) -> None:
        service = _service()
        with patch(
            "newsreader.service.pipeline.extract_article",
            new=AsyncMock(return_value=_article()),
        ) as extract:
            await service.fetch_article("vnexpress.net/a.html")
            await service.fetch_article("  https://vnexpress.net/a.html#comments ")

        extract.assert_awaited_once()
        request = extract.await_args.args[1]
        assert request.target_url == "https://vnexpress.net/a.html"

    async def test_disabled_cache_always_extracts(self) -> None:
        service = _service(ttl=0)
        with patch(
            "newsreader.service.pipeline.extract_article",
            new=AsyncMock(return_value=_article()),
        ) as extract:
            await service.fetch_article("https://vnexpress.net/a.html")
            await service.fetch_article("https://vnexpress.net/a.html")

        assert extract.await_count == 2

    async def test_failures_are_not_cached(self) -> None:
        service = _service()
        failing = AsyncMock(
            side_effect=[
                NavigationError("HTTP 503", url="https://vnexpress.net/a.html", status=503),
                _article(),
            ]
        )
        with patch("newsreader.service.pipeline.extract_article", new=failing):
            with pytest.raises(NavigationError):
                await service.fetch_article("https://vnexpress.net/a.html")
            result = await service.fetch_article("https://vnexpress.net/a.html")

        assert result.title == "Tiêu đề"
        assert failing.await_count == 2
        assert len(service.article_cache) == 1

    async def test_invalid_url_rejected_before_pipeline(self) -> None:
        service = _service()
        with patch("newsreader.service.pipeline.extract_article", new=AsyncMock()) as extract:
            with pytest.raises(InvalidInputError):
                await service.fetch_article("ftp://vnexpress.net/a.html")
        extract.assert_not_awaited()

    async def test_explicit_empty_cache_is_used(self) -> None:
        pool = MagicMock()
        cache: ResultCache[ArticleResult] = ResultCache(ttl=60)
        service = NewsService(pool=pool, article_cache=cache, cfg=Settings())
        assert service.article_cache is cache


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------

class TestFetchCategory:
    async def test_unknown_category_never_reaches_pipeline(self) -> None:
        service = _service()
        with patch("newsreader.service.pipeline.extract_category", new=AsyncMock()) as extract:
            with pytest.raises(UnknownCategoryError):
                await service.fetch_category("khong-ton-tai")
        extract.assert_not_awaited()

    async def test_cached_by_normalised_id(self) -> None:
        service = _service()
        with patch(
            "newsreader.service.pipeline.extract_category",
            new=AsyncMock(return_value=_listing()),
        ) as extract:
            await service.fetch_category("The-Thao")
            listing = await service.fetch_category("/the-thao/")

        assert listing.category == "the-thao"
        extract.assert_awaited_once()
        assert extract.await_args.args[1] == "the-thao"


class TestLifecycle:
    async def test_close_shuts_down_pool(self) -> None:
        service = _service()
        await service.close()
        service.pool.shutdown.assert_awaited_once()

    def test_purge_expired_sums_both_caches(self) -> None:
        service = _service()
        service.article_cache = MagicMock(purge=MagicMock(return_value=2))
        service.category_cache = MagicMock(purge=MagicMock(return_value=1))
        assert service.purge_expired() == 3
