"""Scraper package: browser rendering and content extraction."""

from newsreader.scraper.browser import BrowserPool, open_session
from newsreader.scraper.errors import (
    ContentNotFoundError,
    FetchTimeoutError,
    InvalidInputError,
    MissingUrlError,
    LaunchError,
    NavigationError,
    ScraperError,
    UnknownCategoryError,
)
from newsreader.scraper.models import (
    ArticleKind,
    ArticleResult,
    ArticleSummary,
    CategoryListing,
    ExtractionRequest,
    RawPage,
)
from newsreader.scraper.pipeline import extract_article, extract_category

__all__ = [
    "BrowserPool",
    "open_session",
    "extract_article",
    "extract_category",
    "ArticleKind",
    "ArticleResult",
    "ArticleSummary",
    "CategoryListing",
    "ExtractionRequest",
    "RawPage",
    "ScraperError",
    "InvalidInputError",
    "MissingUrlError",
    "UnknownCategoryError",
    "LaunchError",
    "NavigationError",
    "FetchTimeoutError",
    "ContentNotFoundError",
]
