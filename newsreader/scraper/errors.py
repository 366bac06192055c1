"""Failure taxonomy for the scraping pipeline.

Each error carries the HTTP status the API layer should answer with and a
short user-facing ``error`` label; ``str(exc)`` holds the diagnostic detail.
"""

from __future__ import annotations

from typing import Optional


class ScraperError(Exception):
    """Base class for every failure raised by the scraping pipeline."""

    status_code: int = 500
    error: str = "Scraping failed"

    def __init__(self, message: str, *, url: Optional[str] = None) -> None:
        super().__init__(message)
        self.url = url


class InvalidInputError(ScraperError):
    """The caller supplied a missing or malformed URL."""

    status_code = 400
    error = "Invalid input"


class MissingUrlError(InvalidInputError):
    """No URL was supplied."""

    error = "URL is required"

    def __init__(self) -> None:
        super().__init__("URL is required")


class UnknownCategoryError(InvalidInputError):
    """The requested category id is not in the registry."""

    error = "Invalid category"

    def __init__(self, category_id: str) -> None:
        super().__init__(f"Category {category_id!r} is not supported")
        self.category_id = category_id


class LaunchError(ScraperError):
    """The headless browser process could not be started."""

    error = "Browser launch failed"


class NavigationError(ScraperError):
    """The target site returned no response or a non-2xx status."""

    error = "Failed to load page"

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status: Optional[int] = None,
    ) -> None:
        super().__init__(message, url=url)
        self.status = status


class FetchTimeoutError(ScraperError):
    """Navigation or the overall render deadline was exceeded."""

    error = "Timed out loading page"

    def __init__(self, url: str, timeout: float) -> None:
        super().__init__(f"Timed out after {timeout:g}s loading {url}", url=url)
        self.timeout = timeout


class ContentNotFoundError(ScraperError):
    """Every extraction strategy came back empty-handed."""

    error = "Content not found"
