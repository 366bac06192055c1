"""Bounded page rendering: navigate, wait for readiness, snapshot the DOM."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Browser, Page
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from newsreader.config import Settings
from newsreader.scraper.browser import BrowserPool, open_session
from newsreader.scraper.errors import FetchTimeoutError, NavigationError
from newsreader.scraper.extractor import is_challenge_page
from newsreader.scraper.models import RawPage

logger = logging.getLogger(__name__)

_BODY_TEXT_JS = "() => document.body ? document.body.innerText : ''"


async def _navigate(page: Page, url: str, cfg: Settings) -> int:
    """Go to *url* and return the HTTP status.

    Raises:
        FetchTimeoutError: If navigation exceeds ``navigation_timeout``.
        NavigationError: On no response, a non-2xx status, or a browser error.
    """
    try:
        response = await page.goto(
            url,
            wait_until=cfg.wait_until,
            timeout=cfg.navigation_timeout * 1000,
        )
    except PlaywrightTimeoutError as exc:
        raise FetchTimeoutError(url, cfg.navigation_timeout) from exc
    except PlaywrightError as exc:
        raise NavigationError(f"Navigation to {url} failed: {exc.message}", url=url) from exc

    if response is None:
        raise NavigationError("No response from the server", url=url)
    if not response.ok:
        raise NavigationError(
            f"HTTP {response.status} {response.status_text}".strip(),
            url=url,
            status=response.status,
        )
    return response.status


async def _wait_ready(page: Page, selector: str, cfg: Settings) -> None:
    """Wait for *selector* to appear; a miss is logged, never raised."""
    try:
        await page.wait_for_selector(
            selector, state="attached", timeout=cfg.selector_timeout * 1000
        )
    except PlaywrightTimeoutError:
        logger.info("Ready selector not found on %s, continuing anyway", page.url)


async def _render(
    browser: Browser,
    url: str,
    ready_selector: Optional[str],
    cfg: Settings,
) -> RawPage:
    try:
        async with open_session(browser, cfg) as page:
            logger.info("Navigating to %s", url)
            status = await _navigate(page, url, cfg)

            if ready_selector:
                await _wait_ready(page, ready_selector, cfg)

            title = await page.title()
            body_text = await page.evaluate(_BODY_TEXT_JS)
            if is_challenge_page(title, body_text):
                logger.warning("Page %s looks like a bot challenge; waiting %gs", url, cfg.challenge_wait)
                await asyncio.sleep(cfg.challenge_wait)
                title = await page.title()

            html = await page.content()
            logger.info("Loaded %s (HTTP %d, %d bytes)", page.url, status, len(html))
            return RawPage(url=url, html=html, status_code=status, final_url=page.url, title=title)
    except PlaywrightTimeoutError as exc:
        raise FetchTimeoutError(url, cfg.render_deadline) from exc
    except PlaywrightError as exc:
        # e.g. execution context destroyed by a redirect, or target closed.
        raise NavigationError(f"Reading {url} failed: {exc.message}", url=url) from exc


async def render_page(
    pool: BrowserPool,
    url: str,
    *,
    ready_selector: Optional[str] = None,
    cfg: Optional[Settings] = None,
) -> RawPage:
    """Render *url* in a fresh page session and return its HTML.

    The browser is acquired first, bounded only by its own launch timeout.
    The session work (navigation, readiness wait, challenge pause and DOM
    snapshot) is then bounded by ``cfg.render_deadline``.  The page session
    is closed on every exit path, including timeouts and cancellation.

    Raises:
        LaunchError: If the shared browser cannot be started.
        FetchTimeoutError, NavigationError: On page-level failures.
    """
    cfg = cfg or pool.settings
    browser = await pool.acquire()
    try:
        return await asyncio.wait_for(
            _render(browser, url, ready_selector, cfg), timeout=cfg.render_deadline
        )
    except asyncio.TimeoutError as exc:
        raise FetchTimeoutError(url, cfg.render_deadline) from exc
