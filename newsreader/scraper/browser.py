"""Shared headless browser and per-request page sessions.

One Chromium process is launched lazily and reused by every request; each
request gets its own isolated browser context so cookies, routes and
navigation state never leak between requests.

Usage::

    pool = BrowserPool()
    browser = await pool.acquire()
    async with open_session(browser) as page:
        await page.goto(url)
    ...
    await pool.shutdown()
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from playwright.async_api import (
    Browser,
    Page,
    Playwright,
    Route,
    async_playwright,
)
from playwright_stealth import Stealth

from newsreader.config import Settings, settings as default_settings
from newsreader.scraper.errors import LaunchError

logger = logging.getLogger(__name__)

# Resource types never needed to read article text.
BLOCKED_RESOURCE_TYPES = frozenset({"image", "stylesheet", "font", "media"})

_stealth = Stealth()


def _launch_args(cfg: Settings) -> list[str]:
    return [
        "--no-sandbox",
        "--disable-setuid-sandbox",
        "--disable-dev-shm-usage",
        "--disable-accelerated-2d-canvas",
        "--no-zygote",
        "--disable-gpu",
        f"--window-size={cfg.viewport_width},{cfg.viewport_height}",
        "--disable-blink-features=AutomationControlled",
    ]


class BrowserPool:
    """Owns the single shared :class:`Browser` handle.

    ``acquire()`` is single-flight: concurrent callers that find no live
    handle wait on one launch and all receive the same browser.  A
    ``disconnected`` event drops the handle so the next ``acquire()``
    relaunches.
    """

    def __init__(self, cfg: Optional[Settings] = None) -> None:
        self._settings = cfg or default_settings
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()
        self.launch_count = 0

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def is_connected(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def acquire(self) -> Browser:
        """Return the live browser, launching it if needed.

        Raises:
            LaunchError: If Playwright or the browser process fails to start.
        """
        browser = self._browser
        if browser is not None and browser.is_connected():
            return browser

        async with self._lock:
            # Another caller may have launched while we waited.
            browser = self._browser
            if browser is not None and browser.is_connected():
                return browser

            logger.info("Launching headless browser")
            browser = await self._launch()
            browser.on("disconnected", self._on_disconnected)
            self._browser = browser
            self.launch_count += 1
            logger.info("Browser ready (launch #%d)", self.launch_count)
            return browser

    async def _launch(self) -> Browser:
        cfg = self._settings
        try:
            if self._playwright is None:
                self._playwright = await async_playwright().start()
            return await self._playwright.chromium.launch(
                headless=cfg.headless,
                args=_launch_args(cfg),
                ignore_default_args=["--enable-automation"],
                executable_path=cfg.browser_executable or None,
                timeout=cfg.browser_launch_timeout * 1000,
            )
        except Exception as exc:
            logger.error("Could not start the browser: %s", exc)
            raise LaunchError(f"Could not start the browser: {exc}") from exc

    def _on_disconnected(self, browser: Browser) -> None:
        if self._browser is browser:
            logger.warning("Browser disconnected; it will be relaunched on next use")
            self._browser = None

    async def shutdown(self) -> None:
        """Close the browser and stop Playwright.  Safe to call repeatedly."""
        async with self._lock:
            browser, self._browser = self._browser, None
            if browser is not None and browser.is_connected():
                try:
                    await browser.close()
                except Exception as exc:
                    logger.warning("Error closing browser: %s", exc)
            if self._playwright is not None:
                playwright, self._playwright = self._playwright, None
                await playwright.stop()
            logger.info("Browser pool shut down")


async def _block_heavy_resources(route: Route) -> None:
    if route.request.resource_type in BLOCKED_RESOURCE_TYPES:
        await route.abort()
    else:
        await route.continue_()


@asynccontextmanager
async def open_session(
    browser: Browser,
    cfg: Optional[Settings] = None,
) -> AsyncIterator[Page]:
    """Open an isolated page on *browser*; the context is closed on exit.

    The page carries a desktop user agent, an ``Accept-Language`` header,
    stealth patches, and a route that aborts image/stylesheet/font/media
    requests.
    """
    cfg = cfg or default_settings
    context = await browser.new_context(
        user_agent=cfg.user_agent,
        locale=cfg.locale,
        viewport={"width": cfg.viewport_width, "height": cfg.viewport_height},
        extra_http_headers={"Accept-Language": cfg.accept_language},
        ignore_https_errors=True,
    )
    try:
        await _stealth.apply_stealth_async(context)
        page = await context.new_page()
        await page.route("**/*", _block_heavy_resources)
        yield page
    finally:
        try:
            await context.close()
        except Exception as exc:
            logger.warning("Error closing page session: %s", exc)
