"""Tests for the shared browser pool and page sessions.

Mocking strategy:
- ``BrowserPool._launch`` is replaced with an async fake so no Chromium
  process is ever started; the fake can be slowed down to force two
  ``acquire()`` calls to overlap.
- ``open_session`` runs against a ``MagicMock`` browser whose context and page
  methods are ``AsyncMock``s; the module-level stealth helper is patched out.
"""

from __future__ import annotations

import asyncio
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from newsreader.config import Settings
from newsreader.scraper.browser import (
    BLOCKED_RESOURCE_TYPES,
    BrowserPool,
    _block_heavy_resources,
    open_session,
)
from newsreader.scraper.errors import LaunchError


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class FakeBrowser:
    """Minimal stand-in for ``playwright.async_api.Browser``."""

    def __init__(self) -> None:
        self.connected = True
        self.listeners: dict[str, list] = {}
        self.close = AsyncMock(side_effect=self._close)

    def is_connected(self) -> bool:
        return self.connected

    def on(self, event: str, handler) -> None:
        self.listeners.setdefault(event, []).append(handler)

    async def _close(self) -> None:
        self.disconnect()

    def disconnect(self) -> None:
        self.connected = False
        for handler in self.listeners.get("disconnected", []):
            handler(self)


def _pool_with_fake_launch(delay: float = 0.0) -> tuple[BrowserPool, list[FakeBrowser]]:
    pool = BrowserPool(Settings())
    launched: list[FakeBrowser] = []

    async def _fake_launch() -> FakeBrowser:
        await asyncio.sleep(delay)
        browser = FakeBrowser()
        launched.append(browser)
        return browser

    pool._launch = _fake_launch  # type: ignore[method-assign]
    return pool, launched


def _fake_session_browser() -> tuple[MagicMock, MagicMock, MagicMock]:
    page = MagicMock()
    page.route = AsyncMock()
    context = MagicMock()
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock()
    browser.new_context = AsyncMock(return_value=context)
    return browser, context, page


# ---------------------------------------------------------------------------
# BrowserPool
# ---------------------------------------------------------------------------

class TestBrowserPool:
    async def test_launches_lazily_and_reuses(self) -> None:
        pool, launched = _pool_with_fake_launch()
        assert launched == []

        first = await pool.acquire()
        second = await pool.acquire()

        assert first is second
        assert len(launched) == 1
        assert pool.launch_count == 1
        assert pool.is_connected is True

    async def test_concurrent_acquire_is_single_flight(self) -> None:
        pool, launched = _pool_with_fake_launch(delay=0.05)

        a, b = await asyncio.gather(pool.acquire(), pool.acquire())

        assert len(launched) == 1
        assert a is b is launched[0]

    async def test_relaunches_after_disconnect(self) -> None:
        pool, launched = _pool_with_fake_launch()
        first = await pool.acquire()

        first.disconnect()
        assert pool.is_connected is False

        second = await pool.acquire()
        assert second is not first
        assert len(launched) == 2

    async def test_stale_disconnect_event_ignored(self) -> None:
        pool, _ = _pool_with_fake_launch()
        old = await pool.acquire()
        old.connected = False
        new = await pool.acquire()

        # A late event from the dead browser must not drop the new handle.
        pool._on_disconnected(old)  # type: ignore[arg-type]
        assert await pool.acquire() is new

    async def test_launch_failure_raises_launch_error(self) -> None:
        pool = BrowserPool(Settings())
        fake_pw = MagicMock()
        fake_pw.chromium.launch = AsyncMock(side_effect=RuntimeError("no chromium"))
        starter = MagicMock()
        starter.start = AsyncMock(return_value=fake_pw)

        with patch("newsreader.scraper.browser.async_playwright", return_value=starter):
            with pytest.raises(LaunchError, match="no chromium"):
                await pool.acquire()

        assert pool.is_connected is False

    async def test_launch_uses_container_flags(self) -> None:
        cfg = Settings(headless=True, browser_executable="")
        pool = BrowserPool(cfg)
        fake_pw = MagicMock()
        fake_pw.chromium.launch = AsyncMock(return_value=FakeBrowser())
        starter = MagicMock()
        starter.start = AsyncMock(return_value=fake_pw)

        with patch("newsreader.scraper.browser.async_playwright", return_value=starter):
            await pool.acquire()

        kwargs = fake_pw.chromium.launch.await_args.kwargs
        assert kwargs["headless"] is True
        assert kwargs["executable_path"] is None
        assert "--no-sandbox" in kwargs["args"]
        assert "--disable-gpu" in kwargs["args"]
        assert "--disable-blink-features=AutomationControlled" in kwargs["args"]
        assert kwargs["ignore_default_args"] == ["--enable-automation"]

    async def test_shutdown_closes_and_is_idempotent(self) -> None:
        pool, launched = _pool_with_fake_launch()
        fake_pw = MagicMock()
        fake_pw.stop = AsyncMock()
        pool._playwright = fake_pw

        await pool.acquire()
        await pool.shutdown()
        await pool.shutdown()

        launched[0].close.assert_awaited_once()
        fake_pw.stop.assert_awaited_once()
        assert pool.is_connected is False


# ---------------------------------------------------------------------------
# Page sessions
# ---------------------------------------------------------------------------

class TestOpenSession:
    async def test_configures_page_and_closes_context(self) -> None:
        browser, context, page = _fake_session_browser()
        cfg = Settings(user_agent="UA/1.0", accept_language="vi-VN,vi;q=0.9")

        with patch("newsreader.scraper.browser._stealth") as stealth:
            stealth.apply_stealth_async = AsyncMock()
            async with open_session(browser, cfg) as opened:
                assert opened is page

        kwargs = browser.new_context.await_args.kwargs
        assert kwargs["user_agent"] == "UA/1.0"
        assert kwargs["extra_http_headers"] == {"Accept-Language": "vi-VN,vi;q=0.9"}
        stealth.apply_stealth_async.assert_awaited_once_with(context)
        page.route.assert_awaited_once_with("**/*", _block_heavy_resources)
        context.close.assert_awaited_once()

    async def test_context_closed_on_error(self) -> None:
        browser, context, _ = _fake_session_browser()

        with patch("newsreader.scraper.browser._stealth") as stealth:
            stealth.apply_stealth_async = AsyncMock()
            with pytest.raises(ValueError):
                async with open_session(browser, Settings()):
                    raise ValueError("boom")

        context.close.assert_awaited_once()

    async def test_context_closed_on_cancellation(self) -> None:
        browser, context, _ = _fake_session_browser()

        async def _hang() -> None:
            async with open_session(browser, Settings()):
                await asyncio.sleep(10)

        with patch("newsreader.scraper.browser._stealth") as stealth:
            stealth.apply_stealth_async = AsyncMock()
            with pytest.raises(asyncio.TimeoutError):
                await asyncio.wait_for(_hang(), timeout=0.05)

        context.close.assert_awaited_once()


class TestResourceBlocking:
    @pytest.mark.parametrize("resource_type", sorted(BLOCKED_RESOURCE_TYPES))
    async def test_heavy_resources_aborted(self, resource_type: str) -> None:
        route = SimpleNamespace(
            request=SimpleNamespace(resource_type=resource_type),
            abort=AsyncMock(),
            continue_=AsyncMock(),
        )
        await _block_heavy_resources(route)  # type: ignore[arg-type]
        route.abort.assert_awaited_once()
        route.continue_.assert_not_awaited()

    @pytest.mark.parametrize("resource_type", ["document", "script", "xhr", "fetch"])
    async def test_other_resources_continue(self, resource_type: str) -> None:
        route = SimpleNamespace(
            request=SimpleNamespace(resource_type=resource_type),
            abort=AsyncMock(),
            continue_=AsyncMock(),
        )
        await _block_heavy_resources(route)  # type: ignore[arg-type]
        route.continue_.assert_awaited_once()
        route.abort.assert_not_awaited()
