"""Shared headless browser used to render JavaScript-heavy pages.

One Chromium process serves the whole application. It is launched lazily on
the first render, guarded by an ``asyncio.Lock`` so concurrent first requests
launch it only once, and relaunched if it has disconnected. Each render gets
its own page, which is closed by the ``page()`` context manager on every exit
path. ``close()`` tears the browser down and is safe to call repeatedly or
when nothing was ever launched.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional, Tuple

from playwright.async_api import Browser, Page, Playwright, async_playwright

logger = logging.getLogger(__name__)

LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--disable-gpu",
]

VIEWPORT = {"width": 1200, "height": 800}


class BrowserManager:
    """Owns the process-wide browser instance."""

    def __init__(self, headless: bool = True):
        self.headless = headless
        self._lock = asyncio.Lock()
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self.launch_count = 0

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def _launch(self) -> Tuple[Optional[Playwright], Browser]:
        playwright = await async_playwright().start()
        try:
            browser = await playwright.chromium.launch(headless=self.headless, args=LAUNCH_ARGS)
        except BaseException:
            await playwright.stop()
            raise
        return playwright, browser

    async def get_browser(self) -> Browser:
        """Return the shared browser, launching it on first use."""
        async with self._lock:
            if self._browser is not None and not self._browser.is_connected():
                logger.warning("Browser disconnected, relaunching")
                await self._shutdown()
            if self._browser is None:
                self._playwright, self._browser = await self._launch()
                self.launch_count += 1
                logger.info("Headless browser launched")
            return self._browser

    @asynccontextmanager
    async def page(self, user_agent: str) -> AsyncIterator[Page]:
        """Open a fresh page (own context) on the shared browser."""
        browser = await self.get_browser()
        page = await browser.new_page(user_agent=user_agent, viewport=VIEWPORT)
        try:
            yield page
        finally:
            await page.close()

    async def _shutdown(self) -> None:
        browser, playwright = self._browser, self._playwright
        self._browser = None
        self._playwright = None
        try:
            if browser is not None:
                await browser.close()
        finally:
            if playwright is not None:
                await playwright.stop()

    async def close(self) -> None:
        """Dispose of the shared browser if one exists."""
        async with self._lock:
            if self._browser is None and self._playwright is None:
                return
            await self._shutdown()
            logger.info("Headless browser closed")
