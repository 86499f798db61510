"""Two-stage page text extraction.

Stage one is a plain HTTP fetch. Pages whose static HTML already carries more
than ``MIN_STATIC_TEXT_CHARS`` of text are returned straight away; anything
shorter (or a failed fetch) is rendered in the shared headless browser.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from playwright.async_api import Error as PlaywrightError

from infocard.config import Settings
from infocard.exceptions import ExtractionError
from infocard.utils.text import normalize_text

from .browser import BrowserManager
from .http_fetch import DEFAULT_USER_AGENT, fetch_static_text

logger = logging.getLogger(__name__)

MIN_STATIC_TEXT_CHARS = 100
MIN_MAIN_CONTENT_CHARS = 200

NOISE_SELECTORS = (
    "script",
    "style",
    "nav",
    "header",
    "footer",
    ".ad",
    ".advertisement",
    ".sidebar",
    ".menu",
    ".navigation",
    ".social-media",
    ".comments",
    ".popup",
    ".modal",
)

CONTENT_SELECTORS = (
    "article",
    "main",
    '[role="main"]',
    ".content",
    ".article-content",
    ".post-content",
    ".entry-content",
    "#content",
    "#main-content",
)

_REMOVE_NOISE_JS = """
(selectors) => {
  for (const selector of selectors) {
    document.querySelectorAll(selector).forEach((el) => el.remove());
  }
}
"""

_MAIN_TEXT_JS = """
([selectors, minLength]) => {
  for (const selector of selectors) {
    const element = document.querySelector(selector);
    const text = element ? (element.textContent || '') : '';
    if (text.length > minLength) {
      return text;
    }
  }
  return document.body ? (document.body.textContent || '') : '';
}
"""


class ContentExtractor:
    """Produces clean plain text from a URL or from raw text."""

    def __init__(
        self,
        settings: Settings,
        browser: Optional[BrowserManager] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.browser = browser or BrowserManager(headless=settings.browser_headless)
        self._transport = transport

    def extract_from_text(self, text: str | None) -> str:
        return normalize_text(text)

    async def extract_from_url(self, url: str) -> str:
        text = await fetch_static_text(
            url,
            timeout=self.settings.fetch_timeout,
            user_agent=DEFAULT_USER_AGENT,
            transport=self._transport,
        )
        if len(text) > MIN_STATIC_TEXT_CHARS:
            return text

        logger.info(
            f"Static fetch yielded {len(text)} chars for {url}, rendering in browser",
            extra={"stage": "browser", "url": url},
        )
        return await self.render(url)

    async def render(self, url: str) -> str:
        """Load ``url`` in the shared browser and read its main text.

        Raises:
            ExtractionError: browser launch, navigation or evaluation failed
        """
        try:
            async with self.browser.page(DEFAULT_USER_AGENT) as page:
                await page.goto(
                    url,
                    wait_until="networkidle",
                    timeout=self.settings.browser_timeout * 1000,
                )
                await page.evaluate(_REMOVE_NOISE_JS, list(NOISE_SELECTORS))
                raw = await page.evaluate(
                    _MAIN_TEXT_JS, [list(CONTENT_SELECTORS), MIN_MAIN_CONTENT_CHARS]
                )
        except PlaywrightError as exc:
            logger.error(
                f"Browser extraction failed for {url}: {exc}",
                extra={"stage": "browser", "url": url},
            )
            raise ExtractionError(f"Failed to extract content from URL: {exc.message}") from exc

        text = normalize_text(raw if isinstance(raw, str) else "")
        logger.debug(
            f"Browser extraction got {len(text)} chars from {url}",
            extra={"stage": "browser", "url": url, "content_length": len(text)},
        )
        return text

    async def close(self) -> None:
        await self.browser.close()
