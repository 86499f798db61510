"""Lightweight page fetch: plain GET, strip markup, no JavaScript."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from infocard.utils.text import html_to_text

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)


async def fetch_static_text(
    url: str,
    timeout: float = 10.0,
    user_agent: str = DEFAULT_USER_AGENT,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    """
    Fetch ``url`` and return its tag-stripped, normalized text.

    ``timeout`` bounds the whole exchange, body included, not each read.
    Never raises: transport errors, non-2xx statuses and non-HTML content
    are logged and reported as an empty string so the caller can fall back
    to rendering the page in a browser.
    """
    try:
        async with httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": user_agent},
            transport=transport,
        ) as client:
            response = await asyncio.wait_for(client.get(url), timeout)
            response.raise_for_status()
    except (asyncio.TimeoutError, httpx.TimeoutException):
        logger.warning(f"Timeout fetching {url}", extra={"stage": "static", "url": url})
        return ""
    except httpx.HTTPStatusError as e:
        logger.warning(
            f"HTTP {e.response.status_code} for {url}", extra={"stage": "static", "url": url}
        )
        return ""
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.warning(f"Error fetching {url}: {e}", extra={"stage": "static", "url": url})
        return ""

    content_type = response.headers.get("content-type", "")
    if "text/html" not in content_type.lower():
        logger.warning(
            f"Not HTML content ({content_type or 'no content-type'}) for {url}",
            extra={"stage": "static", "url": url},
        )
        return ""

    text = html_to_text(response.text)
    logger.debug(
        f"Static fetch got {len(text)} chars from {url}",
        extra={"stage": "static", "url": url, "content_length": len(text)},
    )
    return text
