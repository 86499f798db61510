"""Shared fixtures and test doubles."""

from __future__ import annotations

import asyncio
import json
from typing import Callable, List, Optional

import httpx
import pytest

from infocard.config import Settings
from infocard.extractor import BrowserManager, ContentExtractor
from infocard.providers import ProviderDispatcher
from infocard.service import CardService


CARD_JSON = {
    "title": "Company X Funding",
    "description": "Company X closed a $10M funding round.",
    "keyPoints": ["Raised $10M", "Led by Fund Y", "Will hire engineers"],
    "tags": ["funding", "startup"],
}


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        openai_api_key="sk-openai",
        deepseek_api_key="sk-deepseek",
        azure_openai_api_key="az-key",
        azure_openai_endpoint="https://example.openai.azure.com/",
        gemini_api_key="gm-key",
        claude_api_key="cl-key",
        openrouter_api_key="or-key",
        zhipu_api_key="zp-key",
    )


class FakePage:
    def __init__(self, text: str, goto_error: Optional[Exception] = None):
        self.text = text
        self.goto_error = goto_error
        self.goto_calls: list = []
        self.evaluate_args: list = []
        self.closed = False
        self.user_agent: Optional[str] = None
        self.viewport: Optional[dict] = None

    async def goto(self, url, wait_until=None, timeout=None):
        self.goto_calls.append({"url": url, "wait_until": wait_until, "timeout": timeout})
        await asyncio.sleep(0)
        if self.goto_error is not None:
            raise self.goto_error

    async def evaluate(self, script, arg=None):
        self.evaluate_args.append(arg)
        return self.text

    async def close(self):
        self.closed = True


class FakeBrowser:
    def __init__(self, text: str = "", goto_error: Optional[Exception] = None):
        self.text = text
        self.goto_error = goto_error
        self.pages: List[FakePage] = []
        self.connected = True
        self.closed = False

    def is_connected(self) -> bool:
        return self.connected

    async def new_page(self, user_agent=None, viewport=None):
        page = FakePage(self.text, self.goto_error)
        page.user_agent = user_agent
        page.viewport = viewport
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True
        self.connected = False


class FakeBrowserManager(BrowserManager):
    """BrowserManager whose launch hands out in-process fake browsers."""

    def __init__(self, factory: Callable[[], FakeBrowser]):
        super().__init__(headless=True)
        self.factory = factory
        self.browsers: List[FakeBrowser] = []

    async def _launch(self):
        # Yield so concurrent first callers really do race for the lock
        await asyncio.sleep(0)
        browser = self.factory()
        self.browsers.append(browser)
        return None, browser


def html_response(body: str, status_code: int = 200, content_type: str = "text/html; charset=utf-8"):
    return httpx.Response(status_code, headers={"content-type": content_type}, text=body)


def chat_completion(content: Optional[str]) -> dict:
    return {
        "id": "chatcmpl-test",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "gpt-3.5-turbo",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }


@pytest.fixture
def long_html() -> str:
    paragraph = "Static page paragraph with plenty of readable words. " * 5
    return (
        "<html><head><script>var tracking = 'ignore me';</script>"
        "<style>p { color: red; }</style></head>"
        f"<body><p>{paragraph}</p></body></html>"
    )


@pytest.fixture
def card_service_factory(settings):
    """Build a CardService wired to fake browser and mock provider transport."""

    def build(
        provider_handler: Callable[[httpx.Request], httpx.Response],
        page_handler: Optional[Callable[[httpx.Request], httpx.Response]] = None,
        browser_text: str = "",
    ) -> CardService:
        page_transport = httpx.MockTransport(page_handler) if page_handler else None
        extractor = ContentExtractor(
            settings,
            browser=FakeBrowserManager(lambda: FakeBrowser(browser_text)),
            transport=page_transport,
        )
        dispatcher = ProviderDispatcher(settings, transport=httpx.MockTransport(provider_handler))
        return CardService(extractor, dispatcher)

    return build


def openai_card_handler(card: Optional[dict] = None):
    """Provider double answering every call with a chat completion holding ``card``."""
    calls: list = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        content = "Here is the card:\n" + json.dumps(card or CARD_JSON)
        return httpx.Response(200, json=chat_completion(content))

    handler.calls = calls  # type: ignore[attr-defined]
    return handler
