"""Page and text content extraction."""

from .browser import BrowserManager
from .content import ContentExtractor
from .http_fetch import DEFAULT_USER_AGENT, fetch_static_text

__all__ = [
    "BrowserManager",
    "ContentExtractor",
    "DEFAULT_USER_AGENT",
    "fetch_static_text",
]
