"""Card extraction pipeline: input → text → model → card."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict
from urllib.parse import urlparse

from infocard.exceptions import EmptyContentError, InvalidInputError
from infocard.extractor import ContentExtractor
from infocard.models import CardPayload, ExtractionRequest
from infocard.prompts.registry import build_card_prompt
from infocard.providers import ProviderDispatcher

logger = logging.getLogger(__name__)

TEXT_INPUT_SOURCE = "text-input"

MISSING_SOURCE_MESSAGE = "Either a URL or text content must be provided"
BOTH_SOURCES_MESSAGE = "Provide either a URL or text content, not both"
MISSING_PROVIDER_MESSAGE = "An AI provider must be specified"
INVALID_URL_MESSAGE = "URL must be an absolute http(s) URL"
EMPTY_CONTENT_MESSAGE = "Unable to extract any usable content"


class CardService:
    """Runs one extraction request end to end; nothing is retried."""

    def __init__(self, extractor: ContentExtractor, dispatcher: ProviderDispatcher):
        self.extractor = extractor
        self.dispatcher = dispatcher

    @staticmethod
    def validate(request: ExtractionRequest) -> None:
        has_url = bool(request.url)
        has_text = bool(request.text)
        if not has_url and not has_text:
            raise InvalidInputError(MISSING_SOURCE_MESSAGE)
        if has_url and has_text:
            raise InvalidInputError(BOTH_SOURCES_MESSAGE)
        if request.provider is None or not request.provider.name.strip():
            raise InvalidInputError(MISSING_PROVIDER_MESSAGE)
        if has_url:
            parsed = urlparse(request.url.strip())
            if parsed.scheme not in ("http", "https") or not parsed.netloc:
                raise InvalidInputError(INVALID_URL_MESSAGE)

    async def extract(self, request: ExtractionRequest) -> CardPayload:
        self.validate(request)
        url = request.url.strip() if request.url else None

        if url:
            content = await self.extractor.extract_from_url(url)
        else:
            content = self.extractor.extract_from_text(request.text)

        if not content.strip():
            raise EmptyContentError(EMPTY_CONTENT_MESSAGE)

        provider = request.provider
        logger.info(
            f"Extracted {len(content)} chars, requesting card from {provider.name}",
            extra={"provider": provider.name, "content_length": len(content), "url": url},
        )
        card = await self.dispatcher.extract_card(provider, build_card_prompt(content))

        metadata: Dict[str, Any] = dict(card.metadata)
        metadata.update(
            source=url or TEXT_INPUT_SOURCE,
            extractedAt=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            provider=provider.name,
        )
        # style and color only ever come from the caller
        metadata.pop("style", None)
        metadata.pop("color", None)
        if request.style is not None:
            metadata["style"] = request.style
        if request.color is not None:
            metadata["color"] = request.color
        return card.model_copy(update={"metadata": metadata})

    async def close(self) -> None:
        await self.extractor.close()
