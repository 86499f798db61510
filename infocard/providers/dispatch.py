from __future__ import annotations

import asyncio
import logging
from typing import Optional

import httpx

from infocard.config import Settings
from infocard.exceptions import ProviderError
from infocard.models import CardPayload, ProviderDescriptor

from .base import get_adapter
from .parsing import parse_card_reply

logger = logging.getLogger(__name__)


class ProviderDispatcher:
    """Routes a prompt to the adapter registered for the requested provider."""

    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        timeout = httpx.Timeout(self.settings.provider_timeout, connect=10.0)
        return httpx.AsyncClient(timeout=timeout, transport=self._transport)

    async def call_provider(self, descriptor: ProviderDescriptor, prompt: str) -> str:
        """Return the raw model text for ``prompt``.

        Raises:
            ProviderError: unsupported provider (before any network call),
                transport failure, non-2xx reply, an empty text field, or no
                reply within PROVIDER_TIMEOUT seconds overall
        """
        adapter = get_adapter(descriptor.name, self.settings)
        timeout = self.settings.provider_timeout
        async with self._client() as client:
            try:
                return await asyncio.wait_for(adapter.complete(client, prompt, descriptor), timeout)
            except asyncio.TimeoutError as exc:
                display = adapter.spec.display_name
                logger.error(
                    f"{display} did not answer within {timeout}s",
                    extra={"provider": adapter.name.value},
                )
                raise ProviderError(
                    f"Request to {display} timed out", provider=adapter.name.value
                ) from exc

    async def extract_card(self, descriptor: ProviderDescriptor, prompt: str) -> CardPayload:
        raw_text = await self.call_provider(descriptor, prompt)
        return parse_card_reply(raw_text)
