"""Chat-completions style providers: OpenAI, DeepSeek, OpenRouter and Zhipu."""

from __future__ import annotations

import logging
from typing import Any, Dict, List

import httpx
import openai
from openai import AsyncOpenAI

from infocard.exceptions import ProviderError
from infocard.models import ProviderDescriptor

from .base import (
    TEMPERATURE,
    ProviderAdapter,
    ProviderCall,
    ProviderName,
    ProviderRequest,
    register_adapter,
)

logger = logging.getLogger(__name__)


class ChatCompletionsAdapter(ProviderAdapter):
    """``POST {base}/chat/completions`` with a Bearer token."""

    def messages(self, call: ProviderCall) -> List[Dict[str, str]]:
        return [
            {"role": "system", "content": call.system_prompt},
            {"role": "user", "content": call.prompt},
        ]

    def headers(self, call: ProviderCall) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {call.api_key}",
            "Content-Type": "application/json",
        }

    def build_request(self, call: ProviderCall) -> ProviderRequest:
        return ProviderRequest(
            url=f"{call.base_url}/chat/completions",
            json={
                "model": call.model,
                "messages": self.messages(call),
                "temperature": TEMPERATURE,
            },
            headers=self.headers(call),
        )

    def extract_text(self, data: Any) -> Any:
        return data["choices"][0]["message"]["content"]


@register_adapter(ProviderName.DEEPSEEK)
class DeepSeekAdapter(ChatCompletionsAdapter):
    pass


@register_adapter(ProviderName.ZHIPU)
class ZhipuAdapter(ChatCompletionsAdapter):
    pass


@register_adapter(ProviderName.OPENROUTER)
class OpenRouterAdapter(ChatCompletionsAdapter):
    def headers(self, call: ProviderCall) -> Dict[str, str]:
        headers = super().headers(call)
        headers["HTTP-Referer"] = self.settings.openrouter_referer
        headers["X-Title"] = self.settings.openrouter_title
        return headers


@register_adapter(ProviderName.OPENAI)
class OpenAIAdapter(ChatCompletionsAdapter):
    """OpenAI through the official SDK, sharing the dispatcher's HTTP client."""

    async def complete(
        self, client: httpx.AsyncClient, prompt: str, descriptor: ProviderDescriptor
    ) -> str:
        call = self.resolve(prompt, descriptor)
        sdk = AsyncOpenAI(
            api_key=call.api_key,
            base_url=call.base_url,
            http_client=client,
            max_retries=0,
            timeout=self.settings.provider_timeout,
        )

        logger.info(f"Calling OpenAI model {call.model}", extra={"provider": self.name.value})
        try:
            completion = await sdk.chat.completions.create(
                model=call.model,
                messages=self.messages(call),
                temperature=TEMPERATURE,
            )
        except openai.APIStatusError as exc:
            logger.error(
                f"OpenAI API error {exc.status_code}: {exc.message}",
                extra={"provider": self.name.value, "status_code": exc.status_code},
            )
            raise ProviderError(
                f"OpenAI returned HTTP {exc.status_code}",
                provider=self.name.value,
                status_code=exc.status_code,
            ) from exc
        except openai.APIError as exc:
            logger.error(f"Request to OpenAI failed: {exc!r}", extra={"provider": self.name.value})
            raise ProviderError(
                f"Request to OpenAI failed ({type(exc).__name__})", provider=self.name.value
            ) from exc

        content = completion.choices[0].message.content if completion.choices else None
        if not content or not content.strip():
            raise ProviderError("OpenAI returned an empty response", provider=self.name.value)
        return content
