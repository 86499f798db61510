"""Provider table, adapter capability and adapter registry.

Every supported model provider is one ``ProviderAdapter`` subclass registered
under its ``ProviderName``. An adapter knows how to turn a prompt into its
provider's HTTP request (``build_request``) and how to find the single text
field in its provider's reply (``parse_reply``). Adding a provider means adding
a spec row and a registered adapter; dispatch never changes.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Type

import httpx

from infocard.config import Settings
from infocard.exceptions import ProviderError
from infocard.models import ProviderDescriptor
from infocard.prompts.registry import card_system_instruction

logger = logging.getLogger(__name__)

TEMPERATURE = 0.3


class ProviderName(str, Enum):
    OPENAI = "openai"
    DEEPSEEK = "deepseek"
    AZURE = "azure"
    GEMINI = "gemini"
    CLAUDE = "claude"
    OPENROUTER = "openrouter"
    ZHIPU = "zhipu"


@dataclass(frozen=True)
class ProviderSpec:
    """Static defaults for one provider."""

    name: ProviderName
    display_name: str
    default_model: str
    # None means the caller (or an endpoint setting) must supply it
    base_url: Optional[str]
    credential_setting: str
    endpoint_setting: Optional[str] = None
    api_version: Optional[str] = None


PROVIDER_SPECS: Dict[ProviderName, ProviderSpec] = {
    ProviderName.OPENAI: ProviderSpec(
        name=ProviderName.OPENAI,
        display_name="OpenAI",
        default_model="gpt-3.5-turbo",
        base_url="https://api.openai.com/v1",
        credential_setting="openai_api_key",
    ),
    ProviderName.DEEPSEEK: ProviderSpec(
        name=ProviderName.DEEPSEEK,
        display_name="DeepSeek",
        default_model="deepseek-chat",
        base_url="https://api.deepseek.com/v1",
        credential_setting="deepseek_api_key",
    ),
    ProviderName.AZURE: ProviderSpec(
        name=ProviderName.AZURE,
        display_name="Azure OpenAI",
        default_model="gpt-35-turbo",
        base_url=None,
        credential_setting="azure_openai_api_key",
        endpoint_setting="azure_openai_endpoint",
        api_version="2024-02-15-preview",
    ),
    ProviderName.GEMINI: ProviderSpec(
        name=ProviderName.GEMINI,
        display_name="Gemini",
        default_model="gemini-pro",
        base_url="https://generativelanguage.googleapis.com/v1beta",
        credential_setting="gemini_api_key",
    ),
    ProviderName.CLAUDE: ProviderSpec(
        name=ProviderName.CLAUDE,
        display_name="Claude",
        default_model="claude-3-sonnet-20240229",
        base_url="https://api.anthropic.com",
        credential_setting="claude_api_key",
    ),
    ProviderName.OPENROUTER: ProviderSpec(
        name=ProviderName.OPENROUTER,
        display_name="OpenRouter",
        default_model="anthropic/claude-3-sonnet",
        base_url="https://openrouter.ai/api/v1",
        credential_setting="openrouter_api_key",
    ),
    ProviderName.ZHIPU: ProviderSpec(
        name=ProviderName.ZHIPU,
        display_name="Zhipu AI",
        default_model="glm-4",
        base_url="https://open.bigmodel.cn/api/paas/v4",
        credential_setting="zhipu_api_key",
    ),
}


@dataclass(frozen=True)
class ProviderCall:
    """Effective values for one provider call after applying overrides."""

    spec: ProviderSpec
    prompt: str
    system_prompt: str
    model: str
    api_key: str
    base_url: str


@dataclass(frozen=True)
class ProviderRequest:
    url: str
    json: Dict[str, Any]
    headers: Dict[str, str] = field(default_factory=dict)
    params: Optional[Dict[str, str]] = None


class ProviderAdapter(ABC):
    """Builds requests for, and reads replies from, one provider."""

    name: ProviderName

    def __init__(self, settings: Settings):
        self.settings = settings
        self.spec = PROVIDER_SPECS[self.name]

    def resolve(self, prompt: str, descriptor: ProviderDescriptor) -> ProviderCall:
        """Apply caller overrides over table defaults and fallback credentials."""
        spec = self.spec
        api_key = descriptor.api_key or getattr(self.settings, spec.credential_setting, "")
        if not api_key:
            raise ProviderError(
                f"No API key configured for {spec.display_name}", provider=spec.name.value
            )

        base_url = descriptor.base_url or spec.base_url
        if not base_url and spec.endpoint_setting:
            base_url = getattr(self.settings, spec.endpoint_setting, "")
        if not base_url:
            raise ProviderError(
                f"No endpoint configured for {spec.display_name}", provider=spec.name.value
            )

        return ProviderCall(
            spec=spec,
            prompt=prompt,
            system_prompt=card_system_instruction(),
            model=descriptor.model or spec.default_model,
            api_key=api_key,
            base_url=base_url.rstrip("/"),
        )

    @abstractmethod
    def build_request(self, call: ProviderCall) -> ProviderRequest:
        """Return the provider-specific HTTP request for ``call``."""

    @abstractmethod
    def extract_text(self, data: Any) -> Any:
        """Walk the provider reply shape down to its text field.

        May raise ``KeyError``/``IndexError``/``TypeError`` when the shape is wrong.
        """

    def parse_reply(self, data: Any) -> str:
        try:
            content = self.extract_text(data)
        except (KeyError, IndexError, TypeError):
            content = None
        if not isinstance(content, str) or not content.strip():
            raise ProviderError(
                f"{self.spec.display_name} returned an empty response", provider=self.name.value
            )
        return content

    async def complete(
        self, client: httpx.AsyncClient, prompt: str, descriptor: ProviderDescriptor
    ) -> str:
        """Send ``prompt`` to the provider and return the raw model text."""
        call = self.resolve(prompt, descriptor)
        request = self.build_request(call)
        display = self.spec.display_name

        logger.info(
            f"Calling {display} model {call.model}",
            extra={"provider": self.name.value},
        )
        try:
            response = await client.post(
                request.url, json=request.json, headers=request.headers, params=request.params
            )
        except httpx.HTTPError as exc:
            logger.error(f"Request to {display} failed: {exc!r}", extra={"provider": self.name.value})
            raise ProviderError(
                f"Request to {display} failed ({type(exc).__name__})", provider=self.name.value
            ) from exc

        if response.is_error:
            logger.error(
                f"{display} API error {response.status_code}: {response.text[:500]}",
                extra={"provider": self.name.value, "status_code": response.status_code},
            )
            raise ProviderError(
                f"{display} returned HTTP {response.status_code}",
                provider=self.name.value,
                status_code=response.status_code,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ProviderError(
                f"{display} returned a non-JSON response", provider=self.name.value
            ) from exc
        return self.parse_reply(data)


_ADAPTERS: Dict[ProviderName, Type[ProviderAdapter]] = {}


def register_adapter(name: ProviderName) -> Callable[[Type[ProviderAdapter]], Type[ProviderAdapter]]:
    """Class decorator that registers an adapter for ``name``."""

    def decorator(cls: Type[ProviderAdapter]) -> Type[ProviderAdapter]:
        cls.name = name
        _ADAPTERS[name] = cls
        return cls

    return decorator


def get_adapter(provider_name: str, settings: Settings) -> ProviderAdapter:
    """Look up the adapter for ``provider_name`` (case-insensitive)."""
    key = (provider_name or "").strip().lower()
    try:
        adapter_cls = _ADAPTERS[ProviderName(key)]
    except (ValueError, KeyError):
        raise ProviderError(f"Unsupported AI provider: {provider_name}", provider=key) from None
    return adapter_cls(settings)


def registered_providers() -> list[ProviderName]:
    return list(_ADAPTERS)
