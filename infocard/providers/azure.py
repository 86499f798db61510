"""Azure OpenAI: deployment-scoped chat completions with an ``api-key`` header."""

from __future__ import annotations

from typing import Dict

from .base import TEMPERATURE, ProviderCall, ProviderName, ProviderRequest, register_adapter
from .openai_compat import ChatCompletionsAdapter


@register_adapter(ProviderName.AZURE)
class AzureOpenAIAdapter(ChatCompletionsAdapter):
    def headers(self, call: ProviderCall) -> Dict[str, str]:
        return {"api-key": call.api_key, "Content-Type": "application/json"}

    def build_request(self, call: ProviderCall) -> ProviderRequest:
        # The model name is the deployment name and lives in the path
        return ProviderRequest(
            url=f"{call.base_url}/openai/deployments/{call.model}/chat/completions",
            json={"messages": self.messages(call), "temperature": TEMPERATURE},
            headers=self.headers(call),
            params={"api-version": call.spec.api_version or ""},
        )
