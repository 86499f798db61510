from __future__ import annotations

from typing import Any

from .base import ProviderAdapter, ProviderCall, ProviderName, ProviderRequest, register_adapter

ANTHROPIC_VERSION = "2023-06-01"
MAX_TOKENS = 1000


@register_adapter(ProviderName.CLAUDE)
class ClaudeAdapter(ProviderAdapter):
    """Anthropic Messages API."""

    def build_request(self, call: ProviderCall) -> ProviderRequest:
        return ProviderRequest(
            url=f"{call.base_url}/v1/messages",
            json={
                "model": call.model,
                "max_tokens": MAX_TOKENS,
                "messages": [
                    {"role": "user", "content": f"{call.system_prompt}\n\n{call.prompt}"}
                ],
            },
            headers={
                "x-api-key": call.api_key,
                "anthropic-version": ANTHROPIC_VERSION,
                "Content-Type": "application/json",
            },
        )

    def extract_text(self, data: Any) -> Any:
        return data["content"][0]["text"]
