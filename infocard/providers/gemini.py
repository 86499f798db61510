from __future__ import annotations

from typing import Any

from .base import (
    TEMPERATURE,
    ProviderAdapter,
    ProviderCall,
    ProviderName,
    ProviderRequest,
    register_adapter,
)


@register_adapter(ProviderName.GEMINI)
class GeminiAdapter(ProviderAdapter):
    """Google Gemini ``generateContent``; the key travels as a query parameter."""

    def build_request(self, call: ProviderCall) -> ProviderRequest:
        model = call.model.removeprefix("models/")
        return ProviderRequest(
            url=f"{call.base_url}/models/{model}:generateContent",
            json={
                "contents": [
                    {"parts": [{"text": f"{call.system_prompt}\n\n{call.prompt}"}]}
                ],
                "generationConfig": {"temperature": TEMPERATURE},
            },
            headers={"Content-Type": "application/json"},
            params={"key": call.api_key},
        )

    def extract_text(self, data: Any) -> Any:
        return data["candidates"][0]["content"]["parts"][0]["text"]
