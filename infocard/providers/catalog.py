"""Static provider listing served by ``GET /api/providers``."""

from infocard.models import ProviderInfo

PROVIDER_CATALOG: tuple[ProviderInfo, ...] = (
    ProviderInfo(
        name="deepseek",
        display_name="DeepSeek",
        models=["deepseek-chat", "deepseek-reasoner"],
        required=["apiKey"],
        description="DeepSeek AI models",
    ),
    ProviderInfo(
        name="zhipu",
        display_name="Zhipu AI",
        models=["glm-4.6", "glm-4.5", "glm-4.5-air", "glm-4.5-flash"],
        required=["apiKey"],
        description="Zhipu GLM models",
    ),
    ProviderInfo(
        name="openai",
        display_name="OpenAI",
        models=["gpt-4o", "gpt-4"],
        required=["apiKey"],
        description="OpenAI GPT models",
    ),
    ProviderInfo(
        name="azure",
        display_name="Azure OpenAI",
        models=["gpt-35-turbo", "gpt-4"],
        required=["apiKey", "endpoint"],
        description="Azure OpenAI Service",
    ),
    ProviderInfo(
        name="gemini",
        display_name="Google Gemini",
        models=["gemini-pro", "gemini-pro-vision"],
        required=["apiKey"],
        description="Google Gemini models",
    ),
    ProviderInfo(
        name="claude",
        display_name="Anthropic Claude",
        models=["claude-3-sonnet-20240229", "claude-3-opus-20240229"],
        required=["apiKey"],
        description="Anthropic Claude models",
    ),
    ProviderInfo(
        name="openrouter",
        display_name="OpenRouter",
        models=["anthropic/claude-3-sonnet", "openai/gpt-3.5-turbo"],
        required=["apiKey"],
        description="OpenRouter aggregation service",
    ),
)


def list_providers() -> list[ProviderInfo]:
    return list(PROVIDER_CATALOG)
