"""Application configuration using Pydantic Settings."""

import logging
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Configuration
    app_title: str = Field(default="Info Card API", description="Application title")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    host: str = Field(default="0.0.0.0", description="Bind address for the server")
    port: int = Field(default=3001, description="Bind port for the server")
    max_body_bytes: int = Field(
        default=10 * 1024 * 1024, description="Largest accepted request body in bytes"
    )
    allowed_origins: str = Field(
        default="http://localhost:5173", description="Comma-separated CORS origins"
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_json: bool = Field(default=True, description="Use JSON log format")
    log_file: str | None = Field(default=None, description="Optional log file path")

    # Content extraction
    fetch_timeout: float = Field(default=10.0, description="Plain HTTP fetch timeout in seconds")
    browser_timeout: float = Field(default=30.0, description="Browser navigation timeout in seconds")
    browser_headless: bool = Field(default=True, description="Run the browser headless")

    # Provider calls
    provider_timeout: float = Field(default=60.0, description="Model provider request timeout in seconds")
    openrouter_referer: str = Field(default="https://info-card.local", description="OpenRouter HTTP-Referer")
    openrouter_title: str = Field(default="Info Card Generator", description="OpenRouter X-Title")

    # Fallback credentials, used when the caller does not supply one
    openai_api_key: str = Field(default="", description="OpenAI API key")
    deepseek_api_key: str = Field(default="", description="DeepSeek API key")
    azure_openai_api_key: str = Field(default="", description="Azure OpenAI API key")
    azure_openai_endpoint: str = Field(default="", description="Azure OpenAI resource endpoint")
    gemini_api_key: str = Field(default="", description="Google Gemini API key")
    claude_api_key: str = Field(default="", description="Anthropic Claude API key")
    openrouter_api_key: str = Field(default="", description="OpenRouter API key")
    zhipu_api_key: str = Field(default="", description="Zhipu AI API key")

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]

    def configured_providers(self) -> dict[str, bool]:
        """Report which providers have a fallback credential, without exposing values."""
        return {
            "openai": bool(self.openai_api_key),
            "deepseek": bool(self.deepseek_api_key),
            "azure": bool(self.azure_openai_api_key and self.azure_openai_endpoint),
            "gemini": bool(self.gemini_api_key),
            "claude": bool(self.claude_api_key),
            "openrouter": bool(self.openrouter_api_key),
            "zhipu": bool(self.zhipu_api_key),
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def log_startup_config(settings: Settings) -> None:
    """Log one line summarising active configuration."""
    configured = ",".join(name for name, ok in settings.configured_providers().items() if ok)
    logger.info(
        f"{settings.app_title} {settings.app_version} config: "
        f"fetch_timeout={settings.fetch_timeout} browser_timeout={settings.browser_timeout} "
        f"browser_headless={settings.browser_headless} provider_timeout={settings.provider_timeout} "
        f"origins={settings.cors_origins} fallback_credentials=[{configured or 'none'}]"
    )
