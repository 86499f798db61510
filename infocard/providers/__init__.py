"""Model provider adapters."""

# Importing the adapter modules registers them
from . import azure, claude, gemini, openai_compat  # noqa: F401
from .base import PROVIDER_SPECS, ProviderAdapter, ProviderName, get_adapter, registered_providers
from .dispatch import ProviderDispatcher
from .parsing import parse_card_reply

__all__ = [
    "PROVIDER_SPECS",
    "ProviderAdapter",
    "ProviderDispatcher",
    "ProviderName",
    "get_adapter",
    "parse_card_reply",
    "registered_providers",
]
