"""FastAPI dependencies."""

from typing import Optional

from infocard.config import get_settings
from infocard.extractor import ContentExtractor
from infocard.providers import ProviderDispatcher
from infocard.service import CardService

_card_service: Optional[CardService] = None


def get_card_service() -> CardService:
    """Get the process-wide card service (and with it the shared browser)."""
    global _card_service
    if _card_service is None:
        settings = get_settings()
        _card_service = CardService(
            extractor=ContentExtractor(settings),
            dispatcher=ProviderDispatcher(settings),
        )
    return _card_service


async def close_card_service() -> None:
    """Release the shared browser; a no-op if the service was never built."""
    global _card_service
    if _card_service is not None:
        await _card_service.close()
        _card_service = None
