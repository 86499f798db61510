"""FastAPI application for the info card service."""

import logging
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from infocard.config import get_settings, log_startup_config
from infocard.dependencies import close_card_service, get_card_service
from infocard.exceptions import InfoCardError, ResponseFormatError
from infocard.middleware.request_logging import RequestLoggingMiddleware
from infocard.models import (
    ExtractionRequest,
    ExtractResponse,
    HealthResponse,
    ProviderListResponse,
)
from infocard.providers.catalog import list_providers
from infocard.service import MISSING_SOURCE_MESSAGE, CardService
from infocard.utils.logging import setup_logging

settings = get_settings()
setup_logging(level=settings.log_level, json_format=settings.log_json, log_file=settings.log_file)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.app_title,
    version=settings.app_version,
    description="Extract key information from a web page or text into an info card",
)

app.add_middleware(RequestLoggingMiddleware, max_body_bytes=settings.max_body_bytes)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------
@app.on_event("startup")
async def _startup() -> None:
    log_startup_config(settings)


@app.on_event("shutdown")
async def _shutdown() -> None:
    await close_card_service()


# ---------------------------------------------------------------------------
# Error handlers
# ---------------------------------------------------------------------------
@app.exception_handler(InfoCardError)
async def _info_card_error_handler(request: Request, exc: InfoCardError):  # noqa: ARG001
    if isinstance(exc, ResponseFormatError):
        logger.error(f"Card extraction failed: {exc.reason}")
    elif exc.status_code >= 500:
        logger.error(f"Card extraction failed: {exc.message}")
    else:
        logger.warning(f"Rejected request: {exc.message}")
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def _validation_error_handler(request: Request, exc: RequestValidationError):  # noqa: ARG001
    logger.warning(f"Invalid request body: {exc.errors()}")
    # A body without url or text reports that first, whatever else is wrong
    body = exc.body
    if not isinstance(body, dict) or not (body.get("url") or body.get("text")):
        return _error(400, MISSING_SOURCE_MESSAGE)
    return _error(400, "Invalid request body")


@app.exception_handler(StarletteHTTPException)
async def _http_error_handler(request: Request, exc: StarletteHTTPException):  # noqa: ARG001
    if exc.status_code == 404:
        return _error(404, "Endpoint not found")
    return _error(exc.status_code, str(exc.detail))


# ---------------------------------------------------------------------------
# Routes
# ---------------------------------------------------------------------------
@app.get("/api/health", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return HealthResponse(
        message="Info Card API is running",
        timestamp=datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        version=settings.app_version,
    )


@app.get("/api/providers", response_model=ProviderListResponse)
async def providers():
    """List the supported AI providers."""
    return ProviderListResponse(data=list_providers())


@app.post("/api/extract", response_model=ExtractResponse, response_model_exclude_none=True)
async def extract(
    payload: ExtractionRequest,
    service: CardService = Depends(get_card_service),
):
    """Extract a card from a URL or text with the requested provider."""
    card = await service.extract(payload)
    return ExtractResponse(success=True, data=card)


def run() -> None:
    """Console entry point."""
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
