"""Pydantic models for requests, responses and the card payload."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ProviderDescriptor(BaseModel):
    """Which model provider to call, with optional per-request overrides."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(default="", description="Provider identifier, e.g. 'openai'")
    api_key: Optional[str] = Field(default=None, alias="apiKey", description="Override credential")
    base_url: Optional[str] = Field(default=None, alias="baseURL", description="Override base endpoint")
    model: Optional[str] = Field(default=None, description="Override model name")


class ExtractionRequest(BaseModel):
    """Body of ``POST /api/extract``.

    Exactly one of ``url`` / ``text`` must be set; that rule is enforced by the
    service so the client gets the documented error message.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    text: Optional[str] = None
    provider: Optional[ProviderDescriptor] = None
    style: Any = Field(default=None, description="Display-only tag, echoed back in metadata")
    color: Any = Field(default=None, description="Display-only tag, echoed back in metadata")


class CardPayload(BaseModel):
    """Structured summary produced from extracted content."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    description: str
    key_points: List[str] = Field(alias="keyPoints")
    tags: List[str]
    metadata: Dict[str, Any] = Field(default_factory=dict)


class ExtractResponse(BaseModel):
    """Uniform envelope for every API answer."""

    success: bool
    data: Optional[CardPayload] = None
    error: Optional[str] = None


class ProviderInfo(BaseModel):
    """Static description of a supported provider."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    display_name: str = Field(alias="displayName")
    models: List[str]
    required: List[str]
    description: str


class ProviderListResponse(BaseModel):
    success: bool = True
    data: List[ProviderInfo] = Field(default_factory=list)


class HealthResponse(BaseModel):
    success: bool = True
    message: str
    timestamp: str
    version: str
