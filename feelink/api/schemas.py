"""
API Schemas
Pydantic model definitions
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# === Analysis ===


class AnalyzeRequest(BaseModel):
    """Emotion analysis request"""

    model_config = ConfigDict(populate_by_name=True)

    # Blank text is rejected by the route with a 400, not by schema validation
    text: str = Field("", description="Free-form text to analyse")
    user_id: str | None = Field(None, alias="userId", description="Caller-supplied user id")


class AnalyzeResponse(BaseModel):
    """Emotion analysis response"""

    emotion: str
    confidence: float
    activity: str
    encouragement: str
    details: dict[str, Any]


class ErrorResponse(BaseModel):
    """Error body"""

    error: str


# === Quota ===


class QuotaResponse(BaseModel):
    """Remote classifier quota for the current month"""

    key: str
    used: int
    limit: int
    enabled: bool


# === System ===


class HealthResponse(BaseModel):
    """Health check response"""

    status: str
    timestamp: datetime
    version: str
    components: dict[str, bool]


class APIInfoResponse(BaseModel):
    """API info response"""

    service: str
    version: str
    description: str
    features: list[str]
