"""
app/schemas/integrations.py

Request/response schemas for ad-platform integration endpoints.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from app.domain.onboarding import IntegrationRecord


class IntegrationPayload(BaseModel):
    type: str | None = None
    name: str | None = None
    config: dict[str, Any] | None = None


class IntegrationConnectRequest(BaseModel):
    integration: IntegrationPayload | None = None


class IntegrationDisconnectRequest(BaseModel):
    integration_id: int | None = Field(default=None, ge=1)


class IntegrationResponse(BaseModel):
    id: int
    name: str
    type: str
    status: str
    config: dict[str, Any] | None
    created_at: datetime | None

    @classmethod
    def from_domain(cls, record: IntegrationRecord) -> "IntegrationResponse":
        return cls.model_validate(asdict(record))


class IntegrationConnectResponse(BaseModel):
    success: bool = True
    data: IntegrationResponse


class IntegrationListResponse(BaseModel):
    success: bool = True
    data: list[IntegrationResponse] = Field(default_factory=list)


class IntegrationDisconnectResponse(BaseModel):
    success: bool
