"""
app/schemas/onboarding.py

Request/response schemas for onboarding wizard endpoints.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.catalog import MAX_SECONDARY_KPIS
from app.domain.external_factors import ExternalFactor
from app.domain.onboarding import OnboardingData

StepName = Literal["welcome", "objectives", "upload", "analyze", "factors", "review", "complete"]
DataStatus = Literal["analyzing", "success", "error"]


class OnboardingStepRequest(BaseModel):
    """
    One wizard step submission. Only the fields sent are merged.
    """

    model_config = ConfigDict(extra="forbid")

    step: StepName
    primary_kpi: str | None = Field(default=None, min_length=1)
    secondary_kpis: list[str] | None = Field(default=None, max_length=MAX_SECONDARY_KPIS)
    upload_method: Literal["manual", "integration"] | None = None
    data_status: DataStatus | None = None
    external_factors: list[ExternalFactor] | None = None

    def updates(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True, exclude={"step"})


class OnboardingDataResponse(BaseModel):
    id: int
    user_id: str
    step: str
    primary_kpi: str | None
    secondary_kpis: list[str]
    upload_method: str | None
    data_status: str | None
    external_factors: list[dict[str, Any]] | None
    completed: bool
    created_at: datetime | None
    updated_at: datetime | None

    @classmethod
    def from_domain(cls, record: OnboardingData) -> "OnboardingDataResponse":
        return cls.model_validate(asdict(record))


class OnboardingResponse(BaseModel):
    success: bool = True
    data: OnboardingDataResponse | None = None


class KPIOption(BaseModel):
    id: str
    name: str
    description: str


class KPIOptions(BaseModel):
    primary: list[KPIOption]
    secondary: list[KPIOption]
    max_secondary: int


class IntegrationOption(BaseModel):
    id: str
    name: str
    description: str


class FactorOption(BaseModel):
    id: str
    name: str
    description: str


class FactorCategory(BaseModel):
    id: str
    name: str
    factors: list[FactorOption]


class OnboardingOptionsResponse(BaseModel):
    kpis: KPIOptions
    integrations: list[IntegrationOption]
    external_factor_categories: list[FactorCategory]
