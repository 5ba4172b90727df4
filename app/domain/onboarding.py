"""
app/domain/onboarding.py

Store-facing records for the onboarding wizard. Stores return these frozen
dataclasses regardless of their backing implementation.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from db.models.integration import IntegrationStatus


class OnboardingStep:
    """Wizard steps in display order."""

    WELCOME = "welcome"
    OBJECTIVES = "objectives"
    UPLOAD = "upload"
    ANALYZE = "analyze"
    FACTORS = "factors"
    REVIEW = "review"
    COMPLETE = "complete"

    ORDER = (WELCOME, OBJECTIVES, UPLOAD, ANALYZE, FACTORS, REVIEW, COMPLETE)


@dataclass(frozen=True)
class OnboardingData:
    """
    Accumulated wizard answers for one user.

    ``id`` is None until the store assigns one on first save.
    """

    user_id: str
    step: str = OnboardingStep.WELCOME
    primary_kpi: str | None = None
    secondary_kpis: list[str] = field(default_factory=list)
    upload_method: str | None = None
    data_status: str | None = None
    external_factors: list[dict[str, Any]] | None = None
    completed: bool = False
    id: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UploadedFileRecord:
    user_id: str
    filename: str
    original_name: str
    mimetype: str
    size: int
    storage_path: str
    checksum: str
    id: int | None = None
    created_at: datetime | None = None


@dataclass(frozen=True)
class IntegrationRecord:
    user_id: str
    name: str
    type: str
    status: str = IntegrationStatus.CONNECTED
    config: dict[str, Any] | None = None
    id: int | None = None
    created_at: datetime | None = None
