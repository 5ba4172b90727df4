"""
app/api/routers/onboarding.py

Onboarding wizard endpoints: option catalog, step submission, progress and
completion.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_onboarding_service, get_user_id
from app.domain.catalog import (
    EXTERNAL_FACTOR_CATEGORIES,
    INTEGRATIONS,
    MAX_SECONDARY_KPIS,
    PRIMARY_KPIS,
    SECONDARY_KPIS,
)
from app.schemas.onboarding import (
    OnboardingDataResponse,
    OnboardingOptionsResponse,
    OnboardingResponse,
    OnboardingStepRequest,
)
from app.services.onboarding_service import (
    OnboardingNotFoundError,
    OnboardingService,
    OnboardingUpdateError,
)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.get("/options", response_model=OnboardingOptionsResponse)
def get_options() -> OnboardingOptionsResponse:
    """
    Return the KPI, integration and external factor catalog.
    """

    return OnboardingOptionsResponse.model_validate(
        {
            "kpis": {
                "primary": list(PRIMARY_KPIS),
                "secondary": list(SECONDARY_KPIS),
                "max_secondary": MAX_SECONDARY_KPIS,
            },
            "integrations": list(INTEGRATIONS),
            "external_factor_categories": list(EXTERNAL_FACTOR_CATEGORIES),
        }
    )


@router.post("/step", response_model=OnboardingResponse)
def save_step(
    body: OnboardingStepRequest,
    user_id: str = Depends(get_user_id),
    service: OnboardingService = Depends(get_onboarding_service),
) -> OnboardingResponse:
    """
    Merge one step's answers into the caller's onboarding record.
    """

    try:
        record = service.save_step(user_id=user_id, step=body.step, updates=body.updates())
    except OnboardingUpdateError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return OnboardingResponse(data=OnboardingDataResponse.from_domain(record))


@router.get("/progress", response_model=OnboardingResponse)
def get_progress(
    user_id: str = Depends(get_user_id),
    service: OnboardingService = Depends(get_onboarding_service),
) -> OnboardingResponse:
    record = service.get_progress(user_id)
    if record is None:
        return OnboardingResponse(data=None)
    return OnboardingResponse(data=OnboardingDataResponse.from_domain(record))


@router.post("/complete", response_model=OnboardingResponse)
def complete_onboarding(
    user_id: str = Depends(get_user_id),
    service: OnboardingService = Depends(get_onboarding_service),
) -> OnboardingResponse:
    """
    Confirm setup. Raises HTTP 404 when the caller never started onboarding.
    """

    try:
        record = service.complete(user_id)
    except OnboardingNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    return OnboardingResponse(data=OnboardingDataResponse.from_domain(record))
