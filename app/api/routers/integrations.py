"""
app/api/routers/integrations.py

Ad-platform integration endpoints.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_integration_service, get_user_id
from app.schemas.integrations import (
    IntegrationConnectRequest,
    IntegrationConnectResponse,
    IntegrationDisconnectRequest,
    IntegrationDisconnectResponse,
    IntegrationListResponse,
    IntegrationResponse,
)
from app.services.integration_service import IntegrationRequestError, IntegrationService

router = APIRouter(prefix="/integrations", tags=["integrations"])


@router.get("", response_model=IntegrationListResponse)
def list_integrations(
    user_id: str = Depends(get_user_id),
    service: IntegrationService = Depends(get_integration_service),
) -> IntegrationListResponse:
    return IntegrationListResponse(
        data=[IntegrationResponse.from_domain(item) for item in service.list_active(user_id)]
    )


@router.post("/connect", response_model=IntegrationConnectResponse)
def connect_integration(
    body: IntegrationConnectRequest,
    user_id: str = Depends(get_user_id),
    service: IntegrationService = Depends(get_integration_service),
) -> IntegrationConnectResponse:
    payload = body.integration
    try:
        record = service.connect(
            user_id=user_id,
            integration_type=payload.type if payload else "",
            name=payload.name if payload else None,
            config=payload.config if payload else None,
        )
    except IntegrationRequestError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return IntegrationConnectResponse(data=IntegrationResponse.from_domain(record))


@router.post("/disconnect", response_model=IntegrationDisconnectResponse)
def disconnect_integration(
    body: IntegrationDisconnectRequest,
    user_id: str = Depends(get_user_id),
    service: IntegrationService = Depends(get_integration_service),
) -> IntegrationDisconnectResponse:
    """
    Disconnect one integration. success=false when it is unknown or not the caller's.
    """

    if body.integration_id is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Integration ID is required",
        )
    return IntegrationDisconnectResponse(
        success=service.disconnect(user_id=user_id, integration_id=body.integration_id)
    )
