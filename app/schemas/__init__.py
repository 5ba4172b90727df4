"""
app/schemas package marker.
"""

from app.schemas.analysis import AnalysisResponse, AnalysisSummaryResponse, ValidationErrorResponse
from app.schemas.integrations import (
    IntegrationConnectRequest,
    IntegrationConnectResponse,
    IntegrationDisconnectRequest,
    IntegrationDisconnectResponse,
    IntegrationListResponse,
    IntegrationResponse,
)
from app.schemas.onboarding import (
    OnboardingDataResponse,
    OnboardingOptionsResponse,
    OnboardingResponse,
    OnboardingStepRequest,
)
from app.schemas.uploads import UploadedFileResponse, UploadResponse

__all__ = [
    "AnalysisResponse",
    "AnalysisSummaryResponse",
    "IntegrationConnectRequest",
    "IntegrationConnectResponse",
    "IntegrationDisconnectRequest",
    "IntegrationDisconnectResponse",
    "IntegrationListResponse",
    "IntegrationResponse",
    "OnboardingDataResponse",
    "OnboardingOptionsResponse",
    "OnboardingResponse",
    "OnboardingStepRequest",
    "UploadedFileResponse",
    "UploadResponse",
    "ValidationErrorResponse",
]
