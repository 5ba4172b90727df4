"""
app/services package marker.
"""

from app.services.data_analysis_service import DataAnalysisService, NoUploadedFileError
from app.services.integration_service import IntegrationRequestError, IntegrationService
from app.services.onboarding_service import (
    OnboardingNotFoundError,
    OnboardingService,
    OnboardingUpdateError,
)
from app.services.result_summarizer import ResultSummarizer
from app.services.upload_service import UploadService

__all__ = [
    "DataAnalysisService",
    "IntegrationRequestError",
    "IntegrationService",
    "NoUploadedFileError",
    "OnboardingNotFoundError",
    "OnboardingService",
    "OnboardingUpdateError",
    "ResultSummarizer",
    "UploadService",
]
