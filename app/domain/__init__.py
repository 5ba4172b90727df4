"""
app/domain package marker.
"""

from app.domain.data_analysis import (
    AnalysisResult,
    AnalysisStatus,
    AnalysisSummary,
    ParsedTable,
    Row,
    RowValidationError,
)
from app.domain.onboarding import (
    IntegrationRecord,
    OnboardingData,
    OnboardingStep,
    UploadedFileRecord,
)

__all__ = [
    "AnalysisResult",
    "AnalysisStatus",
    "AnalysisSummary",
    "IntegrationRecord",
    "OnboardingData",
    "OnboardingStep",
    "ParsedTable",
    "Row",
    "RowValidationError",
    "UploadedFileRecord",
]
