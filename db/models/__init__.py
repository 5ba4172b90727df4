"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.integration import Integration, IntegrationStatus
from db.models.onboarding_record import OnboardingRecord
from db.models.uploaded_file import UploadedFile

__all__ = [
    "Integration",
    "IntegrationStatus",
    "OnboardingRecord",
    "UploadedFile",
]
