"""
Repository-layer exceptions for upload/storage flows.
"""

from __future__ import annotations


class UploadRepositoryError(Exception):
    """Base exception for upload repository failures."""


class UploadValidationError(UploadRepositoryError):
    """Raised when an uploaded file is rejected before storage."""


class FileStorageError(UploadRepositoryError):
    """Raised when storing, reading or deleting uploaded files fails."""


class UploadPersistenceError(UploadRepositoryError):
    """Raised when upload metadata cannot be recorded in the onboarding store."""
