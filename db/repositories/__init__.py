"""
Repository layer exports.
"""

from db.repositories.errors import (
    FileStorageError,
    UploadPersistenceError,
    UploadRepositoryError,
    UploadValidationError,
)
from db.repositories.storage import FileStorageBackend, LocalFileStorage
from db.repositories.types import StoredFileMetadata, UploadFileInput
from db.repositories.validators import validate_upload_payload

__all__ = [
    "FileStorageBackend",
    "LocalFileStorage",
    "StoredFileMetadata",
    "UploadFileInput",
    "validate_upload_payload",
    "UploadRepositoryError",
    "UploadValidationError",
    "UploadPersistenceError",
    "FileStorageError",
]
