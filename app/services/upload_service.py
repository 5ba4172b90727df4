"""
app/services/upload_service.py

Stores uploaded marketing-data files and records their metadata.

Storage only: analysis runs separately through DataAnalysisService.
"""

from __future__ import annotations

import logging

from app.domain.onboarding import UploadedFileRecord
from app.repositories.onboarding_store import OnboardingStore, OnboardingStoreError
from db.repositories.errors import FileStorageError, UploadPersistenceError
from db.repositories.storage import FileStorageBackend
from db.repositories.types import UploadFileInput
from db.repositories.validators import DEFAULT_MAX_UPLOAD_BYTES, validate_upload_payload

logger = logging.getLogger(__name__)


class UploadService:
    def __init__(
        self,
        *,
        store: OnboardingStore,
        file_storage: FileStorageBackend,
        max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
    ) -> None:
        self._store = store
        self._file_storage = file_storage
        self._max_bytes = max_bytes

    def store_upload(self, payload: UploadFileInput) -> UploadedFileRecord:
        """
        Validate, write and record one upload.

        When recording metadata fails the written file is deleted again.
        """

        validate_upload_payload(payload, max_bytes=self._max_bytes)

        stored = self._file_storage.save(
            user_id=payload.user_id,
            file_name=payload.file_name,
            content=payload.content,
            content_type=payload.content_type,
        )

        try:
            record = self._store.add_uploaded_file(
                UploadedFileRecord(
                    user_id=payload.user_id,
                    filename=stored.file_name,
                    original_name=payload.file_name,
                    mimetype=stored.mime_type or "application/octet-stream",
                    size=stored.file_size_bytes,
                    storage_path=stored.storage_path,
                    checksum=stored.checksum,
                    created_at=stored.stored_at,
                )
            )
        except OnboardingStoreError as exc:
            self._delete_stored_file_quietly(stored.storage_path)
            raise UploadPersistenceError("Failed to record uploaded file metadata.") from exc

        logger.info(
            "Upload stored user_id=%r file_id=%s name=%r size=%s",
            payload.user_id,
            record.id,
            record.original_name,
            record.size,
        )
        return record

    def _delete_stored_file_quietly(self, storage_path: str) -> None:
        try:
            self._file_storage.delete(storage_path=storage_path)
        except FileStorageError:
            logger.warning("Could not remove orphaned upload %r", storage_path)
