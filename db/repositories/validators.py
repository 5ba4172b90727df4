"""
Validation helpers for upload flows.
"""

from __future__ import annotations

from pathlib import Path

from db.repositories.errors import UploadValidationError
from db.repositories.types import UploadFileInput

DEFAULT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024

ALLOWED_EXTENSIONS = {".csv", ".xls", ".xlsx"}
ALLOWED_CONTENT_TYPES = {
    "text/csv",
    "text/plain",
    "application/csv",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/octet-stream",
}


def validate_upload_payload(
    payload: UploadFileInput,
    *,
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
) -> None:
    """
    Validate one file upload before it reaches storage.
    """

    if not payload.user_id or not payload.user_id.strip():
        raise UploadValidationError("user_id is required.")

    if not payload.file_name or not payload.file_name.strip():
        raise UploadValidationError("file_name is required.")

    extension = Path(payload.file_name).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise UploadValidationError(
            "Invalid file type. Only CSV and Excel files are allowed "
            f"({', '.join(sorted(ALLOWED_EXTENSIONS))})."
        )

    if payload.content_type:
        # Browsers append parameters such as "; charset=utf-8".
        media_type = payload.content_type.split(";", 1)[0].strip().lower()
        if media_type not in ALLOWED_CONTENT_TYPES:
            raise UploadValidationError(f"Unsupported content_type '{payload.content_type}'.")

    if not payload.content:
        raise UploadValidationError("Uploaded file content is empty.")

    if len(payload.content) > max_bytes:
        raise UploadValidationError(
            f"Uploaded file exceeds the configured size limit of {max_bytes} bytes."
        )
