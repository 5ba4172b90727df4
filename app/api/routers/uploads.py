"""
app/api/routers/uploads.py

Marketing-data file upload endpoint.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, UploadFile, status

from app.api.dependencies import get_marketing_data_upload, get_upload_service, get_user_id
from app.config import get_upload_settings
from app.schemas.uploads import UploadedFileResponse, UploadResponse
from app.services.upload_service import UploadService
from db.repositories.errors import FileStorageError, UploadPersistenceError, UploadValidationError
from db.repositories.types import UploadFileInput

router = APIRouter(prefix="/upload", tags=["uploads"])


@router.post("/file", response_model=UploadResponse)
def upload_file(
    file: UploadFile = Depends(get_marketing_data_upload),
    user_id: str = Depends(get_user_id),
    upload_service: UploadService = Depends(get_upload_service),
) -> UploadResponse:
    """
    Store one CSV/Excel file for later analysis.
    """

    try:
        # One byte past the limit is enough to reject oversized files.
        content = file.file.read(get_upload_settings().max_bytes + 1)
        record = upload_service.store_upload(
            UploadFileInput(
                user_id=user_id,
                file_name=file.filename or "",
                content=content,
                content_type=file.content_type,
            )
        )
    except UploadValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except (FileStorageError, UploadPersistenceError) as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Unable to store the uploaded file.",
        ) from exc
    finally:
        file.file.close()

    return UploadResponse(
        data=UploadedFileResponse(
            id=record.id,
            filename=record.original_name,
            size=record.size,
        )
    )
