"""
app/api/routers/analysis.py

Data analysis endpoint.

Content problems (missing columns, bad rows) come back as a 200 with
status="error"; only "could not analyse at all" conditions use non-2xx codes.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.dependencies import get_data_analysis_service, get_user_id
from app.schemas.analysis import AnalysisResponse
from app.services.data_analysis_service import DataAnalysisService, NoUploadedFileError
from db.repositories.errors import FileStorageError

router = APIRouter(prefix="/analyze", tags=["analysis"])


@router.post("/data", response_model=AnalysisResponse)
def analyze_data(
    user_id: str = Depends(get_user_id),
    analysis_service: DataAnalysisService = Depends(get_data_analysis_service),
) -> AnalysisResponse:
    """
    Validate the caller's most recent upload and summarise it.
    """

    try:
        result = analysis_service.analyze(user_id=user_id)
    except NoUploadedFileError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except FileStorageError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="The uploaded file could not be read.",
        ) from exc

    return AnalysisResponse.from_domain(result)
