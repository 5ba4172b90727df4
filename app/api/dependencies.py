"""
app/api/dependencies.py

Shared FastAPI dependencies: caller identity, store wiring and services.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from fastapi import Depends, File, Header, HTTPException, UploadFile, status

from app.config import STORE_BACKEND_DATABASE, get_store_settings, get_upload_settings
from app.repositories.memory_store import InMemoryOnboardingStore
from app.repositories.onboarding_store import OnboardingStore
from app.repositories.sqlalchemy_store import SQLAlchemyOnboardingStore
from app.services.data_analysis_service import DataAnalysisService, build_data_analysis_service
from app.services.integration_service import IntegrationService
from app.services.onboarding_service import OnboardingService
from app.services.upload_service import UploadService
from db.repositories.storage import FileStorageBackend, LocalFileStorage
from db.repositories.validators import ALLOWED_EXTENSIONS


def get_user_id(x_user_id: str = Header(..., alias="X-User-Id")) -> str:
    """
    Resolve the caller's user identifier from the X-User-Id header.
    """

    user_id = x_user_id.strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="X-User-Id header must not be blank.",
        )
    return user_id


@lru_cache(maxsize=1)
def get_onboarding_store() -> OnboardingStore:
    """
    Build and cache the onboarding store selected by ONBOARDING_STORE_BACKEND.
    """

    if get_store_settings().backend == STORE_BACKEND_DATABASE:
        return SQLAlchemyOnboardingStore()
    return InMemoryOnboardingStore()


@lru_cache(maxsize=1)
def get_file_storage() -> FileStorageBackend:
    return LocalFileStorage(get_upload_settings().storage_dir)


def get_onboarding_service(
    store: OnboardingStore = Depends(get_onboarding_store),
) -> OnboardingService:
    return OnboardingService(store)


def get_integration_service(
    store: OnboardingStore = Depends(get_onboarding_store),
) -> IntegrationService:
    return IntegrationService(store)


def get_upload_service(
    store: OnboardingStore = Depends(get_onboarding_store),
    file_storage: FileStorageBackend = Depends(get_file_storage),
) -> UploadService:
    return UploadService(
        store=store,
        file_storage=file_storage,
        max_bytes=get_upload_settings().max_bytes,
    )


def get_data_analysis_service(
    store: OnboardingStore = Depends(get_onboarding_store),
    file_storage: FileStorageBackend = Depends(get_file_storage),
) -> DataAnalysisService:
    return build_data_analysis_service(store=store, file_storage=file_storage)


def get_marketing_data_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Reject uploads whose name is not a CSV or Excel file before reading them.
    """

    extension = Path((file.filename or "").strip()).suffix.lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid file type. Only CSV and Excel files are allowed.",
        )
    return file
