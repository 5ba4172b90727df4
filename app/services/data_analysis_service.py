"""
app/services/data_analysis_service.py

Service layer for analysing the most recent uploaded marketing-data file.

Flow per call (synchronous, single request):

    1. Look up the user's most recent upload   (none: NoUploadedFileError)
    2. Read its bytes from file storage        (failure: FileStorageError)
    3. Mark the data stage as analyzing
    4. Parse → validate → summarize
    5. Persist only the resulting status on the onboarding record

Validation problems are returned inside the AnalysisResult; only missing
uploads and storage failures raise.
"""

from __future__ import annotations

import logging

from app.config import get_analysis_settings
from app.domain.data_analysis import AnalysisResult, AnalysisStatus, RowValidationError
from app.domain.onboarding import OnboardingStep, UploadedFileRecord
from app.logging_utils import log_event
from app.parsing.tabular_parser import TabularParser
from app.repositories.onboarding_store import OnboardingStore
from app.services.onboarding_service import OnboardingService
from app.services.result_summarizer import ResultSummarizer
from app.validators.marketing_data_validator import MarketingDataValidator
from db.repositories.storage import FileStorageBackend

logger = logging.getLogger(__name__)


class NoUploadedFileError(LookupError):
    """
    Raised when analysis is requested before any file was uploaded.
    """


class DataAnalysisService:
    """
    Coordinates file retrieval, parsing, validation and summarisation.
    """

    def __init__(
        self,
        *,
        store: OnboardingStore,
        file_storage: FileStorageBackend,
        log_validation_errors: bool = True,
        parser: TabularParser | None = None,
        validator: MarketingDataValidator | None = None,
        summarizer: ResultSummarizer | None = None,
    ) -> None:
        self._store = store
        self._file_storage = file_storage
        self._log_validation_errors = log_validation_errors
        self._parser = parser or TabularParser()
        self._validator = validator or MarketingDataValidator()
        self._summarizer = summarizer or ResultSummarizer()
        self._onboarding = OnboardingService(store)

    def analyze(self, *, user_id: str) -> AnalysisResult:
        """
        Analyse the user's most recent upload and record the outcome status.
        """

        upload = self._latest_upload(user_id)
        content = self._file_storage.read(storage_path=upload.storage_path)

        self._onboarding.save_step(
            user_id=user_id,
            step=OnboardingStep.ANALYZE,
            updates={"data_status": AnalysisStatus.ANALYZING},
        )

        try:
            result = self.analyze_content(
                content=content,
                file_name=upload.original_name,
                media_type=upload.mimetype,
            )
        except Exception:
            logger.exception("Data analysis failed user_id=%r file_id=%s", user_id, upload.id)
            self._onboarding.save_step(
                user_id=user_id,
                step=OnboardingStep.ANALYZE,
                updates={"data_status": AnalysisStatus.ERROR},
            )
            raise

        self._onboarding.save_step(
            user_id=user_id,
            step=OnboardingStep.ANALYZE,
            updates={"data_status": result.status},
        )

        log_event(
            logger,
            logging.INFO,
            "data_analysis_completed",
            user_id=user_id,
            file_id=upload.id,
            status=result.status,
            data_points=result.summary.data_points,
            channels=result.summary.channels,
            error_count=len(result.errors or []),
        )
        return result

    def analyze_content(
        self,
        *,
        content: bytes,
        file_name: str | None = None,
        media_type: str | None = None,
    ) -> AnalysisResult:
        """
        Run parse → validate → summarize over raw bytes without touching the store.
        """

        table = self._parser.parse(content=content, file_name=file_name, media_type=media_type)
        outcome = self._validator.validate(rows=table.rows, columns=table.columns)
        if not outcome.rows_checked:
            logger.info(
                "Row-level checks skipped file=%r missing_columns=%s",
                file_name,
                [error.column for error in outcome.errors],
            )
        for error in outcome.errors:
            self._log_error(error)

        return self._summarizer.summarize(
            rows=table.rows,
            columns=table.columns,
            errors=outcome.errors,
        )

    def _latest_upload(self, user_id: str) -> UploadedFileRecord:
        uploads = self._store.list_uploaded_files(user_id)
        if not uploads:
            raise NoUploadedFileError("No files have been uploaded for analysis")
        return uploads[0]

    def _log_error(self, error: RowValidationError) -> None:
        if self._log_validation_errors:
            logger.warning(
                "Data validation error row=%s column=%s message=%s",
                error.row_index,
                error.column,
                error.message,
            )


def build_data_analysis_service(
    *,
    store: OnboardingStore,
    file_storage: FileStorageBackend,
) -> DataAnalysisService:
    """
    Build the analysis service with env-driven settings.
    """

    settings = get_analysis_settings()
    return DataAnalysisService(
        store=store,
        file_storage=file_storage,
        log_validation_errors=settings.log_validation_errors,
    )
