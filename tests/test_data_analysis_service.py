"""
tests/test_data_analysis_service.py

DataAnalysisService end-to-end over the in-memory store and a temporary
local file storage root.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

import pytest

from app.domain.data_analysis import AnalysisStatus
from app.domain.onboarding import OnboardingStep, UploadedFileRecord
from app.parsing.tabular_parser import TabularParser
from app.repositories.memory_store import InMemoryOnboardingStore
from app.services.data_analysis_service import DataAnalysisService, NoUploadedFileError
from app.services.upload_service import UploadService
from conftest import VALID_CSV, VALID_XLSX_ROWS, csv_bytes, xlsx_bytes
from db.repositories.errors import FileStorageError
from db.repositories.storage import LocalFileStorage
from db.repositories.types import UploadFileInput

USER = "user-1"


@pytest.fixture()
def uploads(store: InMemoryOnboardingStore, file_storage: LocalFileStorage) -> UploadService:
    return UploadService(store=store, file_storage=file_storage)


@pytest.fixture()
def service(store: InMemoryOnboardingStore, file_storage: LocalFileStorage) -> DataAnalysisService:
    return DataAnalysisService(store=store, file_storage=file_storage)


def _upload(uploads: UploadService, content: bytes, file_name: str = "spend.csv", content_type: str = "text/csv"):
    return uploads.store_upload(
        UploadFileInput(user_id=USER, file_name=file_name, content=content, content_type=content_type)
    )


class TestAnalyze:
    def test_no_upload_raises_and_leaves_record_untouched(
        self, service: DataAnalysisService, store: InMemoryOnboardingStore
    ) -> None:
        with pytest.raises(NoUploadedFileError, match="No files have been uploaded for analysis"):
            service.analyze(user_id=USER)
        assert store.get_onboarding(USER) is None

    def test_valid_csv_succeeds_and_persists_status(
        self, service: DataAnalysisService, uploads: UploadService, store: InMemoryOnboardingStore
    ) -> None:
        _upload(uploads, VALID_CSV)

        result = service.analyze(user_id=USER)

        assert result.status == AnalysisStatus.SUCCESS
        assert result.errors is None
        assert result.summary.data_points == 3
        assert result.summary.channels == 2
        assert result.columns == ["date", "channel", "campaign", "spend"]

        record = store.get_onboarding(USER)
        assert record is not None
        assert record.step == OnboardingStep.ANALYZE
        assert record.data_status == AnalysisStatus.SUCCESS

    def test_missing_column_is_an_error_result_not_an_exception(
        self, service: DataAnalysisService, uploads: UploadService, store: InMemoryOnboardingStore
    ) -> None:
        _upload(uploads, csv_bytes("date,channel,campaign", "2024-01-01,TV,Spring"))

        result = service.analyze(user_id=USER)

        assert result.status == AnalysisStatus.ERROR
        assert [(e.row_index, e.column) for e in result.errors] == [(0, "spend")]
        assert result.summary.data_points == 1
        assert len(result.preview) == 1
        assert store.get_onboarding(USER).data_status == AnalysisStatus.ERROR

    def test_row_errors_are_reported_with_display_rows(
        self, service: DataAnalysisService, uploads: UploadService
    ) -> None:
        _upload(
            uploads,
            csv_bytes(
                "date,channel,campaign,spend",
                "2024-01-01,Google Ads,Brand,100",
                "2024-01-02,Google Ads,Brand,abc",
                ",Google Ads!,Brand,50",
            ),
        )

        result = service.analyze(user_id=USER)

        assert [(e.row_index, e.column, e.message) for e in result.errors] == [
            (3, "spend", "Invalid spend format (must be numeric)"),
            (4, "date", "Missing date value"),
            (4, "channel", "Channel name contains special characters"),
        ]

    def test_most_recent_upload_is_analyzed(
        self, service: DataAnalysisService, store: InMemoryOnboardingStore, file_storage: LocalFileStorage
    ) -> None:
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        for offset, content in ((0, VALID_CSV), (1, csv_bytes("date,channel", "2024-01-01,TV"))):
            stored = file_storage.save(user_id=USER, file_name="spend.csv", content=content)
            store.add_uploaded_file(
                UploadedFileRecord(
                    user_id=USER,
                    filename=stored.file_name,
                    original_name="spend.csv",
                    mimetype="text/csv",
                    size=stored.file_size_bytes,
                    storage_path=stored.storage_path,
                    checksum=stored.checksum,
                    created_at=base + timedelta(minutes=offset),
                )
            )

        result = service.analyze(user_id=USER)

        assert result.status == AnalysisStatus.ERROR
        assert {e.column for e in result.errors} == {"campaign", "spend"}

    def test_xlsx_upload_is_analyzed(self, service: DataAnalysisService, uploads: UploadService) -> None:
        _upload(
            uploads,
            xlsx_bytes(VALID_XLSX_ROWS),
            file_name="spend.xlsx",
            content_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        )

        result = service.analyze(user_id=USER)

        assert result.status == AnalysisStatus.SUCCESS
        assert result.preview[0]["date"] == "2024-01-01"

    def test_rerun_on_unchanged_file_is_identical(
        self, service: DataAnalysisService, uploads: UploadService
    ) -> None:
        _upload(uploads, csv_bytes("date,channel,campaign,spend", "2024-01-01,TV,Spring,oops"))

        assert service.analyze(user_id=USER) == service.analyze(user_id=USER)

    def test_unreadable_file_raises_storage_error(
        self,
        service: DataAnalysisService,
        uploads: UploadService,
        file_storage: LocalFileStorage,
        store: InMemoryOnboardingStore,
    ) -> None:
        record = _upload(uploads, VALID_CSV)
        file_storage.delete(storage_path=record.storage_path)

        with pytest.raises(FileStorageError):
            service.analyze(user_id=USER)
        assert store.get_onboarding(USER) is None

    def test_existing_answers_are_preserved(
        self, service: DataAnalysisService, uploads: UploadService, store: InMemoryOnboardingStore
    ) -> None:
        from app.services.onboarding_service import OnboardingService

        OnboardingService(store).save_step(
            user_id=USER,
            step=OnboardingStep.UPLOAD,
            updates={"primary_kpi": "purchase", "upload_method": "manual"},
        )
        _upload(uploads, VALID_CSV)

        service.analyze(user_id=USER)

        record = store.get_onboarding(USER)
        assert record.primary_kpi == "purchase"
        assert record.upload_method == "manual"
        assert record.data_status == AnalysisStatus.SUCCESS

    def test_unexpected_failure_marks_status_error(
        self, store: InMemoryOnboardingStore, file_storage: LocalFileStorage, uploads: UploadService
    ) -> None:
        class _BrokenParser(TabularParser):
            def parse(self, **kwargs):
                raise RuntimeError("parser crashed")

        broken = DataAnalysisService(store=store, file_storage=file_storage, parser=_BrokenParser())
        _upload(uploads, VALID_CSV)

        with pytest.raises(RuntimeError, match="parser crashed"):
            broken.analyze(user_id=USER)

        record = store.get_onboarding(USER)
        assert record.step == OnboardingStep.ANALYZE
        assert record.data_status == AnalysisStatus.ERROR


class TestAnalyzeContent:
    def test_undecodable_bytes_report_every_required_column(self, service: DataAnalysisService) -> None:
        result = service.analyze_content(content=b"\x00\x01garbage", file_name="spend.xlsx")

        assert result.status == AnalysisStatus.ERROR
        assert [e.column for e in result.errors] == ["date", "channel", "campaign", "spend"]
        assert result.summary.data_points == 0
        assert result.columns == []

    def test_validation_errors_are_logged_when_enabled(
        self, service: DataAnalysisService, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING, logger="app.services.data_analysis_service"):
            service.analyze_content(content=csv_bytes("date,channel,campaign,spend", ",TV,A,1"), file_name="a.csv")
        assert any("Missing date value" in message for message in caplog.messages)

    def test_validation_error_logging_can_be_disabled(
        self,
        store: InMemoryOnboardingStore,
        file_storage: LocalFileStorage,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        quiet = DataAnalysisService(store=store, file_storage=file_storage, log_validation_errors=False)
        with caplog.at_level(logging.WARNING, logger="app.services.data_analysis_service"):
            result = quiet.analyze_content(content=csv_bytes("date,channel,campaign,spend", ",TV,A,1"), file_name="a.csv")
        assert result.status == AnalysisStatus.ERROR
        assert not any("Missing date value" in message for message in caplog.messages)
