"""
tests/test_uploads.py

Upload validation, local file storage and UploadService bookkeeping.
"""

from __future__ import annotations

import hashlib

import pytest

from app.repositories.memory_store import InMemoryOnboardingStore
from app.repositories.onboarding_store import OnboardingStoreError
from app.services.upload_service import UploadService
from conftest import VALID_CSV
from db.repositories.errors import FileStorageError, UploadPersistenceError, UploadValidationError
from db.repositories.storage import LocalFileStorage
from db.repositories.types import UploadFileInput
from db.repositories.validators import validate_upload_payload


def _payload(**overrides) -> UploadFileInput:
    values = {"user_id": "u1", "file_name": "spend.csv", "content": VALID_CSV, "content_type": "text/csv"}
    values.update(overrides)
    return UploadFileInput(**values)


# ---------------------------------------------------------------------------
# validate_upload_payload
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "overrides",
    [
        {},
        {"file_name": "SPEND.XLSX", "content_type": "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"},
        {"file_name": "spend.xls", "content_type": "application/vnd.ms-excel"},
        {"content_type": "text/csv; charset=utf-8"},
        {"content_type": None},
    ],
)
def test_accepts_csv_and_excel(overrides: dict) -> None:
    validate_upload_payload(_payload(**overrides))


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"user_id": " "}, "user_id is required"),
        ({"file_name": ""}, "file_name is required"),
        ({"file_name": "notes.txt"}, "Invalid file type"),
        ({"file_name": "spend.csv.exe"}, "Invalid file type"),
        ({"content_type": "application/pdf"}, "Unsupported content_type"),
        ({"content": b""}, "empty"),
    ],
)
def test_rejects_bad_uploads(overrides: dict, message: str) -> None:
    with pytest.raises(UploadValidationError, match=message):
        validate_upload_payload(_payload(**overrides))


def test_rejects_oversized_upload() -> None:
    with pytest.raises(UploadValidationError, match="size limit of 10 bytes"):
        validate_upload_payload(_payload(content=b"x" * 11), max_bytes=10)


# ---------------------------------------------------------------------------
# LocalFileStorage
# ---------------------------------------------------------------------------


class TestLocalFileStorage:
    def test_save_read_delete(self, file_storage: LocalFileStorage) -> None:
        stored = file_storage.save(user_id="u1", file_name="spend.csv", content=b"abc", content_type="text/csv")

        assert stored.storage_path.startswith("u1/")
        assert stored.storage_path.endswith("_spend.csv")
        assert stored.file_size_bytes == 3
        assert stored.checksum == hashlib.sha256(b"abc").hexdigest()
        assert stored.mime_type == "text/csv"
        assert file_storage.read(storage_path=stored.storage_path) == b"abc"

        file_storage.delete(storage_path=stored.storage_path)
        with pytest.raises(FileStorageError):
            file_storage.read(storage_path=stored.storage_path)

    def test_same_name_does_not_overwrite(self, file_storage: LocalFileStorage) -> None:
        first = file_storage.save(user_id="u1", file_name="spend.csv", content=b"one")
        second = file_storage.save(user_id="u1", file_name="spend.csv", content=b"two")
        assert first.storage_path != second.storage_path
        assert file_storage.read(storage_path=first.storage_path) == b"one"

    def test_directory_parts_are_stripped_from_names(self, file_storage: LocalFileStorage) -> None:
        stored = file_storage.save(user_id="../../etc", file_name="../../spend.csv", content=b"x")
        assert ".." not in stored.storage_path.split("/")

    def test_paths_outside_root_are_refused(self, file_storage: LocalFileStorage) -> None:
        with pytest.raises(FileStorageError):
            file_storage.read(storage_path="../../outside.csv")


# ---------------------------------------------------------------------------
# UploadService
# ---------------------------------------------------------------------------


class _FailingStore(InMemoryOnboardingStore):
    def add_uploaded_file(self, record):
        raise OnboardingStoreError("database unavailable")


class TestUploadService:
    def test_store_upload_records_metadata(
        self, store: InMemoryOnboardingStore, file_storage: LocalFileStorage
    ) -> None:
        service = UploadService(store=store, file_storage=file_storage)

        record = service.store_upload(_payload())

        assert record.id == 1
        assert record.original_name == "spend.csv"
        assert record.size == len(VALID_CSV)
        assert record.mimetype == "text/csv"
        assert store.list_uploaded_files("u1") == [record]
        assert file_storage.read(storage_path=record.storage_path) == VALID_CSV

    def test_validation_failure_writes_nothing(self, store: InMemoryOnboardingStore, tmp_path) -> None:
        service = UploadService(store=store, file_storage=LocalFileStorage(tmp_path), max_bytes=5)

        with pytest.raises(UploadValidationError):
            service.store_upload(_payload())

        assert list(tmp_path.iterdir()) == []
        assert store.list_uploaded_files("u1") == []

    def test_metadata_failure_removes_written_file(self, tmp_path) -> None:
        service = UploadService(store=_FailingStore(), file_storage=LocalFileStorage(tmp_path))

        with pytest.raises(UploadPersistenceError):
            service.store_upload(_payload())

        assert [path for path in tmp_path.rglob("*") if path.is_file()] == []
