"""
app/repositories/memory_store.py

Dict-backed onboarding store for single-process deployments and tests.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import datetime, timezone

from app.domain.onboarding import IntegrationRecord, OnboardingData, UploadedFileRecord
from app.repositories.onboarding_store import OnboardingStoreError


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryOnboardingStore:
    """
    Keeps every collection in process memory behind one lock.

    Identifiers come from per-collection counters starting at 1.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._onboarding: dict[str, OnboardingData] = {}
        self._files: dict[int, UploadedFileRecord] = {}
        self._integrations: dict[int, IntegrationRecord] = {}
        self._onboarding_ids = itertools.count(1)
        self._file_ids = itertools.count(1)
        self._integration_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Onboarding records
    # ------------------------------------------------------------------

    def get_onboarding(self, user_id: str) -> OnboardingData | None:
        with self._lock:
            return self._onboarding.get(user_id)

    def save_onboarding(self, record: OnboardingData) -> OnboardingData:
        now = _utcnow()
        with self._lock:
            existing = self._onboarding.get(record.user_id)
            if existing is None:
                stored = replace(
                    record,
                    id=next(self._onboarding_ids),
                    created_at=record.created_at or now,
                    updated_at=now,
                )
            else:
                if record.id is not None and record.id != existing.id:
                    raise OnboardingStoreError(
                        f"Onboarding record {record.id} does not belong to user {record.user_id!r}."
                    )
                stored = replace(
                    record,
                    id=existing.id,
                    created_at=existing.created_at,
                    updated_at=now,
                )
            self._onboarding[record.user_id] = stored
            return stored

    def list_onboarding(self) -> list[OnboardingData]:
        with self._lock:
            return sorted(self._onboarding.values(), key=lambda item: item.id or 0)

    # ------------------------------------------------------------------
    # Uploaded files
    # ------------------------------------------------------------------

    def add_uploaded_file(self, record: UploadedFileRecord) -> UploadedFileRecord:
        with self._lock:
            stored = replace(
                record,
                id=next(self._file_ids),
                created_at=record.created_at or _utcnow(),
            )
            self._files[stored.id] = stored
            return stored

    def list_uploaded_files(self, user_id: str) -> list[UploadedFileRecord]:
        with self._lock:
            files = [item for item in self._files.values() if item.user_id == user_id]
        return sorted(files, key=lambda item: (item.created_at, item.id), reverse=True)

    # ------------------------------------------------------------------
    # Integrations
    # ------------------------------------------------------------------

    def add_integration(self, record: IntegrationRecord) -> IntegrationRecord:
        with self._lock:
            stored = replace(
                record,
                id=next(self._integration_ids),
                created_at=record.created_at or _utcnow(),
            )
            self._integrations[stored.id] = stored
            return stored

    def get_integration(self, integration_id: int) -> IntegrationRecord | None:
        with self._lock:
            return self._integrations.get(integration_id)

    def save_integration(self, record: IntegrationRecord) -> IntegrationRecord:
        if record.id is None:
            return self.add_integration(record)
        with self._lock:
            if record.id not in self._integrations:
                raise OnboardingStoreError(f"Integration {record.id} does not exist.")
            self._integrations[record.id] = record
            return record

    def list_integrations(self, user_id: str) -> list[IntegrationRecord]:
        with self._lock:
            items = [item for item in self._integrations.values() if item.user_id == user_id]
        return sorted(items, key=lambda item: (item.created_at, item.id), reverse=True)
