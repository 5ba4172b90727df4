"""
tests/test_memory_store.py

Behaviour of the dict-backed onboarding store. The same contract is
exercised against the SQLAlchemy store in test_sqlalchemy_store.py.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta, timezone

import pytest

from app.domain.onboarding import IntegrationRecord, OnboardingData, UploadedFileRecord
from app.repositories.memory_store import InMemoryOnboardingStore
from app.repositories.onboarding_store import OnboardingStoreError


def _file(user_id: str, name: str, created_at: datetime | None = None) -> UploadedFileRecord:
    return UploadedFileRecord(
        user_id=user_id,
        filename=f"abc_{name}",
        original_name=name,
        mimetype="text/csv",
        size=10,
        storage_path=f"{user_id}/2024/01/abc_{name}",
        checksum="0" * 64,
        created_at=created_at,
    )


class TestOnboardingRecords:
    def test_save_assigns_increasing_ids(self, store: InMemoryOnboardingStore) -> None:
        first = store.save_onboarding(OnboardingData(user_id="a"))
        second = store.save_onboarding(OnboardingData(user_id="b"))
        assert (first.id, second.id) == (1, 2)
        assert first.created_at is not None and first.updated_at is not None

    def test_save_is_an_upsert_by_user(self, store: InMemoryOnboardingStore) -> None:
        created = store.save_onboarding(OnboardingData(user_id="a"))
        updated = store.save_onboarding(replace(created, step="objectives", primary_kpi="purchase"))

        assert updated.id == created.id
        assert updated.created_at == created.created_at
        assert store.get_onboarding("a").primary_kpi == "purchase"
        assert len(store.list_onboarding()) == 1

    def test_save_with_foreign_id_is_rejected(self, store: InMemoryOnboardingStore) -> None:
        store.save_onboarding(OnboardingData(user_id="a"))
        with pytest.raises(OnboardingStoreError):
            store.save_onboarding(OnboardingData(user_id="a", id=42))

    def test_get_unknown_user_returns_none(self, store: InMemoryOnboardingStore) -> None:
        assert store.get_onboarding("nobody") is None


class TestUploadedFiles:
    def test_list_is_most_recent_first_and_per_user(self, store: InMemoryOnboardingStore) -> None:
        base = datetime(2024, 1, 1, tzinfo=timezone.utc)
        old = store.add_uploaded_file(_file("a", "old.csv", base))
        new = store.add_uploaded_file(_file("a", "new.csv", base + timedelta(hours=1)))
        store.add_uploaded_file(_file("b", "other.csv", base + timedelta(hours=2)))

        assert [item.id for item in store.list_uploaded_files("a")] == [new.id, old.id]
        assert store.list_uploaded_files("nobody") == []

    def test_equal_timestamps_fall_back_to_id(self, store: InMemoryOnboardingStore) -> None:
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        first = store.add_uploaded_file(_file("a", "one.csv", moment))
        second = store.add_uploaded_file(_file("a", "two.csv", moment))
        assert store.list_uploaded_files("a")[0].id == second.id
        assert first.id < second.id


class TestIntegrations:
    def test_save_updates_existing(self, store: InMemoryOnboardingStore) -> None:
        record = store.add_integration(IntegrationRecord(user_id="a", name="Google Ads", type="google-ads"))
        store.save_integration(replace(record, status="disconnected"))
        assert store.get_integration(record.id).status == "disconnected"

    def test_save_unknown_id_is_rejected(self, store: InMemoryOnboardingStore) -> None:
        with pytest.raises(OnboardingStoreError):
            store.save_integration(IntegrationRecord(user_id="a", name="x", type="x", id=7))

    def test_save_without_id_adds(self, store: InMemoryOnboardingStore) -> None:
        record = store.save_integration(IntegrationRecord(user_id="a", name="x", type="x"))
        assert record.id == 1
        assert store.list_integrations("a") == [record]
