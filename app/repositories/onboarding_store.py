"""
app/repositories/onboarding_store.py

Store interface for onboarding state, keyed by user identifier.

Backends assign identifiers and timestamps; callers pass records with
``id=None`` to create and records carrying an id to update.
"""

from __future__ import annotations

from typing import Protocol

from app.domain.onboarding import IntegrationRecord, OnboardingData, UploadedFileRecord


class OnboardingStoreError(RuntimeError):
    """
    Raised when the backing store cannot complete an operation.
    """


class OnboardingStore(Protocol):
    """
    Swappable persistence for wizard answers, uploads and integrations.
    """

    def get_onboarding(self, user_id: str) -> OnboardingData | None:
        ...

    def save_onboarding(self, record: OnboardingData) -> OnboardingData:
        ...

    def list_onboarding(self) -> list[OnboardingData]:
        ...

    def add_uploaded_file(self, record: UploadedFileRecord) -> UploadedFileRecord:
        ...

    def list_uploaded_files(self, user_id: str) -> list[UploadedFileRecord]:
        """Return the user's uploads, most recent first."""
        ...

    def add_integration(self, record: IntegrationRecord) -> IntegrationRecord:
        ...

    def get_integration(self, integration_id: int) -> IntegrationRecord | None:
        ...

    def save_integration(self, record: IntegrationRecord) -> IntegrationRecord:
        ...

    def list_integrations(self, user_id: str) -> list[IntegrationRecord]:
        """Return every integration of the user, most recent first."""
        ...
