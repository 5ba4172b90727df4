"""
app/services/integration_service.py

Ad-platform integration bookkeeping for the upload step.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

from app.domain.catalog import integration_name
from app.domain.onboarding import IntegrationRecord
from app.repositories.onboarding_store import OnboardingStore
from db.models.integration import IntegrationStatus

logger = logging.getLogger(__name__)


class IntegrationRequestError(ValueError):
    """
    Raised when a connect request is missing its integration type.
    """


class IntegrationService:
    def __init__(self, store: OnboardingStore) -> None:
        self._store = store

    def connect(
        self,
        *,
        user_id: str,
        integration_type: str,
        name: str | None = None,
        config: Mapping[str, Any] | None = None,
    ) -> IntegrationRecord:
        normalized_type = (integration_type or "").strip()
        if not normalized_type:
            raise IntegrationRequestError("Integration type is required")

        record = self._store.add_integration(
            IntegrationRecord(
                user_id=user_id,
                name=(name or "").strip() or integration_name(normalized_type),
                type=normalized_type,
                status=IntegrationStatus.CONNECTED,
                config=dict(config or {}),
            )
        )
        logger.info(
            "Integration connected user_id=%r integration_id=%s type=%r",
            user_id,
            record.id,
            record.type,
        )
        return record

    def disconnect(self, *, user_id: str, integration_id: int) -> bool:
        """
        Mark the integration disconnected. False when it is unknown or not the user's.
        """

        existing = self._store.get_integration(integration_id)
        if existing is None or existing.user_id != user_id:
            return False

        self._store.save_integration(replace(existing, status=IntegrationStatus.DISCONNECTED))
        logger.info("Integration disconnected user_id=%r integration_id=%s", user_id, integration_id)
        return True

    def list_active(self, user_id: str) -> list[IntegrationRecord]:
        """
        Return the user's integrations that are not disconnected, most recent first.
        """

        return [
            item
            for item in self._store.list_integrations(user_id)
            if item.status != IntegrationStatus.DISCONNECTED
        ]
