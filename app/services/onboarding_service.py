"""
app/services/onboarding_service.py

Wizard progress: merge per-step answers into the user's onboarding record
and mark onboarding complete.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Mapping

from pydantic import ValidationError

from app.domain.catalog import MAX_SECONDARY_KPIS
from app.domain.data_analysis import AnalysisStatus
from app.domain.external_factors import dump_external_factors, parse_external_factors
from app.domain.onboarding import OnboardingData, OnboardingStep
from app.repositories.onboarding_store import OnboardingStore

logger = logging.getLogger(__name__)

UPLOAD_METHODS = {"manual", "integration"}

_UPDATABLE_FIELDS = frozenset(
    {
        "primary_kpi",
        "secondary_kpis",
        "upload_method",
        "data_status",
        "external_factors",
    }
)


class OnboardingUpdateError(ValueError):
    """
    Raised when a step update carries an unknown step, field or value.
    """


class OnboardingNotFoundError(LookupError):
    """
    Raised when an operation needs an onboarding record the user does not have.
    """


class OnboardingService:
    """
    Reads and updates onboarding records through an OnboardingStore.
    """

    def __init__(self, store: OnboardingStore) -> None:
        self._store = store

    def get_progress(self, user_id: str) -> OnboardingData | None:
        return self._store.get_onboarding(user_id)

    def save_step(
        self,
        *,
        user_id: str,
        step: str,
        updates: Mapping[str, Any] | None = None,
    ) -> OnboardingData:
        """
        Merge ``updates`` into the user's record and move it to ``step``.

        The record is created with wizard defaults when the user has none.
        """

        if step not in OnboardingStep.ORDER:
            raise OnboardingUpdateError(
                f"Unknown onboarding step {step!r}. Allowed: {', '.join(OnboardingStep.ORDER)}."
            )
        changes = self._normalize_updates(updates or {})

        current = self._store.get_onboarding(user_id) or OnboardingData(user_id=user_id)
        saved = self._store.save_onboarding(replace(current, step=step, **changes))
        logger.info(
            "Onboarding step saved user_id=%r step=%r fields=%s",
            user_id,
            step,
            sorted(changes),
        )
        return saved

    def complete(self, user_id: str) -> OnboardingData:
        current = self._store.get_onboarding(user_id)
        if current is None:
            raise OnboardingNotFoundError(f"Onboarding data not found for user {user_id!r}.")

        saved = self._store.save_onboarding(
            replace(current, step=OnboardingStep.COMPLETE, completed=True)
        )
        logger.info("Onboarding completed user_id=%r data_status=%r", user_id, saved.data_status)
        return saved

    def _normalize_updates(self, updates: Mapping[str, Any]) -> dict[str, Any]:
        unknown = set(updates) - _UPDATABLE_FIELDS
        if unknown:
            raise OnboardingUpdateError(f"Unknown onboarding fields: {', '.join(sorted(unknown))}.")

        changes: dict[str, Any] = {}
        for name, value in updates.items():
            if name == "primary_kpi":
                if not isinstance(value, str) or not value.strip():
                    raise OnboardingUpdateError("Primary KPI is required.")
                changes[name] = value.strip()
            elif name == "secondary_kpis":
                kpis = [str(item) for item in (value or [])]
                if len(kpis) > MAX_SECONDARY_KPIS:
                    raise OnboardingUpdateError(
                        f"Maximum {MAX_SECONDARY_KPIS} secondary KPIs allowed."
                    )
                changes[name] = kpis
            elif name == "upload_method":
                if value not in UPLOAD_METHODS:
                    raise OnboardingUpdateError("Upload method must be 'manual' or 'integration'.")
                changes[name] = value
            elif name == "data_status":
                if value not in AnalysisStatus.ALL:
                    raise OnboardingUpdateError(f"Unknown data status {value!r}.")
                changes[name] = value
            elif name == "external_factors":
                changes[name] = self._normalize_factors(value)
        return changes

    @staticmethod
    def _normalize_factors(value: Any) -> list[dict[str, Any]] | None:
        if value is None:
            return None
        try:
            return dump_external_factors(parse_external_factors(value))
        except ValidationError as exc:
            raise OnboardingUpdateError(f"Invalid external factors: {exc.error_count()} problem(s).") from exc
