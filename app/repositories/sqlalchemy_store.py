"""
app/repositories/sqlalchemy_store.py

Database-backed onboarding store built on SQLAlchemy ORM sessions.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.onboarding import IntegrationRecord, OnboardingData, UploadedFileRecord
from app.repositories.onboarding_store import OnboardingStoreError
from db.base import utcnow
from db.models import Integration, OnboardingRecord, UploadedFile


def _to_onboarding(row: OnboardingRecord) -> OnboardingData:
    return OnboardingData(
        id=row.id,
        user_id=row.user_id,
        step=row.step,
        primary_kpi=row.primary_kpi,
        secondary_kpis=list(row.secondary_kpis or []),
        upload_method=row.upload_method,
        data_status=row.data_status,
        external_factors=row.external_factors,
        completed=row.completed,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_uploaded_file(row: UploadedFile) -> UploadedFileRecord:
    return UploadedFileRecord(
        id=row.id,
        user_id=row.user_id,
        filename=row.filename,
        original_name=row.original_name,
        mimetype=row.mimetype,
        size=row.size,
        storage_path=row.storage_path,
        checksum=row.checksum,
        created_at=row.created_at,
    )


def _to_integration(row: Integration) -> IntegrationRecord:
    return IntegrationRecord(
        id=row.id,
        user_id=row.user_id,
        name=row.name,
        type=row.type,
        status=row.status,
        config=row.config,
        created_at=row.created_at,
    )


class SQLAlchemyOnboardingStore:
    """
    Onboarding store persisting to the tables in ``db.models``.

    Every operation runs in its own short transaction.
    """

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        if session_factory is None:
            from db.session import SessionLocal

            self._session_factory = SessionLocal
        else:
            self._session_factory = session_factory

    @contextmanager
    def _transaction(self, action: str) -> Iterator[Session]:
        try:
            with self._session_factory() as session:
                with session.begin():
                    yield session
        except SQLAlchemyError as exc:
            raise OnboardingStoreError(f"Failed to {action}.") from exc

    # ------------------------------------------------------------------
    # Onboarding records
    # ------------------------------------------------------------------

    def get_onboarding(self, user_id: str) -> OnboardingData | None:
        with self._transaction("load onboarding record") as session:
            row = session.execute(
                select(OnboardingRecord).where(OnboardingRecord.user_id == user_id)
            ).scalar_one_or_none()
            return _to_onboarding(row) if row is not None else None

    def save_onboarding(self, record: OnboardingData) -> OnboardingData:
        with self._transaction("save onboarding record") as session:
            row = session.execute(
                select(OnboardingRecord).where(OnboardingRecord.user_id == record.user_id)
            ).scalar_one_or_none()
            if row is None:
                row = OnboardingRecord(user_id=record.user_id)
                session.add(row)
            elif record.id is not None and record.id != row.id:
                raise OnboardingStoreError(
                    f"Onboarding record {record.id} does not belong to user {record.user_id!r}."
                )

            row.step = record.step
            row.primary_kpi = record.primary_kpi
            row.secondary_kpis = list(record.secondary_kpis)
            row.upload_method = record.upload_method
            row.data_status = record.data_status
            row.external_factors = record.external_factors
            row.completed = record.completed
            row.updated_at = utcnow()
            session.flush()
            session.refresh(row)
            return _to_onboarding(row)

    def list_onboarding(self) -> list[OnboardingData]:
        with self._transaction("list onboarding records") as session:
            rows = session.execute(select(OnboardingRecord).order_by(OnboardingRecord.id)).scalars()
            return [_to_onboarding(row) for row in rows]

    # ------------------------------------------------------------------
    # Uploaded files
    # ------------------------------------------------------------------

    def add_uploaded_file(self, record: UploadedFileRecord) -> UploadedFileRecord:
        with self._transaction("record uploaded file") as session:
            row = UploadedFile(
                user_id=record.user_id,
                filename=record.filename,
                original_name=record.original_name,
                mimetype=record.mimetype,
                size=record.size,
                storage_path=record.storage_path,
                checksum=record.checksum,
            )
            if record.created_at is not None:
                row.created_at = record.created_at
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_uploaded_file(row)

    def list_uploaded_files(self, user_id: str) -> list[UploadedFileRecord]:
        with self._transaction("list uploaded files") as session:
            rows = session.execute(
                select(UploadedFile)
                .where(UploadedFile.user_id == user_id)
                .order_by(UploadedFile.created_at.desc(), UploadedFile.id.desc())
            ).scalars()
            return [_to_uploaded_file(row) for row in rows]

    # ------------------------------------------------------------------
    # Integrations
    # ------------------------------------------------------------------

    def add_integration(self, record: IntegrationRecord) -> IntegrationRecord:
        with self._transaction("save integration") as session:
            row = Integration(
                user_id=record.user_id,
                name=record.name,
                type=record.type,
                status=record.status,
                config=record.config,
            )
            if record.created_at is not None:
                row.created_at = record.created_at
            session.add(row)
            session.flush()
            session.refresh(row)
            return _to_integration(row)

    def get_integration(self, integration_id: int) -> IntegrationRecord | None:
        with self._transaction("load integration") as session:
            row = session.get(Integration, integration_id)
            return _to_integration(row) if row is not None else None

    def save_integration(self, record: IntegrationRecord) -> IntegrationRecord:
        if record.id is None:
            return self.add_integration(record)
        with self._transaction("update integration") as session:
            row = session.get(Integration, record.id)
            if row is None:
                raise OnboardingStoreError(f"Integration {record.id} does not exist.")
            row.name = record.name
            row.type = record.type
            row.status = record.status
            row.config = record.config
            session.flush()
            session.refresh(row)
            return _to_integration(row)

    def list_integrations(self, user_id: str) -> list[IntegrationRecord]:
        with self._transaction("list integrations") as session:
            rows = session.execute(
                select(Integration)
                .where(Integration.user_id == user_id)
                .order_by(Integration.created_at.desc(), Integration.id.desc())
            ).scalars()
            return [_to_integration(row) for row in rows]
