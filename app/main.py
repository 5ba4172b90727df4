from __future__ import annotations

import logging
import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import BaseModel

from app.config import STORE_BACKEND_DATABASE, get_store_settings


class HealthResponse(BaseModel):
    status: str
    store_backend: str


def _validate_env() -> None:
    """
    Validate environment variables at startup.

    Collects every problem before raising so the operator can fix them in
    one restart cycle.

    Rules:
    - ONBOARDING_STORE_BACKEND must be 'memory' or 'database'.
    - The database backend needs DATABASE_URL, CLOUD_DATABASE_URL or
      LOCAL_DATABASE_URL.
    - UPLOAD_MAX_BYTES, when set, must be a positive integer.
    """

    from db.config import load_env_files

    load_env_files()

    errors: list[str] = []

    backend = os.getenv("ONBOARDING_STORE_BACKEND", "memory").strip().lower() or "memory"
    if backend not in {"memory", "database"}:
        errors.append(
            f"ONBOARDING_STORE_BACKEND='{backend}' is not valid. Allowed values: ['database', 'memory']."
        )
    elif backend == "database":
        configured = [
            name
            for name in ("DATABASE_URL", "CLOUD_DATABASE_URL", "LOCAL_DATABASE_URL")
            if os.getenv(name, "").strip()
        ]
        if not configured:
            errors.append(
                "No database URL configured. Set DATABASE_URL, CLOUD_DATABASE_URL or "
                "LOCAL_DATABASE_URL when ONBOARDING_STORE_BACKEND=database."
            )

    max_bytes_raw = os.getenv("UPLOAD_MAX_BYTES")
    if max_bytes_raw is not None:
        try:
            if int(max_bytes_raw) < 1:
                raise ValueError
        except ValueError:
            errors.append(f"UPLOAD_MAX_BYTES='{max_bytes_raw}' must be a positive integer.")

    if errors:
        raise RuntimeError(
            "Startup validation failed: missing or invalid environment variables:\n"
            + "\n".join(f"  - {e}" for e in errors)
        )


def _configure_logging() -> None:
    """
    Configure root logging once for the API process.
    """

    log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _check_db() -> None:
    """Open a session and run SELECT 1. Raises RuntimeError if the DB is unreachable."""
    from sqlalchemy import text

    from db.session import SessionLocal

    try:
        db = SessionLocal()
        try:
            db.execute(text("SELECT 1"))
        finally:
            db.close()
    except Exception as exc:
        raise RuntimeError("Database unavailable.") from exc


def _check_schema() -> None:
    """
    Verify every onboarding table exists. Does NOT auto-migrate.
    """
    from sqlalchemy import inspect as sa_inspect

    import db.models  # noqa: F401
    from db.base import Base
    from db.session import get_engine

    inspector = sa_inspect(get_engine())
    actual: set[str] = set(inspector.get_table_names())
    expected: set[str] = set(Base.metadata.tables.keys())
    missing = expected - actual

    if missing:
        logging.getLogger(__name__).critical(
            "Schema mismatch: %d onboarding table(s) absent from the database: %s. "
            "Run 'alembic upgrade head' and restart.",
            len(missing),
            ", ".join(sorted(missing)),
        )
        raise RuntimeError(
            f"Schema mismatch: {len(missing)} table(s) missing from the database "
            f"({', '.join(sorted(missing))}). Run migrations and restart."
        )


@asynccontextmanager
async def _lifespan(application: FastAPI) -> AsyncIterator[None]:
    """Check the database when the database store backend is selected."""
    log = logging.getLogger(__name__)
    backend = get_store_settings().backend
    if backend == STORE_BACKEND_DATABASE:
        _check_db()
        log.info("Database connectivity confirmed")
        _check_schema()
        log.info("Database schema validated")
    log.info("Onboarding API started store_backend=%s", backend)
    yield
    if backend == STORE_BACKEND_DATABASE:
        from db.session import dispose_engine

        dispose_engine()
    log.info("Onboarding API stopped")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.
    """

    _validate_env()
    _configure_logging()

    application = FastAPI(
        title="MMM Onboarding API",
        version="1.0.0",
        lifespan=_lifespan,
    )

    from app.api.routers import (
        analysis_router,
        integrations_router,
        onboarding_router,
        uploads_router,
    )

    application.include_router(onboarding_router)
    application.include_router(uploads_router)
    application.include_router(analysis_router)
    application.include_router(integrations_router)

    @application.get("/health", response_model=HealthResponse)
    def healthcheck() -> HealthResponse:
        return HealthResponse(status="ok", store_backend=get_store_settings().backend)

    return application


app = create_app()
