"""
db/session.py

Engine and session factory for the database-backed onboarding store.

Nothing connects at import time: the engine is built on first use so the
in-memory store backend never needs a database URL.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from db.config import resolve_database_url


@dataclass(frozen=True)
class EnginePoolSettings:
    echo: bool = False
    pool_size: int = 5
    max_overflow: int = 10
    pool_recycle: int = 1800

    @classmethod
    def from_env(cls) -> "EnginePoolSettings":
        defaults = cls()

        def _int(name: str, default: int) -> int:
            try:
                return int(os.getenv(name, default))
            except ValueError:
                return default

        return cls(
            echo=os.getenv("SQL_ECHO", "").strip().lower() in {"1", "true", "yes", "on"},
            pool_size=_int("DB_POOL_SIZE", defaults.pool_size),
            max_overflow=_int("DB_MAX_OVERFLOW", defaults.max_overflow),
            pool_recycle=_int("DB_POOL_RECYCLE", defaults.pool_recycle),
        )


def create_db_engine(
    database_url: str | None = None,
    pool: EnginePoolSettings | None = None,
) -> Engine:
    url = database_url or resolve_database_url()
    if not url.startswith("postgresql"):
        raise RuntimeError("Only PostgreSQL URLs are supported for the onboarding store.")

    pool = pool or EnginePoolSettings.from_env()
    return create_engine(
        url,
        echo=pool.echo,
        pool_pre_ping=True,
        pool_recycle=pool.pool_recycle,
        pool_size=pool.pool_size,
        max_overflow=pool.max_overflow,
    )


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    global _engine
    if _engine is None:
        _engine = create_db_engine()
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(
            bind=get_engine(),
            class_=Session,
            autoflush=False,
            expire_on_commit=False,
        )
    return _session_factory


def SessionLocal() -> Session:
    """Open a session on the shared engine, creating it on first call."""
    return get_session_factory()()


def dispose_engine() -> None:
    """
    Close pooled connections and forget the shared engine.
    """

    global _engine, _session_factory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None
