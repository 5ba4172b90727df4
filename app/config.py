"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files
from db.repositories.validators import DEFAULT_MAX_UPLOAD_BYTES

STORE_BACKEND_MEMORY = "memory"
STORE_BACKEND_DATABASE = "database"
_ALLOWED_STORE_BACKENDS = {STORE_BACKEND_MEMORY, STORE_BACKEND_DATABASE}


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def validate_store_backend(raw: str) -> str:
    """
    Normalise ONBOARDING_STORE_BACKEND, raising RuntimeError for unknown values.
    """

    backend = raw.strip().lower()
    if backend not in _ALLOWED_STORE_BACKENDS:
        raise RuntimeError(
            f"ONBOARDING_STORE_BACKEND '{raw.strip()}' is not valid. "
            f"Allowed values: {sorted(_ALLOWED_STORE_BACKENDS)}."
        )
    return backend


@dataclass(frozen=True)
class StoreSettings:
    """
    Which onboarding store backend serves requests.
    """

    backend: str = STORE_BACKEND_MEMORY


@dataclass(frozen=True)
class UploadSettings:
    """
    Runtime settings for marketing-data uploads.
    """

    storage_dir: str = "data/uploads"
    max_bytes: int = DEFAULT_MAX_UPLOAD_BYTES


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Runtime settings for uploaded-data analysis.
    """

    log_validation_errors: bool = True


@lru_cache(maxsize=1)
def get_store_settings() -> StoreSettings:
    """
    Return cached store settings.

    Raises RuntimeError if ONBOARDING_STORE_BACKEND names an unknown backend.
    """

    return StoreSettings(
        backend=validate_store_backend(_get_str_env("ONBOARDING_STORE_BACKEND", STORE_BACKEND_MEMORY)),
    )


@lru_cache(maxsize=1)
def get_upload_settings() -> UploadSettings:
    """
    Return cached upload settings from environment variables.
    """

    return UploadSettings(
        storage_dir=_get_str_env("UPLOAD_STORAGE_DIR", "data/uploads"),
        max_bytes=max(1, _get_int_env("UPLOAD_MAX_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
    )


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached analysis settings from environment variables.
    """

    return AnalysisSettings(
        log_validation_errors=_get_bool_env("ANALYSIS_LOG_VALIDATION_ERRORS", True),
    )
